"""
User repository.

All reads and writes against the ``user`` table go through here. The four
statements are built once when the repository is opened and executed with
bound parameters on every call.
"""
import logging
from typing import Optional

from sqlalchemy import bindparam, insert, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from .models import User

logger = logging.getLogger(__name__)


class UserNotFoundError(LookupError):
    """Raised when no user row matches a lookup."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UserRepository:
    """Base class for user stores."""

    def get(self, user_id: int) -> User:
        raise NotImplementedError("Subclasses must implement this method.")

    def get_by_email(self, email: str) -> User:
        raise NotImplementedError("Subclasses must implement this method.")

    def add(self, user: User) -> None:
        raise NotImplementedError("Subclasses must implement this method.")

    def update(self, user: User) -> None:
        raise NotImplementedError("Subclasses must implement this method.")


class SQLUserRepository(UserRepository):
    """UserRepository backed by a SQL database through SQLModel."""

    def __init__(self, engine: Engine):
        self.engine = engine
        table = User.__table__

        self._get_user = select(User).where(User.user_id == bindparam("user_id")).limit(1)
        self._get_by_email = select(User).where(User.email == bindparam("email")).limit(1)
        self._add_user = insert(table)
        self._update_user = (
            update(table)
            .where(table.c.user_id == bindparam("target_id"))
            .values(
                alias=bindparam("new_alias"),
                email=bindparam("new_email"),
                password=bindparam("new_password"),
            )
        )

    def _fetch_one(self, statement, params: dict) -> Optional[User]:
        with Session(self.engine) as session:
            row = session.exec(statement, params=params).first()
            if row is None:
                return None
            # hand back a copy so callers never write through the session
            return User(
                user_id=row.user_id,
                alias=row.alias,
                email=row.email,
                password=row.password,
            )

    def get(self, user_id: int) -> User:
        user = self._fetch_one(self._get_user, {"user_id": user_id})
        if user is None:
            raise UserNotFoundError()
        return user

    def get_by_email(self, email: str) -> User:
        """
        Return the first user with this email.

        Email is not unique in the schema; when several rows share it, which
        one comes back is up to the database.
        """
        user = self._fetch_one(self._get_by_email, {"email": email})
        if user is None:
            raise UserNotFoundError()
        return user

    def add(self, user: User) -> None:
        with Session(self.engine) as session:
            try:
                session.exec(
                    self._add_user,
                    params={
                        "user_id": user.user_id,
                        "alias": user.alias,
                        "email": user.email,
                        "password": user.password,
                    },
                )
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error adding user {user.user_id}: {str(e)}")
                raise

    def update(self, user: User) -> None:
        """
        Overwrite alias, email and password of the row with ``user.user_id``.

        The id itself is never changed. An update that matches no row is not
        an error: nothing is written and a warning is logged.
        """
        with Session(self.engine) as session:
            try:
                result = session.exec(
                    self._update_user,
                    params={
                        "target_id": user.user_id,
                        "new_alias": user.alias,
                        "new_email": user.email,
                        "new_password": user.password,
                    },
                )
                session.commit()
                matched = result.rowcount
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error updating user {user.user_id}: {str(e)}")
                raise

        if matched == 0:
            logger.warning(f"Update matched no user with id {user.user_id}")


def init_db(engine: Engine) -> None:
    """
    Create the user table if it doesn't exist.
    """
    logger.debug("Initializing user table")
    try:
        SQLModel.metadata.create_all(engine, tables=[User.__table__])
        logger.debug("User table initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise


def open_repository(engine: Engine) -> SQLUserRepository:
    """
    Make sure the user table exists and return a repository bound to engine.
    """
    init_db(engine)
    return SQLUserRepository(engine)
