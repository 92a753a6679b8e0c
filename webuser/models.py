from sqlmodel import Field, SQLModel


"""
This file contains the models for the database tables.

We have 1 table:
    - user
"""

class User(SQLModel, table=True):
    """
    A web user. The password is stored as given (no hashing happens in this
    layer) and must never be serialized back to clients.
    """
    __tablename__ = "user"

    user_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    alias: str = Field(max_length=64)
    email: str = Field(max_length=64)
    password: str = Field(max_length=64)

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id!r}, alias={self.alias!r}, email={self.email!r})"
