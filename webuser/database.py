from sqlmodel import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from typing import Optional
import os
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)


# Load environment variables
load_dotenv()

DEFAULT_LOCAL_URL = "sqlite:///./webuser.db"


def build_engine(env: Optional[str] = None) -> Engine:
    """
    Create the engine for the given environment (defaults to $ENV, then "local").
    """
    env = env or os.environ.get("ENV", "local")

    if env == "test":
        # one shared in-memory database, visible from the TestClient threads
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if env == "local":
        database_url = os.environ.get("DATABASE_URL", DEFAULT_LOCAL_URL)
        logger.info(
            f"Connecting to local database at: {make_url(database_url).render_as_string(hide_password=True)}"
        )
        return create_engine(database_url, echo=True)

    if env == "prod":
        database_url = os.environ.get("DATABASE_URL")
        if not database_url:
            raise ValueError("DATABASE_URL must be set when ENV=prod")
        logger.info("Connecting to production database")
        return create_engine(database_url, pool_pre_ping=True)

    raise ValueError(f"Invalid environment: {env}")


engine = build_engine()
