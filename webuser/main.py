from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
import logging
import os

from .database import engine
from .repository import open_repository
from .routes import users

# Set up logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "DEBUG").upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Webuser API",
    description="User records over HTTP",
    version="1.0.0"
)

@app.on_event("startup")
async def startup_event():
    logger.debug("Starting up the application")
    try:
        # Test database connection first
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")

        app.state.users = open_repository(engine)
        logger.debug("User repository ready")
    except SQLAlchemyError as e:
        logger.error(f"Database error during startup: {str(e)}")
        raise

# Include routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])

@app.get("/")
async def root():
    return {"message": "Welcome to Webuser API"}
