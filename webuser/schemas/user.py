from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class UserRead(BaseModel):
    """JSON view of a user. The password is never part of it."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: int = Field(alias="userID")
    alias: str
    email: str


class UserCreate(BaseModel):
    """Incoming document for a new user: the caller supplies every field."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: int = Field(alias="userID")
    alias: str = Field(max_length=64)
    email: str = Field(max_length=64)
    password: str = Field(max_length=64)


class UserUpdate(BaseModel):
    """
    Incoming document applied on top of an existing record. Every field is
    optional; password is write-only.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: Optional[int] = Field(default=None, alias="userID")
    alias: Optional[str] = Field(default=None, max_length=64)
    email: Optional[str] = Field(default=None, max_length=64)
    password: Optional[str] = Field(default=None, max_length=64)
