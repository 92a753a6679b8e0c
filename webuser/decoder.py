from fastapi import Request
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from typing import Optional
import logging

from .models import User
from .schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
FORM_FIELD = "data"


class UserDecodeError(ValueError):
    """Raised when a request does not carry a valid user JSON document."""


def _media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


async def read_json_source(request: Request) -> bytes:
    """
    Return the raw JSON document of the request: the "data" form field for
    form-encoded requests, the body for everything else.
    """
    if _media_type(request) in FORM_CONTENT_TYPES:
        try:
            form = await request.form()
        # starlette turns parse failures into a 400 when running inside an app
        except (MultiPartException, StarletteHTTPException) as e:
            detail = getattr(e, "detail", None) or getattr(e, "message", str(e))
            raise UserDecodeError(f"Invalid form body: {detail}") from e
        value = form.get(FORM_FIELD)
        if value is None:
            return b""
        if isinstance(value, str):
            return value.encode("utf-8")
        # multipart upload: read the file part
        return await value.read()
    return await request.body()


async def decode_json_user(request: Request, user: Optional[User] = None) -> User:
    """
    Decode the user JSON document carried by request.

    Without a user, the document must describe a complete new record. With
    one, the fields present in the document are applied onto it and the
    fields it leaves out keep their current values.
    """
    raw = await read_json_source(request)
    schema = UserCreate if user is None else UserUpdate
    try:
        payload = schema.model_validate_json(raw)
    except ValidationError as e:
        logger.debug(f"Rejected user document: {str(e)}")
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        if location:
            raise UserDecodeError(f"Invalid user document: {location}: {error['msg']}") from e
        raise UserDecodeError(f"Invalid user document: {error['msg']}") from e

    if user is None:
        return User(**payload.model_dump())

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, field, value)
    return user
