from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
import logging

from ..decoder import UserDecodeError, decode_json_user
from ..repository import UserNotFoundError, UserRepository
from ..schemas.user import UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


def get_repository(request: Request) -> UserRepository:
    return request.app.state.users


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="User not found"
    )


@router.post("/", response_model=UserRead)
async def create_user(request: Request, repo: UserRepository = Depends(get_repository)):
    try:
        user = await decode_json_user(request)
    except UserDecodeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    try:
        await run_in_threadpool(repo.add, user)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already registered"
        )
    return user


@router.get("/email/{email}", response_model=UserRead)
def get_user_by_email(email: str, repo: UserRepository = Depends(get_repository)):
    try:
        return repo.get_by_email(email)
    except UserNotFoundError:
        raise _not_found()


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, repo: UserRepository = Depends(get_repository)):
    try:
        return repo.get(user_id)
    except UserNotFoundError:
        raise _not_found()


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    request: Request,
    repo: UserRepository = Depends(get_repository)
):
    # the repository update is a silent no-op on unknown ids, so check first
    try:
        user = await run_in_threadpool(repo.get, user_id)
    except UserNotFoundError:
        raise _not_found()

    try:
        user = await decode_json_user(request, user)
    except UserDecodeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    # the id is immutable: whatever the document says, the path wins
    user.user_id = user_id
    await run_in_threadpool(repo.update, user)
    return user
