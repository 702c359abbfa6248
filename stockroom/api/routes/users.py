"""User administration endpoints.

Users are keyed by the actor id the identity provider sends in the actor
header; credentials are not handled here.
"""

from fastapi import APIRouter, Depends, Path, Response, status

from stockroom.api.dependencies import (
    get_actor_id,
    get_create_user_use_case,
    get_delete_user_use_case,
    get_update_user_profile_use_case,
    get_usr_store,
)
from stockroom.application.dto.requests import UserCreateRequest, UserProfileRequest
from stockroom.application.dto.responses import ErrorResponse, UserResponse
from stockroom.application.use_cases.create_user import CreateUserUseCase
from stockroom.application.use_cases.delete_user import DeleteUserUseCase
from stockroom.application.use_cases.update_user_profile import UpdateUserProfileUseCase
from stockroom.core.exceptions import UserNotFoundError
from stockroom.infrastructure.storage.sqlite import SQLiteUserStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    store: SQLiteUserStore = Depends(get_usr_store),
) -> list[UserResponse]:
    """List users, newest first."""
    users = await store.list_users()
    return [UserResponse.from_entity(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_user(
    request: UserCreateRequest,
    actor_id: str = Depends(get_actor_id),
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserResponse:
    """Register a user. Both the id and the email must be unused."""
    user = await use_case.execute(request, actor_id)
    return use_case.to_response(user)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_current_user(
    actor_id: str = Depends(get_actor_id),
    store: SQLiteUserStore = Depends(get_usr_store),
) -> UserResponse:
    """The caller's own user record."""
    user = await store.get_user(actor_id)
    if user is None:
        raise UserNotFoundError(actor_id)
    return UserResponse.from_entity(user)


@router.put(
    "/me",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_current_user(
    request: UserProfileRequest,
    actor_id: str = Depends(get_actor_id),
    use_case: UpdateUserProfileUseCase = Depends(get_update_user_profile_use_case),
) -> UserResponse:
    """Change the caller's name and email."""
    user = await use_case.execute(request, actor_id)
    return UserResponse.from_entity(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: str = Path(..., min_length=1, max_length=200),
    actor_id: str = Depends(get_actor_id),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> Response:
    """Delete another user's account."""
    await use_case.execute(user_id, actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
