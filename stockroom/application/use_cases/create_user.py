"""Create User Use Case."""

from stockroom.application.dto.requests import UserCreateRequest
from stockroom.application.dto.responses import UserResponse
from stockroom.application.use_cases.apply_movement import require_actor
from stockroom.config import get_logger
from stockroom.core.entities.user import User, UserRole
from stockroom.core.exceptions import DuplicateEmailError, UserExistsError
from stockroom.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


class CreateUserUseCase:
    """Register a user under the actor id the identity provider issues."""

    def __init__(
        self,
        user_store: IUserStore | None = None,
    ):
        self._user_store = user_store

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from stockroom.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    async def execute(self, request: UserCreateRequest, actor_id: str) -> User:
        """Execute create user use case."""
        actor = require_actor(actor_id)
        store = await self._get_user_store()

        if await store.get_user(request.id) is not None:
            raise UserExistsError(request.id)
        existing = await store.get_user_by_email(request.email)
        if existing is not None:
            raise DuplicateEmailError(request.email, existing.id)

        user = await store.create_user(
            User(
                id=request.id,
                email=request.email,
                name=request.name,
                role=UserRole(request.role),
            )
        )

        logger.info(
            "create_user_complete",
            user_id=user.id,
            role=user.role,
            created_by=actor,
        )
        return user

    def to_response(self, user: User) -> UserResponse:
        """Convert result to API response."""
        return UserResponse.from_entity(user)
