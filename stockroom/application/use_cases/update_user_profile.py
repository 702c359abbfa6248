"""Update User Profile Use Case: the calling actor edits their own record."""

from stockroom.application.dto.requests import UserProfileRequest
from stockroom.application.use_cases.apply_movement import require_actor
from stockroom.config import get_logger
from stockroom.core.entities.user import User
from stockroom.core.exceptions import DuplicateEmailError, UserNotFoundError
from stockroom.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


class UpdateUserProfileUseCase:
    """Change the caller's name and email; the role is not self-service."""

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

    async def execute(self, request: UserProfileRequest, actor_id: str) -> User:
        """Execute update profile use case."""
        actor = require_actor(actor_id)
        store = await self._get_user_store()

        user = await store.get_user(actor)
        if user is None:
            raise UserNotFoundError(actor)

        if request.email.lower() != user.email.lower():
            clash = await store.get_user_by_email(request.email)
            if clash is not None and clash.id != user.id:
                raise DuplicateEmailError(request.email, clash.id)

        user.name = request.name
        user.email = request.email
        updated = await store.update_user(user)

        logger.info("update_user_profile_complete", user_id=updated.id)
        return updated
