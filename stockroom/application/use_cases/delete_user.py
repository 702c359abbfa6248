"""Delete User Use Case."""

from stockroom.application.use_cases.apply_movement import require_actor
from stockroom.config import get_logger
from stockroom.core.exceptions import UserNotFoundError, ValidationError
from stockroom.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)


class DeleteUserUseCase:
    """Remove another user's account. Nobody can delete themselves."""

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

    async def execute(self, user_id: str, actor_id: str) -> None:
        """Execute delete user use case."""
        actor = require_actor(actor_id)
        if user_id == actor:
            raise ValidationError("user_id", "you cannot delete your own account", user_id)

        store = await self._get_user_store()
        if not await store.delete_user(user_id):
            raise UserNotFoundError(user_id)

        logger.info("delete_user_complete", user_id=user_id, deleted_by=actor)
