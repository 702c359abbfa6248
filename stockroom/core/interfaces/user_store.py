"""Abstract interface for user storage."""

from abc import ABC, abstractmethod

from stockroom.core.entities.user import User


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Register a user under its actor id."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Get user by actor id."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email, ignoring case."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List users, newest first."""
        pass

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """Update name and email."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> bool:
        """Delete a user. Returns False when no such user exists."""
        pass
