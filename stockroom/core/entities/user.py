"""User accounts: the actors recorded on ledger entries."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockroom.core.entities.catalog import utcnow


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """
    A person allowed to work the stockroom.

    id is the actor id the identity provider sends with each request;
    passwords and sessions live with that provider.
    """

    id: str
    email: str
    name: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
