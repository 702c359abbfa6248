"""SQLite implementation of user storage."""

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.catalog import utcnow
from stockroom.core.entities.user import User, UserRole
from stockroom.core.exceptions import DuplicateEmailError, UserExistsError, UserNotFoundError
from stockroom.core.interfaces.user_store import IUserStore
from stockroom.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    now_db_time,
    parse_db_time,
)

logger = get_logger(__name__)


class SQLiteUserStore(SQLiteStore, IUserStore):
    """SQLite implementation of user storage."""

    async def create_user(self, user: User) -> User:
        """Register a user; id and email must both be unused."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute("SELECT 1 FROM users WHERE id = ?", (user.id,))
            if await cursor.fetchone() is not None:
                raise UserExistsError(user.id)

            cursor = await conn.execute(
                "SELECT id FROM users WHERE email = ?", (user.email,)
            )
            clash = await cursor.fetchone()
            if clash is not None:
                raise DuplicateEmailError(user.email, clash["id"])

            await conn.execute(
                """
                INSERT INTO users (id, email, name, role, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (user.id, user.email, user.name, user.role.value, now, now),
            )
            user.created_at = parse_db_time(now)
            user.updated_at = user.created_at
            logger.info("user_created", user_id=user.id, role=user.role)
            return user

    async def get_user(self, user_id: str) -> User | None:
        """Get user by actor id."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email, ignoring case."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def list_users(self) -> list[User]:
        """List users, newest first."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users ORDER BY created_at DESC, id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def update_user(self, user: User) -> User:
        """Update name and email. The role is set at registration only."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT id FROM users WHERE email = ? AND id != ?",
                (user.email, user.id),
            )
            clash = await cursor.fetchone()
            if clash is not None:
                raise DuplicateEmailError(user.email, clash["id"])

            cursor = await conn.execute(
                "UPDATE users SET name = ?, email = ?, updated_at = ? WHERE id = ?",
                (user.name, user.email, now, user.id),
            )
            if cursor.rowcount == 0:
                raise UserNotFoundError(user.id)
            user.updated_at = parse_db_time(now)
            logger.info("user_updated", user_id=user.id)
            return user

    async def delete_user(self, user_id: str) -> bool:
        """Delete a user. Ledger entries keep the actor id they were posted with."""
        async with self._write_transaction() as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted

    def _row_to_user(self, row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            role=UserRole(row["role"]),
            created_at=parse_db_time(row["created_at"]) or utcnow(),
            updated_at=parse_db_time(row["updated_at"]) or utcnow(),
        )
