"""Tests for SQLite user storage."""

import pytest

from stockroom.core.entities.user import User, UserRole
from stockroom.core.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    UserExistsError,
    UserNotFoundError,
)


def _user(user_id: str, email: str, role: UserRole = UserRole.USER) -> User:
    return User(id=user_id, email=email, name=f"User {user_id}", role=role)


class TestCreateUser:
    async def test_create_and_get(self, user_store):
        created = await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        assert created.created_at == created.updated_at

        fetched = await user_store.get_user("clerk-1")
        assert fetched.email == "clerk@shop.example"
        assert fetched.role == UserRole.USER
        assert not fetched.is_admin

    async def test_admin_role_is_stored(self, user_store):
        await user_store.create_user(_user("boss", "boss@shop.example", UserRole.ADMIN))
        assert (await user_store.get_user("boss")).is_admin

    async def test_existing_id_is_rejected(self, user_store):
        await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        with pytest.raises(UserExistsError):
            await user_store.create_user(_user("clerk-1", "other@shop.example"))

    async def test_email_is_unique_ignoring_case(self, user_store):
        await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        with pytest.raises(DuplicateEmailError) as exc_info:
            await user_store.create_user(_user("clerk-2", "Clerk@Shop.Example"))
        assert exc_info.value.details["existing_id"] == "clerk-1"
        assert len(await user_store.list_users()) == 1

    async def test_blank_id_violates_schema(self, user_store):
        with pytest.raises(DatabaseError):
            await user_store.create_user(_user("  ", "blank@shop.example"))


class TestQueries:
    async def test_lookup_by_email_ignores_case(self, user_store):
        await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        found = await user_store.get_user_by_email("CLERK@shop.example")
        assert found.id == "clerk-1"

    async def test_missing_user(self, user_store):
        assert await user_store.get_user("nobody") is None
        assert await user_store.get_user_by_email("nobody@shop.example") is None

    async def test_newest_first(self, user_store):
        await user_store.create_user(_user("zed", "zed@shop.example"))
        await user_store.create_user(_user("amy", "amy@shop.example"))
        assert [u.id for u in await user_store.list_users()] == ["amy", "zed"]


class TestUpdateAndDelete:
    async def test_update_profile(self, user_store):
        user = await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        user.name = "Front desk"
        user.email = "desk@shop.example"
        await user_store.update_user(user)

        fetched = await user_store.get_user("clerk-1")
        assert fetched.name == "Front desk"
        assert fetched.email == "desk@shop.example"
        assert fetched.updated_at >= fetched.created_at

    async def test_update_to_taken_email(self, user_store):
        await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        other = await user_store.create_user(_user("clerk-2", "two@shop.example"))
        other.email = "CLERK@shop.example"
        with pytest.raises(DuplicateEmailError):
            await user_store.update_user(other)
        assert (await user_store.get_user("clerk-2")).email == "two@shop.example"

    async def test_update_missing_user(self, user_store):
        with pytest.raises(UserNotFoundError):
            await user_store.update_user(_user("ghost", "ghost@shop.example"))

    async def test_delete(self, user_store):
        await user_store.create_user(_user("clerk-1", "clerk@shop.example"))
        assert await user_store.delete_user("clerk-1") is True
        assert await user_store.get_user("clerk-1") is None
        assert await user_store.delete_user("clerk-1") is False
