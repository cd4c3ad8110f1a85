"""
Unit tests for core.bootstrap.ensure_default_admin.
"""
import pytest

from store_rating.config import settings
from store_rating.core.bootstrap import ensure_default_admin
from store_rating.core.security import verify_password
from store_rating.models import Role, User


pytestmark = pytest.mark.asyncio


async def test_creates_admin_from_settings(db, monkeypatch):
    monkeypatch.setattr(settings, "admin_email", "root@example.com")
    monkeypatch.setattr(settings, "admin_password", "Admin#2024")

    await ensure_default_admin()

    admin = await User.get(email="root@example.com")
    assert admin.role == Role.ADMIN
    assert verify_password("Admin#2024", admin.password_hash)


async def test_skips_without_password(db, monkeypatch):
    monkeypatch.setattr(settings, "admin_password", None)

    await ensure_default_admin()

    assert await User.filter(role=Role.ADMIN).count() == 0


async def test_skips_weak_password(db, monkeypatch):
    monkeypatch.setattr(settings, "admin_password", "weakpass")

    await ensure_default_admin()

    assert await User.filter(role=Role.ADMIN).count() == 0


async def test_existing_admin_left_alone(db, monkeypatch, create_admin):
    await create_admin()
    monkeypatch.setattr(settings, "admin_email", "second@example.com")
    monkeypatch.setattr(settings, "admin_password", "Admin#2024")

    await ensure_default_admin()

    assert await User.filter(role=Role.ADMIN).count() == 1
    assert not await User.filter(email="second@example.com").exists()


async def test_promotes_account_with_admin_email(db, monkeypatch, create_user):
    user, _ = await create_user(email="boss@example.com")
    monkeypatch.setattr(settings, "admin_email", "boss@example.com")
    monkeypatch.setattr(settings, "admin_password", "Admin#2024")

    await ensure_default_admin()

    await user.refresh_from_db()
    assert user.role == Role.ADMIN
    assert await User.all().count() == 1
