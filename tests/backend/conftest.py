import os
import uuid

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("ENV", "test")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from store_rating.core import db as db_module
from store_rating.core.security import hash_password
from store_rating.main import app
from store_rating.models import Role, Store, User


db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

DEFAULT_PASSWORD = "Secret#123"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without an HTTP client, for service-level tests.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


async def _make_user(role: Role, password: str = DEFAULT_PASSWORD, **overrides) -> tuple[User, str]:
    tag = uuid.uuid4().hex[:6]
    fields = {
        "name": f"{role.value.title()} {tag}",
        "email": f"{role.value.lower()}_{tag}@example.com",
        "address": f"{tag} Test Street",
    }
    fields.update(overrides)
    user = await User.create(password_hash=hash_password(password), role=role, **fields)
    return user, password


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = DEFAULT_PASSWORD, **overrides) -> tuple[User, str]:
        return await _make_user(Role.ADMIN, password, **overrides)

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = DEFAULT_PASSWORD, **overrides) -> tuple[User, str]:
        return await _make_user(Role.USER, password, **overrides)

    return _create_user


@pytest_asyncio.fixture
async def create_owner(db):
    """
    Factory fixture to create store owners directly.
    """

    async def _create_owner(password: str = DEFAULT_PASSWORD, **overrides) -> tuple[User, str]:
        return await _make_user(Role.STORE_OWNER, password, **overrides)

    return _create_owner


@pytest_asyncio.fixture
async def create_store(db, create_owner):
    """
    Factory fixture to create stores directly, with a fresh owner unless one is given.
    """

    async def _create_store(owner: User | None = None, **overrides) -> Store:
        if owner is None:
            owner, _ = await create_owner()
        tag = uuid.uuid4().hex[:6]
        fields = {
            "name": f"Corner Market and Bakery {tag}",
            "email": f"store_{tag}@example.com",
            "address": f"{tag} Market Road",
        }
        fields.update(overrides)
        return await Store.create(owner=owner, **fields)

    return _create_store


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
