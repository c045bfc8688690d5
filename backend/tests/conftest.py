"""
PhotoShare Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches the database gets its own SQLite file under
       pytest's tmp_path, so tests never share rows.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── database: Database handle on a fresh SQLite file, tables created
    ├── make_user: Registers an account and returns its ID
    ├── mock_db_session: AsyncMock session for database-failure paths
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient bound to an app using `database`
"""

import os

# Override settings for testing BEFORE any photoshare import builds `settings`
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"  # fastest cost bcrypt accepts
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from photoshare.database import Database
from photoshare.main import create_app
from photoshare.services.credential_service import credential_service


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a Database handle on an empty SQLite file.

    Usage:
        async with database.session_factory() as db:
            ...
            await db.commit()
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'photoshare_test.db'}", echo=False)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def make_user(database):
    """
    Factory fixture: registers a user in its own committed transaction.

    Usage:
        alice = await make_user("alice")   # email alice@x.com, password "pw"
    """

    async def _make_user(username: str, email: str = None, password: str = "pw"):
        async with database.session_factory() as db:
            user_id = await credential_service.register(
                db,
                username=username,
                email=email or f"{username}@x.com",
                password=password,
            )
            await db.commit()
        return user_id

    return _make_user


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Used to drive the SQLAlchemyError → PersistenceError paths without a
    broken database.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_image_bytes():
    """
    Provides minimal JPEG bytes for upload tests.

    Minimal JPEG: Start of Image (FFD8) + JFIF marker + End of Image (FFD9).
    Not a real photograph; the media host is always mocked.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the app is built with the
    test Database already attached.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
