import pytest

from podcaster.infrastructure.persistence.database.db_connection import (
    create_db_engine,
    create_session_factory,
)
from podcaster.infrastructure.persistence.database.db_models import init_db
from podcaster.infrastructure.services import BcryptPasswordHasher, TokenService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PRIVATE_KEY = "test-signing-key"


@pytest.fixture
async def db_engine():
    """Fresh in-memory database per test with the schema created."""
    engine = create_db_engine(TEST_DATABASE_URL)
    try:
        await init_db(engine)
    except Exception as e:
        pytest.fail(f"Database initialization failed: {e}")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(session_factory):
    """Provide database session with automatic rollback."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def password_hasher():
    """Real bcrypt hasher at the lowest cost so tests stay fast."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def token_service():
    return TokenService(private_key=TEST_PRIVATE_KEY)
