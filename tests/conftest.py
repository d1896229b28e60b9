import pytest
import pytest_asyncio
from sqlalchemy import update

from app.database import build_engine
from app.dependencies import get_account_store
from app.main import app
from app.models.user import User
from app.services.account_store import AccountStore


@pytest.fixture(autouse=True)
def disable_api_key():
    # Disable API key auth for tests
    from app.config import settings
    previous = settings.api_key
    settings.api_key = ""
    yield
    settings.api_key = previous


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'accounts.sqlite3'}"


@pytest_asyncio.fixture
async def store(database_url):
    account_store = AccountStore(database_url, password_scheme="sha256")
    yield account_store
    await account_store.dispose()


@pytest_asyncio.fixture
async def api_store(store):
    app.dependency_overrides[get_account_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_account_store, None)


@pytest.fixture
def deactivate(database_url):
    """Flip the soft-delete flag directly; the store exposes no such operation."""

    async def _deactivate(email: str) -> None:
        engine = build_engine(database_url)
        async with engine.begin() as conn:
            await conn.execute(update(User).where(User.email == email).values(active=0))
        await engine.dispose()

    return _deactivate
