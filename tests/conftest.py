import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config import Settings
from crud import Store
from database import Database
from main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'library.db'}", environment="development")


@pytest_asyncio.fixture
async def store(settings):
    db = Database(settings.database_url)
    await db.init()
    yield Store(db)
    await db.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def created_id(response) -> str:
    """Identity from the Location of a post-create redirect."""
    assert response.status_code == 303, response.text
    return response.headers["location"].rstrip("/").rsplit("/", 1)[-1]
