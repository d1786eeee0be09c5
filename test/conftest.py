import pytest
import pytest_asyncio
from sqlalchemy import func, select

from app.config import Settings
from app.database.event_store import EventStore
from app.models.events_table import Event


@pytest.fixture
def sqlite_settings(tmp_path):
    return Settings(
        _env_file=None,
        db_url=f"sqlite:///{tmp_path / 'events.db'}",
        create_tables_on_startup=False,
    )


@pytest_asyncio.fixture
async def event_store(sqlite_settings):
    store = EventStore.from_settings(sqlite_settings)
    await store.create_tables()
    yield store
    await store.dispose()


@pytest.fixture
def count_rows(event_store):
    """Return an async callable counting rows in the events table."""

    async def _count_rows() -> int:
        async with event_store.engine.connect() as conn:
            result = await conn.execute(select(func.count()).select_from(Event))
            return result.scalar_one()

    return _count_rows
