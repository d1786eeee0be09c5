from app.config import get_settings
from app.database.event_store import EventStore
import asyncio

async def init():
    store = EventStore.from_settings(get_settings())
    try:
        await store.create_tables()
    finally:
        await store.dispose()

asyncio.run(init())
