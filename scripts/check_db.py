import asyncio
from app.config import get_settings
from app.database.event_store import EventStore

async def check():
    store = EventStore.from_settings(get_settings())
    try:
        await store.check_connection()
        print("DB OK")
    finally:
        await store.dispose()

asyncio.run(check())
