"""
Store adapter mediating all database access for events.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import insert, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from app.config import Settings
from app.database.sessions import create_engine_from_settings
from app.errors import PersistenceError
from app.models.base import Base
from app.models.events_table import Event
from app.utils.logger import get_logger
from app.utils.time import as_utc

logger = get_logger(__name__)


class EventStore:
    """
    Owns the engine (and its connection pool) and inserts events.

    Callers open a transaction with ``transaction()`` and pass the yielded
    connection to ``insert_event``; the transaction commits when the block
    exits normally and rolls back on any exception, cancellation included.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "EventStore":
        return cls(create_engine_from_settings(settings))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        try:
            async with self._engine.begin() as conn:
                yield conn
        except (SQLAlchemyError, OSError) as e:
            # connect / commit failures; insert failures are already wrapped
            logger.error("Database transaction failed.", error=str(e))
            raise PersistenceError(f"Database transaction failed: {e}") from e

    async def insert_event(self, conn: AsyncConnection, event: Event) -> Event:
        """
        Insert one event row and populate its id.

        Exactly one ``INSERT ... RETURNING`` round trip. When the event has
        no timestamp the column default supplies one and it is read back.
        """
        values = {"type": event.type, "payload": event.payload}
        if event.timestamp is not None:
            values["timestamp"] = event.timestamp

        stmt = insert(Event).values(**values).returning(Event.id, Event.timestamp)
        try:
            result = await conn.execute(stmt)
            row = result.one()
        except SQLAlchemyError as e:
            logger.error("Error while inserting event.", event_type=event.type, error=str(e))
            raise PersistenceError(f"Failed to insert event: {e}") from e

        event.id = row.id
        if event.timestamp is None:
            event.timestamp = as_utc(row.timestamp)
        return event

    async def create_tables(self) -> None:
        """Create all database tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all database tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def check_connection(self) -> bool:
        """
        Test database connection.

        Returns:
            bool: True if connection successful
        """
        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database connection test failed.", error=str(e))
            raise PersistenceError(f"Database connection test failed: {e}") from e
        logger.info("Database connection test successful")
        return True

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self._engine.dispose()
