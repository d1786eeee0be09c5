from typing import Callable, Optional
from datetime import datetime

from app.database.event_store import EventStore
from app.models.events_table import Event
from app.schemas.event_schema import EventRequest
from app.utils.logger import get_logger
from app.utils.time import utcnow

logger = get_logger(__name__)


class EventService:
    """Turns validated requests into persisted events."""

    def __init__(self, store: EventStore, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._clock = clock or utcnow

    async def create_event(self, request: EventRequest) -> Event:
        """
        Persist a new event built from ``request``.

        The request is assumed to be structurally valid already. The insert
        runs in its own transaction; any store failure propagates unchanged
        after the transaction has rolled back.
        """
        event = Event(type=request.type, payload=request.payload)

        async with self._store.transaction() as conn:
            if event.timestamp is None:
                event.timestamp = self._clock()
            event = await self._store.insert_event(conn, event)

        logger.info("Event persisted successfully.", event_id=event.id, event_type=event.type)
        return event
