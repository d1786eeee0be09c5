from sqlalchemy import JSON, BigInteger, Column, DateTime, Identity, Integer, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base

# SQLite only autoincrements an INTEGER PRIMARY KEY
EventId = BigInteger().with_variant(Integer, "sqlite")
EventPayload = JSON().with_variant(JSONB(), "postgresql")

class Event(Base):
    __tablename__ = 'events'

    id = Column(EventId, Identity(always=False), primary_key=True)
    type = Column(Text, nullable=False)
    # Holds the payload text as a JSON string value so it round-trips verbatim
    payload = Column(EventPayload, nullable=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Event(id={self.id}, type='{self.type}', timestamp={self.timestamp})>"
