"""
Error kinds raised on the ingestion path.

Each kind maps onto one HTTP status in app.main.
"""

from typing import List

from app.schemas.event_schema import FieldError


class IngestionError(Exception):
    """Base class for event ingestion errors."""


class MalformedRequestError(IngestionError):
    """Request body is not a JSON object."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EventValidationError(IngestionError):
    """Request body is JSON but one or more fields are invalid."""

    def __init__(self, errors: List[FieldError]):
        fields = ", ".join(error.field for error in errors)
        super().__init__(f"Invalid fields: {fields}")
        self.errors = errors


class PersistenceError(IngestionError):
    """The store failed to persist an event."""
