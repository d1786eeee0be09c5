from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_serializer, field_validator
from datetime import datetime
from typing import Any, Dict, List

from app.utils.time import to_iso_z

class EventRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: StrictStr = Field(..., description="Event type, at least one non-whitespace character")
    payload: StrictStr = Field(..., description="Opaque JSON text, stored verbatim (may be empty)")

    @field_validator("type")
    @classmethod
    def type_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Database-assigned identifier")
    type: str
    payload: str = Field(..., description="Payload text exactly as submitted")
    timestamp: datetime = Field(..., description="Server-assigned UTC timestamp")

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return to_iso_z(value)


class FieldError(BaseModel):
    field: str
    message: str


def _is_utf8(value: str) -> bool:
    # json.loads accepts lone surrogate escapes such as "\ud800"
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_event_request(data: Dict[str, Any]) -> List[FieldError]:
    """
    Check a decoded request body against the EventRequest contract.

    Returns one FieldError per failing field; an empty list means the body
    can be turned into an EventRequest.
    """
    errors: List[FieldError] = []

    event_type = data.get("type")
    if "type" not in data or event_type is None:
        errors.append(FieldError(field="type", message="is required"))
    elif not isinstance(event_type, str):
        errors.append(FieldError(field="type", message="must be a string"))
    elif not event_type.strip():
        errors.append(FieldError(field="type", message="must not be blank"))
    elif not _is_utf8(event_type):
        errors.append(FieldError(field="type", message="must be valid UTF-8 text"))

    payload = data.get("payload")
    if "payload" not in data:
        errors.append(FieldError(field="payload", message="is required"))
    elif payload is None:
        errors.append(FieldError(field="payload", message="must not be null"))
    elif not isinstance(payload, str):
        errors.append(FieldError(field="payload", message="must be a string"))
    elif not _is_utf8(payload):
        errors.append(FieldError(field="payload", message="must be valid UTF-8 text"))

    return errors
