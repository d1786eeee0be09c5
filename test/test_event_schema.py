from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from app.schemas.event_schema import EventRequest, EventResponse, validate_event_request


def test_validate_event_request_accepts_valid_body():
    assert validate_event_request({"type": "user_login", "payload": ""}) == []


@pytest.mark.parametrize("body, expected", [
    ({}, [("type", "is required"), ("payload", "is required")]),
    ({"type": " ", "payload": "{}"}, [("type", "must not be blank")]),
    ({"type": ["a"], "payload": "{}"}, [("type", "must be a string")]),
    ({"type": "a", "payload": None}, [("payload", "must not be null")]),
    ({"type": "a", "payload": 1}, [("payload", "must be a string")]),
    ({"type": "a\ud800", "payload": "{}"}, [("type", "must be valid UTF-8 text")]),
    ({"type": "a", "payload": "{\"x\": \"\udfff\"}"}, [("payload", "must be valid UTF-8 text")]),
])
def test_validate_event_request_reports_field_errors(body, expected):
    errors = validate_event_request(body)
    assert [(error.field, error.message) for error in errors] == expected


def test_event_request_rejects_blank_type():
    with pytest.raises(ValidationError):
        EventRequest(type="  ", payload="{}")


def test_event_request_keeps_payload_whitespace():
    request = EventRequest(type="raw", payload="  {\"a\": 1}\n")
    assert request.payload == "  {\"a\": 1}\n"


def test_event_response_timestamp_uses_z_suffix():
    response = EventResponse(id=1, type="t", payload="", timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc))
    assert response.model_dump(mode="json")["timestamp"] == "2026-01-01T00:00:00Z"


def test_event_response_timestamp_converts_to_utc():
    offset = timezone(timedelta(hours=2))
    response = EventResponse(id=1, type="t", payload="", timestamp=datetime(2026, 1, 1, 2, 0, tzinfo=offset))
    assert response.model_dump(mode="json")["timestamp"] == "2026-01-01T00:00:00Z"


def test_event_response_naive_timestamp_treated_as_utc():
    response = EventResponse(id=1, type="t", payload="", timestamp=datetime(2026, 1, 1, 0, 0, 0, 123000))
    assert response.model_dump(mode="json")["timestamp"] == "2026-01-01T00:00:00.123000Z"
