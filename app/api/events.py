"""FastAPI router for event ingestion."""
import json

from fastapi import APIRouter, Depends, Request, status

from app.errors import EventValidationError, MalformedRequestError
from app.schemas.event_schema import EventRequest, EventResponse, validate_event_request
from app.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


async def parse_event_request(request: Request) -> EventRequest:
    """
    Decode and validate the request body.

    Raises MalformedRequestError when the body is not a JSON object sent as
    application/json and EventValidationError when any field fails validation.
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json" and not media_type.endswith("+json"):
        raise MalformedRequestError(
            f"Content-Type must be application/json, got {content_type or 'none'}"
        )

    raw_body = await request.body()
    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedRequestError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedRequestError("Request body must be a JSON object")

    errors = validate_event_request(data)
    if errors:
        raise EventValidationError(errors)
    return EventRequest.model_validate(data)


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": EventRequest.model_json_schema()}},
        }
    },
)
async def create_event(
    event_request: EventRequest = Depends(parse_event_request),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """
    Ingest a new event.

    The payload is stored verbatim and echoed back as a string; the id and
    timestamp are assigned on the server.
    """
    event = await service.create_event(event_request)
    return EventResponse.model_validate(event)
