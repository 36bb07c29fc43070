"""SG Life Guide chat endpoint."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from config.profile import MAX_INFERRED_PREFERENCES_HEADER
from models.errors import GuideError, InvalidInputError
from models.preferences import PreferenceSignals
from orchestrator.core import LifeGuideOrchestrator
from server.dependencies import get_orchestrator
from server.schemas.requests import GuideRequestDTO
from server.schemas.responses import ErrorDTO
from server.utils import redact_sensitive_headers, validate_request
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["Guide"])

MISSING_PREFERENCE_HEADER = "X-Missing-Preference"
INFERRED_PREFERENCES_HEADER = "X-Inferred-Preferences"
SIGNAL_HEADERS = (MISSING_PREFERENCE_HEADER, INFERRED_PREFERENCES_HEADER)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorDTO(error=message).model_dump())


def signal_headers(signals: PreferenceSignals) -> dict[str, str]:
    """Encode preference signals as response headers; absent signals add nothing."""
    headers = {}
    if signals.missing_preference:
        headers[MISSING_PREFERENCE_HEADER] = signals.missing_preference
    inferred = signals.inferred_json(MAX_INFERRED_PREFERENCES_HEADER)
    if inferred:
        headers[INFERRED_PREFERENCES_HEADER] = inferred
    return headers


@router.post(
    "/sg-life-guide",
    responses={
        200: {"content": {"text/event-stream": {}}},
        400: {"model": ErrorDTO},
        402: {"model": ErrorDTO},
        429: {"model": ErrorDTO},
        500: {"model": ErrorDTO},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": GuideRequestDTO.model_json_schema()}},
        }
    },
)
async def sg_life_guide(
    http_request: Request,
    orchestrator: LifeGuideOrchestrator = Depends(get_orchestrator),
):
    """
    Answer a Singapore life question as a relayed event stream.

    Body: ``{message, conversationHistory?, userContext?, preferencesContext?}``.
    """
    try:
        try:
            body = await http_request.json()
        except ValueError:
            raise InvalidInputError("Invalid JSON request body") from None

        guide_request = validate_request(body)

        logger.info(
            "Processing guide request",
            extra={
                "extra_fields": {
                    "message_length": len(guide_request.message),
                    "history_turns": len(guide_request.history),
                }
            },
        )

        reply = await orchestrator.answer(guide_request)

    except GuideError as exc:
        logger.warning(
            "Guide request rejected",
            extra={
                "extra_fields": {
                    "status": int(exc.status_code),
                    "error": exc.message,
                    "headers": redact_sensitive_headers(dict(http_request.headers)),
                }
            },
        )
        return _error_response(exc.status_code, exc.message)

    except Exception as exc:
        logger.error(f"❌ SG Life Guide error: {exc}", exc_info=True)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Unknown error")

    return StreamingResponse(
        reply.stream,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            **signal_headers(reply.signals),
        },
        background=BackgroundTask(reply.aclose),
    )
