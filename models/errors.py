"""Error taxonomy for the guide request lifecycle.

Only invalid input and primary-gateway failures ever reach the caller;
retrieval tiers and the cultural enhancer degrade locally and never raise.
"""

from http import HTTPStatus

RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."
UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Please try again later."
GENERIC_FAILURE_MESSAGE = "Failed to generate response"


class GuideError(Exception):
    """Base class for caller-visible errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(GuideError):
    """Malformed body or an unusable message."""

    status_code = HTTPStatus.BAD_REQUEST


class ConfigurationError(GuideError):
    """A mandatory upstream is not configured."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR


class GatewayError(GuideError):
    """
    The primary completion gateway answered with a non-2xx status.

    The upstream status is kept for logging; ``status_code`` and ``message``
    are what the caller sees.
    """

    def __init__(self, upstream_status: int, detail: str = ""):
        if upstream_status == HTTPStatus.TOO_MANY_REQUESTS:
            status, message = HTTPStatus.TOO_MANY_REQUESTS, RATE_LIMIT_MESSAGE
        elif upstream_status == HTTPStatus.PAYMENT_REQUIRED:
            status, message = HTTPStatus.PAYMENT_REQUIRED, UNAVAILABLE_MESSAGE
        else:
            status, message = HTTPStatus.INTERNAL_SERVER_ERROR, GENERIC_FAILURE_MESSAGE
        super().__init__(message)
        self.status_code = int(status)
        self.upstream_status = upstream_status
        self.detail = detail
