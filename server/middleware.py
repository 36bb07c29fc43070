"""HTTP middleware."""

import uuid
from collections.abc import Sequence

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from utils.logger import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"
ALLOWED_REQUEST_HEADERS = ("authorization", "x-client-info", "apikey", "content-type", "x-request-id")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an ID, reusing the caller's if it sent one.

    The context variable is reset when the handler returns, before a streamed
    body is sent; streams that log afterwards capture the ID themselves.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class PreflightMiddleware(BaseHTTPMiddleware):
    """
    Answer every OPTIONS request with 204, an empty body and permissive CORS
    headers, whether or not it is a browser preflight.

    Registered outside CORSMiddleware so its own preflight reply (200 "OK")
    never runs.
    """

    def __init__(self, app, expose_headers: Sequence[str] = ()):
        super().__init__(app)
        self.headers = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
            "Access-Control-Allow-Headers": ", ".join(ALLOWED_REQUEST_HEADERS),
            "Access-Control-Max-Age": "600",
        }
        if expose_headers:
            self.headers["Access-Control-Expose-Headers"] = ", ".join(expose_headers)

    async def dispatch(self, request: Request, call_next):
        if request.method != "OPTIONS":
            return await call_next(request)
        return Response(status_code=204, headers=self.headers)
