"""
PhotoShare Backend — Request ID Middleware
============================================

What:  Tags every request with a correlation ID, exposes it to loggers and
       error handlers, and echoes it back in `X-Request-ID`.
How:   A client-supplied `X-Request-ID` is reused only if it is a short token
       of safe characters; anything else (missing, oversized, containing
       spaces or control characters) is replaced with a fresh ID. The ID is
       written into a ContextVar (read by the access log and by every error
       body in main.py) and onto `request.state.request_id`.
When:  Outermost custom middleware, so every later log line can include it.

Why the header is filtered:
    The ID is interpolated into log lines verbatim. Accepting arbitrary
    header text would let a client forge extra log lines or flood the log.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Letters, digits, dot, underscore, hyphen; at most 64 chars (fits a UUID4)
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def resolve_request_id(client_value: Optional[str]) -> str:
    """Return the client's ID when it is safe to log, else a new one."""
    if client_value and _CLIENT_ID_PATTERN.fullmatch(client_value):
        return client_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds one correlation ID to the request for its whole lifetime."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
