"""
NGO Site Backend - Request ID Middleware
========================================

What:  Tags each request with a short correlation id and echoes it back in
       the `X-Request-ID` response header.
How:   A client-supplied `X-Request-ID` is reused when it is a short token
       (letters, digits, dashes); otherwise an 8-character id is generated.
       The id is stored in a ContextVar (read by the error handlers) and on
       `request.state.request_id`.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop keep separate ids
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_RE = re.compile(r"^[A-Za-z0-9\-]{1,64}$")


def _resolve_request_id(incoming: str) -> str:
    if incoming and _CLIENT_ID_RE.match(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = _resolve_request_id(request.headers.get("X-Request-ID", ""))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = rid
        return response
