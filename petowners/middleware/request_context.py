"""
Request context middleware.

WHAT: Middleware that assigns every request an ID and makes the request
context available throughout the request lifecycle.

WHY: Log lines from services and DAOs are easier to correlate when they
can be tied back to the request that caused them. The ID is also
returned to the client in the X-Request-ID header.

HOW: Stores the context on request.state and in a ContextVar, so code
without access to the request object can still read it.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class RequestContext:
    """
    Container for request-scoped context data.

    Fields:
    - request_id: Unique identifier for the request (for log correlation)
    - ip_address: Client IP as seen by the server
    - path: Request path
    - method: HTTP method (GET, POST, etc.)
    """

    request_id: str
    ip_address: str
    path: str
    method: str


# WHY: ContextVar gives each concurrently handled request its own value
_request_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "request_context", default=None
)


def get_request_context() -> Optional[RequestContext]:
    """
    Get the current request context.

    Returns:
        RequestContext if within a request, None otherwise
    """
    return _request_context.get()


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from a request.

    HOW: Checks X-Forwarded-For first (leftmost entry is the original
    client), then falls back to the direct connection address.
    """
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that captures and stores request context.

    A request ID supplied by the client in X-Request-ID is kept; otherwise
    a UUID4 is generated. Either way it is echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request and add context.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with request ID header added
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        context = RequestContext(
            request_id=request_id,
            ip_address=get_client_ip(request),
            path=request.url.path,
            method=request.method,
        )

        request.state.context = context
        token = _request_context.set(context)
        started = time.perf_counter()

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            logger.debug(
                f"[{request_id}] {context.method} {context.path} -> "
                f"{response.status_code} in {(time.perf_counter() - started) * 1000:.1f}ms"
            )
            return response

        finally:
            _request_context.reset(token)
