"""Request logging middleware for the Helpdesk service."""

import time
import uuid
from typing import Optional, Set

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .handlers import internal_error_response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one structured line per request and tags responses with a request id.

    The request id is taken from an incoming `X-Request-ID` header when present,
    otherwise generated. It is bound into structlog context vars for the duration
    of the request, so every log line emitted by handlers carries it. Exceptions
    no route handler mapped are logged here and answered with a generic 500.
    """

    default_ignored_paths = {"/favicon.ico", "/docs", "/redoc", "/openapi.json"}

    def __init__(
        self,
        app,
        logger=None,
        ignored_paths: Optional[Set[str]] = None,
        add_request_id_header: bool = True,
    ):
        super().__init__(app)
        self.logger = logger or structlog.get_logger("helpdesk")
        self.ignored_paths = ignored_paths if ignored_paths is not None else self.default_ignored_paths
        self.add_request_id_header = add_request_id_header

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # answered here so the failure is logged once, with the request id bound
            self.logger.exception(
                "unhandled_exception",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                exc_info=exc,
            )
            response = internal_error_response()
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        if request.url.path not in self.ignored_paths:
            self.logger.info(
                "request_completed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )

        if self.add_request_id_header:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
