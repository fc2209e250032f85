"""Request tracing for the estimate API: request id propagation and timing."""
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.services.logging_config import current_request_id

logger = logging.getLogger("design-dialogues.middleware")

REQUEST_ID_HEADER = "X-Request-ID"
SKIP_LOG_PATHS = {"/health"}


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    - Reuses the caller's X-Request-ID (the SPA sends one per slider burst)
      or mints a uuid4, and exposes it to every log line of the request.
    - Returns the id and the elapsed milliseconds (X-Process-Time).
    - Logs one line per request, except health probes.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = current_request_id.set(request_id)
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        finally:
            current_request_id.reset(token)

        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(elapsed_ms)

        if request.url.path not in SKIP_LOG_PATHS:
            level = logging.WARNING if response.status_code >= 400 else logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "http_status": response.status_code,
                    "duration_ms": elapsed_ms,
                },
            )
        return response
