import logging
import re
import time
from typing import Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from aitutor.core.logging import LOGGER_NAME, latency_bucket_ms, request_id_ctx_var

# Client-supplied ids end up in logs and response headers
_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def accept_request_id(value: Optional[str]) -> Optional[str]:
    """The incoming id if it is short and header-safe, else None."""
    if value and _SAFE_REQUEST_ID.match(value):
        return value
    return None


def _completion_level(status: Optional[int]) -> int:
    if status is None or status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate every request with an id (echoed or minted) and log one completion line."""

    def __init__(self, app, header_name: str = "x-request-id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next):
        rid = accept_request_id(request.headers.get(self.header_name)) or uuid4().hex
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx_var.reset(token)
        latency = latency_bucket_ms((time.perf_counter() - start) * 1000)

        response.headers[self.header_name] = rid
        status = getattr(response, "status_code", None)
        logging.getLogger(LOGGER_NAME).log(
            _completion_level(status),
            f"[http] {request.method} {request.url.path} -> {status}",
            extra={
                "request_id": rid,
                "path": request.url.path,
                "method": request.method,
                "status": status,
                "latency_bucket": latency,
                "event_type": "request.complete",
            },
        )
        return response
