"""Request id propagation, access logging and HTTP latency metrics"""

import re
import time
import uuid
from typing import Optional
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from worth_gateway.infrastructure.observability.logging import log_http_request
from worth_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"

# Caller ids are echoed into headers and logs, so only short plain tokens are kept
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

_UNMEASURED_PATHS = frozenset({"/metrics"})


def resolve_request_id(header_value: Optional[str]) -> str:
    """Reuse a well-formed incoming id, otherwise mint a new one"""
    if header_value and _REQUEST_ID_PATTERN.match(header_value):
        return header_value
    return uuid.uuid4().hex


def route_template(request: Request) -> str:
    """Matched route path such as /v1/accounts/{account_id}, or the raw path when unrouted"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to state and response, and write the access log line"""

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        start_time = time.time()

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        log_http_request(
            request_id,
            request.method,
            route_template(request),
            response.status_code,
            (time.time() - start_time) * 1000,
        )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe latency per method, route template and status"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in _UNMEASURED_PATHS:
            return await call_next(request)

        start_time = time.time()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            request_duration_histogram.labels(
                method=request.method,
                endpoint=route_template(request),
                status=status,
            ).observe(time.time() - start_time)
