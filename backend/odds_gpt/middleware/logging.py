import json
import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("odds_gpt.access")

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied ids are echoed only when they are short and log-safe.
_INBOUND_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Never logged: local key query parameter.
_HIDDEN_QUERY_KEYS = {"api_key"}


def resolve_request_id(request: Request) -> str:
    """Reuse the caller's X-Request-ID when valid, else mint a short one."""
    inbound = request.headers.get(REQUEST_ID_HEADER)
    if inbound and _INBOUND_ID_RE.fullmatch(inbound):
        return inbound
    return uuid.uuid4().hex[:8]


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """One JSON access line per request, tagged with the request id.

    The id is stored on ``request.state.request_id`` so route handlers can
    tag their own log lines with it, and is returned as X-Request-ID.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id
        start = time.perf_counter()

        response: Response = await call_next(request)

        log_data = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "params": sorted(set(request.query_params.keys()) - _HIDDEN_QUERY_KEYS),
            "status": response.status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            "upstream_remaining": response.headers.get("x-requests-remaining"),
        }

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(level, json.dumps(log_data))

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
