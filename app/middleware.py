"""
Per-request tracing for the API.

Every request gets a request_id bound into the structlog context. Once the
router has matched, the completion log also names the route template and its
area (Payments, Booking, ...) so payment traffic can be filtered from the rest.
"""
import time
import uuid
from typing import Callable, Optional, Tuple

from fastapi import Request, Response
from structlog.contextvars import bind_contextvars, clear_contextvars

from app.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

# uptime pings hit this every few seconds
QUIET_AREAS = {"Health"}


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse the caller's id when it is sane, otherwise mint one"""
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid.uuid4())


def route_details(scope: dict) -> Tuple[Optional[str], Optional[str]]:
    """(path template, area tag) of the matched route, or (None, None) before routing or on 404"""
    route = scope.get("route")
    if route is None:
        return None, None
    tags = getattr(route, "tags", None) or []
    return getattr(route, "path", None), (str(tags[0]) if tags else None)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

    clear_contextvars()
    bind_contextvars(request_id=request_id, method=request.method, path=request.url.path)
    request.state.request_id = request_id

    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        route, area = route_details(request.scope)
        logger.error(
            "request_failed",
            exc_info=exc,
            route=route,
            area=area,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        raise
    else:
        route, area = route_details(request.scope)
        log = logger.debug if area in QUIET_AREAS else logger.info
        log(
            "request_completed",
            route=route,
            area=area,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            client_host=request.client.host if request.client else None,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        clear_contextvars()
