import logging
from functools import wraps
from typing import Optional

from fastapi import HTTPException, Request

from .errors import Internal
from .friendly_msg import get_friendly_message

logger = logging.getLogger(__name__)


def _find_request(args, kwargs) -> Optional[Request]:
    return next(
        (a for a in (*args, *kwargs.values()) if isinstance(a, Request)), None
    )


def _where(func, request: Optional[Request]) -> str:
    if request is None:
        return f"in {func.__name__}"
    client_ip = request.client.host if request.client else "unknown"
    trace_id = request.headers.get("X-Request-ID", "none")
    return (
        f"TraceID={trace_id} | {request.method} {request.url.path} "
        f"from {client_ip} in {func.__name__}"
    )


def safe_handler(func):
    """Let HTTP errors through and hide everything else behind a 500."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException as e:
            where = _where(func, _find_request(args, kwargs))
            logger.warning(f"[HTTPException {e.status_code}] {where}: {e.detail}")
            raise
        except Exception as e:
            where = _where(func, _find_request(args, kwargs))
            logger.error(f"[Unhandled Error] {where}: {e!r}", exc_info=True)
            raise Internal(get_friendly_message(e)) from e

    return wrapper
