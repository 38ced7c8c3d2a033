import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .settings import settings

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled server error:{e}")
            return Response(
                "Something went wrong on our end. Please try again.",
                status_code=500,
            )


class RequestLogMiddleware(BaseHTTPMiddleware):
    MAX_LINE = 80

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if path.startswith(settings.API_PREFIX):
            duration = int((time.perf_counter() - start) * 1000)
            line = f"{request.method} {path} {response.status_code} in {duration}ms"
            if len(line) > self.MAX_LINE:
                line = line[: self.MAX_LINE - 1] + "…"
            logger.info(line)
        return response
