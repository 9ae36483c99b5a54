import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.core.logger import get_logger

logger = get_logger('http')


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration of every HTTP request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f'{request.method} {request.url.path} failed after {time.time() - start:.3f}s: {e}')
            raise
        logger.info(f'{request.method} {request.url.path} -> {response.status_code} ({time.time() - start:.3f}s)')
        return response
