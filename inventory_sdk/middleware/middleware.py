# inventory_sdk/middleware/middleware.py
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from inventory_sdk.db.session import managed_session

logger = logging.getLogger(__name__)


class DBSessionMiddleware(BaseHTTPMiddleware):
    """Оборачивает обработку запроса в managed_session()."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        async with managed_session():
            logger.debug(f"DBSessionMiddleware: session opened for {request.method} {request.url.path}")
            response = await call_next(request)
        return response
