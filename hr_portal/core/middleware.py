import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from hr_portal.core.config import settings
from hr_portal.core.logging import request_id_var, user_id_var

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Propagates X-Request-ID into the logging context and back to the caller.
    A fresh id is generated when the client does not send one. The gateway's
    user id header is copied into the context as-is; it is validated later by
    get_current_user.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(settings.request_id_header) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        user_token = user_id_var.set(request.headers.get(settings.user_id_header))
        try:
            response = await call_next(request)
        finally:
            user_id_var.reset(user_token)
            request_id_var.reset(token)
        response.headers[settings.request_id_header] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={"duration_ms": round(elapsed_ms, 2)}
        )
        return response
