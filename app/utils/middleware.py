import logging
from typing import Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.config.settings import settings
from app.utils.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject uploads whose declared Content-Length is over MAX_UPLOAD_BYTES
    before the body is received. Chunked bodies carry no length and are
    capped while they are written by the asset store.
    """

    def __init__(self, app: ASGIApp, paths: Iterable[str]):
        super().__init__(app)
        self.paths = set(paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")

        if request.method == "POST" and request.url.path in self.paths and content_length:
            limit = settings.MAX_UPLOAD_BYTES
            try:
                declared = int(content_length)
            except ValueError:
                declared = None
            if declared is not None and declared > limit:
                logger.warning(
                    "Request body too large on %s: %d bytes (max: %d)",
                    request.url.path, declared, limit,
                )
                return JSONResponse(status_code=413, content=PayloadTooLargeError(limit).to_dict())

        return await call_next(request)
