"""HTTP middleware for the media helper API."""
from __future__ import annotations

import logging
import secrets
from typing import Iterable

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

PROTECTED_PREFIXES = ("/media-check", "/catalog")


class SharedSecretMiddleware(BaseHTTPMiddleware):
    """Reject protected requests whose Authorization header is not the shared secret.

    Runs before routing, so the request body is never read for unauthorized callers.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        secret: str,
        protected_prefixes: Iterable[str] = PROTECTED_PREFIXES,
    ) -> None:
        super().__init__(app)
        self._secret = secret.encode("utf-8")
        self._protected_prefixes = tuple(protected_prefixes)

    def is_protected(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(f"{prefix}/") for prefix in self._protected_prefixes
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.is_protected(request.url.path):
            provided = request.headers.get("Authorization", "").encode("utf-8")
            if not secrets.compare_digest(provided, self._secret):
                logger.info("rejected unauthorized request path=%s", request.url.path)
                return JSONResponse({"detail": "Unauthorized"}, status_code=401)
        return await call_next(request)
