"""Transport-boundary middleware: origin allow-list and per-client rate limiting."""

import logging
import math

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from code_mentor.entities import RateLimitDecision
from code_mentor.errors import RateLimited
from code_mentor.services import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


def client_address(request: Request) -> str:
    """The caller's network address, used as the rate-limit identity."""
    return request.client.host if request.client else "unknown"


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    headers = {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(max(decision.remaining, 0)),
        "RateLimit-Reset": str(math.ceil(decision.reset_after)),
    }
    if not decision.allowed:
        headers["Retry-After"] = str(max(math.ceil(decision.retry_after), 1))
    return headers


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Admit or reject requests under ``path_prefix`` before they reach a route.

    The limiter is read from ``app.state.rate_limiter`` so tests can swap it.
    """

    def __init__(self, app: ASGIApp, path_prefix: str = "/mentor") -> None:
        super().__init__(app)
        self._path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path != self._path_prefix and not path.startswith(self._path_prefix + "/"):
            return await call_next(request)

        limiter: SlidingWindowRateLimiter = request.app.state.rate_limiter
        decision = limiter.admit(client_address(request))
        if not decision.allowed:
            rejection = RateLimited(retry_after=decision.retry_after)
            return JSONResponse(
                status_code=rejection.status_code,
                content={"error": rejection.message},
                headers=_rate_limit_headers(decision),
            )

        response = await call_next(request)
        response.headers.update(_rate_limit_headers(decision))
        return response


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Origin is not on the allow-list.

    An empty allow-list admits everything. Requests without an Origin header
    (curl, server-to-server, extension background pages) are admitted.
    """

    def __init__(self, app: ASGIApp, allowed_origins: tuple[str, ...] = ()) -> None:
        super().__init__(app)
        self._allowed = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        if origin and self._allowed and origin not in self._allowed:
            logger.warning("Rejected request from origin %s", origin)
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "CORS origin denied"},
            )
        return await call_next(request)
