import logging
import time
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from code_mentor.api.dependencies import HandlerDep, lifespan
from code_mentor.api.middleware import OriginGuardMiddleware, RateLimitMiddleware
from code_mentor.config import Settings, configure_logging, get_settings
from code_mentor.dto import ErrorResponse, HealthCheckResponse, MentorRequest, MentorResponse
from code_mentor.handlers import MentorHandler
from code_mentor.protocols import ModelGateway
from code_mentor.repositories import GeminiGateway, MemoryResponseStore
from code_mentor.services import MentorService, SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request body: {location or 'body'}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[%s] unhandled error", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "Internal error"},
    )


def create_app(
    settings: Settings | None = None,
    gateway: ModelGateway | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    """Build the relay application with its services wired in.

    Args:
        settings: Configuration. Defaults to the environment settings.
        gateway: Model gateway. Defaults to a GeminiGateway from settings.
        clock: Time source shared by the cache and the rate limiter.

    Returns:
        A FastAPI app whose cache, limiter and handler live on app.state
    """
    settings = settings or get_settings()
    gateway = gateway or GeminiGateway(
        api_key=settings.gemini_api_key,
        model_name=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.gemini_timeout,
    )

    store = MemoryResponseStore.create(ttl=settings.cache_ttl, clock=clock)
    limiter = SlidingWindowRateLimiter.create(
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window,
        clock=clock,
    )
    mentor_service = MentorService.create(store=store, gateway=gateway)

    app = FastAPI(
        title="Code Mentor Relay",
        description="Caching, rate-limited relay between the LeetCode mentor extension and Gemini",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.response_store = store
    app.state.rate_limiter = limiter
    app.state.mentor_service = mentor_service
    app.state.mentor_handler = MentorHandler(mentor_service=mentor_service)

    # Last added runs first: origin guard -> CORS -> rate limit -> routes.
    app.add_middleware(RateLimitMiddleware, path_prefix="/mentor")  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"] if settings.allows_all_origins else list(settings.allowed_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"],
    )
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.allowed_origins)  # type: ignore[arg-type]

    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Code Mentor Relay",
            "version": API_VERSION,
            "model": gateway.model_name,
            "endpoints": {
                "mentor": "/mentor",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.post("/mentor", response_model=MentorResponse, responses=_ERROR_RESPONSES)
    async def mentor(request: MentorRequest, handler: HandlerDep) -> MentorResponse:
        """Return mentoring text for the user's code and problem.

        Identical requests within the cache TTL are answered from cache
        without calling the model.
        """
        return await handler.mentor(request)

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "code_mentor.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
