"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built by ``create_app`` and stored in app.state
    - Dependency functions retrieve from request.app.state
    - The lifespan runs the expiry sweep and closes the gateway
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from code_mentor.handlers import MentorHandler
from code_mentor.protocols import ResponseStore
from code_mentor.services import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> MentorHandler:
    """Dependency injection for MentorHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "mentor_handler", None)
    if handler is None:
        raise RuntimeError("MentorHandler not initialized. Check create_app setup.")
    return handler


def sweep_once(store: ResponseStore, limiter: SlidingWindowRateLimiter) -> tuple[int, int]:
    """Drop expired cache entries and idle rate-limit windows.

    Returns:
        (entries purged, client windows purged)
    """
    return store.purge_expired(), limiter.purge_idle()


async def _sweep_forever(app: FastAPI, period: float) -> None:
    while True:
        await asyncio.sleep(period)
        entries, clients = sweep_once(app.state.response_store, app.state.rate_limiter)
        if entries or clients:
            logger.debug("Sweep removed %d cache entries and %d client windows", entries, clients)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Startup:
        Starts the periodic sweep task (every ``cache_check_period`` seconds)

    Cleanup:
        Cancels the sweep and closes the model gateway's HTTP client
    """
    settings = app.state.settings
    gateway = app.state.mentor_service.gateway

    logger.info("Starting Code Mentor relay on port %s", settings.api_port)
    logger.info("Model: %s (credential %s)", gateway.model_name, "set" if settings.gemini_api_key else "MISSING")
    logger.info(
        "Cache TTL: %gs, rate limit: %d per %gs",
        settings.cache_ttl,
        settings.rate_limit_max,
        settings.rate_limit_window,
    )
    if not settings.allows_all_origins:
        logger.info("Allowed origins: %s", ", ".join(settings.allowed_origins))

    sweeper = asyncio.create_task(_sweep_forever(app, settings.cache_check_period))

    yield

    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await gateway.aclose()
    logger.info("Code Mentor relay shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[MentorHandler, Depends(get_handler)]