import asyncio
import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wantboard.api import health_router, wants_router
from wantboard.config import settings
from wantboard.services.catalog_resolver import check_catalog_connection
from wantboard.services.container import build_services

logger = logging.getLogger(__name__)


def handle_fatal_error(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """
    Event loop exception handler.

    An exception that escapes every task terminates the process with
    status 1. Dropped connections go to the default handler.
    """
    exception = context.get("exception")
    if exception is None or isinstance(exception, ConnectionError):
        loop.default_exception_handler(context)
        return

    logger.critical(
        "FATAL_ERROR: %s",
        context.get("message", "unhandled exception"),
        exc_info=exception,
    )
    os._exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    asyncio.get_running_loop().set_exception_handler(handle_fatal_error)

    services = build_services(settings)
    app.state.services = services

    if settings.check_catalog_on_startup:
        await check_catalog_connection(services.resolver)

    try:
        yield
    finally:
        await services.aclose()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("wantboard"),
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(wants_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
