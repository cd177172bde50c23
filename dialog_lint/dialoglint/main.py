"""FastAPI application -- dialog-lint entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import dialoglint.deps as deps
from dialoglint.api.settings import router as settings_router
from dialoglint.api.validate import router as validate_router
from dialoglint.options import configure_logging, load_options

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the rule catalog on startup, drop it on shutdown."""
    configure_logging()

    options = load_options()
    deps._options = options
    deps._catalog = options.catalog()
    logger.info(
        "dialog-lint starting with profile %s (%d rules, disabled: %s)",
        options.profile.value,
        len(deps._catalog),
        options.disabled_rules or "none",
    )

    yield

    deps._catalog = None
    deps._options = None


app = FastAPI(
    title="dialog-lint",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
app.include_router(settings_router)
