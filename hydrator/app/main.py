"""
FastAPI entrypoint for the hydrator.

Exposes the page contract endpoints. The application is stateless:
every request carries the payload it is checked against.
"""

import logging

from fastapi import FastAPI

from hydrator.app.api.pages import router as pages_router
from hydrator.app.config import get_settings
from hydrator.app.registry.registry import PAGE_REGISTRY

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="hydrator",
    description="Typed page payload contracts and their render bindings",
    version="0.1.0",
)

app.include_router(pages_router, prefix="/pages")

logger.info("hydrator: %d page(s) registered", len(PAGE_REGISTRY))
