"""
Page registry.

This module defines the set of pages the hydrator can bind. Each entry
explicitly binds together:

- a page identifier (the client component path)
- a payload schema
- a render entry point
- a Jinja2 template used for server-side root rendering
- a human-readable description

Pages must be registered here to be addressable by a PageBinding.
"""

import logging
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict

from hydrator.app.config import get_settings
from hydrator.app.errors import UnknownPageError
from hydrator.app.rendering.entry_points import (
    RenderEntryPoint,
    component_entry_point,
)
from hydrator.app.schemas.payload_schema import PayloadSchema
from hydrator.app.schemas.product_edit import ProductEditPayload

logger = logging.getLogger(__name__)


class PageIdentifier(str, Enum):
    """Registered page identifiers. Values are client component paths."""

    PRODUCTS_EDIT = "Products/Edit"


class PageEntry(BaseModel):
    """
    Declarative description of a page binding.

    This structure defines the full contract required to turn a page
    identifier into a validated payload and a rendered view.
    """

    page: str
    payload_schema: PayloadSchema
    entry_point: RenderEntryPoint
    template_path: str
    description: str

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
    )


PAGE_REGISTRY: Dict[str, PageEntry] = {
    PageIdentifier.PRODUCTS_EDIT.value: PageEntry(
        page=PageIdentifier.PRODUCTS_EDIT.value,
        payload_schema=PayloadSchema(
            PageIdentifier.PRODUCTS_EDIT.value,
            ProductEditPayload,
            allow_unknown_fields=get_settings().allow_unknown_fields,
        ),
        entry_point=component_entry_point("ProductEditPage"),
        template_path="products/edit.html.jinja",
        description=(
            "Product edit page. Props are computed by the product "
            "presenter and mounted unchanged on the ProductEditPage "
            "component."
        ),
    ),
}


def register_page(
    entry: PageEntry,
    registry: Optional[Dict[str, PageEntry]] = None,
) -> PageEntry:
    """Add a page binding. Identifiers may only be registered once."""
    registry = PAGE_REGISTRY if registry is None else registry
    if entry.page in registry:
        raise ValueError(f"Page '{entry.page}' is already registered.")
    registry[entry.page] = entry
    logger.info("Registered page=%s", entry.page)
    return entry


def get_page_entry(
    page: str,
    registry: Optional[Dict[str, PageEntry]] = None,
) -> PageEntry:
    """Look up the binding for ``page``. Raises UnknownPageError."""
    registry = PAGE_REGISTRY if registry is None else registry
    key = page.value if isinstance(page, PageIdentifier) else page
    entry = registry.get(key)
    if entry is None:
        raise UnknownPageError(key)
    return entry
