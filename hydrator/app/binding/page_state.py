"""
Process-wide page state.

The transport delivers the page object for the current navigation
(component, props, url, asset version) as JSON, typically embedded in
the ``data-page`` attribute of the root element. PageState holds that
object until the next navigation replaces it.

Prefer handing a PageObject straight to ``PageBinding.render_page``:
explicit passing has no hydration race. The module-level ``page_state``
exists for callers that can only discover the current page ambiently.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from hydrator.app.errors import PageStateMissingError, SchemaError

logger = logging.getLogger(__name__)


class PageObject(BaseModel):
    """The page document delivered by the transport for one navigation."""

    component: StrictStr
    props: Dict[str, Any]
    url: Optional[StrictStr] = None
    version: Optional[StrictStr] = None

    # Transports may add history flags and similar keys we do not use.
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )


def _page_object_error(exc: ValidationError) -> SchemaError:
    errors = [
        {"loc": tuple(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    return SchemaError(
        f"Malformed page object ({len(errors)} error(s)).",
        errors=errors,
    )


def parse_page_object(data: Union[PageObject, Mapping[str, Any]]) -> PageObject:
    """Validate a page document. Raises SchemaError when malformed."""
    if isinstance(data, PageObject):
        return data
    try:
        return PageObject.model_validate(dict(data))
    except ValidationError as exc:
        raise _page_object_error(exc) from exc


class PageState:
    """Holds at most one current page object."""

    def __init__(self) -> None:
        self._page: Optional[PageObject] = None

    @property
    def is_hydrated(self) -> bool:
        return self._page is not None

    def hydrate(
        self,
        page_object: Union[PageObject, Mapping[str, Any]],
    ) -> PageObject:
        """Replace the current page object. The previous one is discarded."""
        page_object = parse_page_object(page_object)
        self._page = page_object
        logger.debug(
            "Hydrated page=%s url=%s", page_object.component, page_object.url
        )
        return page_object

    def hydrate_json(self, raw: Union[str, bytes]) -> PageObject:
        """Parse a JSON page document and hydrate from it."""
        try:
            page_object = PageObject.model_validate_json(raw)
        except ValidationError as exc:
            raise _page_object_error(exc) from exc
        return self.hydrate(page_object)

    def current(self) -> PageObject:
        """
        Return the current page object.

        Raises PageStateMissingError rather than returning an empty
        default when nothing has been hydrated yet.
        """
        if self._page is None:
            raise PageStateMissingError(
                "Page state has not been hydrated; the transport has not "
                "delivered a page object yet."
            )
        return self._page

    def clear(self) -> None:
        self._page = None


page_state = PageState()
