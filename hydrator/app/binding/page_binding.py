"""
Page binding.

The single point where "this page" becomes "this payload, this
renderer". A PageBinding resolves its page identifier to a registered
PageEntry once, then for each render:

    props → PayloadSchema.validate → PagePayload → entry point → view

Validation failures are fatal: SchemaError propagates to the caller and
the entry point is never invoked. There is no partial render and no
defaulting. The binding owns no state; the page state it may read is
owned by the transport.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from hydrator.app.binding.page_state import (
    PageObject,
    PageState,
    page_state,
    parse_page_object,
)
from hydrator.app.errors import PageStateMissingError, SchemaError
from hydrator.app.registry.registry import PageEntry, PageIdentifier, get_page_entry
from hydrator.app.schemas.payload_schema import PagePayload

logger = logging.getLogger(__name__)


class PageBinding:
    """
    Binds one page identifier to its schema and render entry point.

    ``state`` is the page state to read from in
    ``resolve_current_payload``. When omitted the process-wide
    ``page_state`` is used.
    """

    def __init__(
        self,
        page: Union[PageIdentifier, str],
        *,
        state: Optional[PageState] = None,
        registry: Optional[Dict[str, PageEntry]] = None,
    ) -> None:
        self.entry = get_page_entry(page, registry)
        self._state = state

    @property
    def page(self) -> str:
        return self.entry.page

    @property
    def state(self) -> PageState:
        return self._state if self._state is not None else page_state

    # ------------------------------------------------------------------
    # Payload resolution
    # ------------------------------------------------------------------

    def resolve_current_payload(self) -> Mapping[str, Any]:
        """
        Read the props of the currently hydrated page.

        Raises PageStateMissingError if the transport has not populated
        page state yet, or if the hydrated page is a different page.
        """
        page_object = self.state.current()
        if page_object.component != self.page:
            raise PageStateMissingError(
                f"Page state holds '{page_object.component}', "
                f"not '{self.page}'."
            )
        return page_object.props

    def validate(
        self,
        payload: Mapping[str, Any],
        *,
        url: Optional[str] = None,
    ) -> PagePayload:
        return self.entry.payload_schema.validate(payload, url=url)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        payload: Mapping[str, Any],
        *,
        url: Optional[str] = None,
    ) -> Any:
        """
        Validate ``payload`` and hand it to the render entry point.

        The entry point receives the PagePayload as its single argument,
        field for field as received. Rendering is idempotent provided the
        entry point is pure.
        """
        if isinstance(payload, PagePayload) and url is None:
            url = payload.url

        validated = self.validate(payload, url=url)
        logger.debug(
            "Rendering page=%s fields=%d", self.page, len(validated)
        )
        return self.entry.entry_point(validated)

    def render_current(self) -> Any:
        """Render the page currently held in page state."""
        page_object = self.state.current()
        return self.render(self.resolve_current_payload(), url=page_object.url)

    def render_page(self, page_object: Union[PageObject, Mapping[str, Any]]) -> Any:
        """
        Render a page object handed in directly by the transport.

        Page state is neither read nor written.
        """
        page_object = parse_page_object(page_object)
        if page_object.component != self.page:
            raise SchemaError(
                f"Page object is for '{page_object.component}', "
                f"binding is for '{self.page}'.",
                page=self.page,
                errors=[
                    {
                        "loc": ("component",),
                        "msg": f"Expected '{self.page}'",
                        "type": "component_mismatch",
                    }
                ],
            )

        return self.render(page_object.props, url=page_object.url)
