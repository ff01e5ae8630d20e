"""
Render entry points.

A render entry point is a pure function from a validated PagePayload
to a view tree. It owns no state and must produce structurally equal
output for equal payloads.

Two kinds are provided:

- component entry points, which hand the payload to a named client
  component as its props (the props are spread, never reshaped)
- template entry points, which render the server-side root element
  carrying the page object for client hydration (Jinja2)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from hydrator.app.schemas.payload_schema import PagePayload

logger = logging.getLogger(__name__)


RenderEntryPoint = Callable[[PagePayload], Any]


# ---------------------------------------------------------------------------
# Component entry points
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ViewNode:
    """A client component together with the props it is mounted with."""

    component: str
    props: Mapping[str, Any]


def component_entry_point(component: str) -> RenderEntryPoint:
    """Build an entry point that mounts ``component`` with the payload."""

    def render(payload: PagePayload) -> ViewNode:
        return ViewNode(component=component, props=payload)

    render.__name__ = f"render_{component}"
    render.__qualname__ = render.__name__
    return render


# ---------------------------------------------------------------------------
# Template entry points
# ---------------------------------------------------------------------------


def page_object_json(
    payload: PagePayload,
    *,
    version: Optional[str] = None,
) -> str:
    """
    Serialize the page object for a payload.

    Keys are sorted so equal payloads always serialize identically.
    """
    page_object: Dict[str, Any] = {
        "component": payload.page,
        "props": payload.to_dict(),
        "url": payload.url,
        "version": version,
    }
    return json.dumps(
        page_object,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )


class TemplateEntryPoint:
    """
    Render the root element of a page with Jinja2.

    Rendering is deterministic (StrictUndefined, sorted JSON). The page
    object is HTML-escaped into the ``data-page`` attribute by Jinja's
    autoescaping; no other transformation is applied to the props.
    """

    def __init__(
        self,
        template_path: str,
        *,
        template_dir: Path,
        root_element_id: str = "app",
        version: Optional[str] = None,
    ) -> None:
        if not template_dir.is_dir():
            raise RuntimeError(f"Template directory does not exist: {template_dir}")

        self.template_path = template_path
        self.root_element_id = root_element_id
        self.version = version
        self._env = Environment(
            loader=FileSystemLoader(template_dir),
            undefined=StrictUndefined,
            autoescape=True,
            keep_trailing_newline=True,
        )

    def __call__(self, payload: PagePayload) -> str:
        template = self._env.get_template(self.template_path)
        logger.debug(
            "Rendering template=%s page=%s", self.template_path, payload.page
        )
        return template.render(
            root_element_id=self.root_element_id,
            page_json=page_object_json(payload, version=self.version),
        )
