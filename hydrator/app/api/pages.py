"""
Page contract endpoints.

These endpoints expose the registered page catalogue, the JSON schema
of each page payload, and validate/render checks for presenter output.
They exist for development and integration: a presenter change that
breaks the contract surfaces here as a 422 rather than as a broken
page in the browser.
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from hydrator.app.binding.page_binding import PageBinding
from hydrator.app.config import Settings, get_settings
from hydrator.app.errors import SchemaError, UnknownPageError
from hydrator.app.registry.registry import PAGE_REGISTRY, PageEntry, get_page_entry
from hydrator.app.rendering.entry_points import TemplateEntryPoint

router = APIRouter()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class PageListItem(BaseModel):
    page: str
    description: str


class ValidationResponse(BaseModel):
    page: str
    fields: List[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _lookup(page: str) -> PageEntry:
    try:
        return get_page_entry(page)
    except UnknownPageError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@lru_cache(maxsize=None)
def template_binding(page: str, settings: Settings) -> PageBinding:
    """
    Binding for ``page`` whose entry point renders the root element.

    Built once per page and settings; the Jinja2 environment is reused
    across requests.
    """
    entry = get_page_entry(page)
    template_entry = entry.model_copy(
        update={
            "entry_point": TemplateEntryPoint(
                entry.template_path,
                template_dir=settings.template_dir,
                root_element_id=settings.root_element_id,
                version=settings.asset_version,
            )
        }
    )
    return PageBinding(entry.page, registry={entry.page: template_entry})


def _schema_error_detail(exc: SchemaError) -> Dict[str, Any]:
    return {
        "message": str(exc),
        "page": exc.page,
        "errors": [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors
        ],
    }


# ---------------------------------------------------------------------------
# GET /pages
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[PageListItem],
    summary="List registered pages",
)
def list_pages() -> List[PageListItem]:
    """Return all pages currently registered with the hydrator."""
    return [
        PageListItem(page=entry.page, description=entry.description)
        for entry in PAGE_REGISTRY.values()
    ]


# ---------------------------------------------------------------------------
# GET /pages/schema/{page}
# ---------------------------------------------------------------------------


@router.get(
    "/schema/{page:path}",
    summary="Return the JSON schema for a page payload",
)
def get_page_schema(page: str) -> Dict[str, Any]:
    """
    Return the JSON schema derived from the pydantic model used to
    validate payloads for the given page. Property names are the
    camelCase wire names.
    """
    return _lookup(page).payload_schema.json_schema()


# ---------------------------------------------------------------------------
# POST /pages/validate/{page}
# ---------------------------------------------------------------------------


@router.post(
    "/validate/{page:path}",
    response_model=ValidationResponse,
    summary="Validate a page payload against its schema",
)
def validate_page_payload(
    page: str,
    payload: Dict[str, Any] = Body(...),
) -> ValidationResponse:
    entry = _lookup(page)
    try:
        validated = entry.payload_schema.validate(payload)
    except SchemaError as exc:
        raise HTTPException(
            status_code=422,
            detail=_schema_error_detail(exc),
        ) from exc

    return ValidationResponse(page=entry.page, fields=sorted(validated))


# ---------------------------------------------------------------------------
# POST /pages/render/{page}
# ---------------------------------------------------------------------------


@router.post(
    "/render/{page:path}",
    response_class=HTMLResponse,
    summary="Render the root element for a page payload",
)
def render_page_root(
    page: str,
    url: Optional[str] = Query(
        default=None,
        description="Request URL recorded in the page object.",
    ),
    payload: Dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """
    Validate the payload and render the server-side root element with
    the page object embedded for client hydration.
    """
    binding = template_binding(_lookup(page).page, settings)
    try:
        rendered = binding.render(payload, url=url)
    except SchemaError as exc:
        raise HTTPException(
            status_code=422,
            detail=_schema_error_detail(exc),
        ) from exc

    return HTMLResponse(rendered)
