from .page_state import PageObject, PageState, page_state, parse_page_object
from .page_binding import PageBinding

__all__ = [
    "PageObject",
    "PageState",
    "page_state",
    "parse_page_object",
    "PageBinding",
]
