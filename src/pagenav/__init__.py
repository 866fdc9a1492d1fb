"""
pagenav - interaction state core for a reorderable page tile strip.

The renderer dispatches primitive pointer/focus events into
PageNavigation and redraws from PageNavigation.snapshot().
"""

from pagenav.errors import AlreadyDragging, DuplicateId, IndexOutOfRange, InvalidSeed, PageNavError
from pagenav.state import PageNavSnapshot, PanelAction, TileRecord
from pagenav.services.page_nav_service import PageNavigation, get_page_navigation

__all__ = [
    "PageNavError", "InvalidSeed", "DuplicateId", "IndexOutOfRange", "AlreadyDragging",
    "PageNavSnapshot", "PanelAction", "TileRecord",
    "PageNavigation", "get_page_navigation",
]

__version__ = "0.1.0"
