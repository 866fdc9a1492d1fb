"""
Page Content Registry.

Explicit tile id -> page body mapping owned by the presentation side.
Tiles without an entry (e.g. freshly inserted pages) render a fallback
built from the tile itself instead of an empty body.
"""

from typing import Dict, Optional

from pagenav.state.tile_store import TileRecord

DEFAULT_MISSING_TEMPLATE = "No content for {label}."


class PageContentRegistry:
    """Maps tile ids to page bodies with a defined fallback."""

    def __init__(self, contents: Optional[Dict[str, str]] = None, missing_template: str = DEFAULT_MISSING_TEMPLATE):
        self._contents: Dict[str, str] = dict(contents or {})
        self._missing_template = missing_template

    def register(self, tile_id: str, body: str) -> None:
        self._contents[tile_id] = body

    def unregister(self, tile_id: str) -> None:
        self._contents.pop(tile_id, None)

    def has_content(self, tile_id: str) -> bool:
        return tile_id in self._contents

    def get(self, tile: TileRecord) -> str:
        """Body for tile, or the fallback text if none is registered."""
        body = self._contents.get(tile.id)
        if body is not None:
            return body
        return self._missing_template.format(label=tile.label, id=tile.id)
