"""
Page Navigation Snapshot - read-only view handed to the renderer.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict

from pagenav.state.tile_store import TileRecord


class PageNavSnapshot(BaseModel):
    """Immutable state of the tile strip after the last command."""
    tiles: Tuple[TileRecord, ...] = Field(default_factory=tuple, description="Tiles in render order")
    active_id: Optional[str] = Field(default=None, description="Selected tile")
    focused_id: Optional[str] = Field(default=None, description="Tile holding focus")
    hovered_index: Optional[int] = Field(default=None, description="Hovered gap (after tile at this index)")
    dragging_id: Optional[str] = Field(default=None, description="Tile being dragged")
    open_panel_id: Optional[str] = Field(default=None, description="Tile whose settings panel is open")

    model_config = ConfigDict(frozen=True)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(t.id for t in self.tiles)

    @property
    def active_tile(self) -> Optional[TileRecord]:
        for tile in self.tiles:
            if tile.id == self.active_id:
                return tile
        return None

    def show_insert_affordance(self, index: int) -> bool:
        """Whether the "+" after tile index should be drawn."""
        return self.hovered_index == index and 0 <= index < len(self.tiles) - 1
