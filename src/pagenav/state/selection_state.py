"""
Selection & Focus Tracker.

Tracks which tile is active, which tile holds keyboard/pointer focus, and
which gap between tiles is hovered. Focus is presentational and is never
validated; selection always points at a live tile.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from pagenav.state.tile_store import TileStore

logger = logging.getLogger(__name__)


class SelectionFocusTracker(QObject):
    """Active tile, focused tile and hovered gap for one tile strip."""
    selection_changed = Signal(str)  # Emits active tile id
    focus_changed = Signal()
    hover_changed = Signal()

    def __init__(self, store: TileStore) -> None:
        super().__init__()
        self._store = store
        self._active_id: Optional[str] = store.first_id()
        self._focused_id: Optional[str] = None
        self._focus_on_tile = False
        self._hovered_index: Optional[int] = None

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    @property
    def focused_id(self) -> Optional[str]:
        return self._focused_id

    @property
    def hovered_index(self) -> Optional[int]:
        return self._hovered_index

    def select(self, tile_id: str) -> bool:
        """Make tile_id active. Unknown ids are ignored (returns False)."""
        if not self._store.contains(tile_id):
            logger.debug("Ignoring select of unknown tile %s", tile_id)
            return False
        if self._active_id != tile_id:
            self._active_id = tile_id
            self.selection_changed.emit(tile_id)
        return True

    def focus(self, tile_id: str) -> None:
        """
        Record the focused element. Any id is accepted; only focus on a
        tile is cleared by reconcile() once that tile is removed.
        """
        self._focus_on_tile = self._store.contains(tile_id)
        if self._focused_id != tile_id:
            self._focused_id = tile_id
            self.focus_changed.emit()

    def blur(self) -> None:
        self._focus_on_tile = False
        if self._focused_id is not None:
            self._focused_id = None
            self.focus_changed.emit()

    def set_hovered_gap(self, index: Optional[int]) -> None:
        """Record the hovered gap. The renderer clears it on pointer-leave."""
        if self._hovered_index != index:
            self._hovered_index = index
            self.hover_changed.emit()

    def is_gap_actionable(self, index: int) -> bool:
        """True while index is the hovered gap and not the gap after the last tile."""
        return self._hovered_index == index and 0 <= index < len(self._store) - 1

    def reconcile(self) -> None:
        """
        Repair references after the tile order changed.

        A vanished active tile falls back to the first remaining tile; a
        vanished focused tile is blurred (focus on a non-tile element is
        kept); a hovered gap past the end is
        cleared.
        """
        if not self._store.contains(self._active_id):
            fallback = self._store.first_id()
            if fallback != self._active_id:
                logger.info("Active tile %s gone, falling back to %s", self._active_id, fallback)
                self._active_id = fallback
                if fallback is not None:
                    self.selection_changed.emit(fallback)

        if self._focused_id is not None:
            if self._store.contains(self._focused_id):
                self._focus_on_tile = True
            elif self._focus_on_tile:
                self.blur()

        if self._hovered_index is not None and not 0 <= self._hovered_index < len(self._store):
            self.set_hovered_gap(None)
