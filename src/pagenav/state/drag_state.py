"""
Drag-Reorder Coordinator.

Idle -> Dragging -> Idle. drag_over is advisory only; the order is touched
exactly once, on drop, so the visible strip never reorders mid-gesture.
"""

import logging
from enum import Enum
from typing import Optional

from PySide6.QtCore import QObject, Signal

from pagenav.errors import AlreadyDragging
from pagenav.state.tile_store import TileStore

logger = logging.getLogger(__name__)


class DragPhase(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragReorderCoordinator(QObject):
    """Owns the drag session and commits reorders through the TileStore."""
    drag_changed = Signal()

    def __init__(self, store: TileStore) -> None:
        super().__init__()
        self._store = store
        self._dragging_id: Optional[str] = None

    @property
    def dragging_id(self) -> Optional[str]:
        return self._dragging_id

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self._dragging_id is None else DragPhase.DRAGGING

    def begin_drag(self, tile_id: str) -> bool:
        """
        Start a drag session for tile_id.

        Returns:
            True if a session started, False if tile_id is unknown.

        Raises:
            AlreadyDragging: If a session is already active. A stale session
                must be ended with cancel_drag() first.
        """
        if self._dragging_id is not None:
            raise AlreadyDragging(self._dragging_id, tile_id)
        if not self._store.contains(tile_id):
            logger.debug("Ignoring drag start on unknown tile %s", tile_id)
            return False
        self._dragging_id = tile_id
        self.drag_changed.emit()
        return True

    def drag_over(self, candidate_id: str) -> bool:
        """Whether candidate_id accepts a drop. Never mutates state."""
        return self._dragging_id is not None and self._store.contains(candidate_id)

    def drop(self, target_id: str) -> bool:
        """
        Resolve the session onto target_id.

        Always ends Idle. Self-drops, drops without a session and drops onto
        vanished tiles leave the order unchanged.

        Returns:
            True if the order changed.
        """
        source_id = self._dragging_id
        moved = False
        if source_id is not None and source_id != target_id:
            moved = self._store.move(source_id, target_id)
        self._end()
        return moved

    def cancel_drag(self) -> None:
        """End the session without reordering (released outside any target)."""
        self._end()

    def reconcile(self) -> None:
        """Cancel the session if the dragged tile no longer exists."""
        if self._dragging_id is not None and not self._store.contains(self._dragging_id):
            logger.info("Dragged tile %s gone, cancelling drag", self._dragging_id)
            self._end()

    def _end(self) -> None:
        if self._dragging_id is not None:
            self._dragging_id = None
            self.drag_changed.emit()
