"""
Insertion Controller - new tiles at hovered gaps.

A gap is the space after the tile at a given index. The gap after the last
tile is never insertable, matching the strip that hides the "+" there.
"""

import logging

from pagenav.errors import IndexOutOfRange
from pagenav.state.selection_state import SelectionFocusTracker
from pagenav.state.tile_store import TileRecord, TileStore

logger = logging.getLogger(__name__)


class InsertionController:
    """Creates tiles between existing ones."""

    def __init__(self, store: TileStore, tracker: SelectionFocusTracker, default_label: str = "New Page") -> None:
        self._store = store
        self._tracker = tracker
        self._default_label = default_label

    def insert_at_gap(self, index: int) -> TileRecord:
        """
        Insert a new tile in the gap after position index.

        Raises:
            IndexOutOfRange: If index is not in [0, len - 2]
        """
        high = len(self._store) - 2
        if not 0 <= index <= high:
            raise IndexOutOfRange(index, 0, high)
        record = TileRecord(id=self._store.generate_id(), label=self._default_label)
        self._store.insert_after(index, record)
        return record

    def insert_at_hovered_gap(self) -> TileRecord:
        """
        Insert at the currently hovered gap.

        Raises:
            IndexOutOfRange: If no insertable gap is hovered
        """
        index = self._tracker.hovered_index
        if index is None or not self._tracker.is_gap_actionable(index):
            raise IndexOutOfRange(-1 if index is None else index, 0, len(self._store) - 2)
        return self.insert_at_gap(index)
