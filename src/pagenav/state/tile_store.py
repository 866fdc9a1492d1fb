"""
Tile Store - Single source of truth for tile order.

Owns the ordered collection of tile records and tile id generation.
Selection, drag and panel state only ever reference ids held here.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, ConfigDict
from PySide6.QtCore import QObject, Signal

from pagenav.errors import DuplicateId, IndexOutOfRange, InvalidSeed

logger = logging.getLogger(__name__)


class TileRecord(BaseModel):
    """One navigable page entry."""
    id: str = Field(..., min_length=1, description="Opaque stable tile id")
    label: str = Field(..., description="Display label")

    model_config = ConfigDict(frozen=True)


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class TileStore(QObject):
    """
    In-memory ordered store of TileRecords.

    Insertion order is navigation and render order. Every mutation emits
    tiles_changed so dependent state can reconcile dangling ids.
    """
    tiles_changed = Signal()

    def __init__(
        self,
        seed: Optional[Iterable[TileRecord]] = None,
        id_prefix: str = "new",
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        super().__init__()
        self._tiles: List[TileRecord] = []
        self._id_prefix = id_prefix
        self._clock = clock
        if seed is not None:
            self.initialize(seed)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def tiles(self) -> Tuple[TileRecord, ...]:
        """Current order as an immutable tuple."""
        return tuple(self._tiles)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(t.id for t in self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def contains(self, tile_id: Optional[str]) -> bool:
        return tile_id is not None and any(t.id == tile_id for t in self._tiles)

    def index_of(self, tile_id: str) -> int:
        """Position of tile_id, or -1 if absent."""
        for i, tile in enumerate(self._tiles):
            if tile.id == tile_id:
                return i
        return -1

    def get(self, tile_id: str) -> Optional[TileRecord]:
        index = self.index_of(tile_id)
        return self._tiles[index] if index >= 0 else None

    def first_id(self) -> Optional[str]:
        return self._tiles[0].id if self._tiles else None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def initialize(self, seed: Iterable[TileRecord]) -> None:
        """
        Replace the tile order with seed.

        Raises:
            InvalidSeed: If seed contains duplicate ids. Duplicates are never
                silently dropped.
        """
        records = list(seed)
        counts: Dict[str, int] = {}
        for record in records:
            counts[record.id] = counts.get(record.id, 0) + 1
        duplicates = [tile_id for tile_id, n in counts.items() if n > 1]
        if duplicates:
            raise InvalidSeed(duplicates)

        self._tiles = records
        logger.info("Tile store initialized with %d tiles", len(records))
        self.tiles_changed.emit()

    def insert_after(self, index: int, record: TileRecord) -> None:
        """
        Insert record immediately after position index (-1 inserts at front).

        Raises:
            IndexOutOfRange: If index is not in [-1, len - 1]
            DuplicateId: If record.id is already present
        """
        high = len(self._tiles) - 1
        if not -1 <= index <= high:
            raise IndexOutOfRange(index, -1, high)
        if self.contains(record.id):
            raise DuplicateId(record.id)

        self._tiles.insert(index + 1, record)
        logger.info("Inserted tile %s at position %d", record.id, index + 1)
        self.tiles_changed.emit()

    def generate_id(self) -> str:
        """
        Produce an id unique within the current order.

        Ids are "<prefix>-<epoch millis>"; repeated calls inside the same
        millisecond get a "-<n>" suffix until the id is free.
        """
        base = f"{self._id_prefix}-{self._clock()}"
        candidate = base
        suffix = 0
        while self.contains(candidate):
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate

    def move(self, source_id: str, target_id: str) -> bool:
        """
        Move source_id to the position target_id occupies.

        The source is removed and reinserted at the target's original index,
        so it lands before the target when moving backward and after it when
        moving forward. All other relative orderings are preserved.

        Returns:
            True if the order changed, False for a no-op (same id, or either
            id absent).
        """
        if source_id == target_id:
            return False
        source_index = self.index_of(source_id)
        target_index = self.index_of(target_id)
        if source_index < 0 or target_index < 0:
            logger.debug("Ignoring move of %s onto %s: tile not present", source_id, target_id)
            return False

        moved = self._tiles.pop(source_index)
        self._tiles.insert(target_index, moved)
        logger.info("Moved tile %s from %d to %d", source_id, source_index, target_index)
        self.tiles_changed.emit()
        return True

    def remove(self, tile_id: str) -> Optional[TileRecord]:
        """Delete tile_id. Returns the removed record, None if absent."""
        index = self.index_of(tile_id)
        if index < 0:
            logger.debug("Ignoring remove of unknown tile %s", tile_id)
            return None
        removed = self._tiles.pop(index)
        logger.info("Removed tile %s", tile_id)
        self.tiles_changed.emit()
        return removed

    def rename(self, tile_id: str, label: str) -> bool:
        """Replace the label of tile_id. Returns False if absent."""
        index = self.index_of(tile_id)
        if index < 0:
            logger.debug("Ignoring rename of unknown tile %s", tile_id)
            return False
        self._tiles[index] = self._tiles[index].model_copy(update={"label": label})
        self.tiles_changed.emit()
        return True
