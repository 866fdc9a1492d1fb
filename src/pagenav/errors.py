"""
Page Navigation Errors

Exception taxonomy for the tile strip state machine.

Stale event targets (unknown tile ids on select/move/drop) are NOT errors:
they are ignored so the UI survives events referencing tiles that vanished
mid-gesture. Only caller mistakes raise.
"""


class PageNavError(Exception):
    """Base exception for page navigation state errors."""
    pass


class InvalidSeed(PageNavError, ValueError):
    """Raised when the initial tile seed contains duplicate ids."""

    def __init__(self, duplicate_ids):
        self.duplicate_ids = tuple(duplicate_ids)
        super().__init__(f"Seed contains duplicate tile ids: {', '.join(self.duplicate_ids)}")


class DuplicateId(PageNavError, ValueError):
    """Raised when inserting a tile whose id is already present."""

    def __init__(self, tile_id: str):
        self.tile_id = tile_id
        super().__init__(f"Tile id already present: {tile_id}")


class IndexOutOfRange(PageNavError, IndexError):
    """Raised when an insertion or gap index is outside the valid range."""

    def __init__(self, index: int, low: int, high: int):
        self.index = index
        self.low = low
        self.high = high
        super().__init__(f"Index {index} out of range [{low}, {high}]")


class AlreadyDragging(PageNavError):
    """Raised when a drag starts while another drag session is active."""

    def __init__(self, dragging_id: str, requested_id: str):
        self.dragging_id = dragging_id
        self.requested_id = requested_id
        super().__init__(
            f"Cannot start dragging {requested_id!r}: {dragging_id!r} is already being dragged"
        )
