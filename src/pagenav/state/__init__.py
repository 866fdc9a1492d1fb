"""Tile strip state components."""

from pagenav.state.tile_store import TileRecord, TileStore
from pagenav.state.selection_state import SelectionFocusTracker
from pagenav.state.drag_state import DragPhase, DragReorderCoordinator
from pagenav.state.panel_state import PANEL_ACTION_LABELS, OutsidePointerObserver, PanelAction, PanelController
from pagenav.state.insertion import InsertionController
from pagenav.state.snapshot import PageNavSnapshot

__all__ = [
    "TileRecord", "TileStore",
    "SelectionFocusTracker",
    "DragPhase", "DragReorderCoordinator",
    "PANEL_ACTION_LABELS", "OutsidePointerObserver", "PanelAction", "PanelController",
    "InsertionController",
    "PageNavSnapshot",
]
