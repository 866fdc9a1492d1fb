"""
Panel Controller - per-tile settings panel lifecycle.

At most one settings panel is open across the whole strip. While a panel
is open an application-wide event filter watches for pointer presses so a
press outside the panel's rendered region dismisses it. The filter is
installed when a panel opens and removed on every close path, so repeated
open/close cycles never leak or duplicate it.

Menu actions (set first, rename, copy, duplicate, delete) are hooks owned
by external collaborators; this controller only dispatches them.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from PySide6.QtCore import QCoreApplication, QEvent, QObject, Signal

from pagenav.state.tile_store import TileStore

logger = logging.getLogger(__name__)

ContainmentPredicate = Callable[[Any], bool]
ActionHook = Callable[[str], None]


class PanelAction(str, Enum):
    """Settings panel menu entries, in menu order."""
    SET_FIRST = "set_first"
    RENAME = "rename"
    COPY = "copy"
    DUPLICATE = "duplicate"
    DELETE = "delete"


PANEL_ACTION_LABELS = {
    PanelAction.SET_FIRST: "Set as first page",
    PanelAction.RENAME: "Rename",
    PanelAction.COPY: "Copy",
    PanelAction.DUPLICATE: "Duplicate",
    PanelAction.DELETE: "Delete",
}


def _press_key(event: QEvent) -> Optional[Tuple[int, float, float]]:
    """Identity of a physical press: timestamp and global position."""
    if not hasattr(event, "globalPosition"):
        return None
    pos = event.globalPosition()
    return (event.timestamp(), pos.x(), pos.y())


def _ancestry(obj: QObject) -> List[QObject]:
    chain = []
    parent = obj.parent()
    while parent is not None:
        chain.append(parent)
        parent = parent.parent()
    return chain


class OutsidePointerObserver(QObject):
    """
    Application event filter reporting each mouse press exactly once.

    Qt re-delivers an unaccepted press to every ancestor of the widget that
    received it, and the application filter sees each delivery. Only the
    first (innermost) receiver is reported; ancestors receiving the same
    press are skipped. QWidgetWindow deliveries are skipped too, since the
    window hands the press on to the widget under the pointer.
    """

    def __init__(self, on_press: Callable[[QObject], None]) -> None:
        super().__init__()
        self._on_press = on_press
        self._last_key: Optional[Tuple[int, float, float]] = None
        self._last_ancestry: List[QObject] = []

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 (Qt override)
        if event.type() == QEvent.Type.MouseButtonPress and self._is_first_delivery(watched, event):
            self._on_press(watched)
        # Never consume the event; the press still reaches its target.
        return False

    def _is_first_delivery(self, watched: QObject, event: QEvent) -> bool:
        if watched.inherits("QWidgetWindow"):
            return False
        key = _press_key(event)
        if key is not None and key == self._last_key and any(watched is a for a in self._last_ancestry):
            return False
        self._last_key = key
        self._last_ancestry = _ancestry(watched)
        return True


class PanelController(QObject):
    """Open panel id, outside dismissal and action hook dispatch."""
    panel_changed = Signal()

    def __init__(self, store: TileStore, event_source: Optional[QObject] = None) -> None:
        """
        Args:
            store: Tile store used to reject panels for unknown tiles.
            event_source: Object the outside-pointer filter is installed on.
                Defaults to the running QCoreApplication instance, resolved
                each time a panel opens.
        """
        super().__init__()
        self._store = store
        self._event_source = event_source
        self._open_panel_id: Optional[str] = None
        self._region: Optional[ContainmentPredicate] = None
        self._observer: Optional[OutsidePointerObserver] = None
        self._observer_host: Optional[QObject] = None
        self._hooks: Dict[PanelAction, ActionHook] = {}

    @property
    def open_panel_id(self) -> Optional[str]:
        return self._open_panel_id

    @property
    def observer_active(self) -> bool:
        """Whether the outside-pointer observer is currently held."""
        return self._observer is not None

    # ------------------------------------------------------------------
    # Open / close
    # ------------------------------------------------------------------

    def toggle(self, tile_id: str) -> None:
        """Close the panel if open for tile_id, otherwise open it for tile_id."""
        if self._open_panel_id == tile_id:
            self._set_open(None)
            return
        if not self._store.contains(tile_id):
            logger.debug("Ignoring panel toggle for unknown tile %s", tile_id)
            return
        self._set_open(tile_id)

    def close(self) -> None:
        self._set_open(None)

    def set_panel_region(self, predicate: Optional[ContainmentPredicate]) -> None:
        """
        Register the containment test for the currently rendered panel.

        predicate(target) must return True when target lies inside the
        panel. The renderer supplies it after drawing the open panel; it is
        dropped whenever the open panel changes.
        """
        self._region = predicate

    def close_if_outside(self, pointer_target: Any) -> bool:
        """
        Close the open panel unless pointer_target is inside it.

        Returns:
            True if the panel was closed.
        """
        if self._open_panel_id is None:
            return False
        if self._region is not None and self._region(pointer_target):
            return False
        logger.debug("Pointer press outside panel %s, closing", self._open_panel_id)
        self._set_open(None)
        return True

    def reconcile(self) -> None:
        """Close the panel if its tile no longer exists."""
        if self._open_panel_id is not None and not self._store.contains(self._open_panel_id):
            self._set_open(None)

    def _set_open(self, tile_id: Optional[str]) -> None:
        if tile_id == self._open_panel_id:
            return
        self._open_panel_id = tile_id
        self._region = None
        if tile_id is None:
            self._release_observer()
        else:
            self._acquire_observer()
        self.panel_changed.emit()

    # ------------------------------------------------------------------
    # Outside-pointer observer
    # ------------------------------------------------------------------

    def _acquire_observer(self) -> None:
        if self._observer is not None:
            return
        host = self._event_source if self._event_source is not None else QCoreApplication.instance()
        self._observer = OutsidePointerObserver(self.close_if_outside)
        if host is not None:
            host.installEventFilter(self._observer)
            self._observer_host = host
        else:
            logger.debug("No application instance; outside dismissal relies on explicit close_if_outside")

    def _release_observer(self) -> None:
        if self._observer is None:
            return
        if self._observer_host is not None:
            self._observer_host.removeEventFilter(self._observer)
        self._observer = None
        self._observer_host = None

    # ------------------------------------------------------------------
    # Action hooks
    # ------------------------------------------------------------------

    def register_action(self, action: PanelAction, hook: Optional[ActionHook]) -> None:
        """Bind (or with None, unbind) the handler for a menu action."""
        action = PanelAction(action)
        if hook is None:
            self._hooks.pop(action, None)
        else:
            self._hooks[action] = hook

    def has_action(self, action: PanelAction) -> bool:
        return PanelAction(action) in self._hooks

    def invoke_action(self, action: PanelAction, tile_id: str) -> bool:
        """
        Dispatch a menu action for tile_id.

        The panel closes before the hook runs, as clicking a menu entry
        dismisses the menu.

        Returns:
            True if a hook handled the action, False if none is registered.
        """
        action = PanelAction(action)
        hook = self._hooks.get(action)
        if hook is None:
            logger.warning("No handler registered for panel action %s (tile %s)", action.value, tile_id)
            return False
        self._set_open(None)
        hook(tile_id)
        return True
