"""
Page Navigation Service.

Facade over the tile strip state components. The renderer talks only to
this object: it dispatches primitive interaction events through the
command methods and redraws from snapshot() whenever state_changed fires.

Whenever the tile order changes, every component reconciles its
references so no state ever points at a tile that no longer exists.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from pagenav.config.page_nav import PageNavConfig, load_page_nav_config
from pagenav.services.page_content import PageContentRegistry
from pagenav.state.drag_state import DragReorderCoordinator
from pagenav.state.insertion import InsertionController
from pagenav.state.panel_state import ActionHook, ContainmentPredicate, PanelAction, PanelController
from pagenav.state.selection_state import SelectionFocusTracker
from pagenav.state.snapshot import PageNavSnapshot
from pagenav.state.tile_store import TileRecord, TileStore

logger = logging.getLogger(__name__)


class PageNavigation(QObject):
    """Command surface and read-only snapshot for one tile strip."""
    state_changed = Signal()

    def __init__(
        self,
        config: Optional[PageNavConfig] = None,
        seed: Optional[Iterable[TileRecord]] = None,
        event_source: Optional[QObject] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Args:
            config: Strip configuration; built-in defaults when omitted.
            seed: Initial tiles; defaults to the config seed.
            event_source: Host for the outside-pointer event filter
                (defaults to the application instance).
            clock: Millisecond clock used for tile id generation.
        """
        super().__init__()
        self._config = config if config is not None else PageNavConfig()

        store_kwargs = {"id_prefix": self._config.id_prefix}
        if clock is not None:
            store_kwargs["clock"] = clock
        self.store = TileStore(**store_kwargs)
        self.tracker = SelectionFocusTracker(self.store)
        self.drag = DragReorderCoordinator(self.store)
        self.panel = PanelController(self.store, event_source=event_source)
        self.insertion = InsertionController(self.store, self.tracker, default_label=self._config.new_tile_label)
        self.content = PageContentRegistry(
            self._config.get_content_map(),
            missing_template=self._config.missing_content_template,
        )

        self.store.tiles_changed.connect(self._on_tiles_changed)
        self.tracker.selection_changed.connect(self._on_component_changed)
        self.tracker.focus_changed.connect(self._on_component_changed)
        self.tracker.hover_changed.connect(self._on_component_changed)
        self.drag.drag_changed.connect(self._on_component_changed)
        self.panel.panel_changed.connect(self._on_component_changed)

        if seed is None:
            seed = [TileRecord(id=t.id, label=t.label) for t in self._config.seed]
        self.store.initialize(seed)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> PageNavSnapshot:
        return PageNavSnapshot(
            tiles=self.store.tiles,
            active_id=self.tracker.active_id,
            focused_id=self.tracker.focused_id,
            hovered_index=self.tracker.hovered_index,
            dragging_id=self.drag.dragging_id,
            open_panel_id=self.panel.open_panel_id,
        )

    def active_content(self) -> Optional[str]:
        """Body text of the active page, None when the strip is empty."""
        tile = self.store.get(self.tracker.active_id) if self.tracker.active_id else None
        return self.content.get(tile) if tile is not None else None

    # ------------------------------------------------------------------
    # Selection & focus
    # ------------------------------------------------------------------

    def select(self, tile_id: str) -> bool:
        return self.tracker.select(tile_id)

    def focus(self, tile_id: str) -> None:
        self.tracker.focus(tile_id)

    def blur(self) -> None:
        self.tracker.blur()

    def set_hovered_gap(self, index: Optional[int]) -> None:
        self.tracker.set_hovered_gap(index)

    # ------------------------------------------------------------------
    # Drag reorder
    # ------------------------------------------------------------------

    def begin_drag(self, tile_id: str) -> bool:
        return self.drag.begin_drag(tile_id)

    def drag_over(self, tile_id: str) -> bool:
        return self.drag.drag_over(tile_id)

    def drop(self, tile_id: str) -> bool:
        return self.drag.drop(tile_id)

    def cancel_drag(self) -> None:
        self.drag.cancel_drag()

    # ------------------------------------------------------------------
    # Settings panel
    # ------------------------------------------------------------------

    def toggle(self, tile_id: str) -> None:
        self.panel.toggle(tile_id)

    def close_panel(self) -> None:
        self.panel.close()

    def set_panel_region(self, predicate: Optional[ContainmentPredicate]) -> None:
        self.panel.set_panel_region(predicate)

    def close_if_outside(self, pointer_target: Any) -> bool:
        return self.panel.close_if_outside(pointer_target)

    def register_action(self, action: PanelAction, hook: Optional[ActionHook]) -> None:
        self.panel.register_action(action, hook)

    def on_set_first(self, tile_id: str) -> bool:
        return self.panel.invoke_action(PanelAction.SET_FIRST, tile_id)

    def on_rename(self, tile_id: str) -> bool:
        return self.panel.invoke_action(PanelAction.RENAME, tile_id)

    def on_copy(self, tile_id: str) -> bool:
        return self.panel.invoke_action(PanelAction.COPY, tile_id)

    def on_duplicate(self, tile_id: str) -> bool:
        return self.panel.invoke_action(PanelAction.DUPLICATE, tile_id)

    def on_delete(self, tile_id: str) -> bool:
        return self.panel.invoke_action(PanelAction.DELETE, tile_id)

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert_at_gap(self, index: int) -> TileRecord:
        return self.insertion.insert_at_gap(index)

    def insert_at_hovered_gap(self) -> TileRecord:
        return self.insertion.insert_at_hovered_gap()

    # ------------------------------------------------------------------
    # Primitives for action collaborators
    # ------------------------------------------------------------------

    def remove_tile(self, tile_id: str) -> Optional[TileRecord]:
        removed = self.store.remove(tile_id)
        if removed is not None:
            self.content.unregister(tile_id)
        return removed

    def rename_tile(self, tile_id: str, label: str) -> bool:
        return self.store.rename(tile_id, label)

    # ------------------------------------------------------------------
    # Signal plumbing
    # ------------------------------------------------------------------

    def _on_tiles_changed(self) -> None:
        self.tracker.reconcile()
        self.drag.reconcile()
        self.panel.reconcile()
        self.state_changed.emit()

    def _on_component_changed(self, *args) -> None:
        self.state_changed.emit()


# -----------------------------------------------------------------------------
# Singleton pattern
# -----------------------------------------------------------------------------

_PAGE_NAVIGATION = None


def get_page_navigation() -> PageNavigation:
    """Get singleton page navigation built from configs/page_nav.yaml."""
    global _PAGE_NAVIGATION
    if _PAGE_NAVIGATION is None:
        _PAGE_NAVIGATION = PageNavigation(config=load_page_nav_config())
    return _PAGE_NAVIGATION
