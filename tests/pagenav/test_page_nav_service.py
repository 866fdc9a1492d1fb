"""
Test PageNavigation facade: command surface, snapshot and reconciliation
across components.
"""

from unittest.mock import Mock

import pytest

from pagenav import PageNavigation, PageNavSnapshot, PanelAction
from pagenav.config.page_nav import PageNavConfig
from pagenav.errors import AlreadyDragging, IndexOutOfRange


@pytest.fixture
def nav(event_source, frozen_clock):
    return PageNavigation(event_source=event_source, clock=frozen_clock)


def test_initial_snapshot(nav):
    snap = nav.snapshot()
    assert isinstance(snap, PageNavSnapshot)
    assert snap.ids == ("info", "details", "other", "ending")
    assert snap.active_id == "info"
    assert snap.active_tile.label == "Info"
    assert snap.focused_id is None
    assert snap.hovered_index is None
    assert snap.dragging_id is None
    assert snap.open_panel_id is None


def test_snapshot_is_frozen(nav):
    snap = nav.snapshot()
    with pytest.raises(Exception):
        snap.active_id = "other"


def test_snapshot_not_affected_by_later_commands(nav):
    snap = nav.snapshot()
    nav.select("details")
    assert snap.active_id == "info"
    assert nav.snapshot().active_id == "details"


def test_explicit_seed(seed, event_source):
    nav = PageNavigation(seed=seed[:2], event_source=event_source)
    assert nav.snapshot().ids == ("info", "details")


def test_drag_reorder_example(nav):
    nav.begin_drag("other")
    assert nav.snapshot().dragging_id == "other"
    assert nav.drag_over("info") is True
    nav.drop("info")

    snap = nav.snapshot()
    assert snap.ids == ("other", "info", "details", "ending")
    assert snap.dragging_id is None


def test_self_drop_example(nav):
    nav.begin_drag("info")
    nav.drop("info")
    snap = nav.snapshot()
    assert snap.ids == ("info", "details", "other", "ending")
    assert snap.dragging_id is None


def test_begin_drag_while_dragging(nav):
    nav.begin_drag("info")
    with pytest.raises(AlreadyDragging):
        nav.begin_drag("other")
    nav.cancel_drag()
    assert nav.begin_drag("other") is True


def test_insert_at_gap_example(nav):
    record = nav.insert_at_gap(1)
    snap = nav.snapshot()
    assert len(snap.tiles) == 5
    assert snap.tiles[2] == record
    assert snap.ids == ("info", "details", record.id, "other", "ending")


def test_insert_at_hovered_gap(nav):
    nav.set_hovered_gap(0)
    assert nav.snapshot().show_insert_affordance(0) is True
    record = nav.insert_at_hovered_gap()
    assert nav.snapshot().tiles[1] == record


def test_insert_at_last_gap_rejected(nav):
    nav.set_hovered_gap(3)
    assert nav.snapshot().show_insert_affordance(3) is False
    with pytest.raises(IndexOutOfRange):
        nav.insert_at_gap(3)


def test_panel_toggle_involution(nav):
    nav.toggle("info")
    nav.toggle("info")
    assert nav.snapshot().open_panel_id is None
    assert nav.panel.observer_active is False


def test_panel_toggle_switch(nav):
    nav.toggle("info")
    nav.toggle("details")
    assert nav.snapshot().open_panel_id == "details"


def test_close_if_outside_with_inside_predicate(nav):
    nav.toggle("info")
    nav.set_panel_region(lambda target: True)
    assert nav.close_if_outside(object()) is False
    assert nav.snapshot().open_panel_id == "info"
    nav.close_panel()
    assert nav.snapshot().open_panel_id is None


def test_focus_and_blur(nav):
    nav.focus("details")
    assert nav.snapshot().focused_id == "details"
    nav.blur()
    assert nav.snapshot().focused_id is None


def test_select_unknown_is_noop(nav):
    assert nav.select("ghost") is False
    assert nav.snapshot().active_id == "info"


class TestActionHooks:

    @pytest.mark.parametrize("method,action", [
        ("on_set_first", PanelAction.SET_FIRST),
        ("on_rename", PanelAction.RENAME),
        ("on_copy", PanelAction.COPY),
        ("on_duplicate", PanelAction.DUPLICATE),
        ("on_delete", PanelAction.DELETE),
    ])
    def test_hook_dispatch(self, nav, method, action):
        hook = Mock()
        nav.register_action(action, hook)
        assert getattr(nav, method)("details") is True
        hook.assert_called_once_with("details")

    def test_unregistered_hook(self, nav):
        assert nav.on_rename("details") is False

    def test_delete_collaborator_reconciles_everything(self, nav):
        nav.register_action(PanelAction.DELETE, nav.remove_tile)
        nav.select("other")
        nav.focus("other")
        nav.toggle("other")

        nav.on_delete("other")

        snap = nav.snapshot()
        assert snap.ids == ("info", "details", "ending")
        assert snap.active_id == "info"
        assert snap.focused_id is None
        assert snap.open_panel_id is None
        assert nav.panel.observer_active is False

    def test_set_first_collaborator(self, nav):
        def set_first(tile_id):
            nav.store.move(tile_id, nav.store.first_id())

        nav.register_action(PanelAction.SET_FIRST, set_first)
        nav.on_set_first("ending")
        assert nav.snapshot().ids == ("ending", "info", "details", "other")

    def test_rename_collaborator(self, nav):
        nav.register_action(PanelAction.RENAME, lambda tile_id: nav.rename_tile(tile_id, "Intro"))
        nav.on_rename("info")
        assert nav.snapshot().active_tile.label == "Intro"


def test_removing_dragged_tile_ends_session(nav):
    nav.begin_drag("details")
    nav.remove_tile("details")
    assert nav.snapshot().dragging_id is None


def test_removing_every_tile(nav):
    for tile_id in ("info", "details", "other", "ending"):
        nav.remove_tile(tile_id)
    snap = nav.snapshot()
    assert snap.tiles == ()
    assert snap.active_id is None
    assert snap.active_tile is None
    assert nav.active_content() is None


def test_state_changed_emitted(nav, recorder):
    rec = recorder(nav.state_changed)
    nav.select("details")
    assert rec.count >= 1
    emitted = rec.count
    nav.select("ghost")
    assert rec.count == emitted


class TestContent:

    def test_active_content(self, nav):
        assert nav.active_content() == "This is the Info section content."
        nav.select("ending")
        assert nav.active_content() == "This is the Ending section content."

    def test_new_tile_falls_back(self, nav):
        record = nav.insert_at_gap(0)
        nav.select(record.id)
        assert nav.active_content() == "No content for New Page."

    def test_custom_fallback_template(self, event_source):
        config = PageNavConfig(missing_content_template="Empty page {id}")
        nav = PageNavigation(config=config, event_source=event_source, clock=lambda: 5)
        record = nav.insert_at_gap(0)
        nav.select(record.id)
        assert nav.active_content() == "Empty page new-5"

    def test_removed_tile_content_unregistered(self, nav):
        nav.remove_tile("details")
        assert nav.content.has_content("details") is False
