"""
Pytest configuration and fixtures.

Ensures PYTHONPATH is set correctly for imports.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src/ to Python path if not already present
# This ensures tests can import pagenav without manual PYTHONPATH setup
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from pagenav.state.tile_store import TileRecord  # noqa: E402

SEED_IDS = ["info", "details", "other", "ending"]


def _make_seed(ids=SEED_IDS):
    return [TileRecord(id=tile_id, label=tile_id.capitalize()) for tile_id in ids]


@pytest.fixture
def make_seed():
    """Factory building TileRecords from ids (label = capitalized id)."""
    return _make_seed


@pytest.fixture
def seed():
    """The four-page strip every interaction test starts from."""
    return _make_seed()


@pytest.fixture
def frozen_clock():
    """Millisecond clock that never advances, to force id collisions."""
    return lambda: 1_700_000_000_000


@pytest.fixture
def event_source():
    """Stand-in for the application object hosting the outside-pointer filter."""
    return Mock(spec=["installEventFilter", "removeEventFilter"])


@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication instance for Qt widget tests (session-scoped)."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


class SignalRecorder:
    """Collects emissions of a Qt signal through a bound-method slot."""

    def __init__(self):
        self.calls = []

    def record(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def recorder():
    """Factory: recorder(signal) connects and returns a fresh SignalRecorder."""
    def _connect(signal):
        rec = SignalRecorder()
        signal.connect(rec.record)
        return rec
    return _connect
