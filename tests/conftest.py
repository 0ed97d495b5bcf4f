"""
Test fixtures for Frame Notes tests.

Qt runs on the offscreen platform plugin so widget and painting tests work
without a display.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session", autouse=True)
def user_data_home(tmp_path_factory):
    """Keep per-user folders (logs, default storage) inside a temp dir."""
    home = tmp_path_factory.mktemp("frame_notes_home")
    previous = os.environ.get("FRAME_NOTES_HOME")
    os.environ["FRAME_NOTES_HOME"] = str(home)
    yield home
    if previous is None:
        os.environ.pop("FRAME_NOTES_HOME", None)
    else:
        os.environ["FRAME_NOTES_HOME"] = previous


@pytest.fixture(scope="session")
def qapp():
    """Single QApplication shared by every Qt test."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def storage(tmp_path):
    """AnnotationStorage rooted in a per-test temp folder."""
    from frame_notes.services.annotation_storage import AnnotationStorage

    return AnnotationStorage(tmp_path / "annotations")


@pytest.fixture
def event_bus(qapp):
    """Fresh, non-singleton event bus."""
    from frame_notes.events.event_bus import EventBus

    return EventBus()
