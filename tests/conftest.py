"""pytest configuration and fixtures for pyqt-formstate tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_form_config():
    """Restore the global FormStateConfig after each test."""
    from pyqt_formstate.protocols import set_form_config

    yield
    set_form_config(None)


class FakeLineEdit:
    """Stand-in component recording the props it was mounted with."""

    def __init__(self, **props):
        self.props = props


@pytest.fixture
def line_edit():
    return FakeLineEdit
