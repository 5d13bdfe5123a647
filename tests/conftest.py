"""Pytest configuration and shared fixtures for roomview tests."""

import gc

import pytest
from qtpy.QtWidgets import QApplication

from roomview.camera import PerspectiveCamera
from roomview.navigation import Navigation, NavigationConfig


@pytest.fixture(scope="session")
def qapp():
    """The QApplication shared by every widget and timer test."""
    app = QApplication.instance() or QApplication([])
    yield app

    # close viewer windows so their frame clocks and event filters are released
    for widget in app.topLevelWidgets():
        widget.close()
    gc.collect()


class FakeSurface:
    """Stands in for a QWidget viewport in tests that do not need Qt widgets."""

    def __init__(self, width=800, height=600):
        self._width = width
        self._height = height
        self.filters = []

    def installEventFilter(self, obj):
        self.filters.append(obj)

    def removeEventFilter(self, obj):
        self.filters.remove(obj)

    def width(self):
        return self._width

    def height(self):
        return self._height


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def navigation():
    return Navigation(PerspectiveCamera(aspect=800 / 600), NavigationConfig())
