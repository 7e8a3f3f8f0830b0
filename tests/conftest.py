# tests/conftest.py
from __future__ import annotations
from typing import List

import pytest

from rendergraph.core.signal import EventBus
from rendergraph.scene.widget import WidgetRegistry
from rendergraph.ui.draw import DrawContext
from rendergraph.ui.view import View


class ManualClock:
    """Clock the tests move by hand (milliseconds)."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float):
        self.now += ms


class FakeElement:
    """Drawing element with a fixed physical size and logical bounds."""

    def __init__(self, width=800, height=600, bounds=None):
        self.width = width
        self.height = height
        self._bounds = bounds or (0.0, 0.0, float(width), float(height))
        self.context_requests: List[str] = []
        self._context = DrawContext()

    def bounds(self):
        return self._bounds

    def get_context(self, context_type="2d"):
        self.context_requests.append(context_type)
        return self._context


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def bus(clock):
    return EventBus(clock=clock)


@pytest.fixture
def registry():
    return WidgetRegistry()


@pytest.fixture
def element():
    return FakeElement()


@pytest.fixture
def view(element):
    return View(lambda: element, name="test")


@pytest.fixture
def surface(view):
    return view.get_context()
