"""
Widget Models

Payloads carried by widgets, one variant per drawing routine.
The widget's type tag selects the variant; plain mappings with the
same keys are accepted wherever a model is read.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, TYPE_CHECKING

if TYPE_CHECKING:
    from rendergraph.ui.style import Font, Pen


# =============================================================================
# Point
# =============================================================================

@dataclass(frozen=True)
class Point:
    """2D point in view coordinates."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def to_tuple(self):
        return (self.x, self.y)

    @staticmethod
    def of(value: Any) -> Point:
        """Coerce a Point, (x, y) pair or {'x', 'y'} mapping."""
        if isinstance(value, Point):
            return value
        if isinstance(value, Mapping):
            return Point(float(value["x"]), float(value["y"]))
        x, y = value
        return Point(float(x), float(y))


# =============================================================================
# Type Tags
# =============================================================================

class WidgetType(str, Enum):
    GROUP = "group"
    TEXT = "text"
    CIRCLE_TEXT = "circle_text"
    CIRCLE = "circle"
    RECT = "rect"
    TRIANGLE = "triangle"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Model Variants
# =============================================================================

@dataclass
class GroupModel:
    """Container with nothing to draw."""


@dataclass
class TextModel:
    text: str
    font: Font
    position: Point


@dataclass
class CircleTextModel:
    text: str
    font: Font
    position: Point  # Circle center
    radius: float
    start_angle: float  # Radians, first glyph
    stop_angle: float   # Radians, last glyph (subject to step cap)


@dataclass
class CircleModel:
    pen: Pen
    position: Point
    radius: float


@dataclass
class RectModel:
    pen: Pen
    top_left: Point
    bot_right: Point


@dataclass
class TriangleModel:
    pen: Pen
    a: Point
    b: Point
    c: Point


def model_field(model: Any, name: str) -> Any:
    """Read a field from a model dataclass or mapping."""
    if isinstance(model, Mapping):
        return model[name]
    return getattr(model, name)
