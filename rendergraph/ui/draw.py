"""
Draw Context

Canvas-style 2D drawing surface that records tessellated primitives.

Design:
- Stateful like an HTML canvas 2D context (save/restore, paths, transforms)
- Paths are flattened to points as they are built (current transform applied)
- stroke() emits line segments, fill() emits triangle fans (convex paths)
- Text is recorded with its transformed anchor and rotation
- finalize() returns a DrawBatch sorted for the renderer
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Tuple
import math
import numpy as np

from rendergraph.core.config import RenderConfig, DEFAULT_CONFIG
from rendergraph.ui.style import Color, color_rgba, font_size_px

RGBA = Tuple[float, float, float, float]
Vertex = Tuple[float, float]


# =============================================================================
# Draw Commands (internal representation)
# =============================================================================

@dataclass
class DrawTriangle:
    a: Vertex
    b: Vertex
    c: Vertex
    color: RGBA
    z_index: int = 0


@dataclass
class DrawLine:
    """A line segment."""
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    width: float = 1.0
    z_index: int = 0


@dataclass
class DrawText:
    """Text to draw."""
    text: str
    x: float
    y: float
    color: RGBA
    font: str = ""
    font_size: float = 14.0
    align: str = "left"
    baseline: str = "top"
    rotation: float = 0.0  # Radians
    mode: str = "fill"  # fill, stroke
    z_index: int = 0


@dataclass(frozen=True)
class TextMetrics:
    width: float


# =============================================================================
# Draw Batch
# =============================================================================

@dataclass
class DrawBatch:
    """
    Collection of draw commands, sorted for rendering.

    After building, call finalize() to sort by z-index.
    """
    triangles: List[DrawTriangle] = field(default_factory=list)
    lines: List[DrawLine] = field(default_factory=list)
    texts: List[DrawText] = field(default_factory=list)

    _finalized: bool = False

    def add_triangle(self, tri: DrawTriangle):
        self.triangles.append(tri)
        self._finalized = False

    def add_line(self, line: DrawLine):
        self.lines.append(line)
        self._finalized = False

    def add_text(self, text: DrawText):
        self.texts.append(text)
        self._finalized = False

    def finalize(self):
        """Sort commands by z-index (stable)."""
        self.triangles.sort(key=lambda t: t.z_index)
        self.lines.sort(key=lambda l: l.z_index)
        self.texts.sort(key=lambda t: t.z_index)
        self._finalized = True

    def clear(self):
        self.triangles.clear()
        self.lines.clear()
        self.texts.clear()
        self._finalized = False

    def triangle_vertices(self) -> np.ndarray:
        """Vertex data: pos(2f) + color(4f) per vertex, 3 vertices per triangle."""
        out = np.zeros((len(self.triangles) * 3, 6), dtype=np.float32)
        for i, t in enumerate(self.triangles):
            base = i * 3
            out[base + 0] = [*t.a, *t.color]
            out[base + 1] = [*t.b, *t.color]
            out[base + 2] = [*t.c, *t.color]
        return out

    def line_vertices(self) -> np.ndarray:
        """Vertex data: pos(2f) + color(4f) per vertex, 2 vertices per line."""
        out = np.zeros((len(self.lines) * 2, 6), dtype=np.float32)
        for i, ln in enumerate(self.lines):
            base = i * 2
            out[base + 0] = [ln.x0, ln.y0, *ln.color]
            out[base + 1] = [ln.x1, ln.y1, *ln.color]
        return out

    @property
    def total_vertices(self) -> int:
        return len(self.triangles) * 3 + len(self.lines) * 2


# =============================================================================
# Geometry
# =============================================================================

TWO_PI = 2.0 * math.pi


def arc_sweep(start_angle: float, end_angle: float, anticlockwise: bool = False) -> float:
    """
    Signed sweep of a canvas arc, in radians.

    Matches canvas semantics: a difference of 2*pi or more in the drawing
    direction is a full circle; otherwise the end angle wraps so the arc
    runs from start to end in the requested direction.
    """
    if not anticlockwise and end_angle - start_angle >= TWO_PI:
        return TWO_PI
    if anticlockwise and start_angle - end_angle >= TWO_PI:
        return -TWO_PI
    if not anticlockwise and start_angle > end_angle:
        return TWO_PI - math.fmod(start_angle - end_angle, TWO_PI)
    if anticlockwise and start_angle < end_angle:
        return -(TWO_PI - math.fmod(end_angle - start_angle, TWO_PI))
    return end_angle - start_angle


# =============================================================================
# Drawing State
# =============================================================================

@dataclass
class DrawState:
    font: str = "10pt sans-serif"
    fill_style: Color = "black"
    stroke_style: Color = "black"
    line_width: float = 1.0
    text_align: str = "left"
    text_baseline: str = "top"
    transform: np.ndarray = field(default_factory=lambda: np.eye(3, dtype=np.float64))

    def copy(self) -> DrawState:
        return replace(self, transform=self.transform.copy())


@dataclass
class _SubPath:
    points: List[Vertex] = field(default_factory=list)
    closed: bool = False


# =============================================================================
# Draw Context
# =============================================================================

class DrawContext:
    """
    Canvas-like drawing surface.

    Returned by View.get_context(); drawing routines set state attributes
    and build paths, the context records the resulting primitives.
    """

    def __init__(self, config: RenderConfig = None):
        self.config = config or DEFAULT_CONFIG

        self.batch = DrawBatch()

        self._state = DrawState()
        self._state_stack: List[DrawState] = []

        self._path: List[_SubPath] = []

        # Z-index counter (auto-increment for draw order)
        self._z_index = 0

    # -------------------------------------------------------------------------
    # State attributes
    # -------------------------------------------------------------------------

    @property
    def font(self) -> str:
        return self._state.font

    @font.setter
    def font(self, value: str):
        self._state.font = value

    @property
    def fill_style(self) -> Color:
        return self._state.fill_style

    @fill_style.setter
    def fill_style(self, value: Color):
        self._state.fill_style = value

    @property
    def stroke_style(self) -> Color:
        return self._state.stroke_style

    @stroke_style.setter
    def stroke_style(self, value: Color):
        self._state.stroke_style = value

    @property
    def line_width(self) -> float:
        return self._state.line_width

    @line_width.setter
    def line_width(self, value: float):
        self._state.line_width = value

    @property
    def text_align(self) -> str:
        return self._state.text_align

    @text_align.setter
    def text_align(self, value: str):
        self._state.text_align = value

    @property
    def text_baseline(self) -> str:
        return self._state.text_baseline

    @text_baseline.setter
    def text_baseline(self, value: str):
        self._state.text_baseline = value

    @property
    def transform_matrix(self) -> np.ndarray:
        return self._state.transform.copy()

    def save(self):
        """Push a copy of the drawing state."""
        self._state_stack.append(self._state.copy())

    def restore(self):
        """Pop the drawing state (no-op on an empty stack)."""
        if self._state_stack:
            self._state = self._state_stack.pop()

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def translate(self, x: float, y: float):
        m = np.array([[1.0, 0.0, x], [0.0, 1.0, y], [0.0, 0.0, 1.0]])
        self._state.transform = self._state.transform @ m

    def rotate(self, angle: float):
        c, s = math.cos(angle), math.sin(angle)
        m = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._state.transform = self._state.transform @ m

    def _transform(self, x: float, y: float) -> Vertex:
        """Apply current transform to point."""
        p = self._state.transform @ np.array([x, y, 1.0])
        return (float(p[0]), float(p[1]))

    def _rotation(self) -> float:
        m = self._state.transform
        return math.atan2(m[1, 0], m[0, 0])

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def begin_path(self):
        self._path = []

    def move_to(self, x: float, y: float):
        self._path.append(_SubPath(points=[self._transform(x, y)]))

    def line_to(self, x: float, y: float):
        if not self._path or self._path[-1].closed:
            self.move_to(x, y)
            return
        self._path[-1].points.append(self._transform(x, y))

    def close_path(self):
        if self._path and self._path[-1].points:
            sub = self._path[-1]
            sub.closed = True
            # Following segments start from the closed subpath's origin
            self._path.append(_SubPath(points=[sub.points[0]]))

    def arc(self, x: float, y: float, radius: float, start_angle: float,
            end_angle: float, anticlockwise: bool = False):
        """Append a circular arc, flattened to line segments."""
        sweep = arc_sweep(start_angle, end_angle, anticlockwise)
        segments = max(1, int(math.ceil(abs(sweep) / TWO_PI * self.config.arc_segments)))
        angles = start_angle + np.linspace(0.0, sweep, segments + 1)
        xs = x + radius * np.cos(angles)
        ys = y + radius * np.sin(angles)

        first = True
        for px, py in zip(xs, ys):
            if first and (not self._path or self._path[-1].closed or not self._path[-1].points):
                self.move_to(float(px), float(py))
            else:
                self.line_to(float(px), float(py))
            first = False

    def _subpaths(self) -> List[_SubPath]:
        return [sub for sub in self._path if len(sub.points) > 1]

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def stroke(self):
        color = color_rgba(self._state.stroke_style)
        width = self._state.line_width
        for sub in self._subpaths():
            pts = list(sub.points)
            if sub.closed:
                pts.append(pts[0])
            for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
                self.batch.add_line(DrawLine(x0, y0, x1, y1, color, width, self._z_index))
        self._z_index += 1

    def fill(self):
        """Fill every subpath as a triangle fan (exact for convex paths)."""
        color = color_rgba(self._state.fill_style)
        for sub in self._subpaths():
            pts = sub.points
            if len(pts) < 3:
                continue
            origin = pts[0]
            for b, c in zip(pts[1:], pts[2:]):
                self.batch.add_triangle(DrawTriangle(origin, b, c, color, self._z_index))
        self._z_index += 1

    def _add_text(self, text: str, x: float, y: float, style: Color, mode: str):
        tx, ty = self._transform(x, y)
        self.batch.add_text(DrawText(
            text=text,
            x=tx,
            y=ty,
            color=color_rgba(style),
            font=self._state.font,
            font_size=font_size_px(self._state.font),
            align=self._state.text_align,
            baseline=self._state.text_baseline,
            rotation=self._rotation(),
            mode=mode,
            z_index=self._z_index,
        ))
        self._z_index += 1

    def fill_text(self, text: str, x: float, y: float):
        self._add_text(text, x, y, self._state.fill_style, "fill")

    def stroke_text(self, text: str, x: float, y: float):
        self._add_text(text, x, y, self._state.stroke_style, "stroke")

    def measure_text(self, text: str) -> TextMetrics:
        # Simple estimation; a real implementation would use font metrics
        size = font_size_px(self._state.font)
        return TextMetrics(width=len(text) * size * self.config.text_width_ratio)

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------

    def finalize(self) -> DrawBatch:
        """Finalize and return the draw batch."""
        self.batch.finalize()
        return self.batch

    def clear(self):
        """Clear the context for next frame."""
        self.batch.clear()
        self._z_index = 0
        self._state = DrawState()
        self._state_stack.clear()
        self._path = []
