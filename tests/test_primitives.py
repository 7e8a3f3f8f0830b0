import math

import pytest

from rendergraph.scene.models import Point, TextModel
from rendergraph.ui import primitives
from rendergraph.ui.style import create_font, create_pen, color_rgba


def _fills(batch):
    return [t for t in batch.texts if t.mode == "fill"]


def test_circle_text_step_spreads_evenly_under_cap():
    step = primitives.circle_text_step(5, math.pi, 0.0, cap=1.0)
    assert step == pytest.approx(min(math.pi / 4, 1.0))


def test_circle_text_step_is_clamped():
    step = primitives.circle_text_step(5, math.pi, 0.0, cap=0.4)
    assert step == pytest.approx(0.4)
    # Default cap comes from the render config
    assert primitives.circle_text_step(5, math.pi, 0.0) == pytest.approx(0.4)


def test_circle_text_step_single_glyph():
    assert primitives.circle_text_step(1, math.pi, 0.0) == 0.0
    assert primitives.circle_text_step(0, math.pi, 0.0) == 0.0


def test_circle_text_places_glyphs_on_arc(view, surface):
    font = create_font("Arial", 12, "white", "black")

    primitives.circle_text(view, "ABCDE", font, Point(0, 0), 10, math.pi, 0.0, max_step=1.0)
    glyphs = _fills(surface.finalize())

    assert [g.text for g in glyphs] == list("ABCDE")
    step = math.pi / 4
    for i, g in enumerate(glyphs):
        angle = math.pi - i * step
        assert g.x == pytest.approx(math.cos(angle) * 10, abs=1e-9)
        assert g.y == pytest.approx(-math.sin(angle) * 10, abs=1e-9)
        assert g.rotation == pytest.approx(math.pi / 2 - angle, abs=1e-9)
        assert g.align == "center"
        assert g.baseline == "middle"


def test_circle_text_restores_state(view, surface):
    font = create_font("Arial", 12, "white", "black")
    primitives.circle_text(view, "abc", font, Point(50, 50), 20, 2.0, 1.0)

    assert surface.text_align == "left"
    assert surface.font == "10pt sans-serif"
    assert surface.transform_matrix.tolist() == [[1, 0, 0], [0, 1, 0], [0, 0, 1]]


def test_text_fills_then_strokes(view, surface):
    font = create_font("Arial", 12, "white", "black", align="right", baseline="bottom")
    primitives.text(view, "hello", font, Point(10, 20))

    texts = surface.finalize().texts
    assert [t.mode for t in texts] == ["fill", "stroke"]
    for t in texts:
        assert (t.x, t.y) == (10, 20)
        assert t.font == "12pt Arial"
        assert t.font_size == pytest.approx(16.0)
        assert t.align == "right"
        assert t.baseline == "bottom"
    assert texts[0].color == color_rgba("white")
    assert texts[1].color == color_rgba("black")


def test_text_size(view):
    model = TextModel(text="abcd", font=create_font("Arial", 12), position=Point(0, 0))
    assert primitives.text_size(view, model) == pytest.approx(4 * 16.0 * 0.6)


def test_circle_stroke_only_without_fill(view, surface):
    pen = create_pen(3, None, "#ff0000")
    primitives.circle(view, pen, Point(100, 100), 25)

    batch = surface.finalize()
    assert batch.triangles == []
    assert len(batch.lines) == surface.config.arc_segments
    assert all(ln.color == (1.0, 0.0, 0.0, 1.0) for ln in batch.lines)
    assert all(ln.width == 3 for ln in batch.lines)
    # Every point sits on the circle
    for ln in batch.lines:
        assert math.hypot(ln.x0 - 100, ln.y0 - 100) == pytest.approx(25)


def test_circle_with_fill(view, surface):
    pen = create_pen(1, "blue", "black")
    primitives.circle(view, pen, (0, 0), 10)

    batch = surface.finalize()
    assert len(batch.triangles) == surface.config.arc_segments - 1
    assert batch.triangles[0].color == color_rgba("blue")
    # Stroke recorded before the fill
    assert batch.lines[0].z_index < batch.triangles[0].z_index


def test_rect_outline(view, surface):
    primitives.rect(view, create_pen(1), Point(0, 0), Point(10, 5))

    batch = surface.finalize()
    segments = [((ln.x0, ln.y0), (ln.x1, ln.y1)) for ln in batch.lines]
    assert segments == [
        ((0, 0), (10, 0)),
        ((10, 0), (10, 5)),
        ((10, 5), (0, 5)),
        ((0, 5), (0, 0)),
    ]
    assert batch.triangles == []


def test_rect_fill(view, surface):
    primitives.rect(view, create_pen(1, "white"), Point(0, 0), Point(10, 5))
    assert len(surface.finalize().triangles) == 2


def test_triangle(view, surface):
    primitives.triangle(view, create_pen(1, "white"), Point(0, 0), Point(4, 0), Point(0, 3))

    batch = surface.finalize()
    assert len(batch.lines) == 3
    assert len(batch.triangles) == 1
    tri = batch.triangles[0]
    assert (tri.a, tri.b, tri.c) == ((0, 0), (4, 0), (0, 3))


def test_pen_without_fill_leaves_fill_style(view, surface):
    surface.fill_style = "green"
    surface.save()
    primitives.triangle(view, create_pen(1), Point(0, 0), Point(1, 0), Point(0, 1))
    surface.restore()

    assert surface.fill_style == "green"
    assert surface.stroke_style == "black"


def _raise(*args, **kwargs):
    raise RuntimeError("surface failure")


@pytest.mark.parametrize("draw", [
    lambda view, pen: primitives.circle(view, pen, Point(0, 0), 5),
    lambda view, pen: primitives.rect(view, pen, Point(0, 0), Point(4, 4)),
    lambda view, pen: primitives.triangle(view, pen, Point(0, 0), Point(4, 0), Point(0, 4)),
])
def test_shape_restores_state_when_stroke_raises(view, surface, monkeypatch, draw):
    monkeypatch.setattr(surface, "stroke", _raise)

    with pytest.raises(RuntimeError):
        draw(view, create_pen(7, "red", "blue"))

    assert surface.line_width == 1.0
    assert surface.fill_style == "black"
    assert surface._state_stack == []


def test_text_routines_restore_state_when_text_raises(view, surface, monkeypatch):
    font = create_font("Arial", 12, "white", "red")
    monkeypatch.setattr(surface, "fill_text", _raise)

    with pytest.raises(RuntimeError):
        primitives.text(view, "a", font, Point(1, 1))
    with pytest.raises(RuntimeError):
        primitives.circle_text(view, "ab", font, Point(50, 50), 10, 1.0, 0.0)

    assert surface.font != font.font
    assert surface._state_stack == []
    assert surface.transform_matrix.tolist() == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
