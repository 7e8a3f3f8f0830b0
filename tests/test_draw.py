import math

import numpy as np
import pytest

from rendergraph.core.config import RenderConfig
from rendergraph.ui.draw import DrawContext, arc_sweep


@pytest.mark.parametrize("start, end, anticlockwise, expected", [
    (0.0, math.pi, False, math.pi),
    (0.0, math.pi, True, -math.pi),
    (math.pi, 0.0, False, math.pi),
    (0.0, 2 * math.pi, True, -2 * math.pi),
    (0.0, 2 * math.pi, False, 2 * math.pi),
    (0.0, 3 * math.pi, False, 2 * math.pi),
    (1.0, 1.0, False, 0.0),
])
def test_arc_sweep(start, end, anticlockwise, expected):
    assert arc_sweep(start, end, anticlockwise) == pytest.approx(expected)


def test_save_restore_state():
    ctx = DrawContext()
    ctx.fill_style = "red"
    ctx.line_width = 4
    ctx.save()
    ctx.fill_style = "blue"
    ctx.line_width = 1
    ctx.translate(5, 5)
    ctx.restore()

    assert ctx.fill_style == "red"
    assert ctx.line_width == 4
    assert np.allclose(ctx.transform_matrix, np.eye(3))


def test_restore_on_empty_stack_is_noop():
    ctx = DrawContext()
    ctx.font = "20px Mono"
    ctx.restore()
    assert ctx.font == "20px Mono"


def test_translate_applies_to_path_points():
    ctx = DrawContext()
    ctx.translate(10, 5)
    ctx.begin_path()
    ctx.move_to(0, 0)
    ctx.line_to(1, 0)
    ctx.stroke()

    (line,) = ctx.finalize().lines
    assert (line.x0, line.y0, line.x1, line.y1) == pytest.approx((10, 5, 11, 5))


def test_rotate_then_translate_composes():
    ctx = DrawContext()
    ctx.rotate(math.pi / 2)
    ctx.translate(10, 0)
    ctx.fill_text("x", 0, 0)

    (text,) = ctx.finalize().texts
    assert (text.x, text.y) == pytest.approx((0, 10))
    assert text.rotation == pytest.approx(math.pi / 2)


def test_line_to_without_move_starts_subpath():
    ctx = DrawContext()
    ctx.begin_path()
    ctx.line_to(1, 1)
    ctx.line_to(2, 2)
    ctx.stroke()
    assert len(ctx.finalize().lines) == 1


def test_begin_path_discards_previous_path():
    ctx = DrawContext()
    ctx.move_to(0, 0)
    ctx.line_to(5, 5)
    ctx.begin_path()
    ctx.stroke()
    assert ctx.finalize().lines == []


def test_arc_segments_follow_config():
    ctx = DrawContext(RenderConfig(arc_segments=8))
    ctx.begin_path()
    ctx.arc(0, 0, 1, 0, math.pi)
    ctx.stroke()
    assert len(ctx.finalize().lines) == 4


def test_measure_text_uses_font_size():
    ctx = DrawContext(RenderConfig(text_width_ratio=0.5))
    ctx.font = "20px Mono"
    assert ctx.measure_text("abc").width == pytest.approx(30.0)


def test_batch_sorted_and_packed():
    ctx = DrawContext()
    ctx.fill_style = "white"
    ctx.begin_path()
    ctx.move_to(0, 0)
    ctx.line_to(10, 0)
    ctx.line_to(0, 10)
    ctx.close_path()
    ctx.fill()
    ctx.stroke()

    batch = ctx.finalize()
    assert [l.z_index for l in batch.lines] == [1, 1, 1]
    assert batch.total_vertices == 3 + 6

    tris = batch.triangle_vertices()
    assert tris.shape == (3, 6)
    assert tris.dtype == np.float32
    assert tris[1].tolist() == [10.0, 0.0, 1.0, 1.0, 1.0, 1.0]

    lines = batch.line_vertices()
    assert lines.shape == (6, 6)


def test_clear_resets_for_next_frame():
    ctx = DrawContext()
    ctx.translate(3, 3)
    ctx.save()
    ctx.fill_text("x", 0, 0)
    ctx.clear()

    assert ctx.batch.texts == []
    assert np.allclose(ctx.transform_matrix, np.eye(3))
    ctx.fill_text("y", 0, 0)
    assert ctx.batch.texts[0].z_index == 0
