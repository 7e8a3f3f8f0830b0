"""
Drawing Routines

Stateless helpers that paint one shape through a view's drawing context.
Every routine brackets its work in save()/restore().

Pens: the stroke style is always applied; shapes are filled only when
the pen has a fill style.
"""

from __future__ import annotations
from typing import Any, TYPE_CHECKING
import math

from rendergraph.core.config import DEFAULT_CONFIG
from rendergraph.scene.models import Point, model_field

if TYPE_CHECKING:
    from rendergraph.ui.style import Font, Pen
    from rendergraph.ui.view import View


def _apply_font(context, font: Font):
    context.font = font.font
    context.fill_style = font.fill_style
    context.stroke_style = font.stroke_style


def _apply_pen(context, pen: Pen):
    context.line_width = pen.line_width
    if pen.fill_style:
        context.fill_style = pen.fill_style
    context.stroke_style = pen.stroke_style


def _finish_shape(context, pen: Pen):
    context.stroke()
    if pen.fill_style:
        context.fill()


# =============================================================================
# Text
# =============================================================================

def text_size(view: View, model: Any) -> float:
    """Width of model.text rendered in model.font."""
    context = view.get_context()
    context.save()
    try:
        context.font = model_field(model, "font").font
        return context.measure_text(model_field(model, "text")).width
    finally:
        context.restore()


def text(view: View, text: str, font: Font, position):
    context = view.get_context()
    p = Point.of(position)
    context.save()
    try:
        _apply_font(context, font)
        context.text_align = font.text_align
        context.text_baseline = font.text_baseline

        context.fill_text(text, p.x, p.y)
        context.stroke_text(text, p.x, p.y)
    finally:
        context.restore()


def circle_text_step(glyph_count: int, start_angle: float, stop_angle: float,
                     cap: float = DEFAULT_CONFIG.circle_text_max_step) -> float:
    """
    Angle between consecutive glyphs of circular text.

    The even spread (start - stop) / (n - 1) is clamped to `cap` so short
    strings do not fan out across the whole arc.
    """
    if glyph_count <= 1:
        return 0.0
    return min((start_angle - stop_angle) / (glyph_count - 1), cap)


def circle_text(view: View, text: str, font: Font, position, radius: float,
                start_angle: float, stop_angle: float,
                max_step: float = None):
    """Lay glyphs along a circle, from start_angle towards stop_angle."""
    context = view.get_context()
    if max_step is None:
        max_step = getattr(context, "config", DEFAULT_CONFIG).circle_text_max_step

    center = Point.of(position)
    step = circle_text_step(len(text), start_angle, stop_angle, max_step)
    angle = float(start_angle)

    context.save()
    try:
        _apply_font(context, font)
        context.text_align = "center"
        context.text_baseline = "middle"

        for character in text:
            context.save()
            try:
                context.begin_path()
                context.translate(center.x + math.cos(angle) * radius,
                                  center.y - math.sin(angle) * radius)
                context.rotate(math.pi / 2 - angle)

                context.fill_text(character, 0, 0)
                context.stroke_text(character, 0, 0)
            finally:
                context.restore()
            angle -= step
    finally:
        context.restore()


# =============================================================================
# Shapes
# =============================================================================

def circle(view: View, pen: Pen, position, radius: float):
    context = view.get_context()
    p = Point.of(position)
    context.save()
    try:
        _apply_pen(context, pen)
        context.begin_path()
        context.arc(p.x, p.y, radius, 0, math.pi * 2, True)
        _finish_shape(context, pen)
    finally:
        context.restore()


def rect(view: View, pen: Pen, top_left, bot_right):
    context = view.get_context()
    tl, br = Point.of(top_left), Point.of(bot_right)
    context.save()
    try:
        _apply_pen(context, pen)
        context.begin_path()
        context.move_to(tl.x, tl.y)
        context.line_to(br.x, tl.y)
        context.line_to(br.x, br.y)
        context.line_to(tl.x, br.y)
        context.close_path()
        _finish_shape(context, pen)
    finally:
        context.restore()


def triangle(view: View, pen: Pen, a, b, c):
    context = view.get_context()
    a, b, c = Point.of(a), Point.of(b), Point.of(c)
    context.save()
    try:
        _apply_pen(context, pen)
        context.begin_path()
        context.move_to(a.x, a.y)
        context.line_to(b.x, b.y)
        context.line_to(c.x, c.y)
        context.close_path()
        _finish_shape(context, pen)
    finally:
        context.restore()
