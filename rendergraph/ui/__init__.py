"""
Drawing layer

Components:
- style: Font and pen descriptors, color parsing
- draw: Canvas-like recording surface (DrawContext -> DrawBatch)
- view: Lazy element binding, coordinate transform, input hooks
- primitives: Drawing routines (text, circular text, shapes)
- dispatch: Widget type tag -> routine table
- renderer: moderngl renderer for a finished DrawBatch
"""

from rendergraph.ui.style import (
    Color, Font, Pen, create_font, create_pen,
    color_rgba, hex_to_color, font_size_px,
)
from rendergraph.ui.draw import DrawContext, DrawBatch, TextMetrics, arc_sweep
from rendergraph.ui.view import View, InputHooks, PointerInput, WindowElement
from rendergraph.ui.dispatch import RenderDispatcher, DEFAULT_ROUTINES
from rendergraph.ui.renderer import BatchRenderer
