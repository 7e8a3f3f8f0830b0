"""
Style Descriptors

Fonts and pens consumed by the drawing routines.

Design principles:
- Plain data, no behavior beyond field access
- Immutable after creation (use dataclasses.replace() for variants)
- Colors are float tuples, '#hex' strings or a few CSS names
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Optional, Union
import logging
import re
import numpy as np

from rendergraph.core.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


# =============================================================================
# Color
# =============================================================================

# Color can be:
# - Tuple of 3-4 floats (RGB or RGBA, 0.0-1.0)
# - '#RGB', '#RGBA', '#RRGGBB', '#RRGGBBAA' or a name from NAMED_COLORS
# - None (transparent)
Color = Optional[Union[Tuple[float, ...], str]]

NAMED_COLORS = {
    "black": (0.0, 0.0, 0.0, 1.0),
    "white": (1.0, 1.0, 1.0, 1.0),
    "red": (1.0, 0.0, 0.0, 1.0),
    "green": (0.0, 128 / 255, 0.0, 1.0),
    "lime": (0.0, 1.0, 0.0, 1.0),
    "blue": (0.0, 0.0, 1.0, 1.0),
    "yellow": (1.0, 1.0, 0.0, 1.0),
    "orange": (1.0, 165 / 255, 0.0, 1.0),
    "gray": (128 / 255, 128 / 255, 128 / 255, 1.0),
    "grey": (128 / 255, 128 / 255, 128 / 255, 1.0),
    "transparent": (0.0, 0.0, 0.0, 0.0),
}


def hex_to_color(hex_str: str) -> Tuple[float, float, float, float]:
    """Convert hex string to color. Supports #RGB, #RGBA, #RRGGBB, #RRGGBBAA."""
    h = hex_str.lstrip('#')
    try:
        if len(h) == 3:
            r, g, b = int(h[0], 16) / 15, int(h[1], 16) / 15, int(h[2], 16) / 15
            return (r, g, b, 1.0)
        elif len(h) == 4:
            r, g, b, a = int(h[0], 16) / 15, int(h[1], 16) / 15, int(h[2], 16) / 15, int(h[3], 16) / 15
            return (r, g, b, a)
        elif len(h) == 6:
            r, g, b = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255
            return (r, g, b, 1.0)
        elif len(h) == 8:
            r, g, b, a = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255, int(h[6:8], 16) / 255
            return (r, g, b, a)
    except ValueError:
        pass
    raise ValueError(f"Invalid hex color: {hex_str}")


def color_rgba(c: Color) -> Tuple[float, float, float, float]:
    """Normalize color to RGBA tuple."""
    if c is None:
        return (0.0, 0.0, 0.0, 0.0)
    if isinstance(c, str):
        if c.startswith('#'):
            return hex_to_color(c)
        named = NAMED_COLORS.get(c.strip().lower())
        if named is None:
            logger.warning(f"Unknown color name {c!r}, using transparent")
            return (0.0, 0.0, 0.0, 0.0)
        return named
    if len(c) == 3:
        return (c[0], c[1], c[2], 1.0)
    return (c[0], c[1], c[2], c[3])


def color_to_array(c: Color) -> np.ndarray:
    """Convert color to numpy array."""
    return np.array(color_rgba(c), dtype=np.float32)


# =============================================================================
# Font
# =============================================================================

_FONT_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(pt|px)\b")


@dataclass(frozen=True)
class Font:
    font: str               # e.g. "12pt Arial"
    fill_style: Color = None
    stroke_style: Color = None
    text_align: str = "left"
    text_baseline: str = "top"


def font_size_px(font: str) -> float:
    """Pixel size of a '<n>pt family' / '<n>px family' font string."""
    m = _FONT_SIZE_RE.search(font or "")
    if not m:
        return 10.0
    size = float(m.group(1))
    if m.group(2) == "pt":
        return size * 4.0 / 3.0
    return size


def create_font(name: str, size: float, fill_style: Color = None,
                stroke_style: Color = None, align: str = None,
                baseline: str = None) -> Font:
    return Font(
        font=f"{size}pt {name}",
        fill_style=fill_style,
        stroke_style=stroke_style,
        text_align=align or DEFAULT_CONFIG.default_text_align,
        text_baseline=baseline or DEFAULT_CONFIG.default_text_baseline,
    )


# =============================================================================
# Pen
# =============================================================================

@dataclass(frozen=True)
class Pen:
    line_width: float = 1.0
    fill_style: Color = None    # None -> shapes are stroked only
    stroke_style: Color = "black"


def create_pen(size: float, fill_style: Color = None, stroke_style: Color = None) -> Pen:
    return Pen(
        line_width=size,
        fill_style=fill_style or None,
        stroke_style=stroke_style or DEFAULT_CONFIG.default_stroke_style,
    )
