# rendergraph/core/config.py
"""
Render configuration.

Tunables shared by the drawing surface and the drawing routines.
"""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RenderConfig:
    # Circular text: max angle (radians) between consecutive glyphs
    circle_text_max_step: float = 0.4

    # Text width estimate: ~ratio * font size per character
    text_width_ratio: float = 0.6

    # Segments used to tessellate a full circle
    arc_segments: int = 48

    default_text_align: str = "left"
    default_text_baseline: str = "top"
    default_stroke_style: str = "black"

    def replace(self, **changes) -> RenderConfig:
        return replace(self, **changes)


DEFAULT_CONFIG = RenderConfig()
