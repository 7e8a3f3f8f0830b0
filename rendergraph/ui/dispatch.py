"""
Render Dispatcher

Maps a widget's type tag to a drawing routine. Routines receive
(view, model) and unpack the fields they need from the model.

New widget kinds are added by registering a routine for a new tag:

    dispatcher = RenderDispatcher()

    @dispatcher.register("label")
    def draw_label(view, model):
        primitives.text(view, model.caption, model.font, model.position)
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, Optional, TYPE_CHECKING
import logging

from rendergraph.scene.models import WidgetType, model_field as f
from rendergraph.ui import primitives

if TYPE_CHECKING:
    from rendergraph.scene.widget import Widget
    from rendergraph.ui.view import View

logger = logging.getLogger(__name__)

Routine = Callable[["View", Any], Any]


# =============================================================================
# Default Routines
# =============================================================================

def draw_text(view: View, model: Any):
    primitives.text(view, f(model, "text"), f(model, "font"), f(model, "position"))


def draw_circle_text(view: View, model: Any):
    primitives.circle_text(
        view,
        f(model, "text"),
        f(model, "font"),
        f(model, "position"),
        f(model, "radius"),
        f(model, "start_angle"),
        f(model, "stop_angle"),
    )


def draw_circle(view: View, model: Any):
    primitives.circle(view, f(model, "pen"), f(model, "position"), f(model, "radius"))


def draw_rect(view: View, model: Any):
    primitives.rect(view, f(model, "pen"), f(model, "top_left"), f(model, "bot_right"))


def draw_triangle(view: View, model: Any):
    primitives.triangle(view, f(model, "pen"), f(model, "a"), f(model, "b"), f(model, "c"))


DEFAULT_ROUTINES: Dict[str, Routine] = {
    WidgetType.TEXT.value: draw_text,
    WidgetType.CIRCLE_TEXT.value: draw_circle_text,
    WidgetType.CIRCLE.value: draw_circle,
    WidgetType.RECT.value: draw_rect,
    WidgetType.TRIANGLE.value: draw_triangle,
}


def _tag(type_tag: Any) -> str:
    if isinstance(type_tag, WidgetType):
        return type_tag.value
    return str(type_tag)


# =============================================================================
# Dispatcher
# =============================================================================

class RenderDispatcher:
    """Type tag -> drawing routine table."""

    def __init__(self, routines: Optional[Dict[str, Routine]] = None):
        self._routines: Dict[str, Routine] = {}
        for tag, routine in (DEFAULT_ROUTINES if routines is None else routines).items():
            self._routines[_tag(tag)] = routine

    def register(self, type_tag: Any, routine: Routine = None):
        """Register a routine for a tag; usable as a decorator."""
        if routine is None:
            def decorator(func: Routine) -> Routine:
                self._routines[_tag(type_tag)] = func
                return func
            return decorator
        self._routines[_tag(type_tag)] = routine
        return routine

    def unregister(self, type_tag: Any) -> Optional[Routine]:
        return self._routines.pop(_tag(type_tag), None)

    def routine_for(self, type_tag: Any) -> Optional[Routine]:
        return self._routines.get(_tag(type_tag))

    @property
    def tags(self):
        return list(self._routines)

    def render(self, view: View, widget: Widget) -> bool:
        """Draw one widget. Unknown tags draw nothing and return False."""
        routine = self._routines.get(_tag(widget.type))
        if routine is None:
            logger.debug(f"No routine for widget type {str(widget.type)!r} ({widget.name!r})")
            return False
        routine(view, widget.model)
        return True

    def render_all(self, view: View, widgets: Iterable[Widget]) -> int:
        """Draw widgets in the given order; returns how many were drawn."""
        drawn = 0
        for widget in widgets:
            if self.render(view, widget):
                drawn += 1
        return drawn
