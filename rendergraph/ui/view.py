"""
View

Binding between the scene and a concrete drawing element:
- Lazily resolves the element and its drawing context (cached)
- Maps window coordinates to view coordinates (logical vs physical size)
- Raw input hook slots, optionally wired to an EventBus
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Callable, Optional, Tuple, TYPE_CHECKING
import logging

from rendergraph.core.config import RenderConfig
from rendergraph.core.signal import (
    EVENT_POINTER_MOVE, EVENT_POINTER_DOWN, EVENT_POINTER_UP,
    EVENT_KEY_DOWN, EVENT_KEY_UP, EVENT_KEY_PRESS,
)
from rendergraph.scene.models import Point
from rendergraph.ui.draw import DrawContext

if TYPE_CHECKING:
    from rendergraph.core.signal import EventBus

logger = logging.getLogger(__name__)


# =============================================================================
# Input Hooks
# =============================================================================

PointerHook = Callable[[Point, int], Any]
KeyHook = Callable[[Any], Any]


@dataclass
class InputHooks:
    """Raw input slots. Pointer hooks receive (view_point, button)."""
    on_mouse_move: Optional[PointerHook] = None
    on_mouse_down: Optional[PointerHook] = None
    on_mouse_up: Optional[PointerHook] = None

    on_key_down: Optional[KeyHook] = None
    on_key_up: Optional[KeyHook] = None
    on_key_press: Optional[KeyHook] = None


_HOOK_EVENTS = {
    "on_mouse_move": EVENT_POINTER_MOVE,
    "on_mouse_down": EVENT_POINTER_DOWN,
    "on_mouse_up": EVENT_POINTER_UP,
    "on_key_down": EVENT_KEY_DOWN,
    "on_key_up": EVENT_KEY_UP,
    "on_key_press": EVENT_KEY_PRESS,
}


@dataclass(frozen=True)
class PointerInput:
    """Payload emitted for pointer events when hooks are bound to a bus."""
    position: Point
    button: int = 0


# =============================================================================
# Window Element
# =============================================================================

class WindowElement:
    """
    Drawing element backed by a moderngl-window window.

    `width`/`height` are the framebuffer size, `bounds()` the logical
    window rect; they differ on high-DPI displays. Both are read from the
    window on every access so resizes are picked up.
    """

    def __init__(self, wnd, config: RenderConfig = None):
        self.wnd = wnd
        self.config = config
        self._context: Optional[DrawContext] = None

    @property
    def width(self) -> int:
        return self.wnd.buffer_size[0]

    @property
    def height(self) -> int:
        return self.wnd.buffer_size[1]

    def bounds(self) -> Tuple[float, float, float, float]:
        w, h = self.wnd.size
        return (0.0, 0.0, float(w), float(h))

    def get_context(self, context_type: str = "2d") -> DrawContext:
        if context_type != "2d":
            raise ValueError(f"Unsupported context type: {context_type}")
        if self._context is None:
            self._context = DrawContext(self.config)
        return self._context


# =============================================================================
# View
# =============================================================================

class View:
    """
    Lazily bound drawing target.

    `resolve_element` is called once, on first use. The element must
    expose `width`, `height`, `bounds()` -> (left, top, width, height)
    and `get_context(context_type)`.
    """

    def __init__(self, resolve_element: Callable[[], Any], context_type: str = "2d",
                 name: str = ""):
        self._resolve_element = resolve_element
        self._element = None
        self._context = None

        self.name = name
        self.context_type = context_type
        self.input = InputHooks()

    # -------------------------------------------------------------------------
    # Element / Context
    # -------------------------------------------------------------------------

    def get_element(self):
        if self._element is None:
            self._element = self._resolve_element()
            logger.debug(f"View {self.name!r} resolved element {self._element!r}")
        return self._element

    def get_context(self):
        if self._context is None:
            self._context = self.get_element().get_context(self.context_type)
        return self._context

    def get_type(self) -> str:
        return self.context_type

    def window_to_view_coords(self, x: float, y: float) -> Point:
        """Map window coordinates to element-local (physical) coordinates."""
        element = self.get_element()
        left, top, width, height = element.bounds()
        sx = element.width / width if width else 1.0
        sy = element.height / height if height else 1.0
        return Point((x - left) * sx, (y - top) * sy)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def _pointer(self, hook: Optional[PointerHook], x: float, y: float, button: int):
        if hook is not None:
            hook(self.window_to_view_coords(x, y), button)

    def mouse_move(self, x: float, y: float, button: int = 0):
        self._pointer(self.input.on_mouse_move, x, y, button)

    def mouse_down(self, x: float, y: float, button: int = 0):
        self._pointer(self.input.on_mouse_down, x, y, button)

    def mouse_up(self, x: float, y: float, button: int = 0):
        self._pointer(self.input.on_mouse_up, x, y, button)

    def key_down(self, key):
        if self.input.on_key_down is not None:
            self.input.on_key_down(key)

    def key_up(self, key):
        if self.input.on_key_up is not None:
            self.input.on_key_up(key)

    def key_press(self, key):
        if self.input.on_key_press is not None:
            self.input.on_key_press(key)

    def bind_bus(self, bus: EventBus):
        """Fill every empty input hook with an emitter for the matching event."""
        for f in fields(self.input):
            if getattr(self.input, f.name) is not None:
                continue
            event_name = _HOOK_EVENTS[f.name]
            if f.name.startswith("on_mouse"):
                hook = _pointer_emitter(bus, event_name)
            else:
                hook = _key_emitter(bus, event_name)
            setattr(self.input, f.name, hook)


def _pointer_emitter(bus: EventBus, event_name: str) -> PointerHook:
    def emit(position: Point, button: int = 0):
        bus.emit(event_name, PointerInput(position, button))
    return emit


def _key_emitter(bus: EventBus, event_name: str) -> KeyHook:
    def emit(key):
        bus.emit(event_name, key)
    return emit
