"""
Core: event bus, configuration and frame timing.

SceneContext lives in rendergraph.core.context and is re-exported from
the top-level package.
"""

from rendergraph.core.signal import (
    EventBus, EventHandler, BusDebugger, EmitTrace, on_event, monotonic_ms,
    EVENT_POINTER_MOVE, EVENT_POINTER_DOWN, EVENT_POINTER_UP,
    EVENT_KEY_DOWN, EVENT_KEY_UP, EVENT_KEY_PRESS,
    EVENT_WIDGET_ADDED, EVENT_WIDGET_REMOVED, EVENT_FRAME,
)
from rendergraph.core.config import RenderConfig, DEFAULT_CONFIG
from rendergraph.core.frame import FrameState
