"""
rendergraph - Scene graph, event bus and type-tag render dispatch for 2D drawing.

Example usage:

    from rendergraph import SceneContext, View, WindowElement, WidgetType
    from rendergraph import TextModel, Point, create_font

    scene = SceneContext.create()
    root = scene.registry.create("root", WidgetType.GROUP)
    scene.registry.create_child(root, "title", WidgetType.TEXT, TextModel(
        text="Hello", font=create_font("Arial", 18, "white"), position=Point(20, 20),
    ))

    handler = scene.bus.on("pointer_move", on_move, min_interval=50)

    view = View(lambda: WindowElement(wnd))
    view.bind_bus(scene.bus)

    # In render loop:
    draw_ctx = view.get_context()
    draw_ctx.clear()
    scene.render(view)
    renderer.render(draw_ctx.finalize(), width, height)
"""

from rendergraph.core import (
    EventBus, EventHandler, BusDebugger, on_event,
    RenderConfig, DEFAULT_CONFIG, FrameState,
)
from rendergraph.scene import (
    Point, WidgetType, Widget, WidgetRegistry,
    GroupModel, TextModel, CircleTextModel, CircleModel, RectModel, TriangleModel,
)
from rendergraph.ui import (
    Font, Pen, create_font, create_pen,
    DrawContext, DrawBatch, View, InputHooks, WindowElement,
    RenderDispatcher, BatchRenderer,
)
from rendergraph.core.context import SceneContext

__all__ = [
    # Events
    "EventBus", "EventHandler", "BusDebugger", "on_event",
    # Config
    "RenderConfig", "DEFAULT_CONFIG", "FrameState",
    # Scene
    "Point", "WidgetType", "Widget", "WidgetRegistry",
    "GroupModel", "TextModel", "CircleTextModel", "CircleModel", "RectModel", "TriangleModel",
    # Drawing
    "Font", "Pen", "create_font", "create_pen",
    "DrawContext", "DrawBatch", "View", "InputHooks", "WindowElement",
    "RenderDispatcher", "BatchRenderer",
    # Context
    "SceneContext",
]
