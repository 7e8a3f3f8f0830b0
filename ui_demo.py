"""
Scene Graph Demo

Demonstrates the widget registry, event bus and render dispatcher
hosted in a moderngl-window window.
Shows:
- Nested widgets of every built-in type
- Throttled pointer handler (status text follows the mouse)
- Limited click handler that expires after a few clicks
- Custom widget type registered on the dispatcher

Run:
    python ui_demo.py
"""

from __future__ import annotations
import logging
import math

import moderngl_window as mglw

from rendergraph import (
    SceneContext, View, WindowElement, BatchRenderer, FrameState,
    WidgetType, Point, GroupModel, TextModel, CircleTextModel, CircleModel, RectModel, TriangleModel,
    create_font, create_pen,
)
from rendergraph.core.signal import BusDebugger, EVENT_POINTER_MOVE, EVENT_POINTER_DOWN, EVENT_KEY_DOWN
from rendergraph.logging_setup import configure_logging
from rendergraph.ui import primitives

logger = logging.getLogger("ui_demo")

CLICK_LIMIT = 5


class SceneDemoApp(mglw.WindowConfig):
    """Demo application for the scene graph."""

    gl_version = (3, 3)
    title = "rendergraph demo"
    window_size = (1280, 720)
    resource_dir = "."

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.ctx.enable(self.ctx.BLEND)
        self.ctx.blend_func = self.ctx.SRC_ALPHA, self.ctx.ONE_MINUS_SRC_ALPHA

        self.scene = SceneContext.create()
        self.view = View(lambda: WindowElement(self.wnd), name="main")
        self.view.bind_bus(self.scene.bus)
        self.renderer = BatchRenderer(self.ctx)

        self.frame = FrameState()

        self._setup_widgets()
        self._setup_events()

    def _setup_widgets(self):
        reg = self.scene.registry
        white = create_font("Arial", 16, "white", None)
        accent = create_pen(2, None, "#4fa3ff")
        filled = create_pen(1, "#2b3a55", "#9fb6d9")

        root = reg.create("root", WidgetType.GROUP, GroupModel())
        panel = reg.create_child(root, "panel", WidgetType.RECT, RectModel(
            pen=filled, top_left=Point(40, 40), bot_right=Point(520, 420),
        ))
        reg.create_child(panel, "title", WidgetType.TEXT, TextModel(
            text="rendergraph", font=create_font("Arial", 20, "white", None), position=Point(60, 60),
        ))
        self.status = reg.create_child(panel, "status", WidgetType.TEXT, TextModel(
            text="Move the mouse", font=white, position=Point(60, 380),
        ))
        dial = reg.create_child(root, "dial", WidgetType.CIRCLE, CircleModel(
            pen=accent, position=Point(860, 300), radius=160,
        ))
        reg.create_child(dial, "dial_label", WidgetType.CIRCLE_TEXT, CircleTextModel(
            text="SCENE GRAPH", font=white, position=Point(860, 300), radius=180,
            start_angle=math.pi * 0.75, stop_angle=math.pi * 0.25,
        ))
        reg.create_child(dial, "needle", WidgetType.TRIANGLE, TriangleModel(
            pen=create_pen(1, "#ff7a59", "#ff7a59"),
            a=Point(850, 300), b=Point(870, 300), c=Point(860, 170),
        ))

        # Custom widget type: a text label with an underline
        @self.scene.dispatcher.register("underlined")
        def draw_underlined(view, model):
            primitives.text(view, model.text, model.font, model.position)
            width = primitives.text_size(view, model)
            y = model.position.y + 26
            primitives.rect(view, accent, Point(model.position.x, y), Point(model.position.x + width, y + 1))

        reg.create_child(panel, "hint", "underlined", TextModel(
            text=f"Click up to {CLICK_LIMIT} times", font=white, position=Point(60, 120),
        ))

    def _setup_events(self):
        bus = self.scene.bus
        self.debugger = BusDebugger(bus)
        self.debugger.watch(EVENT_POINTER_DOWN)

        def on_move(pointer):
            self.status.model.text = f"Pointer at {pointer.position.x:.0f}, {pointer.position.y:.0f}"

        bus.on(EVENT_POINTER_MOVE, on_move, min_interval=50)

        def on_click(pointer):
            return pointer.position

        def report(position):
            logger.info(f"Click at {position}")

        clicks = bus.on(EVENT_POINTER_DOWN, on_click, call_limit=CLICK_LIMIT, result_callback=report)

        def on_key(key):
            logger.info(f"Key {key}; clicks left: {clicks.remaining}")

        bus.on(EVENT_KEY_DOWN, on_key)

    def on_render(self, time: float, frame_time: float):
        """Main render loop."""
        self.frame = self.frame.advance(frame_time)

        w, h = self.wnd.buffer_size
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, w, h)
        self.ctx.clear(0.08, 0.09, 0.11, 1.0)

        draw_ctx = self.view.get_context()
        draw_ctx.clear()
        self.scene.tick(self.frame, self.view)
        self.renderer.render(draw_ctx.finalize(), w, h)

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def on_mouse_position_event(self, x, y, dx, dy):
        self.view.mouse_move(x, y)

    def on_mouse_press_event(self, x, y, button):
        self.view.mouse_down(x, y, button)

    def on_mouse_release_event(self, x, y, button):
        self.view.mouse_up(x, y, button)

    def on_key_event(self, key, action, modifiers):
        if action == self.wnd.keys.ACTION_PRESS:
            self.view.key_down(key)
        elif action == self.wnd.keys.ACTION_RELEASE:
            self.view.key_up(key)

    def on_unicode_char_entered(self, char: str):
        self.view.key_press(char)


if __name__ == "__main__":
    configure_logging(logging.INFO, trace_events=True)
    mglw.run_window_config(SceneDemoApp)
