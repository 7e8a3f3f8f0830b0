# rendergraph/core/context.py
"""
SceneContext - Per-application bundle of bus, widget registry and dispatcher.

Build one per scene (or per test) instead of sharing module globals.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING

from rendergraph.core.config import RenderConfig, DEFAULT_CONFIG
from rendergraph.core.signal import EventBus, Clock, EVENT_FRAME
from rendergraph.scene.widget import WidgetRegistry
from rendergraph.ui.dispatch import RenderDispatcher

if TYPE_CHECKING:
    from rendergraph.core.frame import FrameState
    from rendergraph.ui.view import View


@dataclass
class SceneContext:
    bus: EventBus = field(default_factory=EventBus)
    registry: WidgetRegistry = field(default_factory=WidgetRegistry)
    dispatcher: RenderDispatcher = field(default_factory=RenderDispatcher)
    config: RenderConfig = DEFAULT_CONFIG

    @classmethod
    def create(cls, config: Optional[RenderConfig] = None, clock: Optional[Clock] = None,
               bind_registry: bool = True) -> SceneContext:
        scene = cls(bus=EventBus(clock=clock), config=config or DEFAULT_CONFIG)
        if bind_registry:
            scene.registry.bind_bus(scene.bus)
        return scene

    def render(self, view: View) -> int:
        """Draw every registered widget in creation order with this scene's config."""
        view.get_context().config = self.config
        return self.dispatcher.render_all(view, self.registry)

    def tick(self, frame: FrameState, view: Optional[View] = None) -> int:
        """Emit the frame event, then draw the scene if a view is given."""
        self.bus.emit(EVENT_FRAME, frame)
        if view is None:
            return 0
        return self.render(view)
