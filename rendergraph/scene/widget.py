"""
Widget Tree

Registry of scene-graph widgets:
- Ids from a per-registry monotonic counter, never reused
- Parent stored as an id, fixed at creation (tree is acyclic)
- Ancestor traversal (climb) and linear lookups
- Cascade removal of a widget and its descendants
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Iterator, List, Optional, Union, TYPE_CHECKING
import itertools
import logging
import threading

from rendergraph.core.signal import EVENT_WIDGET_ADDED, EVENT_WIDGET_REMOVED

if TYPE_CHECKING:
    from rendergraph.core.signal import EventBus

logger = logging.getLogger(__name__)


# =============================================================================
# Widget
# =============================================================================

class Widget:
    """
    A node in the scene graph.

    `id`, `type` and `parent_id` are fixed once created; `name` and
    `model` may be edited freely.
    """

    def __init__(self, widget_id: int, name: str, type: str, model: Any = None,
                 parent_id: Optional[int] = None):
        self._id = widget_id
        self._type = type
        self._parent_id = parent_id
        self.name = name
        self.model = model

    @property
    def id(self) -> int:
        return self._id

    @property
    def type(self) -> str:
        return self._type

    @property
    def parent_id(self) -> Optional[int]:
        return self._parent_id

    @property
    def is_root(self) -> bool:
        return self._parent_id is None

    def __repr__(self) -> str:
        return f"Widget(id={self._id}, name={self.name!r}, type={str(self._type)!r}, parent={self._parent_id})"


WidgetRef = Union[Widget, int]


# =============================================================================
# Registry
# =============================================================================

class WidgetRegistry:
    """Owns every widget of one scene, in creation order."""

    def __init__(self, start_id: int = 0):
        self._widgets: List[Widget] = []
        self._by_id: Dict[int, Widget] = {}

        self._ids = itertools.count(start_id)
        self._id_lock = threading.Lock()

        self._bus: Optional[EventBus] = None

    def bind_bus(self, bus: EventBus):
        """Emit widget_added / widget_removed on `bus`."""
        self._bus = bus

    def _next_id(self) -> int:
        with self._id_lock:
            return next(self._ids)

    def _resolve(self, ref: Optional[WidgetRef]) -> Optional[Widget]:
        if ref is None:
            return None
        widget_id = ref.id if isinstance(ref, Widget) else ref
        return self._by_id.get(widget_id)

    # -------------------------------------------------------------------------
    # Creation / Removal
    # -------------------------------------------------------------------------

    def create(self, name: str, type: str, model: Any = None,
               parent: Optional[WidgetRef] = None) -> Widget:
        parent_id = None
        if parent is not None:
            parent_widget = self._resolve(parent)
            if parent_widget is None:
                raise KeyError(f"Parent widget not registered: {parent!r}")
            parent_id = parent_widget.id

        widget = Widget(self._next_id(), name, type, model, parent_id)
        self._widgets.append(widget)
        self._by_id[widget.id] = widget

        logger.debug(f"Created {widget!r}")
        if self._bus:
            self._bus.emit(EVENT_WIDGET_ADDED, widget)

        return widget

    def create_child(self, parent: WidgetRef, name: str, type: str,
                     model: Any = None) -> Widget:
        return self.create(name, type, model, parent=parent)

    def remove(self, widget: WidgetRef) -> List[Widget]:
        """
        Remove a widget together with all of its descendants.

        Returns the removed widgets in creation order ([] if unknown).
        """
        target = self._resolve(widget)
        if target is None:
            return []

        doomed = {target.id}
        # Children always come after their parent in creation order
        for w in self._widgets:
            if w.parent_id in doomed:
                doomed.add(w.id)

        removed = [w for w in self._widgets if w.id in doomed]
        self._widgets = [w for w in self._widgets if w.id not in doomed]
        for w in removed:
            del self._by_id[w.id]

        logger.debug(f"Removed {len(removed)} widget(s) under {target!r}")
        if self._bus:
            for w in removed:
                self._bus.emit(EVENT_WIDGET_REMOVED, w)

        return removed

    def clear(self):
        self._widgets.clear()
        self._by_id.clear()

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def parent_of(self, widget: Widget) -> Optional[Widget]:
        if widget.parent_id is None:
            return None
        return self._by_id.get(widget.parent_id)

    def ancestors(self, widget: Widget) -> Iterator[Widget]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent_of(widget)
        while node is not None:
            yield node
            node = self.parent_of(node)

    def climb(self, widget: Widget, visit: Callable[[Widget], Any]):
        """Call visit(ancestor) for every ancestor, nearest first."""
        for ancestor in self.ancestors(widget):
            visit(ancestor)

    def root_of(self, widget: Widget) -> Widget:
        node = widget
        for node in self.ancestors(widget):
            pass
        return node

    def children(self, widget: WidgetRef) -> List[Widget]:
        widget_id = widget.id if isinstance(widget, Widget) else widget
        return [w for w in self._widgets if w.parent_id == widget_id]

    def descendants(self, widget: WidgetRef) -> List[Widget]:
        widget_id = widget.id if isinstance(widget, Widget) else widget
        found = {widget_id}
        result = []
        for w in self._widgets:
            if w.parent_id in found:
                found.add(w.id)
                result.append(w)
        return result

    def roots(self) -> List[Widget]:
        return [w for w in self._widgets if w.parent_id is None]

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find(self, predicate: Callable[[Widget], Any]) -> Optional[Widget]:
        """First widget (creation order) for which predicate is truthy."""
        for w in self._widgets:
            if predicate(w):
                return w
        return None

    def lookup_by_id(self, widget_id: int) -> Optional[Widget]:
        return self.find(lambda w: w.id == widget_id)

    def lookup_by_name(self, name: str) -> List[Widget]:
        return [w for w in self._widgets if w.name == name]

    def __iter__(self) -> Iterator[Widget]:
        return iter(list(self._widgets))

    def __len__(self) -> int:
        return len(self._widgets)

    def __contains__(self, widget: object) -> bool:
        if isinstance(widget, Widget):
            return self._by_id.get(widget.id) is widget
        return widget in self._by_id
