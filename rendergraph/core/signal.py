# rendergraph/core/signal.py
"""
EventBus - Named pub/sub hub with throttled, expiring handlers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from collections import deque
from typing import Callable, Deque, Dict, List, Any, NamedTuple, Optional
import logging
import time

logger = logging.getLogger(__name__)

# =============================================================================
# Event Names
# =============================================================================

EVENT_POINTER_MOVE = 'pointer_move'
EVENT_POINTER_DOWN = 'pointer_down'
EVENT_POINTER_UP = 'pointer_up'
EVENT_KEY_DOWN = 'key_down'
EVENT_KEY_UP = 'key_up'
EVENT_KEY_PRESS = 'key_press'
EVENT_WIDGET_ADDED = 'widget_added'
EVENT_WIDGET_REMOVED = 'widget_removed'
EVENT_FRAME = 'frame'


Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Milliseconds from a monotonic clock."""
    return time.perf_counter() * 1000.0


# =============================================================================
# Event Handler
# =============================================================================

@dataclass(eq=False)
class EventHandler:
    """
    One subscription on an EventBus.

    Created by EventBus.subscribe(); the firing budget fields can be
    changed on the returned handler at any time.
    """
    event_name: str
    inner_callback: Optional[Callable[[Any], Any]] = None
    active: bool = True

    call_count: int = 0
    call_limit: Optional[int] = None  # None or 0 -> unlimited

    last_invoked_at: float = 0.0
    min_interval: float = 0.0

    fire_once: bool = False
    result_callback: Optional[Callable[[Any], None]] = None

    def throttled(self, now: float) -> bool:
        """True if an attempt at `now` falls inside the throttle window."""
        if self.call_count == 0:
            return False
        return now - self.last_invoked_at < self.min_interval

    def call(self, args: Any, now: float) -> bool:
        """
        Attempt one invocation. Returns whether the handler is still active.

        Throttled attempts are no-ops and do not count against call_limit.
        """
        if not self.active or self.inner_callback is None:
            return self.active
        if self.throttled(now):
            return self.active

        result = self.inner_callback(args)
        self.last_invoked_at = now
        self.call_count += 1

        try:
            if self.result_callback is not None:
                self.result_callback(result)
        finally:
            if self.call_limit and self.call_count >= self.call_limit:
                self.active = False
            if self.fire_once:
                self.active = False

        return self.active

    def deactivate(self):
        self.active = False

    @property
    def remaining(self) -> Optional[int]:
        """Calls left before expiry, None when unlimited."""
        if self.fire_once:
            return 0 if self.call_count else 1
        if not self.call_limit:
            return None
        return max(0, self.call_limit - self.call_count)


# =============================================================================
# Event Bus
# =============================================================================

class EventBus:
    """
    Synchronous event dispatch.

        handler = bus.on("ping", lambda args: ...)
        handler.call_limit = 3
        bus.emit("ping", 42)
        bus.off(handler)
    """

    def __init__(self, clock: Clock = None):
        self._subs: Dict[str, List[EventHandler]] = {}
        self._clock: Clock = clock or monotonic_ms

    @property
    def clock(self) -> Clock:
        return self._clock

    def subscribe(
        self,
        event_name: str,
        callback: Optional[Callable[[Any], Any]],
        *,
        call_limit: Optional[int] = None,
        min_interval: float = 0.0,
        fire_once: bool = False,
        result_callback: Optional[Callable[[Any], None]] = None,
    ) -> EventHandler:
        if event_name not in self._subs:
            self._subs[event_name] = []

        handler = EventHandler(
            event_name=event_name,
            inner_callback=callback,
            call_limit=call_limit,
            min_interval=min_interval,
            fire_once=fire_once,
            result_callback=result_callback,
        )
        self._subs[event_name].append(handler)
        return handler

    on = subscribe

    def unsubscribe(self, handler: EventHandler):
        bucket = self._subs.get(handler.event_name)
        if bucket and handler in bucket:
            bucket.remove(handler)

    off = unsubscribe

    def emit(self, event_name: str, args: Any = None):
        bucket = self._subs.get(event_name)
        if not bucket:
            return

        now = self._clock()
        finished: List[EventHandler] = []

        for handler in list(bucket):
            # Unsubscribed earlier in this pass
            if handler not in bucket:
                continue
            try:
                still_active = handler.call(args, now)
            except Exception:
                logger.exception(f"Event handler error [{event_name}]")
                still_active = handler.active
            if not still_active:
                finished.append(handler)

        for handler in finished:
            if handler in bucket:
                bucket.remove(handler)

    def handlers(self, event_name: str) -> List[EventHandler]:
        return list(self._subs.get(event_name, ()))

    def is_subscribed(self, event_name: str) -> bool:
        return bool(self._subs.get(event_name))

    def clear(self, event_name: str = None):
        if event_name:
            self._subs.pop(event_name, None)
        else:
            self._subs.clear()


# =============================================================================
# Bus Debugger
# =============================================================================

class EmitTrace(NamedTuple):
    """Outcome of one watched emit."""
    event_name: str
    args: Any
    at: float
    handlers: int   # Subscribed when the pass started
    fired: int
    throttled: int
    expired: int    # Removed by the end of the pass


class BusDebugger:
    """
    Wraps a bus's emit and traces watched events.

    Each watched emit logs how many handlers fired, were throttled or
    expired, and appends an EmitTrace to `history` (newest last).
    """

    def __init__(self, bus: EventBus, history_size: int = 256):
        self.bus = bus
        self.history: Deque[EmitTrace] = deque(maxlen=history_size)
        self._original_emit = bus.emit
        self._watched: set = set()
        self._watch_all: bool = False
        bus.emit = self._debug_emit

    def watch(self, event_name: str):
        self._watched.add(event_name)

    def unwatch(self, event_name: str):
        self._watched.discard(event_name)

    def watch_all(self, enabled: bool = True):
        self._watch_all = enabled

    def _debug_emit(self, event_name: str, args: Any = None):
        if not (self._watch_all or event_name in self._watched):
            self._original_emit(event_name, args)
            return

        now = self.bus.clock()
        before = self.bus.handlers(event_name)
        counts = [h.call_count for h in before]
        throttled = sum(1 for h in before if h.active and h.throttled(now))

        self._original_emit(event_name, args)

        remaining = self.bus.handlers(event_name)
        trace = EmitTrace(
            event_name=event_name,
            args=args,
            at=now,
            handlers=len(before),
            fired=sum(1 for h, n in zip(before, counts) if h.call_count > n),
            throttled=throttled,
            expired=sum(1 for h in before if h not in remaining),
        )
        self.history.append(trace)
        logger.debug(
            f"EVENT: {event_name}({args!r}) fired {trace.fired}/{trace.handlers}, "
            f"{trace.throttled} throttled, {trace.expired} expired"
        )

    def detach(self):
        self.bus.emit = self._original_emit


# =============================================================================
# Convenience
# =============================================================================

def on_event(bus: EventBus, event_name: str, **options):
    """Decorator to subscribe a function to an event."""
    def decorator(func):
        func.handler = bus.subscribe(event_name, func, **options)
        return func
    return decorator
