# rendergraph/logging_setup.py
from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Optional, Union

LEVEL_ENV = "RENDERGRAPH_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Window/backends log every frame at DEBUG
QUIET_LOGGERS = ("PIL", "moderngl_window", "pyglet", "glfw")

EVENT_LOGGER = "rendergraph.core.signal"


def resolve_level(level: Union[int, str, None]) -> int:
    """Level from an int, a name like "debug", or $RENDERGRAPH_LOG_LEVEL."""
    if level is None:
        level = os.environ.get(LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: Union[int, str, None] = None, *, log_to_file: bool = False,
                      log_dir: str = "logs", trace_events: bool = False) -> Optional[str]:
    """
    Set up root logging for an application hosting a scene.

    With `trace_events`, the event bus logger is opened to DEBUG so a
    BusDebugger's per-emit traces are shown whatever the root level.
    Returns the log file path when `log_to_file` is set. Calling it again
    reuses the existing file handler.
    """
    level = resolve_level(level)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if trace_events:
        logging.getLogger(EVENT_LOGGER).setLevel(logging.DEBUG)

    if not log_to_file:
        return None

    for handler in root.handlers:
        if getattr(handler, "rendergraph_log", False):
            return handler.baseFilename

    os.makedirs(log_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")
    fh = logging.FileHandler(os.path.join(log_dir, f"rendergraph-{ts}.log"), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    fh.rendergraph_log = True
    root.addHandler(fh)
    return fh.baseFilename
