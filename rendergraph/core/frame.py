"""
Frame State

Carried by the frame event. The host loop keeps one FrameState and
advances it once per rendered frame.
"""

from __future__ import annotations
from dataclasses import dataclass

MIN_DT = 1e-6


@dataclass(frozen=True)
class FrameState:
    frame_id: int = 0
    dt: float = 0.0   # Seconds since the previous frame
    t: float = 0.0    # Seconds since the first frame

    @property
    def fps(self) -> float:
        return 1.0 / max(MIN_DT, self.dt)

    def advance(self, dt: float) -> FrameState:
        """Next frame, `dt` seconds later. Non-positive deltas are clamped."""
        dt = max(MIN_DT, dt)
        return FrameState(frame_id=self.frame_id + 1, dt=dt, t=self.t + dt)
