"""
TimeController — shared simulation time scale.

A single scalar multiplies every orbital/rotational delta per frame:
    1.0  real-time-equivalent (default)
    0.0  paused
    < 0  accepted programmatically, reverses motion

The UI slider covers TIME_SCALE_MIN..TIME_SCALE_MAX. Pausing remembers the
previous value so toggle_pause() can restore it.

SimulationClock turns frames into the "Year N | Day D" readout.
"""

from __future__ import annotations
import math
from typing import Optional

from .config import (TIME_SCALE_MIN, TIME_SCALE_MAX, TIME_SCALE_DEFAULT,
                     DEFAULT_CONFIG)


class TimeController:
    """
    Owner of the process-wide time scale.

    Parameters
    ----------
    scale : initial time scale (default 1)
    step  : increment used by speed_up()/speed_down()
    """

    def __init__(self, scale: float = TIME_SCALE_DEFAULT, step: float = 0.5):
        self._scale = float(scale)
        self._step = step
        self._resume_scale = self._scale if self._scale != 0 else TIME_SCALE_DEFAULT

    # ── Properties ──────────────────────────────────────────────────────────

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def paused(self) -> bool:
        return self._scale == 0

    @property
    def label(self) -> str:
        if self.paused:
            return "PAUSED"
        return ("◀◀ " if self._scale < 0 else "") + f"{abs(self._scale):.1f}×"

    # ── Controls ────────────────────────────────────────────────────────────

    def set_scale(self, value: float) -> float:
        """Set the time scale (any finite value). Returns the stored value."""
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"time scale must be finite (got {value!r})")
        self._scale = value
        if value != 0:
            self._resume_scale = value
        return self._scale

    def set_from_slider(self, value: float) -> float:
        """Slider input, clamped to the slider range."""
        return self.set_scale(max(TIME_SCALE_MIN, min(TIME_SCALE_MAX, value)))

    def speed_up(self):
        self.set_from_slider(self._scale + self._step)

    def speed_down(self):
        self.set_from_slider(self._scale - self._step)

    def toggle_pause(self):
        if self.paused:
            self._scale = self._resume_scale
        else:
            self._resume_scale = self._scale
            self._scale = 0.0

    def reverse(self):
        """Reverse the direction of motion."""
        self.set_scale(-self._scale)


class SimulationClock:
    """Calendar readout driven by the time scale."""

    def __init__(self, days_per_tick: Optional[float] = None):
        self.days = 0.0
        self.days_per_tick = (DEFAULT_CONFIG.days_per_tick
                              if days_per_tick is None else days_per_tick)

    def advance(self, time_scale: float) -> float:
        """Advance one frame; only forward time moves the calendar."""
        if time_scale > 0:
            self.days += time_scale * self.days_per_tick
        return self.days

    @property
    def year(self) -> int:
        return math.floor(self.days / 365.0 + 1)

    @property
    def day(self) -> int:
        return math.floor(self.days % 365.0)

    @property
    def label(self) -> str:
        return f"Year {self.year} | Day {self.day}"
