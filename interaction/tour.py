"""
Cinematic tour: the camera visits each body in turn.

States: INACTIVE ⇄ TOURING (toggle), any → INACTIVE (reset).

While touring, a timer advances by a fixed amount every frame regardless of
the simulation time scale, so pacing stays the same at any orbit speed.
Past the threshold the tour moves to the next body. Each frame the camera
and its look target ease 5 % of the remaining way toward the body's live
world position (plus an offset proportional to its radius). No velocity is
stored, so the approach never overshoots.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from core.config import SimulationConfig, DEFAULT_CONFIG, CAMERA_RESET
from core.coords import lerp_vec
from core.events import EventBus, OrreryEvent
from universe.scene_graph import SceneGraph


class TourMode(Enum):
    INACTIVE = "inactive"
    TOURING = "touring"


@dataclass
class TourState:
    active: bool = False
    current_index: int = 0
    elapsed: float = 0.0

    @property
    def mode(self) -> TourMode:
        return TourMode.TOURING if self.active else TourMode.INACTIVE


@dataclass(frozen=True)
class TourTarget:
    node_id: int
    radius: float
    name: str = ""


def camera_offset(radius: float) -> np.ndarray:
    """Viewing offset from a body of the given radius."""
    return np.array([radius * 4.0, radius * 2.0, radius * 4.0])


class TourController:
    """
    Timed state machine driving the camera between tour targets.

    Emits TOUR_CHANGED on every state change and CLOSE_PANEL when a tour
    starts, if a bus is given.
    """

    def __init__(self, targets: Sequence[TourTarget],
                 config: SimulationConfig = DEFAULT_CONFIG,
                 bus: Optional[EventBus] = None):
        self.targets = list(targets)
        self.config = config
        self.bus = bus
        self.state = TourState()

    @property
    def active(self) -> bool:
        return self.state.active

    @property
    def current_target(self) -> Optional[TourTarget]:
        if not self.targets:
            return None
        return self.targets[self.state.current_index % len(self.targets)]

    # ── Transitions ─────────────────────────────────────────────────────────

    def toggle(self) -> bool:
        """Flip INACTIVE ⇄ TOURING. Returns the new active flag."""
        self._set_active(not self.state.active)
        if self.state.active and self.bus is not None:
            self.bus.emit(OrreryEvent.CLOSE_PANEL)
        return self.state.active

    def reset(self) -> None:
        """Force INACTIVE (manual camera reset)."""
        if self.state.active:
            self._set_active(False)

    def _set_active(self, active: bool) -> None:
        self.state.active = active
        if self.bus is not None:
            self.bus.emit(OrreryEvent.TOUR_CHANGED, active)

    # ── Per-frame ───────────────────────────────────────────────────────────

    def advance_timer(self) -> bool:
        """
        Accumulate tour time. Returns True when the tour moved on to the
        next target.
        """
        self.state.elapsed += self.config.tour_rate
        if self.state.elapsed > self.config.tour_threshold:
            self.state.current_index = (self.state.current_index + 1) % max(len(self.targets), 1)
            self.state.elapsed = 0.0
            return True
        return False

    def step(self, camera, graph: SceneGraph) -> None:
        """Advance the tour by one frame and ease the camera toward the target."""
        if not self.state.active or not self.targets:
            return
        self.advance_timer()
        target = self.current_target
        world = graph.world_position(target.node_id)
        k = self.config.tour_lerp
        camera.position = lerp_vec(camera.position, world + camera_offset(target.radius), k)
        camera.target = lerp_vec(camera.target, world, k)


def reset_camera(camera, tour: Optional[TourController] = None) -> None:
    """Stop any tour and snap the camera to the top-down default view."""
    if tour is not None:
        tour.reset()
    camera.position = np.array(CAMERA_RESET, dtype=np.float64)
    camera.target = np.zeros(3)
