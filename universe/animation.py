"""
Animation tasks and the per-frame update scheduler.

Every moving thing in the orrery is described by a small immutable
AnimationTask naming the node(s) it mutates and its rates. The scheduler
keeps the tasks in registration order and dispatches them by kind once per
frame with the current time scale:

    ORBIT            pivot.rotation.y += rate × ts ; mesh.rotation.y += spin_rate × ts
    SPIN             node.rotation.y  += rate × ts
    SATELLITE_ORBIT  pivot.rotation.y += rate × ts
    COMET_DRIFT      head.phase += rate × ts → head.position, trail points

Tasks hold no state of their own; the comet's phase lives on its head node.
Registration closes with freeze() before the main loop starts; tasks are
never removed.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Set, Tuple

import numpy as np

from .scene_graph import SceneGraph


class SchedulerFrozenError(RuntimeError):
    """Registering a task after the scheduler was frozen."""


class AnimationKind(Enum):
    ORBIT = "orbit"
    SPIN = "spin"
    SATELLITE_ORBIT = "satellite_orbit"
    COMET_DRIFT = "comet_drift"


@dataclass(frozen=True)
class AnimationTask:
    """
    kind      : dispatch tag
    target    : node id the task rotates / moves (pivot, belt, comet head)
    secondary : second node id (ORBIT: spinning mesh, COMET_DRIFT: trail)
    rate      : primary rate per frame at time scale 1
    spin_rate : ORBIT only, mesh self-rotation per frame
    """
    kind: AnimationKind
    target: int
    secondary: Optional[int] = None
    rate: float = 0.0
    spin_rate: float = 0.0


# ── Comet path ──────────────────────────────────────────────────────────────

COMET_SEMI_X = 150.0
COMET_SEMI_Z = 400.0
COMET_OFFSET_X = 50.0
COMET_TILT = 0.1


def comet_position(phase: float) -> np.ndarray:
    """Point on the comet's tilted, off-centre ellipse."""
    x = math.cos(phase) * COMET_SEMI_X + COMET_OFFSET_X
    z = math.sin(phase) * COMET_SEMI_Z
    return np.array([x, z * COMET_TILT, z])


# ── Handlers ────────────────────────────────────────────────────────────────

def _orbit(graph: SceneGraph, task: AnimationTask, ts: float) -> None:
    graph.get(task.target).rotation[1] += task.rate * ts
    if task.secondary is not None:
        graph.get(task.secondary).rotation[1] += task.spin_rate * ts


def _spin(graph: SceneGraph, task: AnimationTask, ts: float) -> None:
    graph.get(task.target).rotation[1] += task.rate * ts


def _comet_drift(graph: SceneGraph, task: AnimationTask, ts: float) -> None:
    if ts == 0:
        return
    head = graph.get(task.target)
    head.phase += task.rate * ts
    head.position = comet_position(head.phase)

    if task.secondary is None:
        return
    trail = graph.get(task.secondary)
    capacity = int(trail.user_data.get("capacity", 50))
    count = int(trail.user_data.get("count", 0))
    if trail.points is None or len(trail.points) != capacity:
        trail.points = np.zeros((capacity, 3))
    # newest first; the oldest point drops off the end
    trail.points[1:] = trail.points[:-1]
    trail.points[0] = head.position
    trail.user_data["count"] = min(count + 1, capacity)


_HANDLERS: Dict[AnimationKind, Callable[[SceneGraph, AnimationTask, float], None]] = {
    AnimationKind.ORBIT: _orbit,
    AnimationKind.SPIN: _spin,
    AnimationKind.SATELLITE_ORBIT: _spin,
    AnimationKind.COMET_DRIFT: _comet_drift,
}


class UpdateScheduler:
    """
    Ordered arena of AnimationTasks, driven once per rendered frame.

    A task that raises is reported and counted; the remaining tasks of the
    same tick still run.
    """

    def __init__(self, graph: SceneGraph):
        self.graph = graph
        self._tasks: List[AnimationTask] = []
        self._claimed: Set[Tuple[AnimationKind, int]] = set()
        self._frozen = False
        self.ticks = 0
        self.failures = 0

    def register(self, task: AnimationTask) -> int:
        """
        Append a task. Returns its index in dispatch order.

        Each node takes at most one task of a given kind.
        """
        if self._frozen:
            raise SchedulerFrozenError("scheduler is frozen; register tasks during setup")
        if task.kind not in _HANDLERS:
            raise ValueError(f"no handler for {task.kind!r}")
        self.graph.get(task.target)   # fail fast on unknown node ids
        if task.secondary is not None:
            self.graph.get(task.secondary)
        key = (task.kind, task.target)
        if key in self._claimed:
            raise ValueError(f"node {task.target} already has a {task.kind.value} task")
        self._claimed.add(key)
        self._tasks.append(task)
        return len(self._tasks) - 1

    def register_many(self, tasks) -> None:
        for task in tasks:
            self.register(task)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def tasks(self) -> tuple[AnimationTask, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def tick(self, time_scale: float) -> int:
        """
        Run every task once, in registration order.

        Returns:
            Number of tasks that failed during this tick
        """
        failed = 0
        for index, task in enumerate(self._tasks):
            try:
                _HANDLERS[task.kind](self.graph, task, time_scale)
            except Exception as e:
                failed += 1
                print(f"Animation task #{index} ({task.kind.value}) failed: {e}")
        self.ticks += 1
        self.failures += failed
        return failed
