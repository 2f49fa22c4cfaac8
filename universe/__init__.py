"""
Universe module: the orrery's scene graph and its animation.

Usage:
    from universe import build_solar_system
    system = build_solar_system()

    # Per frame
    system.scheduler.tick(time_scale)
    pos = system.graph.world_position(system.bodies[2].mesh.id)
"""

from .scene_graph import SceneGraph, SceneNode, NodeKind, SceneGraphError, ROOT_ID
from .animation import (
    AnimationTask,
    AnimationKind,
    UpdateScheduler,
    SchedulerFrozenError,
    comet_position,
)
from .body_registry import BodyRegistry, build_registry, default_bodies
from .scene_builder import (
    BuiltBody,
    InteractionRegistry,
    SolarSystem,
    build_body,
    build_sun,
    build_solar_system,
)

__all__ = [
    "SceneGraph",
    "SceneNode",
    "NodeKind",
    "SceneGraphError",
    "ROOT_ID",
    "AnimationTask",
    "AnimationKind",
    "UpdateScheduler",
    "SchedulerFrozenError",
    "comet_position",
    "BodyRegistry",
    "build_registry",
    "default_bodies",
    "BuiltBody",
    "InteractionRegistry",
    "SolarSystem",
    "build_body",
    "build_sun",
    "build_solar_system",
]
