"""
Scene builder — turns body descriptors into scene-graph hierarchies.

Per body:

    pivot  (root child, random initial rotation.y)
     └── group  (position.x = distance)
          └── mesh  (radius, procedural texture)  ← interactable
               ├── ring   (optional, 1.4r–2.5r, tilted flat)
               └── pivot  (per satellite)
                    └── mesh  (position.x = satellite distance)

plus an orbit track at the root. The body's ORBIT task turns its pivot
(revolution) and its mesh (spin); each satellite gets a SATELLITE_ORBIT
task on its own pivot. Satellites sit under the body mesh, so they follow
the body without any extra bookkeeping.

build_solar_system() assembles the full scene: sun, bodies, asteroid belt,
comet, starfield, and returns a frozen UpdateScheduler.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from core.config import (SimulationConfig, DEFAULT_CONFIG, SUN_RADIUS,
                         GLOW_SCALE)
from core.types import CelestialBodyDescriptor, InteractionRecord, SurfaceClass
from imaging.texture_synth import synthesize, synthesize_glow, mean_colour
from .scene_graph import SceneGraph, SceneNode, NodeKind, ROOT_ID
from .animation import AnimationTask, AnimationKind, UpdateScheduler
from .body_registry import BodyRegistry, build_registry
from .particles import build_asteroid_belt, build_comet, build_starfield

RING_INNER = 1.4
RING_OUTER = 2.5
RING_COLOUR = (204, 187, 170)      # #ccbbaa
RING_ALPHA = 0.7
TRACK_HALF_WIDTH = 0.5
TRACK_ALPHA = 0.1
SATELLITE_COLOUR = (221, 221, 221)  # #dddddd


# ---------------------------------------------------------------------------
# Interaction registry
# ---------------------------------------------------------------------------

class InteractionRegistry:
    """
    Flat, ordered list of pickable meshes and their InteractionRecords.
    Only primary bodies are registered; satellites and rings never are.
    """

    def __init__(self):
        self._records: Dict[int, InteractionRecord] = {}
        self._order: List[int] = []

    def add(self, record: InteractionRecord) -> None:
        if record.node_id in self._records:
            raise ValueError(f"node {record.node_id} already interactable")
        self._records[record.node_id] = record
        self._order.append(record.node_id)

    def record_for(self, node_id: int) -> Optional[InteractionRecord]:
        return self._records.get(node_id)

    @property
    def interactables(self) -> List[InteractionRecord]:
        return [self._records[i] for i in self._order]

    def __len__(self) -> int:
        return len(self._order)


# ---------------------------------------------------------------------------
# Bodies
# ---------------------------------------------------------------------------

@dataclass
class BuiltBody:
    descriptor: CelestialBodyDescriptor
    pivot: SceneNode
    group: SceneNode
    mesh: SceneNode
    record: InteractionRecord
    tasks: List[AnimationTask]
    ring: Optional[SceneNode] = None
    track: Optional[SceneNode] = None
    satellite_pivots: List[SceneNode] = field(default_factory=list)
    satellite_meshes: List[SceneNode] = field(default_factory=list)


def build_body(graph: SceneGraph, descriptor: CelestialBodyDescriptor,
               rng: Optional[np.random.Generator] = None,
               config: SimulationConfig = DEFAULT_CONFIG,
               paint_texture: bool = True) -> BuiltBody:
    """
    Build one body hierarchy under the graph root.

    Args:
        graph: owning scene graph
        descriptor: validated body description
        rng: random source for the start angle and texture
        config: animation rates
        paint_texture: False skips texture synthesis (flat colour only)

    Returns:
        BuiltBody with exactly 1 + len(satellites) tasks and one record
    """
    if rng is None:
        rng = np.random.default_rng()

    pivot = graph.add(NodeKind.PIVOT, ROOT_ID, name=f"{descriptor.name}:pivot",
                      rotation=(0.0, rng.uniform(0.0, 2.0 * math.pi), 0.0))
    group = graph.add(NodeKind.GROUP, pivot.id, name=f"{descriptor.name}:group",
                      position=(descriptor.distance, 0.0, 0.0))

    texture = None
    if paint_texture:
        texture = synthesize(descriptor.surface_class, descriptor.color_a,
                             descriptor.color_b, rng=rng)
    mesh = graph.add(NodeKind.MESH, group.id, name=descriptor.name,
                     radius=float(descriptor.radius), texture=texture,
                     colour=mean_colour(texture) if texture is not None else (160, 160, 160))
    # Water worlds get a faint blue self-illumination
    if descriptor.surface_class is SurfaceClass.WATER_WORLD:
        mesh.user_data["emissive_tint"] = (0, 17, 51)
    record = InteractionRecord(node_id=mesh.id, descriptor=descriptor)
    mesh.user_data["record"] = record

    track = graph.add(NodeKind.TRACK, ROOT_ID, name=f"{descriptor.name}:track",
                      inner=descriptor.distance - TRACK_HALF_WIDTH,
                      outer=descriptor.distance + TRACK_HALF_WIDTH,
                      alpha=TRACK_ALPHA)

    ring = None
    if descriptor.has_ring:
        ring = graph.add(NodeKind.RING, mesh.id, name=f"{descriptor.name}:ring",
                         rotation=(math.pi / 2.0, 0.0, 0.0),
                         inner=descriptor.radius * RING_INNER,
                         outer=descriptor.radius * RING_OUTER,
                         colour=RING_COLOUR, alpha=RING_ALPHA)

    built = BuiltBody(descriptor=descriptor, pivot=pivot, group=group, mesh=mesh,
                      record=record, tasks=[], ring=ring, track=track)

    for sat in descriptor.satellites:
        s_pivot = graph.add(NodeKind.PIVOT, mesh.id, name=f"{sat.name}:pivot")
        s_mesh = graph.add(NodeKind.MESH, s_pivot.id, name=sat.name,
                           position=(sat.distance, 0.0, 0.0),
                           radius=float(sat.radius), colour=SATELLITE_COLOUR)
        built.satellite_pivots.append(s_pivot)
        built.satellite_meshes.append(s_mesh)
        built.tasks.append(AnimationTask(AnimationKind.SATELLITE_ORBIT, s_pivot.id,
                                         rate=config.satellite_speed(sat.distance)))

    built.tasks.append(AnimationTask(AnimationKind.ORBIT, pivot.id, secondary=mesh.id,
                                     rate=descriptor.speed,
                                     spin_rate=config.spin_rate))
    return built


def build_sun(graph: SceneGraph, rng: Optional[np.random.Generator] = None,
              paint_texture: bool = True) -> SceneNode:
    """Unlit sun sphere at the origin with an additive glow sprite."""
    texture = None
    if paint_texture:
        texture = synthesize(SurfaceClass.SUN, "#ffd700", "#ff8800", rng=rng)
    sun = graph.add(NodeKind.MESH, ROOT_ID, name="SUN", radius=SUN_RADIUS,
                    texture=texture, colour=(255, 204, 0), emissive=True)
    sun.user_data["glow"] = synthesize_glow()
    sun.user_data["glow_scale"] = GLOW_SCALE
    return sun


# ---------------------------------------------------------------------------
# Whole scene
# ---------------------------------------------------------------------------

@dataclass
class SolarSystem:
    """Everything the frame loop needs, built once at startup."""
    graph: SceneGraph
    registry: BodyRegistry
    scheduler: UpdateScheduler
    interactions: InteractionRegistry
    bodies: List[BuiltBody]
    sun: SceneNode
    belt: SceneNode
    comet: SceneNode
    trail: SceneNode
    stars: SceneNode

    @property
    def tour_targets(self) -> List[BuiltBody]:
        return self.bodies


def build_solar_system(registry: Optional[BodyRegistry] = None,
                       rng: Optional[np.random.Generator] = None,
                       config: SimulationConfig = DEFAULT_CONFIG,
                       paint_textures: bool = True) -> SolarSystem:
    """
    Build and return the full scene. Call once at startup and pass the
    instance everywhere.
    """
    if registry is None:
        registry = build_registry()
    if rng is None:
        rng = np.random.default_rng()

    graph = SceneGraph()
    scheduler = UpdateScheduler(graph)
    interactions = InteractionRegistry()

    print("Building solar system...")

    sun = build_sun(graph, rng, paint_texture=paint_textures)

    bodies = []
    for descriptor in registry:
        built = build_body(graph, descriptor, rng, config, paint_texture=paint_textures)
        scheduler.register_many(built.tasks)
        interactions.add(built.record)
        bodies.append(built)
    print(f"  Bodies:     {len(bodies)}")
    print(f"  Satellites: {registry.satellite_count()}")

    belt, belt_task = build_asteroid_belt(graph, rng, config)
    scheduler.register(belt_task)
    print(f"  Asteroids:  {len(belt.points)}")

    comet, trail, comet_task = build_comet(graph, config)
    scheduler.register(comet_task)

    stars = build_starfield(graph, rng, config)
    print(f"  Stars:      {len(stars.points)}")

    scheduler.freeze()
    print(f"  Nodes: {len(graph)}  Tasks: {len(scheduler)}")

    return SolarSystem(graph=graph, registry=registry, scheduler=scheduler,
                       interactions=interactions, bodies=bodies, sun=sun,
                       belt=belt, comet=comet, trail=trail, stars=stars)
