"""
particles.py
============
Point-based scene decorations: asteroid belt, comet and starfield.

  Asteroid belt   5000 instances in a 220–280 unit annulus, ±10 units thick,
                  rotating slowly as one block (SPIN task)
  Comet           cyan head on a tilted ellipse + 50-point trail (COMET_DRIFT)
  Starfield       10000 static points in a 10000-unit cube, pastel HSL colours

Positions are generated once with the caller's numpy Generator and stored on
the nodes; the renderer treats them as local-space points.
"""
from __future__ import annotations
import colorsys
import math
import numpy as np
from typing import Optional, Tuple

from core.config import SimulationConfig, DEFAULT_CONFIG
from .scene_graph import SceneGraph, SceneNode, NodeKind, ROOT_ID
from .animation import AnimationTask, AnimationKind, comet_position

BELT_INNER = 220.0
BELT_WIDTH = 60.0
BELT_THICKNESS = 20.0
BELT_COLOUR = (119, 119, 119)     # #777777

COMET_COLOUR = (0, 255, 255)
STARFIELD_EXTENT = 10000.0


def build_asteroid_belt(graph: SceneGraph, rng: np.random.Generator,
                        config: SimulationConfig = DEFAULT_CONFIG
                        ) -> Tuple[SceneNode, AnimationTask]:
    """Belt between Mars and Jupiter, concentrated around 250 units."""
    n = config.belt_count
    dist = BELT_INNER + rng.random(n) * BELT_WIDTH
    angle = rng.random(n) * 2.0 * math.pi
    height = (rng.random(n) - 0.5) * BELT_THICKNESS

    points = np.stack([np.cos(angle) * dist, height, np.sin(angle) * dist], axis=1)
    belt = graph.add(NodeKind.INSTANCES, ROOT_ID, name="asteroid_belt",
                     points=points, colour=BELT_COLOUR,
                     point_size=0.8)
    task = AnimationTask(AnimationKind.SPIN, belt.id, rate=config.belt_rate)
    return belt, task


def build_comet(graph: SceneGraph,
                config: SimulationConfig = DEFAULT_CONFIG
                ) -> Tuple[SceneNode, SceneNode, AnimationTask]:
    """Comet head plus its particle trail. Returns (head, trail, task)."""
    head = graph.add(NodeKind.MESH, ROOT_ID, name="comet",
                     position=comet_position(0.0), radius=1.0,
                     colour=COMET_COLOUR, emissive=True)
    trail = graph.add(NodeKind.POINTS, ROOT_ID, name="comet_trail",
                      points=np.zeros((config.trail_length, 3)),
                      colour=COMET_COLOUR, point_size=2.0, alpha=0.6)
    trail.user_data["capacity"] = config.trail_length
    trail.user_data["count"] = 0
    task = AnimationTask(AnimationKind.COMET_DRIFT, head.id, secondary=trail.id,
                         rate=config.comet_rate)
    return head, trail, task


def build_starfield(graph: SceneGraph, rng: np.random.Generator,
                    config: SimulationConfig = DEFAULT_CONFIG) -> SceneNode:
    """Background stars; static, no animation task."""
    n = config.star_count
    points = (rng.random((n, 3)) - 0.5) * STARFIELD_EXTENT
    colours = np.empty((n, 3), dtype=np.uint8)
    for i, hue in enumerate(rng.random(n)):
        r, g, b = colorsys.hls_to_rgb(hue, 0.8, 0.8)
        colours[i] = (int(r * 255), int(g * 255), int(b * 255))
    return graph.add(NodeKind.POINTS, ROOT_ID, name="starfield",
                     points=points, colours=colours, point_size=2.0)
