"""
Pointer picking: which body is under the mouse?

The pointer is converted to normalized device coordinates, a ray is cast
from the camera through it, and each interactable body is tested as a
world-space bounding sphere (composed world position, radius × world
scale). The nearest hit along the ray wins; equal distances resolve to the
earlier interactable, so identical input always returns the same record.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from core.types import InteractionRecord
from universe.scene_graph import SceneGraph


def pointer_to_ndc(x: float, y: float, width: int, height: int) -> Tuple[float, float]:
    """Pixel (origin top-left) → NDC ([-1, 1], +y up)."""
    return (x / max(width, 1)) * 2.0 - 1.0, -(y / max(height, 1)) * 2.0 + 1.0


def ray_sphere(origin: np.ndarray, direction: np.ndarray,
               centre: np.ndarray, radius: float) -> Optional[float]:
    """
    Smallest non-negative ray parameter t where |origin + t·dir - centre| = radius,
    or None. direction must be unit length. A ray starting inside the
    sphere hits at its exit point.
    """
    oc = origin - centre
    b = float(np.dot(oc, direction))
    c = float(np.dot(oc, oc)) - radius * radius
    disc = b * b - c
    if disc < 0.0:
        return None
    sq = math.sqrt(disc)
    t = -b - sq
    if t < 0.0:
        t = -b + sq
    if t < 0.0:
        return None
    return t


def pick(pointer_ndc: Tuple[float, float], camera,
         interactables: Sequence[InteractionRecord],
         graph: SceneGraph) -> Optional[InteractionRecord]:
    """
    Nearest interactable body under the pointer.

    Args:
        pointer_ndc: (x, y) normalized device coordinates
        camera: object with ray_from_ndc(x, y) -> (origin, direction)
        interactables: pickable records in stable order
        graph: scene graph holding the records' nodes

    Returns:
        The hit record, or None
    """
    if not interactables:
        return None

    origin, direction = camera.ray_from_ndc(*pointer_ndc)
    best: Optional[InteractionRecord] = None
    best_t = math.inf
    for record in interactables:
        centre = graph.world_position(record.node_id)
        radius = graph.get(record.node_id).radius * graph.world_scale(record.node_id)
        t = ray_sphere(origin, direction, centre, radius)
        # strict < keeps the first of equal-distance hits
        if t is not None and t < best_t:
            best, best_t = record, t
    return best
