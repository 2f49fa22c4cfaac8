"""
SceneGraph — owning context for every transform node in the orrery.

Architecture
------------
Nodes live in a flat arena indexed by integer id; the tree is expressed by
parent/children ids. Node 0 is the root (world origin). A node gets exactly
one parent when created and is never reparented, so the hierarchy cannot
contain cycles or shared children.

    root
     ├── pivot (rotation.y = orbit angle)
     │    └── group (position.x = orbital distance)
     │         └── mesh (rotation.y = spin)
     │              ├── ring
     │              └── pivot (satellite) ── mesh (position.x = distance)
     ├── track
     ├── belt (instances)
     └── ...

World transform = parent.world @ T(position) @ R(rotation, Euler XYZ) @ S(scale).
Orbits therefore come from rotating a pivot; absolute coordinates are never
stored, only composed on demand.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
from scipy.spatial.transform import Rotation


class SceneGraphError(KeyError):
    """Unknown node id or invalid parent."""


class NodeKind(Enum):
    ROOT = "root"
    PIVOT = "pivot"          # rotation-only transform, origin centred
    GROUP = "group"          # fixed offset from its pivot
    MESH = "mesh"            # visible sphere
    RING = "ring"            # flat annulus (planetary ring)
    TRACK = "track"          # orbit guide line
    POINTS = "points"        # point cloud (stars, comet trail)
    INSTANCES = "instances"  # instanced geometry (asteroid belt)


ROOT_ID = 0


@dataclass
class SceneNode:
    """
    One transform in the hierarchy plus its render payload.

    Only the fields relevant to the node kind are used:
        MESH       radius, texture / colour, emissive
        RING/TRACK inner, outer, colour, alpha
        POINTS     points (N,3), colours (N,3), point_size, alpha
        INSTANCES  points (N,3), colour
    phase is a free accumulator for animated nodes (comet head).
    """
    id: int
    name: str
    kind: NodeKind
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale:    np.ndarray = field(default_factory=lambda: np.ones(3))

    radius:     float = 0.0
    inner:      float = 0.0
    outer:      float = 0.0
    texture:    Optional[np.ndarray] = field(default=None, repr=False)
    colour:     tuple = (255, 255, 255)
    alpha:      float = 1.0
    emissive:   bool = False
    points:     Optional[np.ndarray] = field(default=None, repr=False)
    colours:    Optional[np.ndarray] = field(default=None, repr=False)
    point_size: float = 1.0
    phase:      float = 0.0
    visible:    bool = True
    user_data:  Dict[str, Any] = field(default_factory=dict, repr=False)

    def local_matrix(self) -> np.ndarray:
        m = np.eye(4)
        m[:3, :3] = Rotation.from_euler("XYZ", self.rotation).as_matrix() * self.scale
        m[:3, 3] = self.position
        return m


class SceneGraph:
    """Arena of SceneNodes with on-demand world transform composition."""

    def __init__(self):
        self._nodes: List[SceneNode] = [SceneNode(id=ROOT_ID, name="root", kind=NodeKind.ROOT)]

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def add(self, kind: NodeKind, parent: int = ROOT_ID, name: str = "",
            **attrs) -> SceneNode:
        """
        Create a node under parent.

        Args:
            kind: NodeKind of the new node
            parent: id of an existing node
            name: label (for debugging / tooltips)
            **attrs: any SceneNode field; vectors accept sequences

        Returns:
            The new node
        """
        parent_node = self.get(parent)
        if kind is NodeKind.ROOT:
            raise SceneGraphError("only one root node")
        for key in ("position", "rotation", "scale"):
            if key in attrs:
                attrs[key] = np.asarray(attrs[key], dtype=np.float64).copy()
        node = SceneNode(id=len(self._nodes), name=name, kind=kind,
                         parent=parent_node.id, **attrs)
        self._nodes.append(node)
        parent_node.children.append(node.id)
        return node

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def get(self, node_id: int) -> SceneNode:
        if not isinstance(node_id, (int, np.integer)) or not 0 <= node_id < len(self._nodes):
            raise SceneGraphError(f"unknown node id {node_id!r}")
        return self._nodes[node_id]

    @property
    def root(self) -> SceneNode:
        return self._nodes[ROOT_ID]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SceneNode]:
        return iter(self._nodes)

    def ancestors(self, node_id: int) -> List[int]:
        """Ids from the node's parent up to the root."""
        out = []
        node = self.get(node_id)
        while node.parent is not None:
            out.append(node.parent)
            node = self._nodes[node.parent]
        return out

    def walk(self, node_id: int = ROOT_ID) -> Iterator[SceneNode]:
        """Depth-first traversal, parents before children."""
        stack = [node_id]
        while stack:
            node = self.get(stack.pop())
            yield node
            stack.extend(reversed(node.children))

    def of_kind(self, kind: NodeKind) -> List[SceneNode]:
        return [n for n in self._nodes if n.kind is kind]

    # -----------------------------------------------------------------------
    # Transform composition
    # -----------------------------------------------------------------------

    def world_matrix(self, node_id: int) -> np.ndarray:
        node = self.get(node_id)
        m = node.local_matrix()
        while node.parent is not None:
            node = self._nodes[node.parent]
            m = node.local_matrix() @ m
        return m

    def world_position(self, node_id: int) -> np.ndarray:
        return self.world_matrix(node_id)[:3, 3].copy()

    def world_scale(self, node_id: int) -> float:
        """Largest axis scale of the world transform (bounding-sphere factor)."""
        m = self.world_matrix(node_id)[:3, :3]
        return float(np.max(np.linalg.norm(m, axis=0)))
