"""Pointer picking"""

import numpy as np
import pytest

from core.types import InteractionRecord
from interaction.picker import pick, pointer_to_ndc, ray_sphere
from rendering.camera import PerspectiveCamera
from universe.scene_graph import NodeKind
from conftest import make_body


@pytest.fixture
def camera():
    # looking down -Z from z = 100
    return PerspectiveCamera(width=800, height=600, position=(0, 0, 100), target=(0, 0, 0))


def _record(graph, position, radius, name, parent=0):
    mesh = graph.add(NodeKind.MESH, parent, name=name, position=position, radius=radius)
    return InteractionRecord(mesh.id, make_body(name=name))


def test_pointer_to_ndc():
    assert pointer_to_ndc(0, 0, 800, 600) == (-1.0, 1.0)
    assert pointer_to_ndc(400, 300, 800, 600) == (0.0, 0.0)
    assert pointer_to_ndc(800, 600, 800, 600) == (1.0, -1.0)


def test_ray_sphere():
    o = np.zeros(3)
    d = np.array([0.0, 0.0, -1.0])
    assert ray_sphere(o, d, np.array([0.0, 0.0, -10.0]), 2.0) == pytest.approx(8.0)
    assert ray_sphere(o, d, np.array([5.0, 0.0, -10.0]), 2.0) is None
    # behind the origin
    assert ray_sphere(o, d, np.array([0.0, 0.0, 10.0]), 2.0) is None
    # origin inside: exit point
    assert ray_sphere(o, d, np.zeros(3), 3.0) == pytest.approx(3.0)


def test_empty_list_returns_none(graph, camera):
    assert pick((0.0, 0.0), camera, [], graph) is None


def test_miss_returns_none(graph, camera):
    rec = _record(graph, (50, 0, 0), 5, "AWAY")
    assert pick((0.0, 0.0), camera, [rec], graph) is None


def test_nearest_of_overlapping_spheres_wins(graph, camera):
    far = _record(graph, (0, 0, -5), 10, "FAR")
    near = _record(graph, (0, 0, 0), 10, "NEAR")
    # list order must not matter
    assert pick((0.0, 0.0), camera, [far, near], graph) is near
    assert pick((0.0, 0.0), camera, [near, far], graph) is near


def test_equal_distance_ties_keep_list_order(graph, camera):
    a = _record(graph, (0, 0, 0), 10, "A")
    b = _record(graph, (0, 0, 0), 10, "B")
    assert pick((0.0, 0.0), camera, [a, b], graph) is a
    assert pick((0.0, 0.0), camera, [b, a], graph) is b
    # identical input, identical answer
    assert all(pick((0.0, 0.0), camera, [a, b], graph) is a for _ in range(5))


def test_uses_world_position(graph, camera):
    pivot = graph.add(NodeKind.PIVOT)
    group = graph.add(NodeKind.GROUP, pivot.id, position=(60, 0, 0))
    rec = _record(graph, (0, 0, 0), 5, "MOVED", parent=group.id)
    assert pick((0.0, 0.0), camera, [rec], graph) is None
    # a quarter turn brings it onto the view axis, 60 units toward the camera
    pivot.rotation[1] = -np.pi / 2
    np.testing.assert_allclose(graph.world_position(rec.node_id), [0, 0, 60], atol=1e-9)
    assert pick((0.0, 0.0), camera, [rec], graph) is rec


def test_uses_world_scale(graph, camera):
    small = graph.add(NodeKind.GROUP, name="plain")
    scaled = graph.add(NodeKind.GROUP, name="scaled", scale=(20, 20, 20))
    unscaled_rec = _record(graph, (0, 0, 0), 1, "PLAIN", parent=small.id)
    scaled_rec = _record(graph, (0, 0, 0), 1, "SCALED", parent=scaled.id)
    # about 11.5 units above the centre at the sphere's depth
    ndc = (0.0, 0.2)
    assert pick(ndc, camera, [unscaled_rec], graph) is None
    assert pick(ndc, camera, [scaled_rec], graph) is scaled_rec
