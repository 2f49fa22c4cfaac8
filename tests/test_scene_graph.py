"""Scene graph arena and transform composition"""

import math

import numpy as np
import pytest

from universe.scene_graph import SceneGraph, NodeKind, SceneGraphError, ROOT_ID


def test_root_exists(graph):
    assert len(graph) == 1
    assert graph.root.id == ROOT_ID
    assert graph.root.kind is NodeKind.ROOT


def test_add_links_parent_and_child(graph):
    pivot = graph.add(NodeKind.PIVOT, name="p")
    group = graph.add(NodeKind.GROUP, pivot.id, name="g")
    assert group.parent == pivot.id
    assert pivot.children == [group.id]
    assert graph.ancestors(group.id) == [pivot.id, ROOT_ID]


def test_unknown_parent_rejected(graph):
    with pytest.raises(SceneGraphError):
        graph.add(NodeKind.MESH, 42)


def test_scene_graph_error_is_key_error(graph):
    with pytest.raises(KeyError):
        graph.get(-1)


def test_second_root_rejected(graph):
    with pytest.raises(SceneGraphError):
        graph.add(NodeKind.ROOT)


def test_vector_attributes_are_copied(graph):
    pos = [1.0, 2.0, 3.0]
    node = graph.add(NodeKind.GROUP, position=pos)
    pos[0] = 99.0
    assert node.position[0] == 1.0
    assert node.position.dtype == np.float64


def test_orbit_pivot_moves_offset_group(graph):
    pivot = graph.add(NodeKind.PIVOT)
    group = graph.add(NodeKind.GROUP, pivot.id, position=(10.0, 0.0, 0.0))
    mesh = graph.add(NodeKind.MESH, group.id, radius=1.0)

    np.testing.assert_allclose(graph.world_position(mesh.id), [10, 0, 0], atol=1e-12)
    pivot.rotation[1] = math.pi / 2
    np.testing.assert_allclose(graph.world_position(mesh.id), [0, 0, -10], atol=1e-9)


def test_orbit_keeps_distance_constant(graph):
    pivot = graph.add(NodeKind.PIVOT)
    group = graph.add(NodeKind.GROUP, pivot.id, position=(70.0, 0.0, 0.0))
    for angle in np.linspace(0, 2 * math.pi, 9):
        pivot.rotation[1] = angle
        assert np.linalg.norm(graph.world_position(group.id)) == pytest.approx(70.0)


def test_satellite_follows_parent(graph):
    pivot = graph.add(NodeKind.PIVOT)
    group = graph.add(NodeKind.GROUP, pivot.id, position=(140.0, 0.0, 0.0))
    mesh = graph.add(NodeKind.MESH, group.id)
    s_pivot = graph.add(NodeKind.PIVOT, mesh.id)
    moon = graph.add(NodeKind.MESH, s_pivot.id, position=(12.0, 0.0, 0.0))

    for a, b in [(0.3, 1.1), (2.0, -0.7), (5.5, 3.3)]:
        pivot.rotation[1] = a
        s_pivot.rotation[1] = b
        d = graph.world_position(moon.id) - graph.world_position(mesh.id)
        assert np.linalg.norm(d) == pytest.approx(12.0)


def test_spin_does_not_move_mesh_centre(graph):
    group = graph.add(NodeKind.GROUP, position=(50.0, 0.0, 0.0))
    mesh = graph.add(NodeKind.MESH, group.id)
    before = graph.world_position(mesh.id)
    mesh.rotation[1] = 1.23
    np.testing.assert_allclose(graph.world_position(mesh.id), before)


def test_world_scale_composes(graph):
    group = graph.add(NodeKind.GROUP, scale=(2.0, 2.0, 2.0))
    child = graph.add(NodeKind.MESH, group.id, position=(5.0, 0.0, 0.0),
                      scale=(1.5, 1.5, 1.5))
    assert graph.world_scale(child.id) == pytest.approx(3.0)
    np.testing.assert_allclose(graph.world_position(child.id), [10, 0, 0])


def test_walk_visits_parents_first(graph):
    a = graph.add(NodeKind.PIVOT, name="a")
    b = graph.add(NodeKind.GROUP, a.id, name="b")
    c = graph.add(NodeKind.PIVOT, name="c")
    names = [n.name for n in graph.walk()]
    assert names == ["root", "a", "b", "c"]
    assert names.index("a") < names.index("b")


def test_of_kind(graph):
    graph.add(NodeKind.MESH)
    graph.add(NodeKind.PIVOT)
    graph.add(NodeKind.MESH)
    assert len(graph.of_kind(NodeKind.MESH)) == 2
