"""Camera projection and orbit controls"""

import math

import numpy as np
import pytest

from rendering.camera import PerspectiveCamera, OrbitControls


@pytest.fixture
def camera():
    return PerspectiveCamera(width=800, height=600, position=(0, 0, 100), target=(0, 0, 0))


def test_target_projects_to_centre(camera):
    xy, depth, visible = camera.project(np.zeros(3))
    np.testing.assert_allclose(xy[0], [400, 300])
    assert depth[0] == pytest.approx(100)
    assert visible[0]


def test_behind_camera_not_visible(camera):
    _, _, visible = camera.project(np.array([[0.0, 0.0, 200.0]]))
    assert not visible[0]


def test_up_is_up_on_screen(camera):
    xy, _, _ = camera.project(np.array([[0.0, 10.0, 0.0], [10.0, 0.0, 0.0]]))
    assert xy[0, 1] < 300
    assert xy[1, 0] > 400


def test_set_viewport_updates_aspect(camera):
    camera.set_viewport(1000, 500)
    assert (camera.width, camera.height) == (1000, 500)
    assert camera.aspect == 2.0


def test_centre_ray_is_forward(camera):
    origin, direction = camera.ray_from_ndc(0.0, 0.0)
    np.testing.assert_allclose(origin, [0, 0, 100])
    np.testing.assert_allclose(direction, [0, 0, -1], atol=1e-12)


def test_ray_matches_projection(camera):
    point = np.array([12.0, -7.0, 5.0])
    xy, _, _ = camera.project(point)
    ndc = (xy[0, 0] / 400 - 1.0, 1.0 - xy[0, 1] / 300)
    origin, direction = camera.ray_from_ndc(*ndc)
    to_point = point - origin
    np.testing.assert_allclose(direction, to_point / np.linalg.norm(to_point), atol=1e-9)


def test_top_down_view_has_valid_basis():
    cam = PerspectiveCamera(position=(0, 500, 0), target=(0, 0, 0))
    right, up, fwd = cam.basis()
    for v in (right, up, fwd):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    np.testing.assert_allclose(fwd, [0, -1, 0])


def test_zoom_respects_max_distance(camera):
    controls = OrbitControls(camera, max_distance=150)
    controls.zoom(-100)
    controls.update()
    assert np.linalg.norm(camera.position - camera.target) == pytest.approx(150)


def test_rotation_is_damped(camera):
    controls = OrbitControls(camera, damping=0.05)
    controls.rotate(100, 0)
    controls.update()
    first = camera.position.copy()
    controls.update()
    # keeps drifting after input stops, distance unchanged
    assert not np.allclose(first, camera.position)
    assert np.linalg.norm(camera.position) == pytest.approx(100)


def test_disabled_controls_ignore_input(camera):
    controls = OrbitControls(camera)
    controls.enabled = False
    controls.rotate(100, 100)
    controls.zoom(5)
    controls.update()
    np.testing.assert_allclose(camera.position, [0, 0, 100], atol=1e-9)


def test_auto_rotate_orbits_at_constant_distance(camera):
    controls = OrbitControls(camera)
    controls.update()
    np.testing.assert_allclose(camera.position, [0, 0, 100], atol=1e-9)

    controls.auto_rotate = True
    for _ in range(10):
        controls.update()
    assert not np.allclose(camera.position, [0, 0, 100])
    assert np.linalg.norm(camera.position) == pytest.approx(100)
