"""Cinematic tour state machine"""

import numpy as np
import pytest

from core.config import SimulationConfig
from core.events import EventBus, OrreryEvent
from interaction.tour import (TourController, TourTarget, TourMode, camera_offset,
                              reset_camera)
from rendering.camera import PerspectiveCamera
from universe.scene_graph import NodeKind


@pytest.fixture
def targets(graph):
    a = graph.add(NodeKind.MESH, name="A", position=(100, 0, 0), radius=1)
    b = graph.add(NodeKind.MESH, name="B", position=(0, 0, 200), radius=2)
    return [TourTarget(a.id, 1.0, "A"), TourTarget(b.id, 2.0, "B")]


@pytest.fixture
def camera():
    return PerspectiveCamera(position=(0, 0, 0), target=(0, 0, 0))


@pytest.fixture
def recorder():
    bus = EventBus()
    seen = []
    for event in OrreryEvent:
        bus.subscribe(event, lambda payload, e=event: seen.append((e, payload)))
    return bus, seen


def test_starts_inactive(targets):
    tour = TourController(targets)
    assert not tour.active
    assert tour.state.mode is TourMode.INACTIVE
    assert tour.state.current_index == 0


def test_toggle(targets):
    tour = TourController(targets)
    assert tour.toggle() is True
    assert tour.state.mode is TourMode.TOURING
    assert tour.toggle() is False


def test_inactive_step_leaves_camera(targets, camera, graph):
    tour = TourController(targets)
    tour.step(camera, graph)
    np.testing.assert_array_equal(camera.position, [0, 0, 0])
    assert tour.state.elapsed == 0.0


def test_first_step_eases_toward_target(targets, camera, graph):
    tour = TourController(targets)
    tour.toggle()
    tour.step(camera, graph)
    goal = np.array([100, 0, 0]) + camera_offset(1.0)
    np.testing.assert_allclose(camera.position, goal * 0.05)
    np.testing.assert_allclose(camera.target, [5, 0, 0])


def test_camera_offset():
    np.testing.assert_array_equal(camera_offset(2.0), [8.0, 4.0, 8.0])


def test_converges_without_overshoot(targets, camera, graph):
    tour = TourController(targets)
    tour.toggle()
    goal = np.array([104.0, 2.0, 4.0])
    last = np.inf
    for _ in range(300):
        tour.step(camera, graph)
        gap = np.linalg.norm(goal - camera.position)
        assert gap <= last
        last = gap
    assert last < 1e-3


def test_advances_after_threshold(targets, camera, graph):
    tour = TourController(targets)
    tour.toggle()
    for _ in range(499):
        tour.step(camera, graph)
    assert tour.state.current_index == 0
    for _ in range(3):
        tour.step(camera, graph)
    assert tour.state.current_index == 1
    assert tour.state.elapsed < 0.05


def test_index_wraps(targets):
    tour = TourController(targets, SimulationConfig(tour_rate=1.0, tour_threshold=0.5))
    tour.toggle()
    assert tour.advance_timer()
    assert tour.state.current_index == 1
    assert tour.advance_timer()
    assert tour.state.current_index == 0


def test_pacing_ignores_time_scale(targets, camera, graph):
    # step() takes no time scale: elapsed grows by tour_rate per frame
    tour = TourController(targets)
    tour.toggle()
    for _ in range(10):
        tour.step(camera, graph)
    assert tour.state.elapsed == pytest.approx(0.1)


def test_events(targets, recorder):
    bus, seen = recorder
    tour = TourController(targets, bus=bus)
    tour.toggle()
    assert seen == [(OrreryEvent.TOUR_CHANGED, True), (OrreryEvent.CLOSE_PANEL, None)]
    seen.clear()
    tour.toggle()
    assert seen == [(OrreryEvent.TOUR_CHANGED, False)]


def test_reset_camera_stops_tour(targets, camera, recorder):
    bus, seen = recorder
    tour = TourController(targets, bus=bus)
    tour.toggle()
    camera.position = np.array([1.0, 2.0, 3.0])
    camera.target = np.array([4.0, 5.0, 6.0])

    reset_camera(camera, tour)

    assert not tour.active
    np.testing.assert_array_equal(camera.position, [0, 500, 0])
    np.testing.assert_array_equal(camera.target, [0, 0, 0])
    assert seen[-1] == (OrreryEvent.TOUR_CHANGED, False)


def test_reset_when_inactive_emits_nothing(targets, camera, recorder):
    bus, seen = recorder
    reset_camera(camera, TourController(targets, bus=bus))
    assert seen == []


def test_reset_forces_inactive(targets):
    tour = TourController(targets)
    tour.toggle()
    tour.reset()
    assert not tour.active
    tour.reset()
    assert not tour.active
