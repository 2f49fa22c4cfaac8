"""Orrery screen wiring (headless pygame)"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from core.events import OrreryEvent
from ui.audio import BackgroundMusic
from ui.screen_orrery import OrreryScreen, TOUR_LABEL, STOP_TOUR_LABEL
from universe.scene_builder import build_solar_system


@pytest.fixture(scope="module", autouse=True)
def pygame_session():
    pygame.init()
    pygame.display.set_mode((320, 200))
    yield
    pygame.quit()


@pytest.fixture
def screen(small_config):
    system = build_solar_system(rng=np.random.default_rng(3), config=small_config,
                                paint_textures=False)
    return OrreryScreen(system, 640, 400, config=small_config)


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="")


def test_select_opens_detail_panel(screen):
    record = screen.system.interactions.interactables[2]
    screen.bus.emit(OrreryEvent.SELECT, record)
    assert screen.panel.is_open
    assert screen.panel.details.name == "EARTH"


def test_tour_button_toggles_label_and_closes_panel(screen):
    screen.bus.emit(OrreryEvent.SELECT, screen.system.interactions.interactables[0])
    screen.tour_button.callback()
    assert screen.tour.active
    assert screen.tour_button.text == STOP_TOUR_LABEL
    assert not screen.panel.is_open

    screen.controls.auto_rotate = True
    screen.tour_button.callback()
    assert screen.tour_button.text == TOUR_LABEL
    assert not screen.controls.auto_rotate


def test_reset_view(screen):
    screen.tour.toggle()
    screen.reset_view()
    assert not screen.tour.active
    np.testing.assert_array_equal(screen.camera.position, [0, 500, 0])


def test_space_pauses_and_slider_follows(screen):
    screen.handle_input([_key(pygame.K_SPACE)])
    assert screen.time.paused
    assert screen.slider.value == 0.0
    screen.handle_input([_key(pygame.K_SPACE)])
    assert screen.time.scale == 1.0
    assert screen.slider.value == 1.0


def test_plus_minus_nudge(screen):
    screen.handle_input([_key(pygame.K_EQUALS)])
    assert screen.time.scale == 1.5
    screen.handle_input([_key(pygame.K_MINUS), _key(pygame.K_MINUS)])
    assert screen.time.scale == 0.5


def test_escape_quits_only_without_panel(screen):
    screen.bus.emit(OrreryEvent.SELECT, screen.system.interactions.interactables[0])
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) is None
    assert not screen.panel.is_open
    assert screen.handle_input([_key(pygame.K_ESCAPE)]) == "QUIT"


def test_click_on_button_does_not_pick(screen):
    selected = []
    screen.bus.subscribe(OrreryEvent.SELECT, selected.append)
    pos = screen.tour_button.rect.center
    screen.handle_input([
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos),
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos),
    ])
    assert screen.tour.active
    assert selected == []


def test_click_on_body_selects_it(screen):
    # move the camera so EARTH sits in the middle of the view
    earth = screen.system.bodies[2]
    centre = screen.system.graph.world_position(earth.mesh.id)
    screen.camera.target = centre
    screen.camera.position = centre + np.array([0.0, 10.0, 30.0])
    pos = (screen.width // 2, screen.height // 2)
    screen.handle_input([
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos),
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos),
    ])
    assert screen.panel.is_open
    assert screen.panel.details.name == "EARTH"


def test_resize_updates_camera(screen):
    screen.on_resize(1000, 500)
    assert (screen.camera.width, screen.camera.height) == (1000, 500)
    assert screen.camera.aspect == 2.0


def test_update_and_render_smoke(screen):
    surface = pygame.Surface((640, 400))
    screen.on_resize(640, 400)
    for _ in range(3):
        screen.update(1 / 60)
    screen.render(surface)
    assert screen.calendar.days == pytest.approx(1.5)
    assert screen.system.scheduler.ticks == 3


def test_first_click_survives_missing_mixer(screen, tmp_path, monkeypatch):
    def no_mixer(*args, **kwargs):
        raise NotImplementedError("mixer module not available")

    track = tmp_path / "track.mp3"
    track.write_bytes(b"\x00" * 16)
    screen.music = BackgroundMusic(track)
    monkeypatch.setattr(pygame.mixer, "get_init", no_mixer)

    pos = screen.tour_button.rect.center
    screen.handle_input([
        pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos),
        pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos),
    ])
    assert screen.music.failed
    assert screen.tour.active


def test_hover_publishes_record_then_none(screen):
    seen = []
    screen.bus.subscribe(OrreryEvent.HOVER, seen.append)
    earth = screen.system.bodies[2]
    centre = screen.system.graph.world_position(earth.mesh.id)
    screen.camera.target = centre
    screen.camera.position = centre + np.array([0.0, 10.0, 30.0])

    screen.handle_input([pygame.event.Event(pygame.MOUSEMOTION, pos=(screen.width // 2, screen.height // 2),
                                            rel=(0, 0), buttons=(0, 0, 0))])
    screen.handle_input([pygame.event.Event(pygame.MOUSEMOTION, pos=screen.tour_button.rect.center,
                                            rel=(0, 0), buttons=(0, 0, 0))])
    assert seen[0] is earth.record
    assert seen[0].name == "EARTH"
    assert seen[-1] is None
