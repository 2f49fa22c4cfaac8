"""
Orrery Screen

The single interactive view: the animated solar system with its HUD.

Frame order:
    scheduler tick → calendar → tour step → orbit controls → render

Pointer input goes through the picker; results travel over the EventBus
to the tooltip and the detail panel, so the core never touches widgets.
"""

import pygame
from typing import Optional

from core.config import (SimulationConfig, DEFAULT_CONFIG, TIME_SCALE_MIN,
                         TIME_SCALE_MAX, TIME_SCALE_DEFAULT)
from core.events import EventBus, OrreryEvent
from core.time_controller import TimeController, SimulationClock
from core.types import InteractionRecord
from interaction.picker import pick, pointer_to_ndc
from interaction.tour import TourController, TourTarget, reset_camera
from rendering.camera import PerspectiveCamera, OrbitControls
from rendering.scene_renderer import SceneRenderer
from universe.scene_builder import SolarSystem
from .base_screen import BaseScreen
from .components import Button, Slider, Tooltip, InfoPanel, LoaderOverlay
from .details import format_body_details
from .audio import BackgroundMusic

TOUR_LABEL = "CINEMATIC TOUR"
STOP_TOUR_LABEL = "STOP TOUR"


class OrreryScreen(BaseScreen):
    """
    Solar system view

    Owns the camera, controls, tour and time scale for one SolarSystem.
    """

    def __init__(self, system: SolarSystem, width: int, height: int,
                 config: SimulationConfig = DEFAULT_CONFIG,
                 music: Optional[BackgroundMusic] = None,
                 bus: Optional[EventBus] = None):
        super().__init__("ORRERY")

        self.system = system
        self.config = config
        self.width, self.height = width, height
        self.bus = bus if bus is not None else EventBus()
        self.music = music

        # Simulation state
        self.time = TimeController(TIME_SCALE_DEFAULT)
        self.calendar = SimulationClock(config.days_per_tick)

        # Camera
        self.camera = PerspectiveCamera(width=width, height=height)
        self.controls = OrbitControls(self.camera, damping=0.05)
        self.renderer = SceneRenderer()

        targets = [TourTarget(b.mesh.id, b.descriptor.radius, b.descriptor.name)
                   for b in system.tour_targets]
        self.tour = TourController(targets, config, bus=self.bus)

        # Widgets
        self.tooltip = Tooltip()
        self.panel = InfoPanel(width, height)
        self.loader = LoaderOverlay()
        self.tour_button = Button(0, 0, 170, 34, TOUR_LABEL, callback=self.tour.toggle)
        self.reset_button = Button(0, 0, 150, 34, "RESET CAMERA", callback=self.reset_view)
        self.slider = Slider(0, 0, 200, TIME_SCALE_MIN, TIME_SCALE_MAX,
                             TIME_SCALE_DEFAULT, step=0.1, label="SIMULATION SPEED",
                             on_change=self.set_time_scale)
        self.layout(width, height)

        self.hovered: Optional[InteractionRecord] = None
        self._dragging = False
        self._drag_moved = False
        self._cursor_hand = False

        self.bus.subscribe(OrreryEvent.HOVER, self._on_hover)
        self.bus.subscribe(OrreryEvent.SELECT, self._on_select)
        self.bus.subscribe(OrreryEvent.CLOSE_PANEL, lambda _: self.panel.close())
        self.bus.subscribe(OrreryEvent.TOUR_CHANGED, self._on_tour_changed)
        self.bus.subscribe(OrreryEvent.TIME_SCALE_CHANGED, self._on_time_scale)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def layout(self, width: int, height: int):
        """Place widgets for the current window size"""
        self.width, self.height = width, height
        bottom = height - 60
        self.slider.rect.topleft = (30, bottom)
        self.tour_button.rect.topleft = (width - 350, bottom - 8)
        self.reset_button.rect.topleft = (width - 170, bottom - 8)
        self.panel.layout(width, height)

    def on_resize(self, width: int, height: int):
        self.camera.set_viewport(width, height)
        self.layout(width, height)

    def on_enter(self):
        super().on_enter()
        print(f"Interactables: {len(self.system.interactions)}  "
              f"Tour targets: {len(self.tour.targets)}")

    def on_exit(self):
        super().on_exit()
        if self.music is not None:
            self.music.stop()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_time_scale(self, value: float):
        self.time.set_from_slider(value)
        self.bus.emit(OrreryEvent.TIME_SCALE_CHANGED, self.time.scale)

    def toggle_pause(self):
        self.time.toggle_pause()
        self.bus.emit(OrreryEvent.TIME_SCALE_CHANGED, self.time.scale)

    def nudge_time_scale(self, faster: bool):
        if faster:
            self.time.speed_up()
        else:
            self.time.speed_down()
        self.bus.emit(OrreryEvent.TIME_SCALE_CHANGED, self.time.scale)

    def reset_view(self):
        reset_camera(self.camera, self.tour)
        self.controls.stop()

    # ------------------------------------------------------------------
    # Event bus handlers
    # ------------------------------------------------------------------

    def _on_hover(self, record: Optional[InteractionRecord]):
        self.tooltip.show(record.name if record is not None else None)
        want_hand = record is not None
        if want_hand != self._cursor_hand:
            self._cursor_hand = want_hand
            cursor = pygame.SYSTEM_CURSOR_HAND if want_hand else pygame.SYSTEM_CURSOR_ARROW
            try:
                pygame.mouse.set_cursor(cursor)
            except pygame.error as e:
                print(f"Cursor change failed: {e}")

    def _on_select(self, record: InteractionRecord):
        self.panel.open(format_body_details(record.descriptor))

    def _on_tour_changed(self, active: bool):
        self.tour_button.text = STOP_TOUR_LABEL if active else TOUR_LABEL
        self.tour_button.active = active
        if not active:
            self.controls.auto_rotate = False

    def _on_time_scale(self, scale: float):
        self.slider.set_value(scale)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _over_chrome(self, pos) -> bool:
        """True if pos is over a HUD element rather than the scene"""
        return (self.tour_button.rect.collidepoint(pos)
                or self.reset_button.rect.collidepoint(pos)
                or self.slider.contains(pos)
                or self.panel.contains(pos))

    def pick_at(self, pos) -> Optional[InteractionRecord]:
        ndc = pointer_to_ndc(pos[0], pos[1], self.width, self.height)
        return pick(ndc, self.camera, self.system.interactions.interactables,
                    self.system.graph)

    def _update_hover(self, pos):
        self.tooltip.move(pos)
        record = None if self._over_chrome(pos) else self.pick_at(pos)
        if record is not self.hovered:
            self.hovered = record
            self.bus.emit(OrreryEvent.HOVER, record)

    def handle_input(self, events: list[pygame.event.Event]) -> Optional[str]:
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.music is not None:
                    self.music.start()

            # Widgets first
            if self.panel.handle_event(event):
                continue
            if self.slider.handle_event(event):
                continue
            if self.tour_button.handle_event(event) or self.reset_button.handle_event(event):
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    if self.panel.is_open:
                        self.bus.emit(OrreryEvent.CLOSE_PANEL)
                    else:
                        return "QUIT"
                elif event.key == pygame.K_SPACE:
                    self.toggle_pause()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.nudge_time_scale(faster=True)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    self.nudge_time_scale(faster=False)
                elif event.key == pygame.K_t:
                    self.tour.toggle()
                elif event.key == pygame.K_r:
                    self.reset_view()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._dragging = True
                self._drag_moved = False

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                was_click = self._dragging and not self._drag_moved
                self._dragging = False
                if was_click and not self._over_chrome(event.pos):
                    record = self.pick_at(event.pos)
                    if record is not None:
                        self.bus.emit(OrreryEvent.SELECT, record)

            elif event.type == pygame.MOUSEMOTION:
                if self._dragging and any(event.buttons[:1]):
                    dx, dy = event.rel
                    if abs(dx) + abs(dy) > 2:
                        self._drag_moved = True
                    self.controls.rotate(dx, dy)
                self._update_hover(event.pos)

            elif event.type == pygame.MOUSEWHEEL:
                self.controls.zoom(event.y)

        return None

    # ------------------------------------------------------------------
    # Update / render
    # ------------------------------------------------------------------

    def update(self, dt: float):
        ts = self.time.scale
        self.system.scheduler.tick(ts)
        self.calendar.advance(ts)
        self.tour.step(self.camera, self.system.graph)
        self.controls.update()

        mouse_pos = pygame.mouse.get_pos()
        self.tour_button.update(mouse_pos)
        self.reset_button.update(mouse_pos)
        self.panel.update(mouse_pos)
        self.loader.update(dt)

    def render(self, surface: pygame.Surface):
        highlight = self.hovered.node_id if self.hovered is not None else None
        self.renderer.render(surface, self.system.graph, self.camera, highlight=highlight)
        self._draw_hud(surface)
        self.panel.draw(surface)
        self.tooltip.draw(surface)
        self.loader.draw(surface)

    def _draw_hud(self, surface: pygame.Surface):
        t = self.theme
        c = t.colors

        # Title + calendar
        t.draw_text(surface, t.fonts.title(), 30, 24, "SOLAR SYSTEM", c.ACCENT_CYAN)
        t.draw_text(surface, t.fonts.small(), 32, 58, self.calendar.label, c.FG_PRIMARY)

        # Speed slider with value
        self.slider.draw(surface)
        t.draw_text(surface, t.fonts.small(), self.slider.rect.right + 14,
                    self.slider.rect.y, self.time.label,
                    c.ACCENT_ORANGE if self.time.paused else c.FG_PRIMARY)

        self.tour_button.draw(surface)
        self.reset_button.draw(surface)

        footer = pygame.Rect(0, self.height - 22, self.width, 22)
        self.draw_footer(surface, footer,
                         "[DRAG] Orbit  [WHEEL] Zoom  [CLICK] Inspect  [SPACE] Pause  "
                         "[+/-] Speed  [T] Tour  [R] Reset  [F11] Fullscreen  [ESC] Quit")
