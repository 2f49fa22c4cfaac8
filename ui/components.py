"""
UI Components - Reusable HUD Elements

- Button: Interactive button with hover/click/active states
- Slider: Horizontal value slider (time scale)
- Tooltip: Text that follows the pointer
- InfoPanel: Body detail panel with close button
- LoaderOverlay: Startup splash that fades out
"""

import pygame
from typing import Optional, Callable, List, Tuple
from dataclasses import dataclass
from .theme import get_theme
from .details import BodyDetails


@dataclass
class ButtonState:
    hovered: bool = False
    pressed: bool = False


class Button:
    """
    Push button: fires callback on press-and-release inside its rect.

    `active` draws it in the accent colour (tour running).
    """

    def __init__(self, x: int, y: int, width: int, height: int,
                 text: str, callback: Optional[Callable] = None):
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.callback = callback
        self.state = ButtonState()
        self.active = False
        self.enabled = True
        self.theme = get_theme()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """True if the event was consumed by this button"""
        if not self.enabled:
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.state.pressed = True
                return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.state.pressed and self.rect.collidepoint(event.pos):
                self.state.pressed = False
                if self.callback:
                    self.callback()
                return True
            self.state.pressed = False

        return False

    def update(self, mouse_pos: Tuple[int, int]):
        """Update hover state"""
        self.state.hovered = self.enabled and self.rect.collidepoint(mouse_pos)

    def draw(self, surface: pygame.Surface):
        colors = self.theme.colors
        if self.active:
            fg_color = colors.BUTTON_ACTIVE
            border_color = colors.BUTTON_ACTIVE
        elif self.state.hovered or self.state.pressed:
            fg_color = colors.BUTTON_HOVER
            border_color = colors.BORDER_FOCUS
        else:
            fg_color = colors.BUTTON_NORMAL
            border_color = colors.BORDER_NORMAL

        bg = colors.BG_PANEL_LIGHT if self.state.hovered else colors.BG_PANEL
        self.theme.draw_panel(surface, self.rect, fg_color=border_color, bg_color=bg)

        font = self.theme.fonts.small()
        self.theme.draw_text(surface, font,
                             self.rect.centerx, self.rect.centery - font.get_height() // 2,
                             self.text, fg_color, align='center')


class Slider:
    """
    Horizontal slider

    Dragging or clicking the track sets the value; on_change is called with
    the new value.
    """

    def __init__(self, x: int, y: int, width: int,
                 min_value: float, max_value: float, value: float,
                 step: float = 0.1, label: str = "",
                 on_change: Optional[Callable[[float], None]] = None):
        self.rect = pygame.Rect(x, y, width, 18)
        self.min_value = min_value
        self.max_value = max_value
        self.step = step
        self.value = value
        self.label = label
        self.on_change = on_change
        self.dragging = False
        self.theme = get_theme()

    def value_at(self, px: int) -> float:
        """Slider value for a pointer x coordinate, snapped to step."""
        t = (px - self.rect.x) / max(self.rect.width, 1)
        t = max(0.0, min(1.0, t))
        raw = self.min_value + t * (self.max_value - self.min_value)
        if self.step > 0:
            raw = round(raw / self.step) * self.step
        return max(self.min_value, min(self.max_value, raw))

    def set_value(self, value: float, notify: bool = False):
        self.value = max(self.min_value, min(self.max_value, value))
        if notify and self.on_change:
            self.on_change(self.value)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 12).collidepoint(event.pos):
                self.dragging = True
                self.set_value(self.value_at(event.pos[0]), notify=True)
                return True
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.set_value(self.value_at(event.pos[0]), notify=True)
            return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.dragging:
                self.dragging = False
                return True
        return False

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.inflate(0, 12).collidepoint(pos)

    def draw(self, surface: pygame.Surface):
        colors = self.theme.colors
        track = pygame.Rect(self.rect.x, self.rect.centery - 2, self.rect.width, 4)
        pygame.draw.rect(surface, colors.BG_PANEL_LIGHT, track)
        span = max(self.max_value - self.min_value, 1e-9)
        t = (self.value - self.min_value) / span
        filled = pygame.Rect(track.x, track.y, int(track.width * t), track.height)
        pygame.draw.rect(surface, colors.ACCENT_CYAN, filled)
        knob_x = track.x + int(track.width * t)
        pygame.draw.circle(surface, colors.FG_PRIMARY, (knob_x, self.rect.centery), 7)
        if self.label:
            self.theme.draw_text(surface, self.theme.fonts.tiny(),
                                 self.rect.x, self.rect.y - 16,
                                 self.label, colors.FG_DIM)


class Tooltip:
    """Body name next to the pointer; hidden when text is None."""

    def __init__(self):
        self.text: Optional[str] = None
        self.pos = (0, 0)
        self.theme = get_theme()

    def show(self, text: Optional[str]):
        self.text = text

    def move(self, pos: Tuple[int, int]):
        self.pos = pos

    @property
    def visible(self) -> bool:
        return bool(self.text)

    def draw(self, surface: pygame.Surface):
        if not self.visible:
            return
        font = self.theme.fonts.small()
        w, h = font.size(self.text)
        rect = pygame.Rect(self.pos[0] + 14, self.pos[1] + 14, w + 16, h + 8)
        self.theme.draw_panel(surface, rect, fg_color=self.theme.colors.ACCENT_CYAN)
        self.theme.draw_text(surface, font, rect.x + 8, rect.y + 4,
                             self.text, self.theme.colors.FG_PRIMARY)


class InfoPanel:
    """
    Detail panel for the selected body, docked on the right

    Shows name, class, temperature placeholder, diameter, distance, speed,
    description and moon badges.
    """

    WIDTH = 320

    def __init__(self, screen_width: int, screen_height: int):
        self.details: Optional[BodyDetails] = None
        self.rect = pygame.Rect(0, 0, self.WIDTH, 0)
        self.close_button = Button(0, 0, 28, 28, "X", callback=self.close)
        self.theme = get_theme()
        self.layout(screen_width, screen_height)

    def layout(self, screen_width: int, screen_height: int):
        self.rect = pygame.Rect(screen_width - self.WIDTH - 20, 80,
                                self.WIDTH, min(460, screen_height - 160))
        self.close_button.rect.topright = (self.rect.right - 8, self.rect.y + 8)

    @property
    def is_open(self) -> bool:
        return self.details is not None

    def open(self, details: BodyDetails):
        self.details = details

    def close(self):
        self.details = None

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.is_open and self.rect.collidepoint(pos)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.is_open:
            return False
        if self.close_button.handle_event(event):
            return True
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            return self.rect.collidepoint(event.pos)
        return False

    def update(self, mouse_pos: Tuple[int, int]):
        self.close_button.update(mouse_pos)

    def _wrap(self, text: str, font: pygame.font.Font, width: int) -> List[str]:
        lines, line = [], ""
        for word in text.split():
            candidate = f"{line} {word}".strip()
            if font.size(candidate)[0] > width and line:
                lines.append(line)
                line = word
            else:
                line = candidate
        if line:
            lines.append(line)
        return lines

    def draw(self, surface: pygame.Surface):
        if not self.is_open:
            return
        d = self.details
        t = self.theme
        c = t.colors
        t.draw_panel(surface, self.rect, fg_color=c.ACCENT_CYAN)
        self.close_button.draw(surface)

        x = self.rect.x + t.padding + 4
        y = self.rect.y + 14
        t.draw_text(surface, t.fonts.title(), x, y, d.name, c.ACCENT_CYAN)
        y += 34
        t.draw_text(surface, t.fonts.small(), x, y, d.kind, c.FG_DIM)
        y += 28

        for label, value in (("TEMP", d.temperature), ("DIAMETER", d.diameter),
                             ("DISTANCE", d.distance), ("SPEED", d.speed)):
            t.draw_text(surface, t.fonts.tiny(), x, y, label, c.FG_DIM)
            t.draw_text(surface, t.fonts.small(), self.rect.right - 16, y - 1,
                        value, c.FG_PRIMARY, align='right')
            y += 22

        y += 8
        for line in self._wrap(d.description, t.fonts.small(), self.rect.width - 32):
            t.draw_text(surface, t.fonts.small(), x, y, line, c.FG_PRIMARY)
            y += 18

        y += 12
        t.draw_text(surface, t.fonts.tiny(), x, y, "MOONS", c.FG_DIM)
        y += 18
        if not d.moons:
            t.draw_text(surface, t.fonts.tiny(), x, y, d.moons_label, c.FG_DARK)
            return
        bx = x
        font = t.fonts.tiny()
        for moon in d.moons:
            w = font.size(moon)[0] + 14
            if bx + w > self.rect.right - 12:
                bx = x
                y += 24
            badge = pygame.Rect(bx, y, w, 20)
            pygame.draw.rect(surface, c.BADGE_BG, badge, border_radius=8)
            t.draw_text(surface, font, badge.x + 7, badge.y + 3, moon, c.FG_PRIMARY)
            bx += w + 6


class LoaderOverlay:
    """Full-screen splash shown at startup, fading out after a delay."""

    def __init__(self, text: str = "INITIALIZING SOLAR SYSTEM",
                 hold_s: float = 1.5, fade_s: float = 1.0):
        self.text = text
        self.hold_s = hold_s
        self.fade_s = fade_s
        self.elapsed = 0.0
        self.theme = get_theme()

    @property
    def done(self) -> bool:
        return self.elapsed >= self.hold_s + self.fade_s

    @property
    def opacity(self) -> float:
        if self.elapsed <= self.hold_s:
            return 1.0
        return max(0.0, 1.0 - (self.elapsed - self.hold_s) / self.fade_s)

    def update(self, dt: float):
        self.elapsed += dt

    def draw(self, surface: pygame.Surface):
        if self.done:
            return
        veil = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        veil.fill((*self.theme.colors.BG_DARK, int(255 * self.opacity)))
        surface.blit(veil, (0, 0))
        colors = self.theme.colors
        color = colors.lerp_color(colors.BG_DARK, colors.ACCENT_CYAN, self.opacity)
        self.theme.draw_text(surface, self.theme.fonts.large(),
                             surface.get_width() // 2, surface.get_height() // 2 - 10,
                             self.text, color, align='center')
