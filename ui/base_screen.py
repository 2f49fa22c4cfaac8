"""
Screen interface

The application drives exactly one screen per frame:
handle_input(events) → update(dt) → render(surface).
"""

import pygame
from abc import ABC, abstractmethod
from typing import Optional
from .theme import get_theme


class BaseScreen(ABC):
    """
    Abstract screen

    Subclasses own their widgets and state; the application only forwards
    events, frame time and resize notices.
    """

    def __init__(self, screen_name: str):
        self.screen_name = screen_name
        self.active = False
        self.theme = get_theme()

    @abstractmethod
    def on_enter(self):
        """Screen becomes visible"""
        self.active = True

    @abstractmethod
    def on_exit(self):
        """Screen is being torn down; release audio etc."""
        self.active = False

    @abstractmethod
    def handle_input(self, events: list[pygame.event.Event]) -> Optional[str]:
        """
        Consume this frame's events.

        Returns:
            "QUIT" to end the application, None otherwise
        """

    @abstractmethod
    def update(self, dt: float):
        """Advance one frame (dt in seconds)"""

    @abstractmethod
    def render(self, surface: pygame.Surface):
        """Draw the whole frame onto surface"""

    def on_resize(self, width: int, height: int):
        """Display surface changed size"""

    def draw_footer(self, surface: pygame.Surface, rect: pygame.Rect, hints: str):
        """Key hint strip, e.g. "[SPACE] Pause  [+/-] Speed" """
        self.theme.draw_panel(surface, rect)
        self.theme.draw_text(surface, self.theme.fonts.tiny(),
                             rect.x + 12, rect.y + 5, hints, self.theme.colors.FG_DIM)
