"""
UI Theme - Orrery HUD Style

Translucent dark-navy panels with cyan accents, drawn over the starfield.
Colours, font roles and spacing all live here so widgets never hardcode them.
"""

import pygame
from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field

RGB = Tuple[int, int, int]


class Colors:
    """
    HUD palette

    Cyan marks focus and headings; warm orange marks an active mode.
    """

    # Backdrop / panels
    BG_DARK = (0, 0, 5)               # Space
    BG_PANEL = (8, 14, 28)
    BG_PANEL_LIGHT = (16, 28, 52)     # Hovered panel, slider track
    PANEL_ALPHA = 215                 # 0-255

    # Text
    FG_PRIMARY = (220, 240, 255)
    FG_DIM = (130, 160, 190)
    FG_DARK = (70, 85, 110)           # Placeholders

    ACCENT_CYAN = (0, 210, 255)
    ACCENT_ORANGE = (255, 150, 40)    # Tour running, paused readout

    # Widgets
    BUTTON_NORMAL = FG_PRIMARY
    BUTTON_HOVER = ACCENT_CYAN
    BUTTON_ACTIVE = ACCENT_ORANGE
    BORDER_NORMAL = (40, 90, 130)
    BORDER_FOCUS = ACCENT_CYAN
    BADGE_BG = (20, 45, 70)           # Moon badges

    @staticmethod
    def lerp_color(start: RGB, end: RGB, t: float) -> RGB:
        """Blend start → end by t in [0, 1]"""
        return tuple(int(a + (b - a) * t) for a, b in zip(start, end))


@dataclass
class FontConfig:
    """Font family and the pixel size of each role"""
    family: str = "Verdana"
    fallbacks: Tuple[str, ...] = ("Tahoma", "Arial", "sans")
    sizes: Dict[str, int] = field(default_factory=lambda: {
        'title': 26, 'large': 20, 'normal': 16, 'small': 13, 'tiny': 11,
    })
    bold_roles: Tuple[str, ...] = ('title',)


class Fonts:
    """
    Lazily loaded font roles (title / large / normal / small / tiny)

    The first installed family wins; pygame's bundled font is the last resort.
    """

    _fonts: Dict[str, pygame.font.Font] = {}
    _config = FontConfig()

    @classmethod
    def initialize(cls, config: Optional[FontConfig] = None):
        if config is not None:
            cls._config = config
        pygame.font.init()

        cfg = cls._config
        for family in (cfg.family, *cfg.fallbacks):
            try:
                cls._fonts = {
                    role: pygame.font.SysFont(family, size, bold=role in cfg.bold_roles)
                    for role, size in cfg.sizes.items()
                }
                return
            except (pygame.error, OSError):
                continue

        cls._fonts = {role: pygame.font.Font(None, size) for role, size in cfg.sizes.items()}

    @classmethod
    def get(cls, role: str = 'normal') -> pygame.font.Font:
        if not cls._fonts:
            cls.initialize()
        return cls._fonts.get(role, cls._fonts['normal'])

    @classmethod
    def title(cls) -> pygame.font.Font:
        return cls.get('title')

    @classmethod
    def large(cls) -> pygame.font.Font:
        return cls.get('large')

    @classmethod
    def normal(cls) -> pygame.font.Font:
        return cls.get('normal')

    @classmethod
    def small(cls) -> pygame.font.Font:
        return cls.get('small')

    @classmethod
    def tiny(cls) -> pygame.font.Font:
        return cls.get('tiny')


class Theme:
    """Colours, fonts and spacing plus the two drawing primitives every widget uses"""

    def __init__(self):
        self.colors = Colors()
        self.fonts = Fonts()

        self.padding = 10
        self.margin = 16
        self.border_width = 1
        self.button_height = 34

    def draw_panel(self, surface: pygame.Surface, rect: pygame.Rect,
                   fg_color: Optional[RGB] = None,
                   bg_color: Optional[RGB] = None):
        """
        Translucent filled rectangle with a 1px border

        Args:
            fg_color: border (default BORDER_NORMAL)
            bg_color: fill (default BG_PANEL), blended at PANEL_ALPHA
        """
        veil = pygame.Surface(rect.size, pygame.SRCALPHA)
        veil.fill((*(bg_color or self.colors.BG_PANEL), self.colors.PANEL_ALPHA))
        surface.blit(veil, rect.topleft)
        pygame.draw.rect(surface, fg_color or self.colors.BORDER_NORMAL, rect,
                         self.border_width)

    def draw_text(self, surface: pygame.Surface, font: pygame.font.Font,
                  x: int, y: int, text: str, color: RGB,
                  align: str = 'left') -> int:
        """
        Blit antialiased text anchored at x ('left', 'center' or 'right').

        Returns:
            Rendered width in pixels
        """
        rendered = font.render(text, True, color)
        width = rendered.get_width()
        offset = {'center': width // 2, 'right': width}.get(align, 0)
        surface.blit(rendered, (x - offset, y))
        return width


_theme: Optional[Theme] = None


def get_theme() -> Theme:
    """Shared theme instance (fonts load on first use)"""
    global _theme
    if _theme is None:
        _theme = Theme()
        _theme.fonts.initialize()
    return _theme
