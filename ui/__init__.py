"""
UI Module - HUD Components and the Orrery Screen
"""
from .theme import get_theme, Colors, Fonts
from .base_screen import BaseScreen
from .components import Button, Slider, Tooltip, InfoPanel, LoaderOverlay
from .details import BodyDetails, format_body_details
from .audio import BackgroundMusic
from .screen_orrery import OrreryScreen

__all__ = [
    "get_theme", "Colors", "Fonts",
    "BaseScreen",
    "Button", "Slider", "Tooltip", "InfoPanel", "LoaderOverlay",
    "BodyDetails", "format_body_details",
    "BackgroundMusic",
    "OrreryScreen",
]
