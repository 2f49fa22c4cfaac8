"""
Orrery - Imaging

Procedural surface textures and sprites:
- synthesize: per-class 512×512 RGBA body textures
- synthesize_glow: radial halo sprite for the sun
"""

from .texture_synth import synthesize, synthesize_glow, mean_colour

__all__ = [
    'synthesize',
    'synthesize_glow',
    'mean_colour',
]

__version__ = '0.1.0'
