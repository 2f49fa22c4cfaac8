"""
Orrery configuration.

Window and camera defaults are plain module constants (as the application
entry point reads them directly); the tunable animation rates live in
SimulationConfig so tests and the command line can override them.

All rates are per rendered frame, multiplied by the time scale where noted.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path


# Window settings
WIDTH, HEIGHT = 1280, 800
FPS = 60
TITLE = "Orrery - Solar System Engine"

# Camera
CAMERA_FOV_DEG = 60.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 20000.0
CAMERA_START = (0.0, 400.0, 600.0)   # high angle start
CAMERA_RESET = (0.0, 500.0, 0.0)     # top-down view
CAMERA_MAX_DISTANCE = 5000.0
CAMERA_DAMPING = 0.05

# Procedural content
TEXTURE_SIZE = 512
GLOW_SIZE = 128
GLOW_SCALE = 220.0
SUN_RADIUS = 35.0

# Time scale slider range
TIME_SCALE_MIN = 0.0
TIME_SCALE_MAX = 10.0
TIME_SCALE_DEFAULT = 1.0

# Background music (optional, best effort)
MUSIC_PATH = Path("music.mp3")
MUSIC_VOLUME = 0.5


@dataclass
class SimulationConfig:
    """
    Tunable per-frame rates.

    spin_rate is the same for every body regardless of size; satellites
    revolve at satellite_rate / distance * 10.
    """
    spin_rate:        float = 0.02      # rad/frame × time scale
    satellite_rate:   float = 0.05
    belt_rate:        float = 0.0005    # asteroid belt rotation
    comet_rate:       float = 0.008     # comet phase advance

    # Cinematic tour (independent of the time scale)
    tour_rate:        float = 0.01
    tour_threshold:   float = 5.0
    tour_lerp:        float = 0.05

    # Calendar readout
    days_per_tick:    float = 0.5

    # Particle counts
    belt_count:       int = 5000
    star_count:       int = 10000
    trail_length:     int = 50

    def satellite_speed(self, distance: float) -> float:
        """Angular rate of a satellite pivot at the given distance."""
        return self.satellite_rate / distance * 10.0


DEFAULT_CONFIG = SimulationConfig()
