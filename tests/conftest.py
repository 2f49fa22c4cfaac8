"""
Shared fixtures for the orrery test suite.

Everything here runs headless: scenes are built without texture painting
and with small particle counts unless a test asks otherwise.
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import SimulationConfig
from core.types import CelestialBodyDescriptor, SatelliteDescriptor, SurfaceClass
from universe.scene_graph import SceneGraph


def make_body(name="TESTBODY", radius=3.0, distance=70.0, speed=0.04,
              surface_class=SurfaceClass.ROCKY, satellites=(), has_ring=False,
              description="A test body."):
    return CelestialBodyDescriptor(
        name=name, radius=radius, distance=distance, speed=speed,
        surface_class=surface_class, color_a="#aaaaaa", color_b="#555555",
        description=description, has_ring=has_ring,
        satellites=tuple(satellites),
    )


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def graph():
    return SceneGraph()


@pytest.fixture
def small_config():
    return SimulationConfig(belt_count=20, star_count=30, trail_length=50)


@pytest.fixture
def three_bodies():
    """Mercury-like, Earth-like with one moon, Saturn-like with a ring."""
    return [
        make_body("INNER", radius=3, distance=70, speed=0.04),
        make_body("HOME", radius=6, distance=140, speed=0.01,
                  surface_class=SurfaceClass.WATER_WORLD,
                  satellites=[SatelliteDescriptor("Moon", 1.5, 12)]),
        make_body("RINGED", radius=15, distance=420, speed=0.003,
                  surface_class=SurfaceClass.GAS, has_ring=True),
    ]
