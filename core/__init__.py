"""
Core module: shared types, configuration, time scale and events.

Main exports:
    CelestialBodyDescriptor / SatelliteDescriptor  validated body records
    SurfaceClass           texture family enum (unknown names → ROCKY)
    InteractionRecord      pickable mesh → descriptor link
    SimulationConfig       tunable animation / tour rates
    TimeController         process-wide time scale
    SimulationClock        "Year N | Day D" readout
    EventBus, OrreryEvent  core ↔ UI messaging
"""
from .types import (
    CelestialBodyDescriptor,
    SatelliteDescriptor,
    SurfaceClass,
    InteractionRecord,
    DescriptorError,
    parse_hex_color,
)
from .config import SimulationConfig, DEFAULT_CONFIG
from .time_controller import TimeController, SimulationClock
from .events import EventBus, OrreryEvent

__all__ = [
    "CelestialBodyDescriptor",
    "SatelliteDescriptor",
    "SurfaceClass",
    "InteractionRecord",
    "DescriptorError",
    "parse_hex_color",
    "SimulationConfig",
    "DEFAULT_CONFIG",
    "TimeController",
    "SimulationClock",
    "EventBus",
    "OrreryEvent",
]
