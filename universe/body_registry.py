"""
BodyRegistry — the static list of orbiting bodies shown in the orrery.

Scene units, not physical ones: radius and distance are chosen for
legibility, speed is the orbit pivot's angular increment per frame at time
scale 1. Eight planets plus four dwarf planets; the sun is built separately
by the scene builder.

Usage:
    registry = build_registry()
    earth = registry.get("EARTH")
    for body in registry: ...
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Sequence

from core.types import (CelestialBodyDescriptor, SatelliteDescriptor,
                        SurfaceClass, DescriptorError)


class BodyRegistry:
    """Ordered, name-indexed collection of descriptors. Read-only after build."""

    def __init__(self, bodies: Sequence[CelestialBodyDescriptor]):
        self._bodies: tuple[CelestialBodyDescriptor, ...] = tuple(bodies)
        self._by_name: Dict[str, CelestialBodyDescriptor] = {}
        for body in self._bodies:
            key = body.name.upper()
            if key in self._by_name:
                raise DescriptorError(f"duplicate body name {body.name!r}")
            self._by_name[key] = body

    def __iter__(self) -> Iterator[CelestialBodyDescriptor]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __getitem__(self, index: int) -> CelestialBodyDescriptor:
        return self._bodies[index]

    def get(self, name: str) -> Optional[CelestialBodyDescriptor]:
        return self._by_name.get(name.upper())

    @property
    def bodies(self) -> tuple[CelestialBodyDescriptor, ...]:
        return self._bodies

    def satellite_count(self) -> int:
        return sum(len(b.satellites) for b in self._bodies)


def _body(name, r, d, s, c1, c2, kind, desc, moons=(), ring=False):
    return CelestialBodyDescriptor(
        name=name, radius=r, distance=d, speed=s,
        surface_class=SurfaceClass(kind),
        color_a=c1, color_b=c2,
        description=desc,
        has_ring=ring,
        satellites=tuple(SatelliteDescriptor(n, mr, md) for n, mr, md in moons),
    )


def default_bodies() -> List[CelestialBodyDescriptor]:
    """The built-in solar system, innermost planets first, dwarf planets last."""
    return [
        _body("MERCURY", 3,   70,  0.04,   "#aaaaaa", "#555555", "rocky",
              "Fastest planet, sun-scorched surface."),
        _body("VENUS",   5.5, 100, 0.015,  "#eecfa1", "#dbb47e", "rocky",
              "Hottest planet due to greenhouse gases."),
        _body("EARTH",   6,   140, 0.01,   "#0000ff", "#00ff00", "earth",
              "Our home. The only known life.",
              moons=[("Moon", 1.5, 12)]),
        _body("MARS",    4.5, 180, 0.008,  "#c1440e", "#8a2be2", "rocky",
              "The Red Planet. Possible ancient water.",
              moons=[("Phobos", 0.5, 6), ("Deimos", 0.3, 8)]),
        _body("JUPITER", 18,  300, 0.004,  "#d9cdb1", "#a97c50", "gas",
              "King of planets. Massive gas giant.",
              moons=[("Io", 1.8, 25), ("Europa", 1.6, 28),
                     ("Ganymede", 2.2, 34), ("Callisto", 2, 40)]),
        _body("SATURN",  15,  420, 0.003,  "#f4d03f", "#c9a128", "gas",
              "Known for its majestic ring system.",
              moons=[("Titan", 2, 30)], ring=True),
        _body("URANUS",  10,  520, 0.002,  "#73acac", "#ffffff", "gas",
              "Ice giant that spins on its side.",
              moons=[("Titania", 1, 18)]),
        _body("NEPTUNE", 9.5, 600, 0.0018, "#3333ff", "#111199", "gas",
              "Windiest planet. Dark blue world.",
              moons=[("Triton", 1.2, 20)]),
        # Dwarf planets
        _body("CERES",    1.5, 240, 0.007,  "#888888", "#444444", "rocky",
              "Queen of the asteroid belt."),
        _body("PLUTO",    2.5, 700, 0.001,  "#dcb", "#987", "rocky",
              "Dwarf planet with a heart-shaped glacier.",
              moons=[("Charon", 1.2, 8)]),
        _body("ERIS",     2.6, 800, 0.0008, "#fff", "#eee", "rocky",
              "More massive than Pluto."),
        _body("MAKEMAKE", 2.4, 900, 0.0007, "#aa5555", "#552222", "rocky",
              "Reddish dwarf planet."),
    ]


def build_registry(bodies: Optional[Sequence[CelestialBodyDescriptor]] = None) -> BodyRegistry:
    """Validate and index the body list (default: the built-in solar system)."""
    return BodyRegistry(default_bodies() if bodies is None else bodies)
