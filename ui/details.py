"""
Detail panel text for a selected body.

Display units are cosmetic: diameter = radius × 2 × 1000 km,
distance = scene units as "Million Km", speed = speed × 1000 km/s.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from core.types import CelestialBodyDescriptor

NO_MOONS = "No Moons Detected"
TEMPERATURE_PLACEHOLDER = "CALCULATING..."


@dataclass(frozen=True)
class BodyDetails:
    name: str
    kind: str
    temperature: str
    diameter: str
    distance: str
    speed: str
    description: str
    moons: List[str]

    @property
    def moons_label(self) -> str:
        return ", ".join(self.moons) if self.moons else NO_MOONS


def _number(value: float) -> str:
    """Thousands separators, no trailing .0 for whole numbers."""
    rounded = round(value, 3)
    if float(rounded).is_integer():
        return f"{int(rounded):,}"
    return f"{rounded:,}"


def format_body_details(body: CelestialBodyDescriptor) -> BodyDetails:
    return BodyDetails(
        name=body.name,
        kind=f"{body.surface_class.value.upper()} PLANET",
        temperature=TEMPERATURE_PLACEHOLDER,
        diameter=f"{_number(body.radius * 2 * 1000)} km",
        distance=f"{_number(body.distance)} Million Km",
        speed=f"{body.speed * 1000:.1f} km/s",
        description=body.description,
        moons=body.satellite_names,
    )
