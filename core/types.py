from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class DescriptorError(ValueError):
    """Raised at startup when a body descriptor is malformed."""


class SurfaceClass(Enum):
    SUN = "sun"
    WATER_WORLD = "earth"
    GAS = "gas"
    ROCKY = "rocky"

    @classmethod
    def parse(cls, text: str) -> "SurfaceClass":
        """Map a class name to a member; unknown names fall back to ROCKY."""
        if isinstance(text, cls):
            return text
        try:
            return cls(str(text).lower())
        except ValueError:
            return cls.ROCKY


_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(text: str) -> Tuple[int, int, int]:
    """'#rgb' or '#rrggbb' -> (r, g, b)"""
    m = _HEX_RE.match(text or "")
    if not m:
        raise DescriptorError(f"invalid color {text!r}")
    h = m.group(1)
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _require_positive(owner: str, label: str, value: float) -> None:
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise DescriptorError(f"{owner}: {label} must be > 0 (got {value!r})")


@dataclass(frozen=True)
class SatelliteDescriptor:
    name: str
    radius: float
    distance: float

    def __post_init__(self):
        _require_positive(self.name, "radius", self.radius)
        _require_positive(self.name, "distance", self.distance)


@dataclass(frozen=True)
class CelestialBodyDescriptor:
    """
    Immutable description of one orbiting body.

    radius/distance are scene units; speed is the orbit pivot's angular
    increment per frame at time scale 1. Validation happens here so that
    malformed data fails at startup, never mid-frame.
    """
    name: str
    radius: float
    distance: float
    speed: float
    surface_class: SurfaceClass
    color_a: str
    color_b: str
    description: str = ""
    has_ring: bool = False
    satellites: Tuple[SatelliteDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise DescriptorError("body name must not be empty")
        _require_positive(self.name, "radius", self.radius)
        _require_positive(self.name, "distance", self.distance)
        if not isinstance(self.speed, (int, float)) or not math.isfinite(self.speed):
            raise DescriptorError(f"{self.name}: speed must be finite (got {self.speed!r})")
        if not isinstance(self.surface_class, SurfaceClass):
            raise DescriptorError(
                f"{self.name}: unknown surface class {self.surface_class!r}")
        parse_hex_color(self.color_a)
        parse_hex_color(self.color_b)
        # Lists are accepted for convenience but stored as a tuple
        object.__setattr__(self, "satellites", tuple(self.satellites))
        for sat in self.satellites:
            if not isinstance(sat, SatelliteDescriptor):
                raise DescriptorError(f"{self.name}: invalid satellite {sat!r}")

    @property
    def satellite_names(self) -> list[str]:
        return [s.name for s in self.satellites]


@dataclass(frozen=True)
class InteractionRecord:
    """Links a pickable mesh node to the body it was built from."""
    node_id: int
    descriptor: CelestialBodyDescriptor

    @property
    def name(self) -> str:
        return self.descriptor.name
