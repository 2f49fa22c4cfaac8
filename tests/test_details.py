"""Detail panel formatting"""

import pytest

from core.types import SatelliteDescriptor, SurfaceClass
from ui.details import format_body_details, NO_MOONS
from universe.body_registry import build_registry
from conftest import make_body


@pytest.fixture(scope="module")
def registry():
    return build_registry()


def test_earth(registry):
    d = format_body_details(registry.get("EARTH"))
    assert d.name == "EARTH"
    assert d.kind == "EARTH PLANET"
    assert d.temperature == "CALCULATING..."
    assert d.diameter == "12,000 km"
    assert d.distance == "140 Million Km"
    assert d.speed == "10.0 km/s"
    assert d.description == "Our home. The only known life."
    assert d.moons == ["Moon"]


def test_gas_giant(registry):
    d = format_body_details(registry.get("JUPITER"))
    assert d.kind == "GAS PLANET"
    assert d.diameter == "36,000 km"
    assert d.speed == "4.0 km/s"
    assert d.moons_label == "Io, Europa, Ganymede, Callisto"


def test_fractional_values(registry):
    d = format_body_details(registry.get("NEPTUNE"))
    assert d.diameter == "19,000 km"
    assert d.speed == "1.8 km/s"


def test_no_moons(registry):
    d = format_body_details(registry.get("VENUS"))
    assert d.moons == []
    assert d.moons_label == NO_MOONS == "No Moons Detected"
    assert d.kind == "ROCKY PLANET"


def test_fractional_distance():
    d = format_body_details(make_body(distance=1234.5, radius=0.25))
    assert d.distance == "1,234.5 Million Km"
    assert d.diameter == "500 km"


def test_sun_class():
    d = format_body_details(make_body(surface_class=SurfaceClass.SUN))
    assert d.kind == "SUN PLANET"
