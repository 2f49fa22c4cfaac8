"""Built-in body list"""

import pytest

from core.types import SurfaceClass, DescriptorError
from universe.body_registry import BodyRegistry, build_registry, default_bodies
from conftest import make_body


@pytest.fixture(scope="module")
def registry():
    return build_registry()


def test_twelve_bodies_in_order(registry):
    names = [b.name for b in registry]
    assert names == ["MERCURY", "VENUS", "EARTH", "MARS", "JUPITER", "SATURN",
                     "URANUS", "NEPTUNE", "CERES", "PLUTO", "ERIS", "MAKEMAKE"]


def test_only_saturn_has_ring(registry):
    assert [b.name for b in registry if b.has_ring] == ["SATURN"]


def test_surface_classes(registry):
    assert registry.get("EARTH").surface_class is SurfaceClass.WATER_WORLD
    assert {b.name for b in registry if b.surface_class is SurfaceClass.GAS} == \
        {"JUPITER", "SATURN", "URANUS", "NEPTUNE"}


def test_lookup_is_case_insensitive(registry):
    assert registry.get("jupiter") is registry.get("JUPITER")
    assert registry.get("vulcan") is None


def test_satellites(registry):
    assert registry.get("JUPITER").satellite_names == ["Io", "Europa", "Ganymede", "Callisto"]
    assert registry.get("MARS").satellite_names == ["Phobos", "Deimos"]
    assert registry.get("VENUS").satellites == ()
    assert registry.satellite_count() == 11


def test_earth_values(registry):
    earth = registry.get("EARTH")
    assert (earth.radius, earth.distance, earth.speed) == (6, 140, 0.01)
    assert earth.satellites[0].distance == 12


def test_duplicate_names_rejected():
    with pytest.raises(DescriptorError):
        BodyRegistry([make_body(name="A"), make_body(name="a")])


def test_custom_registry():
    registry = build_registry([make_body(name="SOLO")])
    assert len(registry) == 1
    assert registry[0].name == "SOLO"


def test_default_bodies_returns_fresh_list():
    assert default_bodies() is not default_bodies()
