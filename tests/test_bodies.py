"""Tests for the body catalogue."""

from __future__ import annotations

import pytest

from orrery.core.model import BodyKind
from orrery.data.bodies import AU, BODY_DEFINITIONS, get_body, list_bodies


def test_catalogue_order_and_size() -> None:
    """The Sun leads, followed by every planet and dwarf planet."""
    names = list_bodies()
    assert names[0] == "sun"
    assert len(names) == 14
    assert len(set(names)) == len(names)


def test_get_body_is_case_insensitive() -> None:
    """Catalogue lookups ignore case."""
    assert get_body("JUPITER").kind is BodyKind.JUPITER


def test_get_body_unknown() -> None:
    """Unknown names raise KeyError listing the catalogue."""
    with pytest.raises(KeyError, match="neptune"):
        get_body("nibiru")


def test_only_the_sun_is_static() -> None:
    """Every body except the star has orbital elements."""
    for body in BODY_DEFINITIONS:
        assert (body.elements is None) == body.is_star


def test_elements_are_bound_orbits() -> None:
    """All catalogue eccentricities are elliptical."""
    for body in BODY_DEFINITIONS:
        if body.elements is not None:
            assert 0.0 <= body.elements.eccentricity < 1.0
            assert body.elements.period_days > 0.0


def test_earth_reference_orbit() -> None:
    """Earth sits at one AU with a one-year period."""
    earth = get_body("earth")
    assert earth.elements.semi_major_axis == pytest.approx(AU)
    assert earth.elements.period_days == 365
    assert [moon.name for moon in earth.moons] == ["Moon"]


def test_dwarf_planets_flagged() -> None:
    """Ceres, Pluto, Haumea, Makemake and Eris are dwarf planets."""
    dwarfs = {body.name for body in BODY_DEFINITIONS if body.is_dwarf}
    assert dwarfs == {"Ceres", "Pluto", "Haumea", "Makemake", "Eris"}


def test_ringed_bodies() -> None:
    """Saturn carries rings."""
    assert get_body("saturn").has_rings
    assert not get_body("jupiter").has_rings
