"""Tests for the unit registry."""
from __future__ import annotations

import math

import pytest

from errors import UnitCategoryMismatch, UnsupportedUnitError
from units import UNITS, Category, convert, resolve, supported_symbols, symbols_for


@pytest.mark.parametrize(
    "symbol,value,metres",
    [
        ("m", 2.0, 2.0),
        ("cm", 5.0, 0.05),
        ("mm", 5.0, 0.005),
        ("um", 3.0, 3e-6),
        ("nm", 4.0, 4e-9),
        ("in", 1.0, 0.0254),
        ("ft", 1.0, 0.3048),
        ("mil", 1000.0, 0.0254),
        ("uin", 1e6, 0.0254),
    ],
)
def test_length_units_convert_to_metres(symbol: str, value: float, metres: float) -> None:
    unit = resolve(symbol)
    assert unit.category is Category.LENGTH
    assert math.isclose(unit.to_si(value), metres, rel_tol=1e-12)


def test_angle_units_convert_to_radians() -> None:
    assert math.isclose(resolve("deg").to_si(180.0), math.pi)
    assert math.isclose(resolve("deg").to_si(90.0), 1.5707963267948966)
    assert resolve("rad").to_si(1.25) == 1.25
    assert resolve("deg").category is Category.ANGLE


@pytest.mark.parametrize("symbol", sorted(UNITS))
@pytest.mark.parametrize("value", [0.0, 1.0, -1.0, 1e6, 1e-6])
def test_from_si_inverts_to_si(symbol: str, value: float) -> None:
    unit = resolve(symbol)
    assert math.isclose(unit.from_si(unit.to_si(value)), value, rel_tol=1e-9)


@pytest.mark.parametrize("symbol", ["undefined", "xyz", "MM", "", "inch"])
def test_unknown_symbols_are_unsupported(symbol: str) -> None:
    with pytest.raises(UnsupportedUnitError) as excinfo:
        resolve(symbol)
    assert excinfo.value.symbol == symbol


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        UNITS["yd"] = UNITS["ft"]  # type: ignore[index]
    assert "yd" not in supported_symbols()


def test_symbols_by_category() -> None:
    assert symbols_for(Category.ANGLE) == ("deg", "rad")
    assert len(symbols_for(Category.LENGTH)) == 9
    assert len(supported_symbols()) == 11


def test_convert_within_category() -> None:
    assert math.isclose(convert(1.0, "ft", "in"), 12.0)
    assert math.isclose(convert(90.0, "deg", "rad"), math.pi / 2)


def test_convert_across_categories_fails() -> None:
    with pytest.raises(UnitCategoryMismatch):
        convert(1.0, "mm", "deg")
