"""Units understood by the SolidWorks equation manager.

Every unit belongs to a category and converts to that category's SI base
unit: metres for lengths, radians for angles. The table is built once at
import time and exposed read-only.
"""
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable

from errors import UnitCategoryMismatch, UnsupportedUnitError

METRES_PER_INCH = 0.0254


class Category(Enum):
    LENGTH = 'Length'
    ANGLE = 'Angle'


SI_UNITS = {
    Category.LENGTH: 'm',
    Category.ANGLE: 'rad',
}


@dataclass(frozen=True)
class UnitDescriptor:
    symbol: str
    category: Category
    to_si: Callable[[float], float]
    from_si: Callable[[float], float]


def _linear(symbol, category, factor):
    return UnitDescriptor(symbol, category, lambda x: x * factor, lambda x: x / factor)


UNITS = MappingProxyType({u.symbol: u for u in (
    _linear('m', Category.LENGTH, 1.0),
    _linear('cm', Category.LENGTH, 0.01),
    _linear('mm', Category.LENGTH, 0.001),
    _linear('um', Category.LENGTH, 1e-6),
    _linear('nm', Category.LENGTH, 1e-9),
    _linear('in', Category.LENGTH, METRES_PER_INCH),
    _linear('ft', Category.LENGTH, 0.3048),
    _linear('mil', Category.LENGTH, METRES_PER_INCH * 1e-3),  # thousandth of an inch
    _linear('uin', Category.LENGTH, METRES_PER_INCH * 1e-6),  # micro inch
    UnitDescriptor('deg', Category.ANGLE,
                   lambda x: x * math.pi / 180, lambda x: x * 180 / math.pi),
    _linear('rad', Category.ANGLE, 1.0),
)})


def resolve(symbol: str) -> UnitDescriptor:
    try:
        return UNITS[symbol]
    except (KeyError, TypeError):
        raise UnsupportedUnitError(symbol) from None


def supported_symbols():
    return tuple(UNITS)


def symbols_for(category: Category):
    return tuple(s for s, u in UNITS.items() if u.category is category)


def convert(value: float, from_symbol: str, to_symbol: str) -> float:
    """Convert a magnitude between two units of the same category."""
    src = resolve(from_symbol)
    dst = resolve(to_symbol)
    if src.category is not dst.category:
        raise UnitCategoryMismatch(from_symbol, to_symbol)
    return dst.from_si(src.to_si(value))
