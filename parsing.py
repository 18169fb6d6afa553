import math
import re
from dataclasses import dataclass

from errors import MalformedNumeral, MissingSeparator, UnexpectedToken
from numerals import match_numeral
from units import UnitDescriptor, resolve

WS_RE = re.compile(r'[ \t]*')
NAME_RE = re.compile(r'[A-Za-z][A-Za-z0-9]*')
UNIT_RE = re.compile(r'[A-Za-z]+')


@dataclass(frozen=True)
class Equation:
    """A global variable with its value normalized to SI.

    ``value_si`` is in metres for lengths and radians for angles, whatever
    unit the value was typed in. ``unit`` is only used for display.
    """
    name: str
    value_si: float
    unit: str

    def __post_init__(self):
        resolve(self.unit)
        value = float(self.value_si)
        if not math.isfinite(value):
            raise MalformedNumeral(f'Value of "{self.name}" is not a finite number')
        object.__setattr__(self, 'value_si', value)

    @classmethod
    def from_display(cls, name: str, magnitude: float, unit: str) -> 'Equation':
        return cls(name, resolve(unit).to_si(magnitude), unit)

    @property
    def descriptor(self) -> UnitDescriptor:
        return resolve(self.unit)

    @property
    def category(self):
        return self.descriptor.category

    @property
    def magnitude(self) -> float:
        return self.descriptor.from_si(self.value_si)


def _skip_ws(text: str, pos: int) -> int:
    return WS_RE.match(text, pos).end()


def parse_equation(text: str) -> Equation:
    """Parse ``"name" = numeral unit`` into an :class:`Equation`."""
    pos = _skip_ws(text, 0)
    if not text.startswith('"', pos):
        raise UnexpectedToken('Expected \'"\' before the variable name', text, pos)
    m = NAME_RE.match(text, pos + 1)
    if m is None:
        raise UnexpectedToken('Expected a variable name', text, pos + 1)
    name = m.group(0)
    pos = m.end()
    if not text.startswith('"', pos):
        raise UnexpectedToken('Expected \'"\' after the variable name', text, pos)

    pos = _skip_ws(text, pos + 1)
    if not text.startswith('=', pos):
        raise MissingSeparator("Expected '='", text, pos)

    pos = _skip_ws(text, pos + 1)
    magnitude, pos = match_numeral(text, pos)

    pos = _skip_ws(text, pos)
    m = UNIT_RE.match(text, pos)
    if m is None:
        raise UnexpectedToken('Expected a unit', text, pos)
    unit = m.group(0)
    pos = _skip_ws(text, m.end())
    if pos != len(text):
        raise UnexpectedToken('Unexpected text after the unit', text, pos)

    return Equation.from_display(name, magnitude, unit)


def format_number(value) -> str:
    # shortest round-trip text; integral floats drop the ".0"
    if isinstance(value, float):
        text = repr(value)
        if text.endswith('.0'):
            text = text[:-2]
        return text
    return str(value)


def format_equation(eq: Equation) -> str:
    return f'"{eq.name}"={format_number(eq.magnitude)}{eq.unit}'


def split_equation_text(text: str):
    """Split the contents of an equations file into one slot per equation."""
    slots = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        slots.append(line)
    return slots


def join_equation_text(slots) -> str:
    return '\n'.join(slots) + '\n'
