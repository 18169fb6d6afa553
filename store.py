"""Lookup and in-place update of global variables in the equation manager.

The store never owns the equations. It works through a slot collection
(anything with ``count``, ``get_text`` and ``set_text``) and only reads or
rewrites the raw text of those slots.

``set_one`` rewrites a value with a plain substring replace over the whole
slot text, not a positional splice. When the old value text also appears
elsewhere in the slot, for example inside the name in ``"w2in" = 2in``,
those occurrences are rewritten as well.
"""
import logging
import math
import re
from typing import Protocol

from errors import MalformedNumeral, MissingSeparator
from numerals import match_numeral
from parsing import format_number, parse_equation

logger = logging.getLogger('swequations.' + __name__)

VALUE_PREFIX_RE = re.compile(r'"?[ \t]*')


class SlotCollection(Protocol):
    def count(self) -> int: ...

    def get_text(self, index: int) -> str: ...

    def set_text(self, index: int, text: str) -> None: ...


class ListSlots:
    """In-memory slot collection."""

    def __init__(self, slots=None):
        self.slots = list(slots or [])

    def count(self):
        return len(self.slots)

    def get_text(self, index):
        return self.slots[index]

    def set_text(self, index, text):
        self.slots[index] = text


def _split(text: str, index: int):
    parts = text.split('=')
    if len(parts) < 2:
        raise MissingSeparator(f"Equation {index} has no '='", text, len(text))
    return parts


def _name_of(segment: str) -> str:
    return segment.strip().strip('"').strip()


class EquationStore:
    def __init__(self, slots: SlotCollection):
        self.slots = slots

    def _texts(self):
        for i in range(self.slots.count()):
            yield i, self.slots.get_text(i)

    def get_all(self):
        """Map every variable name to the raw text on the right of its '='."""
        values = {}
        for i, text in self._texts():
            parts = _split(text, i)
            values[_name_of(parts[0])] = parts[1].strip()
        return values

    def get_one(self, name: str):
        value = self.get_all().get(name)
        logger.debug('Lookup %s -> %r', name, value)
        return value

    def names(self):
        return list(self.get_all())

    def set_one(self, name: str, new_value) -> bool:
        """Replace the number in the first equation named ``name``.

        The unit suffix is kept. Returns False, without writing anything,
        when no equation has that name.
        """
        if isinstance(new_value, float) and not math.isfinite(new_value):
            raise MalformedNumeral(f'Value for "{name}" is not a finite number')
        for i, text in self._texts():
            parts = _split(text, i)
            if _name_of(parts[0]) != name:
                continue
            old = parts[1].strip()
            if not old:
                raise MalformedNumeral(f'Equation "{name}" has no value', text, len(text))
            # the number may sit inside quotes, as in "D1" = "5" mm
            start = VALUE_PREFIX_RE.match(old).end()
            _, end = match_numeral(old, start)
            new = old[:start] + format_number(new_value) + old[end:]
            updated = text.replace(old, new)
            self.slots.set_text(i, updated)
            logger.info('Set %s: %r -> %r', name, text, updated)
            return True
        logger.debug('No equation named %s', name)
        return False

    def get_equation(self, name: str):
        """Parse the first equation named ``name`` into SI units."""
        for i, text in self._texts():
            if _name_of(_split(text, i)[0]) == name:
                return parse_equation(text)
        return None

    def equations(self):
        return [parse_equation(text) for _, text in self._texts()]
