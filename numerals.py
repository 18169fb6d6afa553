"""Numeral grammars for values typed into the equation manager.

The lenient grammar is the one the equation codec uses::

    numeral := sign? digit* ('.' digit*)? ([eE] sign? digit+)?

so ``.5``, ``5.``, ``-.5`` and ``1e10`` are all accepted while a bare sign or
a dangling exponent marker is not. Whitespace is never consumed here.

``parse_strict_numeral`` is the stricter literal grammar (mandatory integer
digits, mandatory fraction digits after a point, exponent only after a
fraction). Nothing in the codec calls it.
"""
import math
import re

from errors import MalformedNumeral

NUMERAL_RE = re.compile(r'[+-]?[0-9]*(?:\.[0-9]*)?(?:[eE][+-]?[0-9]+)?')

STRICT_RE = re.compile(r'[0-9]+(?:\.[0-9]+(?:[eE][0-9]+)?)?')


def _to_float(lexeme: str, text: str, pos: int) -> float:
    try:
        value = float(lexeme)
    except ValueError:
        raise MalformedNumeral('Invalid floating point value', text, pos) from None
    if not math.isfinite(value):
        raise MalformedNumeral('Value is not a finite number', text, pos)
    return value


def match_numeral(text: str, pos: int = 0):
    """Match the longest numeral starting at ``pos``.

    Returns ``(value, end)`` where ``end`` is the index just past the lexeme.
    """
    m = NUMERAL_RE.match(text, pos)
    lexeme = m.group(0)
    if not lexeme:
        raise MalformedNumeral('Expected a number', text, pos)
    return _to_float(lexeme, text, pos), m.end()


def parse_numeral(text: str) -> float:
    m = NUMERAL_RE.fullmatch(text)
    if m is None or not text:
        raise MalformedNumeral('Invalid floating point value', text, 0)
    return _to_float(text, text, 0)


def parse_strict_numeral(text: str) -> float:
    # integer, decimal or exponential literal; "1e3" and ".5" are rejected
    if STRICT_RE.fullmatch(text) is None:
        raise MalformedNumeral('Invalid numeric literal', text, 0)
    return _to_float(text, text, 0)
