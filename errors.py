"""Exceptions raised while reading and writing equation manager text."""


class EquationError(ValueError):
    """Base class for every equation parsing or conversion failure."""


class EquationParseError(EquationError):
    def __init__(self, message: str, text: str = '', position: int = 0):
        super().__init__(message)
        self.text = text
        self.position = position

    def __str__(self):
        msg = super().__str__()
        if self.text:
            return f'{msg} (at column {self.position} of {self.text!r})'
        return msg


class UnexpectedToken(EquationParseError):
    """The quoted variable name, the unit or the trailing text is malformed."""


class MissingSeparator(EquationParseError):
    """No '=' between the variable name and its value."""


class MalformedNumeral(EquationParseError):
    """The value does not match the numeral grammar or is not a finite float."""


class UnsupportedUnitError(EquationError):
    def __init__(self, symbol: str):
        super().__init__(f'Not supported {symbol}')
        self.symbol = symbol


class UnitCategoryMismatch(EquationError):
    def __init__(self, from_symbol: str, to_symbol: str):
        super().__init__(f'Cannot convert {from_symbol} to {to_symbol}')
        self.from_symbol = from_symbol
        self.to_symbol = to_symbol
