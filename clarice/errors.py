from typing import Optional
from clarice.types import ErrorVal


class ClariceError(Exception):
    """Exception type used to propagate Clarice runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name


class LexError(Exception):
    """Raised by the lexer on an unterminated literal or an invalid character."""
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


class ParseError(Exception):
    """Raised by the parser on the first structural mismatch."""
    def __init__(self, expected: str, found: Optional[str], line: int, column: int):
        found_text = found if found is not None else 'end of input'
        super().__init__(f"expected {expected} at {line}:{column}, got {found_text}")
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column


class BreakSignal:
    """Control signal returned (not raised) by `break` until a loop absorbs it."""
    def __repr__(self) -> str:
        return 'BreakSignal'


BREAK = BreakSignal()


def name_error(message: str) -> ClariceError:
    return ClariceError(ErrorVal('NameError', message))


def type_error(message: str) -> ClariceError:
    return ClariceError(ErrorVal('RuntimeTypeError', message))
