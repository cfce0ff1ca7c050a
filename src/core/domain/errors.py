"""Error taxonomy.

Two families:
- `DerivationError` and its subclasses describe why a password could not be
  derived (matrix shape/content, specification format/digits/ranges).
- Glue errors (`ConfigError`, `FetchError`, `DialError`) describe failures of
  the collaborators around the derivation.

None of them subclass `ValueError`: pydantic wraps `ValueError` raised inside
validators into a `ValidationError`, and we want callers to see the precise kind.
"""

from __future__ import annotations


class WvpaError(Exception):
    """Base class for every error the application reports to the user."""


class DerivationError(WvpaError):
    """The matrix or the password specification is malformed."""


class ShapeError(DerivationError):
    def __init__(self, *, what: str, expected: int, actual: int, table: int | None = None) -> None:
        self.what = what
        self.expected = expected
        self.actual = actual
        self.table = table
        where = f" in table {table}" if table is not None else ""
        super().__init__(f"Expected exactly {expected} {what}{where}, found {actual}")


class ParseError(DerivationError):
    def __init__(self, *, table: int, cell: int, text: str) -> None:
        self.table = table
        self.cell = cell
        self.text = text
        super().__init__(f"Matrix cell {cell} of table {table} is not a single decimal digit: {text!r}")


class FormatError(DerivationError):
    def __init__(self, *, text_length: int, required: int = 16) -> None:
        self.text_length = text_length
        self.required = required
        super().__init__(
            f"Invalid format: a password specification needs at least {required} characters, got {text_length}"
        )


class DigitError(DerivationError):
    def __init__(self, *, char: str, radix: int, index: int) -> None:
        self.char = char
        self.radix = radix
        self.index = index
        super().__init__(f"Failed to parse character {char!r} base {radix} (position {index})")


class RangeError(DerivationError):
    def __init__(self, *, field: str, value: int, upper: int) -> None:
        self.field = field
        self.value = value
        self.upper = upper
        super().__init__(f"{field} {value} out of range [0, {upper}]")


class ConfigError(WvpaError):
    """Config file missing, unreadable or invalid."""


class FetchError(WvpaError):
    """The matrix page could not be retrieved."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class DialError(WvpaError):
    """The OS dial command could not run or reported failure."""

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)
