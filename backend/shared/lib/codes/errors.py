"""Errors raised by the game code codec.

Every error is a ``ValueError`` so callers that only care about "bad input"
can catch one type, while the relay and the UI layer can tell the kinds apart.
"""


class CodeError(ValueError):
    """Base class for game code encoding and decoding failures."""


class InvalidCharacterError(CodeError):
    """A character outside ``0-9A-Z`` was found while decoding."""

    def __init__(self, *, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"invalid base-36 character {char!r} at position {position}")


class NegativeValueError(CodeError):
    """A negative integer was passed to the encoder."""

    def __init__(self, value: int) -> None:
        self.value = value
        super().__init__(f"cannot encode negative value {value}")


class LengthMismatchError(CodeError):
    """A code string does not have the required number of characters."""

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"code must be {expected} characters, got {actual}")


class FieldOutOfRangeError(CodeError):
    """A field value is outside its declared range.

    Attributes:
        field: Name of the offending field (e.g. ``"num_players"``).
        value: The rejected value.
        low: Smallest accepted value.
        high: Largest accepted value.

    """

    def __init__(self, field: str, value: object, low: int, high: int) -> None:
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{field} must be an integer {low}-{high}, got {value!r}")


class CapacityOverflowError(CodeError):
    """A packed value does not fit in the fixed-length code."""

    def __init__(self, value: int, capacity: int) -> None:
        self.value = value
        self.capacity = capacity
        super().__init__(f"packed value {value} exceeds code capacity {capacity}")
