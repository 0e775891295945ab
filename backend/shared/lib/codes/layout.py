"""Bit-field layout of the 6-character game code.

A game code packs six fixed-width fields into one integer, then writes that
integer as a 6-character base-36 string (see ``shared.lib.codes.base36``).

No external dependencies.

Integer layout
--------------
Fields are packed low-to-high in this order:

    Field               Width   Offset   Stored value        Range
    -----               -----   ------   ------------        -----
    player_count          3        0     num_players - 2     0-6  (2-8 players)
    end_minute            6        3     end_minute          0-59
    puzzle_mask           8        9     raw mask            0-255
    solution_mask         8       17     raw mask            0-255
    current_player_id     3       25     raw id              0-7
    control_number        2       28     raw value           0-3

Total: 30 bits. The largest packable value is 2**30 - 1 = 1073741823, well
below 36**6 - 1 = 2176782335, so every valid field combination fits.
"""

from dataclasses import dataclass

from shared.lib.codes.base36 import decode_base36, encode_base36
from shared.lib.codes.errors import CapacityOverflowError, FieldOutOfRangeError, LengthMismatchError

CODE_LENGTH = 6
CODE_CAPACITY = 36**CODE_LENGTH - 1

MIN_PLAYERS = 2
MAX_PLAYERS = 8
MAX_MINUTE = 59
NUM_SLOTS = 8
SLOT_MASK_MAX = (1 << NUM_SLOTS) - 1
MAX_CONTROL_NUMBER = 3


@dataclass(frozen=True)
class FieldSpec:
    """One field of the packed layout.

    ``low``/``high`` bound the *semantic* value (e.g. 2-8 players); ``bias``
    is subtracted before storing, so the stored value is ``value - bias``.
    """

    name: str
    width: int
    low: int
    high: int
    bias: int = 0

    @property
    def bit_mask(self) -> int:
        return (1 << self.width) - 1


@dataclass(frozen=True)
class CodeFields:
    """Decoded contents of one game code."""

    num_players: int
    end_minute: int
    puzzle_mask: int
    solution_mask: int
    current_player_id: int
    control_number: int


LAYOUT: tuple[FieldSpec, ...] = (
    FieldSpec("num_players", 3, MIN_PLAYERS, MAX_PLAYERS, bias=MIN_PLAYERS),
    FieldSpec("end_minute", 6, 0, MAX_MINUTE),
    FieldSpec("puzzle_mask", 8, 0, SLOT_MASK_MAX),
    FieldSpec("solution_mask", 8, 0, SLOT_MASK_MAX),
    FieldSpec("current_player_id", 3, 0, MAX_PLAYERS - 1),
    FieldSpec("control_number", 2, 0, MAX_CONTROL_NUMBER),
)

TOTAL_BITS = sum(spec.width for spec in LAYOUT)


def _is_strict_int(value: object) -> bool:
    """Return True if value is an int but not a bool."""
    return isinstance(value, int) and not isinstance(value, bool)


def check_field(spec: FieldSpec, value: object) -> int:
    """Validate a semantic field value against its range and return it."""
    if not _is_strict_int(value) or not spec.low <= value <= spec.high:
        raise FieldOutOfRangeError(spec.name, value, spec.low, spec.high)
    return value


def pack(fields: CodeFields) -> int:
    """Pack decoded fields into a single integer.

    All fields are validated before any bits are combined.
    """
    stored = [check_field(spec, getattr(fields, spec.name)) - spec.bias for spec in LAYOUT]

    value = 0
    offset = 0
    for spec, raw in zip(LAYOUT, stored, strict=True):
        value |= raw << offset
        offset += spec.width

    if value > CODE_CAPACITY:
        raise CapacityOverflowError(value, CODE_CAPACITY)
    return value


def unpack(value: int) -> CodeFields:
    """Recover every field from a packed integer (exact inverse of ``pack``)."""
    if not _is_strict_int(value) or not 0 <= value <= CODE_CAPACITY:
        raise CapacityOverflowError(value, CODE_CAPACITY)
    if value >> TOTAL_BITS:
        # Bits above the layout can only come from a forged or mistyped code.
        raise CapacityOverflowError(value, (1 << TOTAL_BITS) - 1)

    decoded: dict[str, int] = {}
    offset = 0
    for spec in LAYOUT:
        decoded[spec.name] = check_field(spec, ((value >> offset) & spec.bit_mask) + spec.bias)
        offset += spec.width
    return CodeFields(**decoded)


def encode_game_code(fields: CodeFields) -> str:
    """Encode fields as a 6-character uppercase base-36 code."""
    return encode_base36(pack(fields), CODE_LENGTH)


def decode_game_code(code: str) -> CodeFields:
    """Decode a 6-character code (case-insensitive, surrounding spaces ignored)."""
    text = code.strip()
    if len(text) != CODE_LENGTH:
        raise LengthMismatchError(expected=CODE_LENGTH, actual=len(text))
    return unpack(decode_base36(text))
