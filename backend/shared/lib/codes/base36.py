"""Fixed-length base-36 strings for human-transcribable codes.

Alphabet is digits then uppercase letters. Decoding also accepts lowercase ASCII;
encoding always produces uppercase.

No external dependencies.
"""

from shared.lib.codes.errors import InvalidCharacterError, LengthMismatchError, NegativeValueError

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE = len(ALPHABET)

_DIGIT_VALUES = {char: index for index, char in enumerate(ALPHABET)} | {
    char.lower(): index for index, char in enumerate(ALPHABET)
}


def encode_base36(value: int, min_length: int = 1) -> str:
    """Encode a non-negative integer, left-padded with ``"0"`` to min_length."""
    if value < 0:
        raise NegativeValueError(value)

    digits: list[str] = []
    while value:
        value, remainder = divmod(value, BASE)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(min_length, ALPHABET[0])


def decode_base36(text: str) -> int:
    """Decode a base-36 string, accepting lowercase letters."""
    if not text:
        raise LengthMismatchError(expected=1, actual=0)

    acc = 0
    for position, char in enumerate(text):
        digit = _DIGIT_VALUES.get(char)
        if digit is None:
            raise InvalidCharacterError(char=char, position=position)
        acc = acc * BASE + digit
    return acc
