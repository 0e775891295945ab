"""Human-readable share text: ``"<6-char code> (Control: <0-3>)"``.

The initiator hands this line to the first player. Later holders usually
receive only the code, so the control part is optional when parsing.

No external dependencies.
"""

import re

from shared.lib.codes.errors import FieldOutOfRangeError
from shared.lib.codes.layout import MAX_CONTROL_NUMBER, decode_game_code

_CONTROL_RE = re.compile(r"^\(\s*control\s*:\s*(?P<value>[^)]*?)\s*\)$", re.IGNORECASE)


def format_share_text(code: str, control_number: int) -> str:
    """Format a code and its control number for the human channel."""
    return f"{code.upper()} (Control: {control_number})"


def parse_share_text(text: str) -> tuple[str, int | None]:
    """Split pasted share text into (canonical code, control number or None).

    The code part is fully decoded so malformed input fails here with the
    usual codec errors rather than later in the relay.
    """
    code_part, _, rest = text.strip().partition(" ")
    decode_game_code(code_part)
    code = code_part.upper()

    rest = rest.strip()
    if not rest:
        return code, None

    match = _CONTROL_RE.match(rest)
    if match is None:
        raise FieldOutOfRangeError("control_number", rest, 0, MAX_CONTROL_NUMBER)
    value = match.group("value")
    if not (value.isascii() and value.isdigit()) or int(value) > MAX_CONTROL_NUMBER:
        raise FieldOutOfRangeError("control_number", value, 0, MAX_CONTROL_NUMBER)
    return code, int(value)
