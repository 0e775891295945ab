"""
Integrity checks for relayed codes.

The same comparison runs at every hop (where a mismatch blocks the turn) and
once more on the code returned to the initiator (where it produces a verdict).
"""

from game.logic.types import GameConfig, ValidationResult
from shared.lib.codes.errors import CodeError
from shared.lib.codes.layout import CodeFields, decode_game_code

INVARIANT_FIELDS = ("num_players", "end_minute", "control_number")


def find_mismatches(
    config: GameConfig,
    fields: CodeFields,
    entered_control_number: int | None = None,
) -> dict[str, tuple[int, int]]:
    """Return field name -> (expected, actual) for every invariant that differs.

    ``entered_control_number`` is the number the holder received over the side
    channel; when given it must match the session's control number too.
    """
    mismatches = {
        name: (getattr(config, name), getattr(fields, name))
        for name in INVARIANT_FIELDS
        if getattr(config, name) != getattr(fields, name)
    }
    if entered_control_number is not None and entered_control_number != config.control_number:
        mismatches["entered_control_number"] = (config.control_number, entered_control_number)
    return mismatches


def validate_final_code(config: GameConfig, code: str, control_number: int) -> ValidationResult:
    """Decode the returned code and check it against the original config.

    Never raises for bad input: decode failures become an invalid verdict.
    """
    try:
        fields = decode_game_code(code)
    except CodeError as e:
        return ValidationResult(valid=False, messages=(f"code could not be decoded: {e}",))

    mismatches = find_mismatches(config, fields, control_number)
    if mismatches:
        messages = tuple(
            f"{name} mismatch: expected {expected}, got {actual}" for name, (expected, actual) in mismatches.items()
        )
        return ValidationResult(valid=False, decoded_fields=fields, messages=messages)

    return ValidationResult(
        valid=True,
        decoded_fields=fields,
        messages=(
            f"code is valid: {fields.num_players} players, ends at minute {fields.end_minute}",
            f"puzzles {fields.puzzle_mask:08b}, solutions {fields.solution_mask:08b}, "
            f"last holder {fields.current_player_id}",
        ),
    )
