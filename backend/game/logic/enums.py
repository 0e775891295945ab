"""Enums for relay roles and phases."""

from enum import StrEnum


class TurnRole(StrEnum):
    """Allocation behavior for a turn.

    The final holder reconciles unmatched puzzles instead of only adding new ones.
    """

    CREATOR = "creator"
    NON_FINAL = "non_final"
    FINAL = "final"


class RelayPhase(StrEnum):
    CREATED = "created"
    AWAITING_PLAYER = "awaiting_player"
    AWAITING_FINAL_VALIDATION = "awaiting_final_validation"
    VALIDATED = "validated"
    INVALID = "invalid"


TERMINAL_PHASES = frozenset({RelayPhase.VALIDATED, RelayPhase.INVALID})
