"""
Data structures shared by the allocator, the relay and the final validator.

GameConfig is fixed at creation; SessionState is the only mutable piece and is
owned by the relay. ValidationResult is a pydantic model so the UI layer can
``model_dump()`` it directly.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from game.logic.enums import TurnRole
from shared.lib.codes.layout import LAYOUT, CodeFields, check_field

_SPECS = {spec.name: spec for spec in LAYOUT}


@dataclass(frozen=True)
class GameConfig:
    """Session parameters chosen by the initiator.

    Raises FieldOutOfRangeError on construction for any out-of-range value.
    """

    num_players: int
    end_minute: int
    control_number: int
    initial_puzzle_mask: int = 0
    initial_solution_mask: int = 0

    def __post_init__(self) -> None:
        check_field(_SPECS["num_players"], self.num_players)
        check_field(_SPECS["end_minute"], self.end_minute)
        check_field(_SPECS["control_number"], self.control_number)
        check_field(_SPECS["puzzle_mask"], self.initial_puzzle_mask)
        check_field(_SPECS["solution_mask"], self.initial_solution_mask)

    @property
    def final_holder_id(self) -> int:
        return self.num_players - 1

    def code_fields(self, *, puzzle_mask: int, solution_mask: int, current_player_id: int) -> CodeFields:
        """Build code fields carrying this config's invariant values."""
        return CodeFields(
            num_players=self.num_players,
            end_minute=self.end_minute,
            puzzle_mask=puzzle_mask,
            solution_mask=solution_mask,
            current_player_id=current_player_id,
            control_number=self.control_number,
        )


@dataclass
class SessionState:
    """Live relay state. Masks only ever gain bits."""

    puzzle_mask: int
    solution_mask: int
    current_holder_id: int = 0


@dataclass(frozen=True)
class Allocation:
    """Slot indices claimed in a single turn."""

    role: TurnRole
    puzzles: frozenset[int]
    solutions: frozenset[int]

    @property
    def puzzle_mask(self) -> int:
        return sum(1 << index for index in self.puzzles)

    @property
    def solution_mask(self) -> int:
        return sum(1 << index for index in self.solutions)


class ValidationResult(BaseModel):
    """Verdict for the code returned to the initiator."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    decoded_fields: CodeFields | None = None
    messages: tuple[str, ...] = ()
