from dataclasses import dataclass, field
from random import Random

from game.logic.enums import RelayPhase
from game.logic.rng import create_allocation_rng
from game.logic.types import Allocation, GameConfig, SessionState, ValidationResult


@dataclass
class RelaySession:
    """Everything one relay needs, owned by a single caller.

    Lifecycle:
    - Created when the initiator finalizes the config (phase CREATED)
    - start(): creator claims slots, first code issued, holder 1 is up
    - process_turn(): one call per holder, 1 .. num_players - 1
    - validate_final(): verdict on the returned code (terminal)

    ``state`` is only replaced after every check for a step has passed.
    """

    config: GameConfig
    state: SessionState
    rng: Random = field(default_factory=create_allocation_rng)
    phase: RelayPhase = RelayPhase.CREATED
    code: str | None = None
    history: list[Allocation] = field(default_factory=list)
    result: ValidationResult | None = None

    @property
    def holder_id(self) -> int:
        return self.state.current_holder_id

    @property
    def is_final_turn(self) -> bool:
        return self.state.current_holder_id == self.config.final_holder_id
