"""
Turn relay: hand the code from holder to holder.

Each step is one synchronous call on a RelaySession. Decoding and the
integrity check run before anything is written, so a failed step leaves the
session untouched and the same holder can retry with corrected input.

Phases:
    CREATED -> (start_relay) -> AWAITING_PLAYER, holder 1
    AWAITING_PLAYER, holder k -> (process_turn) -> AWAITING_PLAYER, holder k + 1
    AWAITING_PLAYER, holder n - 1 -> (process_turn) -> AWAITING_FINAL_VALIDATION
    AWAITING_FINAL_VALIDATION -> (validate_final) -> VALIDATED | INVALID
"""

from random import Random

import structlog

from game.logic.enums import TERMINAL_PHASES, RelayPhase, TurnRole
from game.logic.exceptions import IntegrityViolationError, InvalidPhaseError
from game.logic.masks import allocate, make_allocation, mask_to_indices, merge_allocation, turn_role
from game.logic.rng import create_allocation_rng
from game.logic.types import Allocation, GameConfig, SessionState, ValidationResult
from game.logic.validator import find_mismatches, validate_final_code
from game.session.models import RelaySession
from shared.lib.codes.layout import CodeFields, decode_game_code, encode_game_code
from shared.lib.codes.share import format_share_text

logger = structlog.get_logger()


def create_session(config: GameConfig, rng: Random | None = None) -> RelaySession:
    """Create a relay for a finalized config. No code exists until start_relay()."""
    session = RelaySession(
        config=config,
        state=SessionState(
            puzzle_mask=config.initial_puzzle_mask,
            solution_mask=config.initial_solution_mask,
        ),
        rng=rng if rng is not None else create_allocation_rng(),
    )
    # control_number travels on a side channel and is never logged
    logger.info("relay created", num_players=config.num_players, end_minute=config.end_minute)
    return session


def _require_phase(session: RelaySession, operation: str, phase: RelayPhase) -> None:
    if session.phase is not phase:
        raise InvalidPhaseError(operation=operation, phase=session.phase.value)


def _accept_allocation(
    role: TurnRole,
    allocation: Allocation | None,
    session: RelaySession,
    basis: tuple[int, int],
) -> Allocation:
    if allocation is None:
        return allocate(role, *basis, session.rng)
    return make_allocation(role, allocation.puzzles, allocation.solutions)


def _creator_allocation(session: RelaySession, allocation: Allocation | None) -> Allocation:
    config = session.config
    if allocation is None and (config.initial_puzzle_mask or config.initial_solution_mask):
        return Allocation(
            role=TurnRole.CREATOR,
            puzzles=mask_to_indices(config.initial_puzzle_mask),
            solutions=mask_to_indices(config.initial_solution_mask),
        )
    basis = (session.state.puzzle_mask, session.state.solution_mask)
    return _accept_allocation(TurnRole.CREATOR, allocation, session, basis)


def start_relay(session: RelaySession, allocation: Allocation | None = None) -> str:
    """
    Creator turn: claim the opening slots and issue the first code.

    Initial masks on the config are the creator's picks and are encoded
    unchanged. The allocator only picks when the config carries none.
    An explicit ``allocation`` is added on top of the initial masks.
    """
    _require_phase(session, "start relay", RelayPhase.CREATED)
    config = session.config
    state = session.state

    basis = (state.puzzle_mask, state.solution_mask)
    allocation = _creator_allocation(session, allocation)
    puzzle_mask, solution_mask = merge_allocation(*basis, allocation)
    code = encode_game_code(
        config.code_fields(puzzle_mask=puzzle_mask, solution_mask=solution_mask, current_player_id=0),
    )

    session.state = SessionState(puzzle_mask=puzzle_mask, solution_mask=solution_mask, current_holder_id=1)
    session.code = code
    session.phase = RelayPhase.AWAITING_PLAYER
    session.history.append(allocation)

    logger.info("relay started", puzzles=allocation.puzzles, solutions=allocation.solutions, code=code)
    return code


def share_text(session: RelaySession) -> str:
    """Share line for the current code, including the control number."""
    if session.code is None:
        raise InvalidPhaseError(operation="share code", phase=session.phase.value)
    return format_share_text(session.code, session.config.control_number)


def _decode_and_check(session: RelaySession, code: str, control_number: int | None) -> CodeFields:
    fields = decode_game_code(code)
    mismatches = find_mismatches(session.config, fields, control_number)
    if mismatches:
        logger.warning("integrity violation", fields=sorted(mismatches))
        raise IntegrityViolationError(mismatches)
    return fields


def _claimed_basis(session: RelaySession, fields: CodeFields) -> tuple[int, int]:
    """Masks already claimed: the decoded ones plus whatever this session has seen."""
    state = session.state
    missing_puzzles = state.puzzle_mask & ~fields.puzzle_mask
    missing_solutions = state.solution_mask & ~fields.solution_mask
    if missing_puzzles or missing_solutions:
        logger.warning(
            "code is missing claimed slots",
            puzzles=mask_to_indices(missing_puzzles),
            solutions=mask_to_indices(missing_solutions),
        )
    return fields.puzzle_mask | state.puzzle_mask, fields.solution_mask | state.solution_mask


def suggest_allocation(session: RelaySession, code: str, control_number: int | None = None) -> Allocation:
    """Preview the allocator's picks for the current holder without changing the session."""
    _require_phase(session, "suggest allocation", RelayPhase.AWAITING_PLAYER)
    fields = _decode_and_check(session, code, control_number)
    role = turn_role(session.holder_id, session.config.num_players)
    # draw from a copy so confirming with process_turn() repeats these picks
    preview_rng = Random()
    preview_rng.setstate(session.rng.getstate())
    return allocate(role, *_claimed_basis(session, fields), preview_rng)


def process_turn(
    session: RelaySession,
    code: str,
    *,
    control_number: int | None = None,
    allocation: Allocation | None = None,
) -> str:
    """
    Run the current holder's turn and return the code for the next holder.

    ``allocation`` carries the holder's explicit slot selections; when omitted
    the allocator picks for them. ``control_number`` is the number the holder
    was told out-of-band and is checked when given.

    Raises CodeError or IntegrityViolationError without modifying the session.
    """
    _require_phase(session, "process turn", RelayPhase.AWAITING_PLAYER)
    config = session.config
    holder = session.holder_id

    with structlog.contextvars.bound_contextvars(holder=holder):
        fields = _decode_and_check(session, code, control_number)
        role = turn_role(holder, config.num_players)
        basis = _claimed_basis(session, fields)
        allocation = _accept_allocation(role, allocation, session, basis)

        puzzle_mask, solution_mask = merge_allocation(*basis, allocation)
        new_code = encode_game_code(
            config.code_fields(puzzle_mask=puzzle_mask, solution_mask=solution_mask, current_player_id=holder),
        )

        is_final = session.is_final_turn
        session.state = SessionState(
            puzzle_mask=puzzle_mask,
            solution_mask=solution_mask,
            current_holder_id=holder if is_final else holder + 1,
        )
        session.code = new_code
        session.phase = RelayPhase.AWAITING_FINAL_VALIDATION if is_final else RelayPhase.AWAITING_PLAYER
        session.history.append(allocation)

        logger.info(
            "turn processed",
            role=role,
            puzzles=allocation.puzzles,
            solutions=allocation.solutions,
            code=new_code,
        )
    return new_code


def validate_final(session: RelaySession, code: str, control_number: int) -> ValidationResult:
    """Check the code returned to the initiator and close the relay."""
    _require_phase(session, "validate final code", RelayPhase.AWAITING_FINAL_VALIDATION)
    result = validate_final_code(session.config, code, control_number)

    session.result = result
    session.phase = RelayPhase.VALIDATED if result.valid else RelayPhase.INVALID
    logger.info("final validation", valid=result.valid, messages=list(result.messages))
    return result


def is_finished(session: RelaySession) -> bool:
    return session.phase in TERMINAL_PHASES
