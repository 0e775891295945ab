"""
Slot allocation for puzzle and solution masks.

Each turn claims slot indices (0-7) in two independent pools. Exclusion is
soft: ``select_indices`` prefers unclaimed indices but falls back to already
claimed ones rather than failing, so a claim can duplicate an existing bit
(a no-op under the OR-merge).
"""

from collections.abc import Iterable
from random import Random

from game.logic.enums import TurnRole
from game.logic.types import Allocation
from shared.lib.codes.errors import FieldOutOfRangeError
from shared.lib.codes.layout import NUM_SLOTS

PICKS_PER_TURN = 3
ALL_SLOTS = frozenset(range(NUM_SLOTS))


def mask_to_indices(mask: int) -> frozenset[int]:
    return frozenset(index for index in range(NUM_SLOTS) if mask >> index & 1)


def indices_to_mask(indices: Iterable[int]) -> int:
    mask = 0
    for index in indices:
        mask |= 1 << index
    return mask


def unmatched_puzzles(puzzle_mask: int, solution_mask: int) -> frozenset[int]:
    """Return puzzle slots whose solution bit is not set yet."""
    return mask_to_indices(puzzle_mask & ~solution_mask)


def select_indices(count: int, excluded: Iterable[int], rng: Random) -> frozenset[int]:
    """
    Pick ``count`` distinct slot indices uniformly at random.

    Indices outside ``excluded`` are preferred. When fewer than ``count`` of
    them remain, all of them are taken and the rest are drawn from the
    excluded indices without replacement.
    """
    if not 0 <= count <= NUM_SLOTS:
        raise FieldOutOfRangeError("count", count, 0, NUM_SLOTS)

    excluded_set = ALL_SLOTS & frozenset(excluded)
    # sorted() keeps draws reproducible for a seeded rng
    available = sorted(ALL_SLOTS - excluded_set)
    if len(available) >= count:
        return frozenset(rng.sample(available, count))

    fallback = rng.sample(sorted(excluded_set), count - len(available))
    return frozenset(available) | frozenset(fallback)


def turn_role(holder_id: int, num_players: int) -> TurnRole:
    """Role of the holder about to act."""
    if holder_id == 0:
        return TurnRole.CREATOR
    if holder_id == num_players - 1:
        return TurnRole.FINAL
    return TurnRole.NON_FINAL


def _fresh_picks(
    role: TurnRole,
    claimed_puzzles: frozenset[int],
    claimed_solutions: frozenset[int],
    rng: Random,
) -> Allocation:
    puzzles = select_indices(PICKS_PER_TURN, claimed_puzzles, rng)
    solutions = select_indices(PICKS_PER_TURN, claimed_solutions | puzzles, rng)
    return Allocation(role=role, puzzles=puzzles, solutions=solutions)


def _reconcile(unmatched: frozenset[int], claimed_solutions: frozenset[int], rng: Random) -> Allocation:
    """Final holder: solve every unmatched puzzle, topping up to PICKS_PER_TURN."""
    if len(unmatched) > PICKS_PER_TURN:
        return Allocation(role=TurnRole.FINAL, puzzles=frozenset(), solutions=unmatched)
    top_up = select_indices(PICKS_PER_TURN - len(unmatched), claimed_solutions | unmatched, rng)
    return Allocation(role=TurnRole.FINAL, puzzles=frozenset(), solutions=unmatched | top_up)


def allocate(role: TurnRole, puzzle_mask: int, solution_mask: int, rng: Random) -> Allocation:
    """
    Choose the slots claimed this turn, given the masks claimed so far.

    The creator ignores prior claims for puzzles. The final holder reconciles
    unmatched puzzles when there are any, otherwise plays a normal turn.
    """
    if role is TurnRole.CREATOR:
        return _fresh_picks(role, frozenset(), frozenset(), rng)

    claimed_puzzles = mask_to_indices(puzzle_mask)
    claimed_solutions = mask_to_indices(solution_mask)

    if role is TurnRole.FINAL:
        unmatched = claimed_puzzles - claimed_solutions
        if unmatched:
            return _reconcile(unmatched, claimed_solutions, rng)

    return _fresh_picks(role, claimed_puzzles, claimed_solutions, rng)


def make_allocation(role: TurnRole, puzzles: Iterable[int], solutions: Iterable[int]) -> Allocation:
    """Build an allocation from explicit player selections, validating slot range."""
    puzzle_set = frozenset(puzzles)
    solution_set = frozenset(solutions)
    for name, indices in (("puzzle_slot", puzzle_set), ("solution_slot", solution_set)):
        for index in indices:
            if isinstance(index, bool) or not isinstance(index, int) or index not in ALL_SLOTS:
                raise FieldOutOfRangeError(name, index, 0, NUM_SLOTS - 1)
    return Allocation(role=role, puzzles=puzzle_set, solutions=solution_set)


def merge_allocation(puzzle_mask: int, solution_mask: int, allocation: Allocation) -> tuple[int, int]:
    """OR the allocation into the masks. Bits are never cleared."""
    return puzzle_mask | allocation.puzzle_mask, solution_mask | allocation.solution_mask
