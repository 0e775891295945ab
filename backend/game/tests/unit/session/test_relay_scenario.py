"""Four-player walkthrough with hand-picked slots."""

from game.logic.enums import RelayPhase, TurnRole
from game.logic.masks import make_allocation, mask_to_indices, unmatched_puzzles
from game.session.relay import create_session, process_turn, start_relay, validate_final
from game.tests.conftest import create_config
from shared.lib.codes.layout import CodeFields, decode_game_code, encode_game_code

INITIAL_PUZZLES = 0b00000111
INITIAL_SOLUTIONS = 0b00111000


def _scenario_session(rng):
    config = create_config(
        num_players=4,
        end_minute=17,
        control_number=2,
        initial_puzzle_mask=INITIAL_PUZZLES,
        initial_solution_mask=INITIAL_SOLUTIONS,
    )
    return create_session(config, rng=rng)


class TestFourPlayerScenario:
    def test_player_one_decodes_creator_code(self):
        code = encode_game_code(CodeFields(4, 17, INITIAL_PUZZLES, INITIAL_SOLUTIONS, 0, 2))

        fields = decode_game_code(code)

        assert (fields.num_players, fields.end_minute, fields.control_number) == (4, 17, 2)
        assert fields.puzzle_mask == INITIAL_PUZZLES
        assert fields.solution_mask == INITIAL_SOLUTIONS

    def test_walkthrough(self, rng):
        session = _scenario_session(rng)

        # creator hands over the initial masks untouched
        code = start_relay(session)
        fields = decode_game_code(code)
        assert fields.puzzle_mask == INITIAL_PUZZLES
        assert fields.solution_mask == INITIAL_SOLUTIONS
        assert session.history[0].puzzles == {0, 1, 2}
        assert session.history[0].solutions == {3, 4, 5}

        # player 1 adds puzzles {3, 4, 5} and solutions away from them
        code = process_turn(
            session,
            code,
            control_number=2,
            allocation=make_allocation(TurnRole.NON_FINAL, [3, 4, 5], [0, 6, 7]),
        )
        fields = decode_game_code(code)
        assert fields.puzzle_mask == INITIAL_PUZZLES | 0b00111000
        assert fields.solution_mask == INITIAL_SOLUTIONS | 0b11000001
        assert fields.current_player_id == 1

        # player 2 lets the allocator choose
        code = process_turn(session, code, control_number=2)
        assert decode_game_code(code).current_player_id == 2

        # player 3 is last and must solve every unmatched puzzle
        before = decode_game_code(code)
        unmatched = unmatched_puzzles(before.puzzle_mask, before.solution_mask)
        code = process_turn(session, code, control_number=2)
        after = decode_game_code(code)
        allocation = session.history[-1]

        assert allocation.role is TurnRole.FINAL
        assert unmatched <= mask_to_indices(after.solution_mask)
        if unmatched:
            assert allocation.puzzles == frozenset()
            assert after.puzzle_mask == before.puzzle_mask
        assert session.phase is RelayPhase.AWAITING_FINAL_VALIDATION

        result = validate_final(session, code, 2)
        assert result.valid
        assert result.decoded_fields == after
        assert session.phase is RelayPhase.VALIDATED


class TestFinalReconciliation:
    def test_five_unmatched_all_solved_no_new_puzzles(self, rng):
        session = create_session(create_config(num_players=2), rng=rng)
        start_relay(session, make_allocation(TurnRole.CREATOR, [0, 1, 2, 3, 4, 5, 6], [5, 6, 7]))

        code = process_turn(session, session.code)

        fields = decode_game_code(code)
        assert session.history[-1].solutions == {0, 1, 2, 3, 4}
        assert session.history[-1].puzzles == frozenset()
        assert fields.puzzle_mask == 0b01111111
        assert fields.solution_mask == 0xFF
