"""Tests for the integrity comparison and the final verdict."""

from game.logic.validator import find_mismatches, validate_final_code
from game.tests.conftest import create_config
from shared.lib.codes.layout import CodeFields, encode_game_code


def _fields(**overrides) -> CodeFields:
    values = {
        "num_players": 4,
        "end_minute": 17,
        "puzzle_mask": 0b01110111,
        "solution_mask": 0b01111111,
        "current_player_id": 3,
        "control_number": 2,
    }
    values.update(overrides)
    return CodeFields(**values)


class TestFindMismatches:
    def test_matching_fields(self):
        assert find_mismatches(create_config(), _fields()) == {}

    def test_masks_and_holder_are_not_invariants(self):
        assert find_mismatches(create_config(), _fields(puzzle_mask=0, solution_mask=1, current_player_id=7)) == {}

    def test_reports_each_mismatch(self):
        mismatches = find_mismatches(create_config(), _fields(num_players=5, end_minute=18, control_number=1))
        assert mismatches == {
            "num_players": (4, 5),
            "end_minute": (17, 18),
            "control_number": (2, 1),
        }

    def test_entered_control_number_checked(self):
        assert find_mismatches(create_config(), _fields(), 2) == {}
        assert find_mismatches(create_config(), _fields(), 0) == {"entered_control_number": (2, 0)}


class TestValidateFinalCode:
    def test_valid_code(self):
        fields = _fields()
        result = validate_final_code(create_config(), encode_game_code(fields), 2)

        assert result.valid
        assert result.decoded_fields == fields
        assert "code is valid" in result.messages[0]

    def test_lowercase_code_accepted(self):
        result = validate_final_code(create_config(), encode_game_code(_fields()).lower(), 2)
        assert result.valid

    def test_wrong_control_number(self):
        result = validate_final_code(create_config(), encode_game_code(_fields()), 3)

        assert not result.valid
        assert result.decoded_fields == _fields()
        assert result.messages == ("entered_control_number mismatch: expected 2, got 3",)

    def test_tampered_code(self):
        result = validate_final_code(create_config(), encode_game_code(_fields(end_minute=45)), 2)

        assert not result.valid
        assert result.messages == ("end_minute mismatch: expected 17, got 45",)

    def test_undecodable_code_is_invalid_not_an_error(self):
        result = validate_final_code(create_config(), "NOPE!", 2)

        assert not result.valid
        assert result.decoded_fields is None
        assert result.messages[0].startswith("code could not be decoded")

    def test_result_is_serializable(self):
        result = validate_final_code(create_config(), encode_game_code(_fields()), 2)
        dumped = result.model_dump()
        assert dumped["valid"] is True
        assert dumped["decoded_fields"]["puzzle_mask"] == 0b01110111
