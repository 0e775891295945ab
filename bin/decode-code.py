"""Print the fields carried by a game code.

Usage:
    uv run python bin/decode-code.py 1X9K3F
    uv run python bin/decode-code.py "1X9K3F (Control: 2)"
"""

import sys

from game.logic.masks import mask_to_indices, unmatched_puzzles
from shared.lib.codes.errors import CodeError
from shared.lib.codes.layout import decode_game_code
from shared.lib.codes.share import parse_share_text


def main() -> None:
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <code or share text>")
        sys.exit(1)

    try:
        code, entered_control = parse_share_text(sys.argv[1])
        fields = decode_game_code(code)
    except CodeError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Code:              {code}")
    print(f"Players:           {fields.num_players}")
    print(f"End minute:        {fields.end_minute}")
    print(f"Puzzles:           {sorted(mask_to_indices(fields.puzzle_mask))}")
    print(f"Solutions:         {sorted(mask_to_indices(fields.solution_mask))}")
    print(f"Unmatched puzzles: {sorted(unmatched_puzzles(fields.puzzle_mask, fields.solution_mask))}")
    print(f"Last holder:       {fields.current_player_id}")
    if entered_control is not None:
        matches = "matches" if entered_control == fields.control_number else "DOES NOT match"
        print(f"Control number:    {entered_control} ({matches} the code)")


if __name__ == "__main__":
    main()
