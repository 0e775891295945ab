"""Relay a code through every player in-process and print each hop.

Useful for checking allocations by hand and for reproducing a reported
session from its seed.

Usage:
    uv run python bin/simulate-relay.py --players 4 --duration 20
    uv run python bin/simulate-relay.py --players 6 --control 2 --seed 0badc0de
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime

from game.logic.clock import end_minute_after, minutes_remaining
from game.logic.rng import create_allocation_rng, generate_seed
from game.logic.types import GameConfig
from game.session.relay import create_session, process_turn, share_text, start_relay, validate_final
from game.settings import RelaySettings
from shared.lib.codes.errors import CodeError
from shared.lib.codes.layout import decode_game_code
from shared.logging import setup_logging


def _print_hop(label: str, code: str) -> None:
    fields = decode_game_code(code)
    print(
        f"{label:<10} {code}  puzzles={fields.puzzle_mask:08b}  "
        f"solutions={fields.solution_mask:08b}  holder={fields.current_player_id}",
    )


def simulate(players: int, duration: int, control: int | None, seed: str) -> bool:
    """Run one full relay; return True when the final code validates."""
    rng = create_allocation_rng(seed)
    if control is None:
        control = rng.randrange(4)

    current_minute = datetime.now().astimezone().minute
    config = GameConfig(
        num_players=players,
        end_minute=end_minute_after(current_minute, duration),
        control_number=control,
    )
    session = create_session(config, rng=rng)

    print(f"Seed: {seed}")
    print(f"Ends at minute {config.end_minute} ({minutes_remaining(config.end_minute, current_minute)} min left)")
    code = start_relay(session)
    print(f"Share: {share_text(session)}")
    print()
    _print_hop("creator", code)

    for holder in range(1, players):
        code = process_turn(session, code, control_number=control)
        _print_hop(f"player {holder}", code)

    result = validate_final(session, code, control)
    print()
    print("VALID" if result.valid else "INVALID")
    for message in result.messages:
        print(f"  {message}")
    return result.valid


def main() -> None:
    settings = RelaySettings()
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--players", type=int, default=4, help="number of players (2-8)")
    parser.add_argument("--duration", type=int, default=settings.default_duration_minutes, help="minutes (0-59)")
    parser.add_argument("--control", type=int, default=None, help="control number (0-3), random when omitted")
    parser.add_argument("--seed", default=settings.seed, help="hex seed for reproducible allocation")
    parser.add_argument("--log-dir", default=settings.log_dir, help="also write logs to this directory")
    args = parser.parse_args()

    setup_logging(log_dir=args.log_dir)
    try:
        valid = simulate(args.players, args.duration, args.control, args.seed or generate_seed())
    except CodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(0 if valid else 1)


if __name__ == "__main__":
    main()
