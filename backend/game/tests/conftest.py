import random

import pytest

from game.logic.types import GameConfig
from game.session.models import RelaySession
from game.session.relay import create_session

FIXED_SEED = 20240917


def create_config(
    num_players: int = 4,
    end_minute: int = 17,
    control_number: int = 2,
    *,
    initial_puzzle_mask: int = 0,
    initial_solution_mask: int = 0,
) -> GameConfig:
    """Create a GameConfig with sensible defaults for testing."""
    return GameConfig(
        num_players=num_players,
        end_minute=end_minute,
        control_number=control_number,
        initial_puzzle_mask=initial_puzzle_mask,
        initial_solution_mask=initial_solution_mask,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(FIXED_SEED)


@pytest.fixture
def config() -> GameConfig:
    return create_config()


@pytest.fixture
def session(config: GameConfig, rng: random.Random) -> RelaySession:
    return create_session(config, rng=rng)
