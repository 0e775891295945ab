"""
Random source for slot allocation.

Production sessions use a fresh ``random.Random``. A hex seed (from settings or
the simulation script) makes a whole relay reproducible, which is how tests
and replays assert exact allocations.
"""

import random
import secrets

SEED_BYTES = 16


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is non-empty, even-length hex.

    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    if not seed_hex or len(seed_hex) % 2:
        raise ValueError(f"Seed must be a non-empty, even number of hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a random seed as a hex string (32 chars / 128 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def create_allocation_rng(seed_hex: str | None = None) -> random.Random:
    """
    Create the RNG used by the mask allocator.

    Slot picks are a game mechanic, not a security boundary, so stdlib
    random.Random is sufficient.
    """
    if seed_hex is None:
        return random.Random()  # noqa: S311
    validate_seed_hex(seed_hex)
    return random.Random(int(seed_hex, 16))  # noqa: S311
