"""Relay configuration via environment variables."""

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from game.logic.rng import validate_seed_hex


class RelaySettings(BaseSettings):
    model_config = {"env_prefix": "RELAY_"}

    log_dir: Annotated[str, Field(min_length=1)] | None = None
    # Hex seed for a reproducible allocator; unset means a fresh random source
    seed: str | None = None
    default_duration_minutes: int = Field(default=30, ge=1, le=59)

    @field_validator("seed")
    @classmethod
    def validate_seed(cls, v: str | None) -> str | None:
        if v is not None:
            validate_seed_hex(v)
        return v
