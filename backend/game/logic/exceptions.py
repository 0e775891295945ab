"""Typed domain exceptions for relay protocol violations.

Codec failures (bad characters, wrong length, out-of-range fields) are
``shared.lib.codes.errors.CodeError`` subclasses. The exceptions here cover
what can go wrong once a code decodes cleanly. Both are caught at the
collaborator boundary and shown to the player, who retries the same turn.
"""


class RelayError(Exception):
    """Base exception for relay protocol violations."""


class IntegrityViolationError(RelayError):
    """Decoded invariant fields disagree with the session configuration.

    Attributes:
        mismatches: Field name -> (expected, actual) for every field that differs.

    """

    def __init__(self, mismatches: dict[str, tuple[int, int]]) -> None:
        self.mismatches = mismatches
        details = ", ".join(
            f"{name} expected {expected} got {actual}" for name, (expected, actual) in mismatches.items()
        )
        super().__init__(f"code integrity check failed: {details}")


class InvalidPhaseError(RelayError):
    """Operation is not allowed in the relay's current phase."""

    def __init__(self, *, operation: str, phase: str) -> None:
        self.operation = operation
        self.phase = phase
        super().__init__(f"cannot {operation} while relay is {phase}")
