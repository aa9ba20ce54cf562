from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNABLE_TO_VALIDATE_MESSAGE = "Unable to validate scheduling - please check manually"
DEFAULT_CONFLICT_MESSAGE = "Scheduling conflict detected"


class ValidationState(str, Enum):
    idle = "idle"
    validating = "validating"
    valid = "valid"
    invalid = "invalid"
    error = "error"


@dataclass(frozen=True)
class ValidationResult:
    state: ValidationState = ValidationState.idle
    conflict_message: str | None = None
    sequence: int = 0

    @property
    def is_validating(self) -> bool:
        return self.state == ValidationState.validating

    @property
    def is_valid(self) -> bool | None:
        """True/False once evaluated, None while idle, validating or after a soft error."""
        if self.state == ValidationState.valid:
            return True
        if self.state == ValidationState.invalid:
            return False
        return None

    @property
    def blocks_submission(self) -> bool:
        # Remote failures only warn; a reported conflict blocks.
        return self.state == ValidationState.invalid

    @classmethod
    def idle(cls, sequence: int = 0) -> "ValidationResult":
        return cls(state=ValidationState.idle, sequence=sequence)

    @classmethod
    def validating(cls, sequence: int) -> "ValidationResult":
        return cls(state=ValidationState.validating, sequence=sequence)

    @classmethod
    def valid(cls, sequence: int) -> "ValidationResult":
        return cls(state=ValidationState.valid, sequence=sequence)

    @classmethod
    def invalid(cls, sequence: int, message: str | None) -> "ValidationResult":
        return cls(
            state=ValidationState.invalid,
            conflict_message=message or DEFAULT_CONFLICT_MESSAGE,
            sequence=sequence,
        )

    @classmethod
    def error(cls, sequence: int) -> "ValidationResult":
        return cls(
            state=ValidationState.error,
            conflict_message=UNABLE_TO_VALIDATE_MESSAGE,
            sequence=sequence,
        )
