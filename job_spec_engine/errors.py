"""Exception types raised by the cache, generator and versioning helpers.

Normalization never raises; everything else surfaces one of these.
"""

from typing import List, Optional, Tuple

from pydantic import ValidationError

# (dotted field path, message)
FieldError = Tuple[str, str]


class JobSpecEngineError(Exception):
    """Base class for all pipeline errors."""


class SchemaViolationError(JobSpecEngineError):
    """A structure failed schema validation. Carries every offending field path."""

    def __init__(self, model: str, field_errors: List[FieldError]) -> None:
        self.model = model
        self.field_errors = list(field_errors)
        details = "; ".join(f"{path}: {msg}" for path, msg in self.field_errors)
        super().__init__(f"{model} failed validation: {details}")

    @property
    def paths(self) -> List[str]:
        return [path for path, _ in self.field_errors]

    @classmethod
    def from_validation_error(cls, model: str, exc: ValidationError) -> "SchemaViolationError":
        errors: List[FieldError] = []
        for err in exc.errors():
            path = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
            errors.append((path, err.get("msg", "invalid value")))
        return cls(model, errors)


class ReasoningCallError(JobSpecEngineError):
    """The external reasoning capability failed or returned nothing usable."""


class SearchSpecGenerationError(JobSpecEngineError):
    """Generation failed after exhausting every attempt."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]) -> None:
        self.attempts = attempts
        self.last_error = last_error
        reason = str(last_error) if last_error is not None else "no output"
        super().__init__(f"SearchSpec generation failed after {attempts} attempts: {reason}")


class VersionTransitionError(JobSpecEngineError):
    """A profile version update broke the increment-by-one rule."""

    def __init__(self, old_version: int, new_version: int, reason: str) -> None:
        self.old_version = old_version
        self.new_version = new_version
        self.reason = reason
        super().__init__(reason)


class ProfileNotFoundError(JobSpecEngineError):
    """No raw profile exists for the requested subject."""

    def __init__(self, user_id: str, team_id: str) -> None:
        self.user_id = user_id
        self.team_id = team_id
        super().__init__(f"No profile for user {user_id} in team {team_id}")


class ProfileVersionMismatchError(JobSpecEngineError):
    """A derived profile does not carry its source profile's version."""

    def __init__(self, source_version: int, derived_version: int) -> None:
        self.source_version = source_version
        self.derived_version = derived_version
        super().__init__(
            f"Normalized profile version {derived_version} does not match source version {source_version}"
        )
