"""
Profile versioning rules.

profile_version starts at 1 and increases by exactly 1 on every committed
edit. Anything derived from a profile carries the version it was built from;
it is stale once the subject's current version is higher. Stale artifacts
are superseded, never rewritten.
"""

from typing import Optional

from pydantic import BaseModel, Field

from job_spec_engine.errors import ProfileVersionMismatchError, VersionTransitionError

MIN_PROFILE_VERSION = 1
# Sanity ceiling; a real profile should never get here
MAX_PROFILE_VERSION = 1_000_000


class StalenessCheck(BaseModel):
    is_stale: bool
    data_version: int
    current_version: int
    version_gap: int = Field(..., ge=0)
    reason: Optional[str] = None


class VersionUpdateResult(BaseModel):
    valid: bool
    error: Optional[str] = None


def check_staleness(data_version: int, current_version: int) -> StalenessCheck:
    """
    Compare the version an artifact was built from with the subject's current version.

    >>> check_staleness(5, 7).reason
    'Data version (5) is 2 versions behind current (7)'
    """
    stale = data_version < current_version
    gap = current_version - data_version if stale else 0
    reason = None
    if stale:
        plural = "" if gap == 1 else "s"
        reason = f"Data version ({data_version}) is {gap} version{plural} behind current ({current_version})"
    return StalenessCheck(
        is_stale=stale,
        data_version=data_version,
        current_version=current_version,
        version_gap=gap,
        reason=reason,
    )


def is_stale(data_version: int, current_version: int) -> bool:
    return data_version < current_version


def is_fresh(data_version: int, current_version: int) -> bool:
    return data_version >= current_version


def validate_version_update(old_version: int, new_version: int) -> VersionUpdateResult:
    """Accept only old -> old + 1 (and never past MAX_PROFILE_VERSION)."""
    if new_version == old_version:
        return VersionUpdateResult(valid=False, error=f"Version unchanged: {old_version} -> {new_version} (no-op update)")
    if new_version < old_version:
        return VersionUpdateResult(valid=False, error=f"Version cannot decrement: {old_version} -> {new_version}")
    if new_version != old_version + 1:
        return VersionUpdateResult(
            valid=False,
            error=f"Version must increment by 1: {old_version} -> {new_version} (expected {old_version + 1})",
        )
    if new_version > MAX_PROFILE_VERSION:
        return VersionUpdateResult(
            valid=False,
            error=f"Version exceeds maximum ({MAX_PROFILE_VERSION}): {new_version}",
        )
    return VersionUpdateResult(valid=True)


def ensure_version_update(old_version: int, new_version: int) -> int:
    """Raising form of validate_version_update. Returns new_version when accepted."""
    result = validate_version_update(old_version, new_version)
    if not result.valid:
        raise VersionTransitionError(old_version, new_version, result.error or "invalid version update")
    return new_version


def get_next_version(current_version: int) -> int:
    return current_version + 1


def validate_profile_version_match(source_version: int, derived_version: int) -> bool:
    return source_version == derived_version


def ensure_profile_version_match(source_version: int, derived_version: int) -> None:
    if not validate_profile_version_match(source_version, derived_version):
        raise ProfileVersionMismatchError(source_version, derived_version)
