"""Read-only providers of RawProfile records, looked up by subject and tenant."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from pydantic import ValidationError

from job_spec_engine.errors import SchemaViolationError
from job_spec_engine.schemas.raw_profile import RawProfile
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)


class ProfileSource(ABC):
    """Abstract profile store. The pipeline only ever reads from it."""

    @abstractmethod
    async def fetch_profile(self, user_id: str, team_id: str) -> Optional[RawProfile]:
        """Return the subject's current RawProfile, or None if unknown."""
        ...


class InMemoryProfileSource(ProfileSource):
    """Dict-backed source for tests and local runs."""

    def __init__(self, profiles: Iterable[RawProfile] = ()) -> None:
        self._profiles: Dict[Tuple[str, str], RawProfile] = {}
        for profile in profiles:
            self.put(profile)

    def put(self, profile: RawProfile) -> None:
        self._profiles[(profile.user_id, profile.team_id)] = profile

    async def fetch_profile(self, user_id: str, team_id: str) -> Optional[RawProfile]:
        return self._profiles.get((user_id, team_id))


def load_raw_profile(path: Union[str, Path]) -> RawProfile:
    """Parse one RawProfile from a JSON file. Raises SchemaViolationError on bad shape."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaViolationError("RawProfile", [("<root>", f"invalid JSON: {e}")]) from e
    try:
        return RawProfile.model_validate(data)
    except ValidationError as e:
        raise SchemaViolationError.from_validation_error("RawProfile", e) from e


class JsonFileProfileSource(ProfileSource):
    """
    Directory of `<user_id>.json` files. A file whose team_id differs from the
    requested tenant is treated as not found.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self._directory = Path(directory)

    async def fetch_profile(self, user_id: str, team_id: str) -> Optional[RawProfile]:
        path = self._directory / f"{user_id}.json"
        if not path.is_file():
            return None
        profile = load_raw_profile(path)
        if profile.team_id != team_id:
            logger.warning("Profile %s belongs to another team; ignoring", user_id)
            return None
        return profile
