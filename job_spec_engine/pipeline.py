"""End-to-end flow: fetch raw profile -> normalize -> generate (or reuse) the search spec."""

from datetime import date
from typing import Optional

from job_spec_engine.agents.search_spec_agent import GenerateSearchSpecResult, SearchSpecAgent
from job_spec_engine.errors import ProfileNotFoundError
from job_spec_engine.normalizers.profile_normalizer import normalize_profile
from job_spec_engine.schemas.search_spec import SearchSpec
from job_spec_engine.services.profile_source import ProfileSource
from job_spec_engine.utils.logger import get_logger
from job_spec_engine.versioning import check_staleness, ensure_profile_version_match

logger = get_logger(__name__)


async def build_search_spec(
    source: ProfileSource,
    agent: SearchSpecAgent,
    user_id: str,
    team_id: str,
    reference_date: Optional[date] = None,
) -> GenerateSearchSpecResult:
    """Produce the SearchSpec for a subject's current profile version."""
    raw = await source.fetch_profile(user_id, team_id)
    if raw is None:
        raise ProfileNotFoundError(user_id, team_id)

    normalized = normalize_profile(raw, reference_date=reference_date)
    ensure_profile_version_match(raw.profile_version, normalized.profile_version)

    result = await agent.generate(normalized)
    logger.info(
        "Pipeline finished: user=%s version=%s from_cache=%s",
        user_id,
        raw.profile_version,
        result.from_cache,
    )
    return result


def is_spec_current(spec: SearchSpec, current_version: int) -> bool:
    """Downstream guard: only trust a spec built from the subject's current profile version."""
    check = check_staleness(spec.profile_version, current_version)
    if check.is_stale:
        logger.info("Search spec for user=%s is stale: %s", spec.user_id, check.reason)
    return not check.is_stale
