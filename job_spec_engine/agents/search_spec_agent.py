"""
Search Spec Agent: NormalizedProfile -> SearchSpec, cached per profile version.

Per call: cache check -> (hit: done) | (miss: invoke reasoning -> validate
draft -> merge identity -> re-validate -> cache write). Invoke and validate
run inside the retry loop; a schema violation in the draft counts as a failed
attempt. Concurrent misses for the same key are not coalesced: both callers
may invoke the model, and the later write simply replaces the earlier one.
"""

import asyncio
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from job_spec_engine.agents.prompts import SEARCH_SPEC_SYSTEM_PROMPT, format_user_message
from job_spec_engine.agents.reasoning import OpenAIReasoningCapability, ReasoningCapability
from job_spec_engine.agents.retry import RetryPolicy, RetryState, SleepFn, run_with_retry
from job_spec_engine.config import (
    LLM_EXPERIENCE_LIMIT,
    LLM_SECONDARY_SKILL_LIMIT,
    MAX_RESULTS_PER_PLATFORM,
    SEARCH_SPEC_BACKOFF_BASE_SECONDS,
    SEARCH_SPEC_CACHE_TTL_SECONDS,
    SEARCH_SPEC_MAX_RETRIES,
)
from job_spec_engine.schemas.normalized_profile import NormalizedProfile
from job_spec_engine.schemas.search_spec import (
    SearchSpec,
    SearchSpecDraft,
    validate_search_spec,
    validate_search_spec_draft,
)
from job_spec_engine.services.spec_cache import (
    InMemorySearchSpecStorage,
    SearchSpecCache,
    SearchSpecCacheStorage,
)
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerateSearchSpecResult:
    spec: SearchSpec
    from_cache: bool
    cache_key: str
    attempts: int = 0


def serialize_profile_for_llm(
    profile: NormalizedProfile,
    secondary_limit: int = LLM_SECONDARY_SKILL_LIMIT,
    experience_limit: int = LLM_EXPERIENCE_LIMIT,
) -> str:
    """Bounded, field-selected JSON view of the profile. Identity fields are never sent."""
    prefs = profile.preferences
    relevant: Dict[str, Any] = {
        "display_name": profile.display_name,
        "total_experience_months": profile.total_experience_months,
        "inferred_seniority": profile.inferred_seniority,
        "primary_skills": [
            {"name": s.display_name, "level": s.level, "years": s.years}
            for s in profile.primary_skills
        ],
        "secondary_skills": [
            {"name": s.display_name, "level": s.level}
            for s in profile.secondary_skills[:secondary_limit]
        ],
        "experiences": [
            {
                "title": e.title,
                "company": e.company,
                "duration_months": e.duration_months,
                "is_current": e.is_current,
            }
            for e in profile.experiences[:experience_limit]
        ],
        "title_keywords": profile.title_keywords,
        "preferences": {
            "platforms": prefs.platforms,
            "hourly_rate": prefs.hourly_rate.model_dump(),
            "fixed_budget": prefs.fixed_budget.model_dump(),
            "remote_preference": prefs.remote_preference,
            "contract_type": prefs.contract_type,
            "tightness": prefs.tightness,
        },
    }
    return json.dumps(relevant, indent=2)


def merge_to_search_spec(
    draft: SearchSpecDraft,
    profile: NormalizedProfile,
    generated_at: datetime,
) -> Dict[str, Any]:
    """Draft fields + identity and platforms from the profile. Returned unvalidated."""
    merged = draft.model_dump()
    merged.update(
        user_id=profile.user_id,
        team_id=profile.team_id,
        profile_version=profile.profile_version,
        platforms=list(profile.preferences.platforms),
        max_results_per_platform=MAX_RESULTS_PER_PLATFORM,
        generated_at=generated_at,
    )
    return merged


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SearchSpecAgent:
    """
    Generates and caches SearchSpecs.

    Usage:
        agent = SearchSpecAgent(cache_storage=get_cache_storage())
        result = await agent.generate(normalized_profile)
    """

    def __init__(
        self,
        reasoning: Optional[ReasoningCapability] = None,
        cache_storage: Optional[SearchSpecCacheStorage] = None,
        cache_ttl_seconds: Optional[int] = SEARCH_SPEC_CACHE_TTL_SECONDS,
        max_retries: int = SEARCH_SPEC_MAX_RETRIES,
        backoff_base_seconds: float = SEARCH_SPEC_BACKOFF_BASE_SECONDS,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._reasoning = reasoning or OpenAIReasoningCapability()
        self._cache = SearchSpecCache(cache_storage or InMemorySearchSpecStorage())
        self._cache_ttl_seconds = cache_ttl_seconds
        self._retry_policy = RetryPolicy.from_max_retries(max_retries, backoff_base_seconds, sleep)
        self._clock = clock

    @property
    def cache(self) -> SearchSpecCache:
        return self._cache

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    async def _invoke(self, profile: NormalizedProfile, attempt: int) -> SearchSpecDraft:
        user_message = format_user_message(serialize_profile_for_llm(profile))
        logger.debug(
            "Invoking reasoning for user=%s version=%s attempt=%s",
            profile.user_id,
            profile.profile_version,
            attempt,
        )
        raw = await self._reasoning.generate(SEARCH_SPEC_SYSTEM_PROMPT, user_message)
        return validate_search_spec_draft(raw)

    async def generate(self, profile: NormalizedProfile) -> GenerateSearchSpecResult:
        """
        Return the cached SearchSpec for (user_id, profile_version), generating it on a miss.

        Raises SearchSpecGenerationError once every attempt has failed and
        SchemaViolationError if the merged spec is invalid.
        """
        lookup = await self._cache.check(profile.user_id, profile.profile_version)
        if lookup.hit and lookup.spec is not None:
            logger.info("Search spec cache hit: %s", lookup.key)
            return GenerateSearchSpecResult(spec=lookup.spec, from_cache=True, cache_key=lookup.key)

        logger.info("Search spec cache miss: %s", lookup.key)
        state = RetryState()
        draft = await run_with_retry(
            lambda attempt: self._invoke(profile, attempt),
            self._retry_policy,
            label=f"search spec generation ({lookup.key})",
            state=state,
        )

        spec = validate_search_spec(merge_to_search_spec(draft, profile, self._clock()))
        await self._cache.set(spec, self._cache_ttl_seconds)
        logger.info(
            "Search spec generated: key=%s attempts=%s titles=%s skills=%s",
            lookup.key,
            state.attempt,
            len(spec.title_keywords),
            len(spec.skill_keywords),
        )
        return GenerateSearchSpecResult(spec=spec, from_cache=False, cache_key=lookup.key, attempts=state.attempt)

    async def is_cached(self, user_id: str, profile_version: int) -> bool:
        return await self._cache.has(user_id, profile_version)

    async def invalidate_cache(self, user_id: str, profile_version: int) -> None:
        await self._cache.invalidate(user_id, profile_version)


async def generate_search_spec(profile: NormalizedProfile) -> SearchSpec:
    """One-off generation with the default configuration (OpenAI + in-memory cache)."""
    result = await SearchSpecAgent().generate(profile)
    return result.spec
