"""Job Spec Engine: profile normalization and versioned search-spec generation."""

from .agents.search_spec_agent import GenerateSearchSpecResult, SearchSpecAgent, generate_search_spec
from .normalizers.profile_normalizer import normalize_profile
from .pipeline import build_search_spec, is_spec_current
from .services.spec_cache import SearchSpecCache, get_cache_storage
from .versioning import (
    check_staleness,
    get_next_version,
    is_fresh,
    is_stale,
    validate_version_update,
)

__all__ = [
    "normalize_profile",
    "SearchSpecAgent",
    "GenerateSearchSpecResult",
    "generate_search_spec",
    "SearchSpecCache",
    "get_cache_storage",
    "build_search_spec",
    "is_spec_current",
    "check_staleness",
    "is_stale",
    "is_fresh",
    "validate_version_update",
    "get_next_version",
]
