"""Schema exports."""

from .normalized_profile import (
    NormalizedEducation,
    NormalizedExperience,
    NormalizedPreferences,
    NormalizedProfile,
    NormalizedSkill,
)
from .raw_profile import RawEducation, RawExperience, RawPreferences, RawProfile, RawSkill
from .search_spec import (
    LocationPreference,
    SearchSpec,
    SearchSpecDraft,
    WeightedKeyword,
    validate_search_spec,
    validate_search_spec_draft,
)

__all__ = [
    "RawProfile",
    "RawSkill",
    "RawExperience",
    "RawEducation",
    "RawPreferences",
    "NormalizedProfile",
    "NormalizedSkill",
    "NormalizedExperience",
    "NormalizedEducation",
    "NormalizedPreferences",
    "SearchSpec",
    "SearchSpecDraft",
    "WeightedKeyword",
    "LocationPreference",
    "validate_search_spec",
    "validate_search_spec_draft",
]
