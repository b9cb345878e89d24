"""Deterministic normalization: skill aliases, seniority tiers, full profile."""

from .profile_normalizer import normalize_profile
from .seniority import SENIORITY_THRESHOLDS, get_seniority_threshold, infer_seniority_level
from .skill_aliases import get_skill_display_name, to_canonical_skill_name

__all__ = [
    "normalize_profile",
    "infer_seniority_level",
    "get_seniority_threshold",
    "SENIORITY_THRESHOLDS",
    "to_canonical_skill_name",
    "get_skill_display_name",
]
