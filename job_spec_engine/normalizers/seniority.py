"""Threshold-based mapping from total experience (months) to a seniority tier."""

import math
from typing import NamedTuple, Tuple

from job_spec_engine.schemas.normalized_profile import SeniorityLevel


class SeniorityThreshold(NamedTuple):
    min_months: int
    max_months: float  # exclusive; math.inf for the last tier
    level: SeniorityLevel
    description: str


# Sorted by min_months; contiguous half-open intervals, last one unbounded.
SENIORITY_THRESHOLDS: Tuple[SeniorityThreshold, ...] = (
    SeniorityThreshold(0, 24, "entry", "0-2 years: learning fundamentals"),
    SeniorityThreshold(24, 48, "junior", "2-4 years: gaining independence"),
    SeniorityThreshold(48, 72, "mid", "4-6 years: solid contributor"),
    SeniorityThreshold(72, 120, "senior", "6-10 years: technical leadership"),
    SeniorityThreshold(120, 180, "lead", "10-15 years: team and project leadership"),
    SeniorityThreshold(180, math.inf, "principal", "15+ years: org-wide impact"),
)


def _clamp_months(total_months: object) -> int:
    """Floor to an int; negative, NaN and non-numeric values become 0."""
    if isinstance(total_months, bool):
        return 0
    try:
        value = float(total_months)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 0 if value < 0 else int(SENIORITY_THRESHOLDS[-1].min_months)
    return max(0, math.floor(value))


def infer_seniority_level(total_months: object) -> SeniorityLevel:
    """
    Map total experience in months to a seniority tier.

    >>> infer_seniority_level(23)
    'entry'
    >>> infer_seniority_level(24)
    'junior'
    >>> infer_seniority_level(180)
    'principal'
    """
    months = _clamp_months(total_months)
    for threshold in SENIORITY_THRESHOLDS:
        if threshold.min_months <= months < threshold.max_months:
            return threshold.level
    # Unreachable: the last interval is unbounded
    return SENIORITY_THRESHOLDS[-1].level


def get_seniority_threshold(level: str) -> SeniorityThreshold:
    """Threshold entry for a tier. Raises ValueError for unknown tiers."""
    for threshold in SENIORITY_THRESHOLDS:
        if threshold.level == level:
            return threshold
    raise ValueError(f"Unknown seniority level: {level}")


def months_to_years(months: float) -> float:
    """Months as years, rounded to one decimal place."""
    return round(months / 12, 1)


def years_to_months(years: float) -> int:
    return math.floor(years * 12)
