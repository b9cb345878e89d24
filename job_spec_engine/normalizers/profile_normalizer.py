"""
Deterministic RawProfile -> NormalizedProfile transformation.

Pure: no network, no randomness. The only clock reads are the defaults for
reference_date (open-ended experience durations) and normalized_at, both of
which callers can pin. Reordering any input list does not change the output;
every list is put through a total sort before it is emitted. Malformed dates
degrade to None instead of raising.
"""

from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from job_spec_engine.config import (
    DEFAULT_CURRENCY,
    DEFAULT_PLATFORMS,
    DEFAULT_TIGHTNESS,
    PRIMARY_SKILL_LIMIT,
)
from job_spec_engine.normalizers.seniority import infer_seniority_level
from job_spec_engine.normalizers.skill_aliases import get_skill_display_name, to_canonical_skill_name
from job_spec_engine.schemas.normalized_profile import (
    REMOTE_PREFERENCES,
    BudgetFloor,
    ContractType,
    NormalizedEducation,
    NormalizedExperience,
    NormalizedPreferences,
    NormalizedProfile,
    NormalizedSkill,
    RateRange,
)
from job_spec_engine.schemas.raw_profile import (
    RawEducation,
    RawExperience,
    RawPreferences,
    RawProfile,
    RawSkill,
)
from job_spec_engine.utils.date_parser import (
    compute_duration_months,
    extract_year,
    parse_iso_date,
    to_reference_date,
)
from job_spec_engine.utils.helpers import normalize_title_keyword, normalize_whitespace, split_highlights
from job_spec_engine.utils.logger import get_logger

logger = get_logger(__name__)

# Checked in order; the first key contained in the degree text wins for that entry.
# Loose substring matching: "mba" hits "ba" (bachelor) before "mba" (master).
DEGREE_LEVELS: Tuple[Tuple[str, int], ...] = (
    ("highschool", 1),
    ("ged", 1),
    ("associate", 2),
    ("bachelor", 3),
    ("bs", 3),
    ("ba", 3),
    ("master", 4),
    ("ms", 4),
    ("ma", 4),
    ("mba", 4),
    ("meng", 4),
    ("phd", 5),
    ("doctorate", 5),
    ("doctor", 5),
    ("md", 5),
    ("jd", 5),
)

# (project type tag, contract type), highest precedence first
CONTRACT_TYPE_PRECEDENCE: Tuple[Tuple[str, ContractType], ...] = (
    ("full_time", "full_time"),
    ("long_term", "contract"),
    ("short_gig", "freelance"),
    ("medium_project", "freelance"),
)


# ---- Skills ----

def _normalize_skill(skill: RawSkill) -> NormalizedSkill:
    canonical = to_canonical_skill_name(skill.name)
    return NormalizedSkill(
        canonical_name=canonical,
        display_name=get_skill_display_name(canonical) if canonical else skill.name.strip(),
        level=skill.level,
        years=skill.years,
    )


def _years_key(years: Optional[float]) -> float:
    return years if years is not None else -1.0


def _skill_sort_key(skill: NormalizedSkill) -> tuple:
    # level DESC, years DESC (nulls last), canonical name ASC
    return (-skill.level, -_years_key(skill.years), skill.canonical_name)


def normalize_skills(skills: Iterable[RawSkill]) -> List[NormalizedSkill]:
    """Canonicalize, keep the strongest entry per canonical name, and sort."""
    best: Dict[str, NormalizedSkill] = {}
    for raw in skills:
        skill = _normalize_skill(raw)
        if not skill.canonical_name:
            # Name had no alphanumeric characters at all
            continue
        existing = best.get(skill.canonical_name)
        if existing is None or (skill.level, _years_key(skill.years)) > (
            existing.level,
            _years_key(existing.years),
        ):
            best[skill.canonical_name] = skill
    return sorted(best.values(), key=_skill_sort_key)


def split_skills(
    skills: List[NormalizedSkill],
    limit: int = PRIMARY_SKILL_LIMIT,
) -> Tuple[List[NormalizedSkill], List[NormalizedSkill]]:
    """Primary = first `limit` skills, secondary = the rest."""
    return skills[:limit], skills[limit:]


# ---- Experiences ----

def _experience_sort_key(exp: RawExperience) -> tuple:
    start = parse_iso_date(exp.start_date)
    # start DESC with nulls last, then title ASC; the remaining fields only break exact ties
    return (
        start is None,
        -(start.toordinal()) if start else 0,
        exp.title,
        exp.company or "",
        exp.end_date or "",
        exp.highlights or "",
    )


def _normalize_experience(exp: RawExperience, reference_date: date) -> NormalizedExperience:
    start = parse_iso_date(exp.start_date)
    return NormalizedExperience(
        title=normalize_whitespace(exp.title) or exp.title,
        company=normalize_whitespace(exp.company),
        start_date=start.isoformat() if start else None,
        duration_months=compute_duration_months(exp.start_date, exp.end_date, reference_date),
        is_current=exp.end_date is None,
        highlights=split_highlights(exp.highlights),
    )


def normalize_experiences(
    experiences: Iterable[RawExperience],
    reference_date: date,
) -> List[NormalizedExperience]:
    """Most recent first, with computed durations and split highlights."""
    ordered = sorted(experiences, key=_experience_sort_key)
    return [_normalize_experience(exp, reference_date) for exp in ordered]


def compute_total_experience_months(experiences: Iterable[NormalizedExperience]) -> int:
    """Plain sum of known durations; overlapping positions are not merged."""
    return sum(exp.duration_months or 0 for exp in experiences)


def extract_title_keywords(experiences: Iterable[NormalizedExperience]) -> List[str]:
    titles = {normalize_title_keyword(exp.title) for exp in experiences}
    titles.discard("")
    return sorted(titles)


# ---- Education ----

def get_degree_level(degree: Optional[str]) -> int:
    """Rank of a degree string (0 = unknown). See DEGREE_LEVELS for the matching caveat."""
    if not degree:
        return 0
    letters = "".join(ch for ch in degree.lower() if "a" <= ch <= "z")
    for key, level in DEGREE_LEVELS:
        if key in letters:
            return level
    return 0


def _normalize_education(edu: RawEducation) -> NormalizedEducation:
    year = extract_year(edu.end_date)
    if year is not None and not 1950 <= year <= 2100:
        year = None
    return NormalizedEducation(
        institution=normalize_whitespace(edu.institution),
        degree=normalize_whitespace(edu.degree),
        field=normalize_whitespace(edu.field_of_study),
        graduation_year=year,
    )


def _education_sort_key(edu: NormalizedEducation) -> tuple:
    # graduation year DESC (unknown last), institution ASC, then degree/field for exact ties
    return (
        -(edu.graduation_year or 0),
        edu.institution or "",
        edu.degree or "",
        edu.field or "",
    )


def normalize_educations(
    educations: Iterable[RawEducation],
) -> Tuple[List[NormalizedEducation], Optional[str]]:
    """Sorted educations and the degree text of the highest-ranked entry."""
    normalized = sorted((_normalize_education(e) for e in educations), key=_education_sort_key)
    highest_degree: Optional[str] = None
    highest_level = 0
    for edu in normalized:
        level = get_degree_level(edu.degree)
        if level > highest_level:
            highest_level = level
            highest_degree = edu.degree
    return normalized, highest_degree


# ---- Preferences ----

def derive_contract_type(project_types: Iterable[str]) -> ContractType:
    tags = set(project_types or [])
    for tag, contract_type in CONTRACT_TYPE_PRECEDENCE:
        if tag in tags:
            return contract_type
    return "any"


def default_preferences() -> NormalizedPreferences:
    return NormalizedPreferences(
        platforms=sorted(DEFAULT_PLATFORMS),
        hourly_rate=RateRange(currency=DEFAULT_CURRENCY),
        fixed_budget=BudgetFloor(currency=DEFAULT_CURRENCY),
        tightness=DEFAULT_TIGHTNESS,
        remote_preference="flexible",
        contract_type="any",
    )


def normalize_preferences(prefs: Optional[RawPreferences]) -> NormalizedPreferences:
    """Dedupe/sort platforms, clamp tightness to 1-5, derive one contract type, fill defaults."""
    if prefs is None:
        return default_preferences()
    platforms = sorted(set(prefs.platforms)) or sorted(DEFAULT_PLATFORMS)
    currency = (prefs.currency or DEFAULT_CURRENCY).upper()
    remote = (prefs.remote_preference or "").strip().lower()
    return NormalizedPreferences(
        platforms=platforms,
        hourly_rate=RateRange(min=prefs.hourly_min, max=prefs.hourly_max, currency=currency),
        fixed_budget=BudgetFloor(min=prefs.fixed_budget_min, currency=currency),
        tightness=max(1, min(5, prefs.tightness)),
        remote_preference=remote if remote in REMOTE_PREFERENCES else "flexible",
        contract_type=derive_contract_type(prefs.project_types),
    )


# ---- Entry point ----

def normalize_profile(
    profile: RawProfile,
    reference_date: Optional[date] = None,
    normalized_at: Optional[datetime] = None,
) -> NormalizedProfile:
    """
    Build the NormalizedProfile for a RawProfile.

    reference_date: "today" for current positions (defaults to the real date).
    normalized_at: timestamp stamped on the result (defaults to now, UTC).
    Pass both for reproducible output.
    """
    ref = to_reference_date(reference_date)
    stamp = normalized_at or datetime.now(timezone.utc)

    skills = normalize_skills(profile.skills)
    primary, secondary = split_skills(skills)

    experiences = normalize_experiences(profile.experiences, ref)
    total_months = compute_total_experience_months(experiences)

    educations, highest_degree = normalize_educations(profile.educations)

    normalized = NormalizedProfile(
        user_id=profile.user_id,
        team_id=profile.team_id,
        profile_version=profile.profile_version,
        display_name=normalize_whitespace(profile.display_name),
        timezone=profile.timezone,
        total_experience_months=total_months,
        inferred_seniority=infer_seniority_level(total_months),
        primary_skills=primary,
        secondary_skills=secondary,
        skill_keywords=[s.canonical_name for s in skills],
        experiences=experiences,
        title_keywords=extract_title_keywords(experiences),
        educations=educations,
        highest_degree=highest_degree,
        preferences=normalize_preferences(profile.preferences),
        normalized_at=stamp,
    )
    logger.debug(
        "Normalized profile user=%s version=%s skills=%s experiences=%s months=%s seniority=%s",
        profile.user_id,
        profile.profile_version,
        len(skills),
        len(experiences),
        total_months,
        normalized.inferred_seniority,
    )
    return normalized
