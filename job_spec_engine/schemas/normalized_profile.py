"""Normalized profile schema: the immutable, deterministic snapshot built from a RawProfile."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from job_spec_engine.schemas.raw_profile import Platform

SeniorityLevel = Literal["entry", "junior", "mid", "senior", "lead", "principal"]
RemotePreference = Literal["remote_only", "hybrid", "onsite", "flexible"]
ContractType = Literal["freelance", "contract", "full_time", "part_time", "any"]

SENIORITY_LEVELS: tuple = ("entry", "junior", "mid", "senior", "lead", "principal")
REMOTE_PREFERENCES: tuple = ("remote_only", "hybrid", "onsite", "flexible")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class NormalizedSkill(_Frozen):
    canonical_name: str = Field(..., description="Lowercase alphanumeric identifier")
    display_name: str = Field(..., description="Human-readable name")
    level: int = Field(..., ge=1, le=5)
    years: Optional[float] = Field(default=None, ge=0)


class NormalizedExperience(_Frozen):
    title: str
    company: Optional[str] = None
    start_date: Optional[str] = Field(default=None, description="Parsed start date (ISO) or null if missing/invalid")
    duration_months: Optional[int] = Field(default=None, ge=1, description="Null when dates are missing or invalid")
    is_current: bool
    highlights: List[str] = Field(default_factory=list)


class NormalizedEducation(_Frozen):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    graduation_year: Optional[int] = Field(default=None, ge=1950, le=2100)


class RateRange(_Frozen):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"


class BudgetFloor(_Frozen):
    min: Optional[float] = None
    currency: str = "USD"


class NormalizedPreferences(_Frozen):
    platforms: List[Platform]
    hourly_rate: RateRange
    fixed_budget: BudgetFloor
    tightness: int = Field(..., ge=1, le=5)
    remote_preference: RemotePreference = "flexible"
    contract_type: ContractType = "any"


class NormalizedProfile(_Frozen):
    """
    Deterministic transformation of a RawProfile. Created fresh on every
    normalization; profile_version always equals the source's version.
    """

    user_id: str
    team_id: str
    profile_version: int = Field(..., ge=1)

    display_name: Optional[str] = None
    timezone: str = "UTC"

    total_experience_months: int = Field(..., ge=0)
    inferred_seniority: SeniorityLevel

    primary_skills: List[NormalizedSkill] = Field(..., max_length=10)
    secondary_skills: List[NormalizedSkill]
    skill_keywords: List[str] = Field(default_factory=list)

    experiences: List[NormalizedExperience]
    title_keywords: List[str] = Field(default_factory=list)

    educations: List[NormalizedEducation]
    highest_degree: Optional[str] = None

    preferences: NormalizedPreferences

    normalized_at: datetime
