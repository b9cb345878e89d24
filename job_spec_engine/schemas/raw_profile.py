"""Raw profile schema: user-entered data as read from the profile store."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Platform = Literal["linkedin", "upwork"]
ProjectType = Literal["short_gig", "medium_project", "long_term", "full_time"]


class RawSkill(BaseModel):
    """One skill row as entered by the user."""

    name: str = Field(..., min_length=1, max_length=100, description="Free-text skill name")
    level: int = Field(default=3, ge=1, le=5, description="Proficiency 1 (beginner) to 5 (expert)")
    years: Optional[float] = Field(default=None, ge=0, description="Years of experience with this skill")


class RawExperience(BaseModel):
    """One work-history entry. Dates are kept as entered; the normalizer parses them."""

    title: str = Field(..., min_length=1, max_length=200, description="Job title")
    company: Optional[str] = Field(default=None, max_length=200, description="Employer or client")
    start_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")
    end_date: Optional[str] = Field(default=None, description="ISO date, or null for the current position")
    highlights: Optional[str] = Field(default=None, max_length=5000, description="Free-text achievements")


class RawEducation(BaseModel):
    """One education entry."""

    institution: str = Field(default="", max_length=200, description="School or university")
    degree: Optional[str] = Field(default=None, max_length=200, description="Degree name as entered")
    field_of_study: Optional[str] = Field(default=None, max_length=200, description="Major or field")
    start_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")
    end_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")


class RawPreferences(BaseModel):
    """Job search preferences. Tightness is clamped later, not rejected here."""

    platforms: List[Platform] = Field(default_factory=lambda: ["upwork", "linkedin"], description="Platforms to search")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="ISO currency code for rates")
    hourly_min: Optional[float] = Field(default=None, ge=0, description="Minimum hourly rate")
    hourly_max: Optional[float] = Field(default=None, ge=0, description="Maximum hourly rate")
    fixed_budget_min: Optional[float] = Field(default=None, ge=0, description="Minimum fixed project budget")
    project_types: List[ProjectType] = Field(
        default_factory=lambda: ["short_gig", "medium_project"],
        description="Preferred project shapes",
    )
    tightness: int = Field(default=3, description="How strictly to match jobs, 1 (loose) to 5 (strict)")
    remote_preference: Optional[str] = Field(default=None, description="remote_only, hybrid, onsite or flexible")


class RawProfile(BaseModel):
    """Aggregated user profile. Owned by the profile-editing surface; read-only here."""

    user_id: str = Field(..., description="Subject identifier")
    team_id: str = Field(..., description="Tenant identifier")
    profile_version: int = Field(default=1, ge=1, description="Incremented by exactly 1 on every committed edit")
    display_name: Optional[str] = Field(default=None, max_length=200)
    timezone: str = Field(default="UTC")
    skills: List[RawSkill] = Field(default_factory=list)
    experiences: List[RawExperience] = Field(default_factory=list)
    educations: List[RawEducation] = Field(default_factory=list)
    preferences: Optional[RawPreferences] = Field(default=None)
