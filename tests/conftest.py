"""Shared fixtures: deterministic raw profiles, a scripted reasoning capability, recorded sleeps."""

import copy
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Union

import pytest

from job_spec_engine.agents.reasoning import ReasoningCapability
from job_spec_engine.normalizers.profile_normalizer import normalize_profile
from job_spec_engine.schemas.raw_profile import RawProfile

REFERENCE_DATE = date(2026, 1, 21)
NORMALIZED_AT = datetime(2026, 1, 21, 12, 0, tzinfo=timezone.utc)
GENERATED_AT = datetime(2026, 1, 21, 12, 30, tzinfo=timezone.utc)

USER_ID = "550e8400-e29b-41d4-a716-446655440000"
TEAM_ID = "660e8400-e29b-41d4-a716-446655440001"


def raw_profile_data(profile_version: int = 3) -> Dict[str, Any]:
    return {
        "user_id": USER_ID,
        "team_id": TEAM_ID,
        "profile_version": profile_version,
        "display_name": "  Jane   Developer ",
        "timezone": "America/New_York",
        "skills": [
            {"name": "TypeScript", "level": 5, "years": 4},
            {"name": "React", "level": 4, "years": 3},
            {"name": "node.js", "level": 4, "years": 5},
            {"name": "Postgres", "level": 3, "years": 2},
            {"name": "reactjs", "level": 3, "years": 6},
        ],
        "experiences": [
            {
                "title": "Senior Full-Stack Developer",
                "company": "TechCorp",
                "start_date": "2023-02-01",
                "end_date": None,
                "highlights": "Led a team of 5 engineers.\n- Built the billing microservices\n• Cut infra costs by 30%",
            },
            {
                "title": "Frontend Developer",
                "company": "StartupCo",
                "start_date": "2019-06-01",
                "end_date": "2023-01-15",
                "highlights": None,
            },
        ],
        "educations": [
            {"institution": "MIT", "degree": "Bachelor of Science", "field_of_study": "Computer Science",
             "start_date": "2012-09-01", "end_date": "2016-06-01"},
        ],
        "preferences": {
            "platforms": ["upwork", "linkedin"],
            "currency": "USD",
            "hourly_min": 75,
            "hourly_max": 150,
            "fixed_budget_min": 5000,
            "project_types": ["short_gig", "medium_project"],
            "tightness": 3,
        },
    }


def valid_draft() -> Dict[str, Any]:
    return {
        "title_keywords": [
            {"keyword": "Full Stack Developer", "weight": 10},
            {"keyword": "Senior Software Engineer", "weight": 8},
        ],
        "skill_keywords": [
            {"keyword": "typescript", "weight": 10},
            {"keyword": "react", "weight": 9},
            {"keyword": "nodejs", "weight": 9},
        ],
        "negative_keywords": ["unpaid", "equity only"],
        "locations": [{"country_code": "US", "city": None, "region": None}],
        "seniority_levels": ["mid", "senior"],
        "remote_preference": "flexible",
        "contract_types": ["freelance", "contract"],
        "hourly_min": 75,
        "hourly_max": 150,
        "fixed_budget_min": 5000,
    }


class ScriptedReasoning(ReasoningCapability):
    """Returns (or raises) the scripted outcomes in order; repeats the last one when exhausted."""

    def __init__(self, outcomes: List[Union[Dict[str, Any], Exception]]) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[Dict[str, str]] = []

    async def generate(self, instructions: str, user_message: str) -> Dict[str, Any]:
        self.calls.append({"instructions": instructions, "user_message": user_message})
        index = min(len(self.calls) - 1, len(self._outcomes) - 1)
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return copy.deepcopy(outcome)


class RecordedSleep:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def raw_profile() -> RawProfile:
    return RawProfile.model_validate(raw_profile_data())


@pytest.fixture
def normalized_profile(raw_profile):
    return normalize_profile(raw_profile, reference_date=REFERENCE_DATE, normalized_at=NORMALIZED_AT)


@pytest.fixture
def recorded_sleep() -> RecordedSleep:
    return RecordedSleep()
