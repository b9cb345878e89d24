import random
from datetime import date

import pytest
from pydantic import ValidationError

from conftest import NORMALIZED_AT, REFERENCE_DATE, raw_profile_data
from job_spec_engine.normalizers.profile_normalizer import (
    get_degree_level,
    normalize_preferences,
    normalize_profile,
)
from job_spec_engine.schemas.raw_profile import RawPreferences, RawProfile


def _normalize(data):
    return normalize_profile(
        RawProfile.model_validate(data),
        reference_date=REFERENCE_DATE,
        normalized_at=NORMALIZED_AT,
    )


def test_identity_and_version_are_preserved(normalized_profile, raw_profile):
    assert normalized_profile.user_id == raw_profile.user_id
    assert normalized_profile.team_id == raw_profile.team_id
    assert normalized_profile.profile_version == raw_profile.profile_version == 3
    assert normalized_profile.display_name == "Jane Developer"
    assert normalized_profile.normalized_at == NORMALIZED_AT


def test_skills_are_deduplicated_sorted_and_flattened(normalized_profile):
    names = [s.canonical_name for s in normalized_profile.primary_skills]
    assert names == ["typescript", "nodejs", "react", "postgresql"]
    react = next(s for s in normalized_profile.primary_skills if s.canonical_name == "react")
    # "React" (4, 3y) beats "reactjs" (3, 6y): level wins over years
    assert (react.level, react.years) == (4, 3)
    assert normalized_profile.secondary_skills == []
    assert normalized_profile.skill_keywords == names
    assert normalized_profile.primary_skills[1].display_name == "Node.js"


def test_nextjs_and_react_stay_distinct_and_react_keeps_highest_level():
    data = raw_profile_data()
    data["skills"] = [
        {"name": "Next.js", "level": 4},
        {"name": "React", "level": 3},
        {"name": "react", "level": 5},
    ]
    profile = _normalize(data)
    assert [(s.canonical_name, s.level) for s in profile.primary_skills] == [("react", 5), ("nextjs", 4)]


def test_skill_ties_break_on_years_then_name():
    data = raw_profile_data()
    data["skills"] = [
        {"name": "Vue", "level": 4, "years": None},
        {"name": "Angular", "level": 4, "years": None},
        {"name": "Svelte", "level": 4, "years": 2},
        {"name": "Vue.js", "level": 4, "years": 1},
    ]
    profile = _normalize(data)
    assert [s.canonical_name for s in profile.primary_skills] == ["svelte", "vue", "angular"]
    vue = profile.primary_skills[1]
    assert vue.years == 1


def test_primary_skills_capped_at_ten():
    data = raw_profile_data()
    data["skills"] = [{"name": f"skill{i:02d}", "level": 1 + i % 5, "years": i} for i in range(14)]
    profile = _normalize(data)
    assert len(profile.primary_skills) == 10
    assert len(profile.secondary_skills) == 4
    assert len(profile.skill_keywords) == 14
    levels = [s.level for s in profile.primary_skills + profile.secondary_skills]
    assert levels == sorted(levels, reverse=True)


def test_experiences_sorted_with_durations(normalized_profile):
    first, second = normalized_profile.experiences
    assert first.title == "Senior Full-Stack Developer"
    assert first.is_current is True
    assert first.duration_months == 35
    assert first.highlights == [
        "Led a team of 5 engineers",
        "Built the billing microservices",
        "Cut infra costs by 30%",
    ]
    assert second.title == "Frontend Developer"
    assert second.duration_months == 43
    assert second.highlights == []
    assert normalized_profile.total_experience_months == 78
    assert normalized_profile.inferred_seniority == "senior"
    assert normalized_profile.title_keywords == ["frontend developer", "senior full stack developer"]


def test_malformed_dates_degrade_to_none():
    data = raw_profile_data()
    data["experiences"] = [
        {"title": "Consultant", "start_date": "sometime", "end_date": None},
        {"title": "Backwards", "start_date": "2022-01-01", "end_date": "2021-01-01"},
        {"title": "Undated", "start_date": None, "end_date": "2020-01-01"},
        {"title": "Real", "start_date": "2025-01-01", "end_date": "2025-07-01"},
    ]
    profile = _normalize(data)
    by_title = {e.title: e for e in profile.experiences}
    assert by_title["Consultant"].duration_months is None
    assert by_title["Backwards"].duration_months is None
    assert by_title["Undated"].duration_months is None
    assert by_title["Real"].duration_months == 6
    assert profile.total_experience_months == 6
    assert profile.inferred_seniority == "entry"
    # dated entries first (most recent first), undated ones last by title
    assert [e.title for e in profile.experiences] == ["Real", "Backwards", "Consultant", "Undated"]


def test_education_sorted_and_highest_degree():
    data = raw_profile_data()
    data["educations"] = [
        {"institution": "MIT", "degree": "Bachelor of Science", "end_date": "2016-06-01"},
        {"institution": " Stanford ", "degree": "Master of Science", "field_of_study": " ", "end_date": "2018-06-01"},
        {"institution": "Community College", "degree": "  ", "end_date": "garbage"},
    ]
    profile = _normalize(data)
    assert [e.institution for e in profile.educations] == ["Stanford", "MIT", "Community College"]
    assert [e.graduation_year for e in profile.educations] == [2018, 2016, None]
    assert profile.educations[0].field is None
    assert profile.educations[2].degree is None
    assert profile.highest_degree == "Master of Science"


def test_no_recognized_degree_means_none():
    data = raw_profile_data()
    data["educations"] = [{"institution": "Bootcamp", "degree": "Certificate"}]
    assert _normalize(data).highest_degree is None


@pytest.mark.parametrize(
    "degree, level",
    [
        ("High School Diploma", 1),
        ("Associate of Arts", 2),
        ("B.Sc. Computer Science", 3),
        ("Master of Engineering", 4),
        ("Ph.D. Physics", 5),
        ("Doctor of Philosophy", 5),
        # substring matching checks "ba" before "mba"
        ("MBA", 3),
        (None, 0),
    ],
)
def test_get_degree_level(degree, level):
    assert get_degree_level(degree) == level


def test_default_preferences_when_absent():
    prefs = normalize_preferences(None)
    assert prefs.platforms == ["linkedin", "upwork"]
    assert prefs.tightness == 3
    assert prefs.remote_preference == "flexible"
    assert prefs.contract_type == "any"
    assert prefs.hourly_rate.min is None and prefs.hourly_rate.currency == "USD"


@pytest.mark.parametrize(
    "project_types, contract_type",
    [
        (["short_gig", "full_time", "long_term"], "full_time"),
        (["short_gig", "long_term"], "contract"),
        (["medium_project"], "freelance"),
        ([], "any"),
    ],
)
def test_contract_type_precedence(project_types, contract_type):
    prefs = normalize_preferences(RawPreferences(project_types=project_types))
    assert prefs.contract_type == contract_type


@pytest.mark.parametrize("tightness, expected", [(9, 5), (-2, 1), (4, 4)])
def test_tightness_is_clamped(tightness, expected):
    assert normalize_preferences(RawPreferences(tightness=tightness)).tightness == expected


def test_platforms_deduplicated_and_empty_falls_back():
    assert normalize_preferences(RawPreferences(platforms=["upwork", "linkedin", "upwork"])).platforms == [
        "linkedin",
        "upwork",
    ]
    assert normalize_preferences(RawPreferences(platforms=[])).platforms == ["linkedin", "upwork"]


def test_remote_preference_passes_through_when_known():
    assert normalize_preferences(RawPreferences(remote_preference="Remote_Only")).remote_preference == "remote_only"
    assert normalize_preferences(RawPreferences(remote_preference="mars")).remote_preference == "flexible"


def test_output_is_order_insensitive():
    data = raw_profile_data()
    data["skills"].extend([
        {"name": "Docker", "level": 3, "years": None},
        {"name": "AWS", "level": 3, "years": 2},
        {"name": "k8s", "level": 2, "years": 1},
    ])
    data["experiences"].append(
        {"title": "Intern", "company": "Big Co", "start_date": "2018-06-01", "end_date": "2018-09-01"}
    )
    data["educations"].append({"institution": "Bootcamp", "degree": None, "end_date": "2016-06-01"})
    baseline = _normalize(data).model_dump_json()

    rng = random.Random(1234)
    for _ in range(20):
        shuffled = raw_profile_data()
        shuffled.update(
            skills=rng.sample(data["skills"], len(data["skills"])),
            experiences=rng.sample(data["experiences"], len(data["experiences"])),
            educations=rng.sample(data["educations"], len(data["educations"])),
        )
        assert _normalize(shuffled).model_dump_json() == baseline


def test_same_input_same_output():
    assert _normalize(raw_profile_data()) == _normalize(raw_profile_data())


def test_current_position_uses_reference_date():
    data = raw_profile_data()
    profile_a = normalize_profile(RawProfile.model_validate(data), reference_date=date(2026, 1, 21), normalized_at=NORMALIZED_AT)
    profile_b = normalize_profile(RawProfile.model_validate(data), reference_date=date(2027, 1, 21), normalized_at=NORMALIZED_AT)
    assert profile_b.experiences[0].duration_months == profile_a.experiences[0].duration_months + 12


def test_normalized_profile_is_immutable(normalized_profile):
    with pytest.raises(ValidationError):
        normalized_profile.total_experience_months = 1


def test_empty_profile_normalizes():
    profile = _normalize({"user_id": "u", "team_id": "t"})
    assert profile.profile_version == 1
    assert profile.primary_skills == [] and profile.experiences == [] and profile.educations == []
    assert profile.total_experience_months == 0
    assert profile.inferred_seniority == "entry"
    assert profile.highest_degree is None
    assert profile.preferences.contract_type == "any"
