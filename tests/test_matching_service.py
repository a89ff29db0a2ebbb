"""
Tests for the rule-based job matcher.
"""

import pytest

from app.models.documents import Job, UserProfile
from app.schemas.schemas import CandidateProfile
from app.services.matching_service import (
    JobMatcher,
    calculate_experience_match,
    calculate_job_match,
    calculate_location_match,
    calculate_skills_match,
    candidate_from_profile,
    candidate_locations,
    parse_years_of_experience,
)


class TestParseYearsOfExperience:

    @pytest.mark.parametrize("text,expected", [
        ("5", 5),
        ("5+ years of work", 5),
        ("5-7 years", 5),
        ("  3 yrs", 3),
    ])
    def test_first_number_wins(self, text, expected):
        assert parse_years_of_experience(text) == expected

    @pytest.mark.parametrize("text", [None, "", "   ", "fresher"])
    def test_unparseable_is_none(self, text):
        assert parse_years_of_experience(text) is None


class TestSkillsMatch:

    def test_candidate_without_skills_scores_zero(self):
        assert calculate_skills_match(["java"], []) == 0.0
        assert calculate_skills_match([], None) == 0.0

    def test_job_without_skills_gets_partial_credit(self):
        assert calculate_skills_match([], ["python"]) == 50.0
        assert calculate_skills_match(None, ["python"]) == 50.0

    def test_fraction_of_required_skills(self):
        assert calculate_skills_match(["java", "sql"], ["Java", "Python"]) == 50.0

    def test_substring_either_direction(self):
        assert calculate_skills_match(["Java 17"], ["java"]) == 100.0
        assert calculate_skills_match(["react"], ["React.js"]) == 100.0

    def test_blank_skills_ignored(self):
        assert calculate_skills_match(["java", " "], ["java", ""]) == 100.0


class TestLocationMatch:

    def test_no_preference_is_neutral(self):
        assert calculate_location_match("Pune", []) == 50.0
        assert calculate_location_match("Pune", ["  "]) == 50.0

    def test_preferred_location_matches(self):
        assert calculate_location_match("Bangalore, India", ["bangalore"]) == 100.0

    def test_remote_fallback(self):
        assert calculate_location_match("Remote (India)", ["Delhi"]) == 75.0

    def test_no_match(self):
        assert calculate_location_match("Chennai", ["Delhi"]) == 0.0

    def test_empty_job_location_matches_any_preference(self):
        assert calculate_location_match(None, ["Delhi"]) == 100.0


class TestExperienceMatch:

    @pytest.mark.parametrize("required", [None, 0])
    def test_no_requirement_is_neutral(self, required):
        assert calculate_experience_match(required, 2) == 50.0

    def test_unknown_candidate_experience(self):
        assert calculate_experience_match(3, None) == 30.0

    def test_meets_requirement(self):
        assert calculate_experience_match(3, 3) == 100.0
        assert calculate_experience_match(3, 10) == 100.0

    def test_gap_penalty(self):
        assert calculate_experience_match(7, 5) == 70.0

    def test_penalty_floors_at_zero(self):
        assert calculate_experience_match(10, 0) == 0.0


class TestJobMatch:

    def test_half_skills_everything_else_neutral(self):
        job = Job(title="Backend", skills=["java", "sql"])
        candidate = CandidateProfile(skills=["Java", "Python"])
        assert calculate_job_match(job, candidate) == pytest.approx(50.0)

    def test_experience_gap_contributes_weighted(self):
        job = Job(title="Lead", skills=["go"], location="Pune", years_of_experience=7)
        candidate = CandidateProfile(
            skills=["Go"], preferred_locations=["pune"], years_experience="5+ years of work"
        )
        # 100*0.5 + 100*0.3 + 70*0.2
        assert calculate_job_match(job, candidate) == pytest.approx(94.0)

    def test_score_bounded(self):
        jobs = [
            Job(title="a", skills=["x"], location="Mars", years_of_experience=40),
            Job(title="b"),
            Job(title="c", skills=["python"], location="remote", years_of_experience=1),
        ]
        candidates = [
            CandidateProfile(),
            CandidateProfile(skills=["python"], preferred_locations=["Delhi"], years_experience="20"),
        ]
        for job in jobs:
            for candidate in candidates:
                assert 0.0 <= calculate_job_match(job, candidate) <= 100.0


class TestCandidateFromProfile:

    def test_legacy_location_merged(self):
        profile = UserProfile(preferred_locations=["Delhi"], preferred_location="Noida")
        assert candidate_from_profile(profile).preferred_locations == ["Delhi", "Noida"]

    def test_current_location_carried(self):
        candidate = candidate_from_profile(UserProfile(current_location="Mumbai"))
        assert candidate.current_location == "Mumbai"
        assert candidate.preferred_locations == []


class TestCandidateLocations:

    def test_current_location_fallback(self):
        candidate = CandidateProfile(current_location="Mumbai", preferred_locations=[" "])
        assert candidate_locations(candidate) == ["mumbai"]

    def test_preferences_win_over_current_location(self):
        candidate = CandidateProfile(current_location="Mumbai", preferred_locations=["Pune"])
        assert candidate_locations(candidate) == ["pune"]

    def test_nothing_set(self):
        assert candidate_locations(CandidateProfile()) == []

    def test_current_location_scores_like_a_preference(self):
        job = Job(title="Ops", location="Mumbai")
        by_current = CandidateProfile(skills=["excel"], current_location="Mumbai")
        by_preference = CandidateProfile(skills=["excel"], preferred_locations=["Mumbai"])
        # skills 50 (job lists none), location 100, experience 50
        assert calculate_job_match(job, by_current) == pytest.approx(65.0)
        assert calculate_job_match(job, by_current) == calculate_job_match(job, by_preference)


class TestJobMatcher:

    def test_sorted_descending_and_zero_scores_dropped(self):
        jobs = [
            Job(id="low", title="Low", skills=["java", "sql"], location="Delhi"),
            Job(id="zero", title="Zero", skills=["rust"], location="Chennai", years_of_experience=20),
            Job(id="high", title="High", skills=["python"], location="Bangalore"),
        ]
        candidate = CandidateProfile(
            skills=["Python", "Java"], preferred_locations=["Bangalore"], years_experience="0"
        )

        results = JobMatcher().match(candidate, jobs)

        assert [r.job.id for r in results] == ["high", "low"]
        assert results[0].match_percentage > results[1].match_percentage

    def test_no_jobs(self):
        assert JobMatcher().match(CandidateProfile(skills=["python"]), []) == []
