"""
Job Matching Service

PURPOSE:
Rank job postings for one applicant with a rule-based 0-100 score.

HOW IT WORKS:
1. Build a CandidateProfile from the stored UserProfile
   (skills, preferred locations, years of experience); the current
   location stands in for the preferences when none are set
2. Score every job on three components:
   - skills     (50%)
   - location   (30%)
   - experience (20%)
3. Drop jobs scoring 0, sort the rest descending

Every function here is pure: jobs and profile are fetched by the caller.
Missing or malformed data never raises, it degrades to a neutral score.
"""

import re
from typing import List, Optional, Sequence

from app.models.documents import Job, UserProfile
from app.schemas.schemas import CandidateProfile, MatchResult


# ============================================================
# WEIGHTS & NEUTRAL SCORES
# ============================================================

SKILL_WEIGHT = 0.50
LOCATION_WEIGHT = 0.30
EXPERIENCE_WEIGHT = 0.20

NEUTRAL_SCORE = 50.0         # no data on one side of the comparison
REMOTE_SCORE = 75.0          # job is remote but not in a preferred location
UNKNOWN_EXPERIENCE_SCORE = 30.0
EXPERIENCE_GAP_PENALTY = 15.0  # per missing year

MAX_SCORE = 100.0

_NON_DIGITS = re.compile(r"[^0-9]")


# ============================================================
# INPUT NORMALIZATION
# ============================================================

def parse_years_of_experience(experience: Optional[str]) -> Optional[int]:
    """
    Parse the first number out of a free-text experience value.

    "5" -> 5, "5+ years of work" -> 5, "5-7 years" -> 5, "fresher" -> None
    """
    if experience is None or not str(experience).strip():
        return None

    parts = _NON_DIGITS.sub(" ", str(experience)).split()
    if not parts:
        return None
    return int(parts[0])


def _normalize(values: Optional[Sequence[str]]) -> List[str]:
    """Lowercase and strip, dropping blanks."""
    if not values:
        return []
    return [v.strip().lower() for v in values if v and v.strip()]


def candidate_from_profile(profile: UserProfile) -> CandidateProfile:
    """
    Build the matcher input from a stored profile.

    Preferred locations are the list plus the legacy single value.
    """
    locations = list(profile.preferred_locations or [])
    if profile.preferred_location:
        locations.append(profile.preferred_location)

    return CandidateProfile(
        skills=profile.skills or [],
        current_location=profile.current_location,
        preferred_locations=locations,
        years_experience=profile.experience
    )


def candidate_locations(candidate: CandidateProfile) -> List[str]:
    """Preferred locations, or the current location when none is set."""
    preferred = _normalize(candidate.preferred_locations)
    if not preferred:
        return _normalize([candidate.current_location])
    return preferred


# ============================================================
# COMPONENT SCORES (each 0-100)
# ============================================================

def calculate_skills_match(job_skills: Optional[Sequence[str]],
                           candidate_skills: Optional[Sequence[str]]) -> float:
    """
    Percentage of the job's skills covered by the candidate.

    A job skill is covered when it and any candidate skill contain one
    another (case-insensitive), so "java" covers "java 17" and vice versa.
    """
    user_skills = _normalize(candidate_skills)
    if not user_skills:
        return 0.0

    required = _normalize(job_skills)
    if not required:
        return NEUTRAL_SCORE

    matched = sum(
        1 for skill in required
        if any(skill in user_skill or user_skill in skill for user_skill in user_skills)
    )
    return (matched / len(required)) * 100.0


def calculate_location_match(job_location: Optional[str],
                             preferred_locations: Optional[Sequence[str]]) -> float:
    preferred = _normalize(preferred_locations)
    if not preferred:
        return NEUTRAL_SCORE

    location = (job_location or "").lower()
    if any(loc in location or location in loc for loc in preferred):
        return 100.0
    if "remote" in location:
        return REMOTE_SCORE
    return 0.0


def calculate_experience_match(required_years: Optional[int],
                               candidate_years: Optional[int]) -> float:
    if not required_years:
        return NEUTRAL_SCORE
    if candidate_years is None:
        return UNKNOWN_EXPERIENCE_SCORE
    if candidate_years >= required_years:
        return 100.0

    gap = required_years - candidate_years
    return max(0.0, 100.0 - gap * EXPERIENCE_GAP_PENALTY)


def calculate_job_match(job: Job, candidate: CandidateProfile) -> float:
    """Weighted match percentage for one job, clamped to [0, 100]."""
    candidate_years = parse_years_of_experience(candidate.years_experience)

    score = (
        calculate_skills_match(job.skills, candidate.skills) * SKILL_WEIGHT +
        calculate_location_match(job.location, candidate_locations(candidate)) * LOCATION_WEIGHT +
        calculate_experience_match(job.years_of_experience, candidate_years) * EXPERIENCE_WEIGHT
    )
    return min(max(score, 0.0), MAX_SCORE)


# ============================================================
# MATCHER
# ============================================================

class JobMatcher:
    """
    Ranks job postings against one candidate.

    Stateless: one instance can serve any number of concurrent requests.
    """

    def match(self, candidate: CandidateProfile, jobs: Sequence[Job]) -> List[MatchResult]:
        results = []
        for job in jobs:
            score = calculate_job_match(job, candidate)
            if score > 0:
                results.append(MatchResult(job=job, match_percentage=score))

        results.sort(key=lambda r: r.match_percentage, reverse=True)
        return results
