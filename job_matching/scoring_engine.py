"""
Deterministic Scoring Components

Each function scores one factor of a (worker, job) pair.
All functions are pure and total: out-of-range inputs are clamped, never rejected.
"""

import logging
import math
from typing import List

from .config import (
    TRADE_BASE_SCORE, EXPERIENCE_CAP_YEARS, JOBS_COMPLETED_CAP, EXPERIENCE_TIERS,
    AVAILABILITY_SCORES, MAX_DISTANCE_KM, UNKNOWN_DISTANCE_SCORE, MAX_RATING
)
from .models import Availability, JobCandidate, WorkerCandidate

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]. NaN collapses to low."""
    if value is None or math.isnan(value):
        return low
    return max(low, min(value, high))


def trades_match(worker: WorkerCandidate, job: JobCandidate) -> bool:
    return bool(worker.trade_key) and worker.trade_key == job.trade_key


def matched_skills(worker: WorkerCandidate, job: JobCandidate) -> List[str]:
    """Required skills of the job the worker has, in posting order (exact, case-insensitive)."""
    matched = []
    seen = set()
    for skill in job.required_skills:
        key = skill.strip().lower()
        if key in worker.skill_keys and key not in seen:
            seen.add(key)
            matched.append(skill.strip())
    return matched


def skill_score(worker: WorkerCandidate, job: JobCandidate) -> float:
    """
    Calculate skill overlap score.

    Formula:
    - Job lists skills: count of distinct required skills the worker has (0..N)
    - Job lists none: TRADE_BASE_SCORE if trades match, else 0

    Args:
        worker: Worker being scored
        job: Job being scored against

    Returns:
        Score from 0 to N (or 0/3 for skill-less jobs)
    """
    if not job.skill_keys:
        score = float(TRADE_BASE_SCORE) if trades_match(worker, job) else 0.0
        logger.debug(f"Skill score: no required skills, trade match={score > 0}, score = {score}")
        return score

    score = float(sum(1 for key in job.skill_keys if key in worker.skill_keys))
    logger.debug(f"Skill score: {score:.0f}/{len(job.skill_keys)} required skills")
    return score


def max_skill_units(job: JobCandidate) -> int:
    """
    Skill units in the normalization denominator.

    A skill-less job counts one unit even though a trade match scores
    TRADE_BASE_SCORE, so such pairs can exceed the maximum and clamp at 100.
    """
    return len(job.skill_keys) if job.skill_keys else 1


def experience_bonus(worker: WorkerCandidate) -> float:
    """Years of experience scaled to 0-1, saturating at EXPERIENCE_CAP_YEARS."""
    return clamp(min(worker.experience_years, EXPERIENCE_CAP_YEARS) / EXPERIENCE_CAP_YEARS)


def availability_score(worker: WorkerCandidate, job: JobCandidate) -> float:
    """
    Calculate availability score.

    - immediate: 1.0
    - flexible: 0.5
    - dated: 1.0 only when the worker's date equals the job date, else 0.0
    """
    if worker.availability == Availability.IMMEDIATE:
        return AVAILABILITY_SCORES["immediate"]
    if worker.availability == Availability.FLEXIBLE:
        return AVAILABILITY_SCORES["flexible"]
    if (
        worker.availability == Availability.DATED
        and worker.availability_date is not None
        and job.date is not None
        and worker.availability_date == job.date
    ):
        return AVAILABILITY_SCORES["dated_match"]
    return AVAILABILITY_SCORES["other"]


def proximity_score(worker: WorkerCandidate) -> float:
    """
    Calculate proximity score (0-1).

    Linear falloff reaching 0 at MAX_DISTANCE_KM. Unknown distance
    scores UNKNOWN_DISTANCE_SCORE so it neither helps nor hurts.
    """
    if worker.distance_km is None:
        return UNKNOWN_DISTANCE_SCORE
    return clamp(1 - worker.distance_km / MAX_DISTANCE_KM)


def rating_score(worker: WorkerCandidate) -> float:
    return clamp(worker.rating / MAX_RATING)


def verification_score(worker: WorkerCandidate) -> float:
    return 1.0 if worker.verified else 0.0


# Percentage policy components

def fuzzy_matched_skills(worker: WorkerCandidate, job: JobCandidate) -> List[str]:
    """Job skills where either the job skill or some worker skill contains the other."""
    matched = []
    for skill in job.required_skills:
        key = skill.strip().lower()
        if not key:
            continue
        if any(key in own or own in key for own in worker.skill_keys):
            matched.append(skill.strip())
    return matched


def skill_match_fraction(worker: WorkerCandidate, job: JobCandidate) -> float:
    """Share of the job's skills the worker covers (fuzzy). 0 when either side lists none."""
    listed = [s for s in job.required_skills if s.strip()]
    if not listed or not worker.skill_keys:
        return 0.0
    return clamp(len(fuzzy_matched_skills(worker, job)) / len(listed))


def experience_factor(worker: WorkerCandidate) -> float:
    """Completed jobs scaled to 0-1, saturating at JOBS_COMPLETED_CAP."""
    return clamp(worker.total_jobs_completed / JOBS_COMPLETED_CAP)


# Bonus policy components

def experience_tier(worker: WorkerCandidate) -> str:
    """'expert', 'intermediate' or 'entry' from years of experience."""
    if worker.experience_years >= EXPERIENCE_TIERS["expert"]:
        return "expert"
    if worker.experience_years >= EXPERIENCE_TIERS["intermediate"]:
        return "intermediate"
    return "entry"
