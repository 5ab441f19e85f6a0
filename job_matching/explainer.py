"""
Match Explainer

Turns the inputs behind a score into short human-readable reasons.
"""

from typing import List, Sequence

from .config import (
    REASON_THRESHOLDS, BONUS_THRESHOLDS, MAX_REASONS, MAX_SKILLS_IN_REASON, MAX_RATING
)
from .models import JobCandidate, WorkerCandidate


def format_rating(rating: float) -> str:
    """4.0 -> '4', 4.5 -> '4.5'. Ratings above the scale print as its maximum."""
    return f"{min(rating, MAX_RATING):g}"


def explain(worker: WorkerCandidate, matched: Sequence[str]) -> List[str]:
    """
    Build the ordered reason list for one match.

    Rules, in order (each adds at most one reason):
    1. Matched skills: "Skills: a, b +more"
    2. At least 5 completed jobs: "Experienced: N+ jobs"
    3. Rating of 4 or more: "Top rated: R/5"
    4. Verified worker: "Verified"

    Args:
        worker: The worker in the pair
        matched: Matched skill names, in display order

    Returns:
        Up to MAX_REASONS strings; empty when nothing stands out
    """
    reasons = []

    if matched:
        shown = ", ".join(matched[:MAX_SKILLS_IN_REASON])
        more = " +more" if len(matched) > MAX_SKILLS_IN_REASON else ""
        reasons.append(f"Skills: {shown}{more}")

    if worker.total_jobs_completed >= REASON_THRESHOLDS["experienced_jobs"]:
        reasons.append(f"Experienced: {worker.total_jobs_completed}+ jobs")

    if worker.rating >= REASON_THRESHOLDS["top_rated"]:
        reasons.append(f"Top rated: {format_rating(worker.rating)}/5")

    if worker.verified:
        reasons.append("Verified")

    return reasons[:MAX_REASONS]


def explain_bonus(worker: WorkerCandidate, job: JobCandidate, tier: str) -> List[str]:
    """
    Reasons for the bonus policy.

    1. Same trade: "Specializes in <trade>"
    2. Expert tier: "Expert level experience"
    3. Rating of 4.5 or more: "High rated (R★)"
    4. More than 50 completed jobs: "N+ jobs completed"
    """
    reasons = []

    if worker.trade_key and worker.trade_key == job.trade_key:
        reasons.append(f"Specializes in {job.trade_required.strip()}")

    if tier == "expert":
        reasons.append("Expert level experience")

    if worker.rating >= BONUS_THRESHOLDS["top_rating"]:
        reasons.append(f"High rated ({format_rating(worker.rating)}★)")

    if worker.total_jobs_completed > BONUS_THRESHOLDS["many_jobs"]:
        reasons.append(f"{worker.total_jobs_completed}+ jobs completed")

    return reasons[:MAX_REASONS]
