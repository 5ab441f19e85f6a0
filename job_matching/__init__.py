"""
Worker-Job Matching and Ranking

This package scores and ranks blue-collar workers against jobs:
1. Filter the candidate set (active jobs, optional strict trade filter)
2. Deterministic multi-factor scoring under a named policy
3. Ranking with a stable tie-break, plus human-readable reasons

Usage:
    from job_matching import find_job_matches_for_worker

    matches = find_job_matches_for_worker(worker, jobs, limit=5)
    print(f"Best: {matches[0].subject_id} {matches[0].display_score}%")
"""

from .config import WEIGHTS, PERCENTAGE_WEIGHTS, BONUS_POINTS
from .errors import InvalidArgument
from .job_filter import search_jobs, sort_by_relevance, trending_jobs
from .matcher import find_job_matches_for_worker, find_worker_matches_for_job
from .models import (
    Availability,
    JobCandidate,
    JobStatus,
    MatchResult,
    ScoringPolicyName,
    SearchCriteria,
    WagePeriod,
    WorkerCandidate,
)
from .policies import get_policy
from .ranker import rank

__all__ = [
    "find_job_matches_for_worker",
    "find_worker_matches_for_job",
    "search_jobs",
    "sort_by_relevance",
    "trending_jobs",
    "rank",
    "get_policy",
    "InvalidArgument",
    "Availability",
    "JobCandidate",
    "JobStatus",
    "MatchResult",
    "ScoringPolicyName",
    "SearchCriteria",
    "WagePeriod",
    "WorkerCandidate",
    "WEIGHTS",
    "PERCENTAGE_WEIGHTS",
    "BONUS_POINTS",
]
__version__ = "1.0.0"
