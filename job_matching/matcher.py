"""
Main Matcher Module

Orchestrates the complete matching process:
1. Narrow the candidate set (active jobs, optional strict trade filter)
2. Score every pair with the configured policy
3. Rank, truncate and return results with reasons
"""

import logging
from typing import Iterable, List

from .config import DEFAULT_LIMIT, DEFAULT_POLICY
from .job_filter import eligible_jobs, filter_by_trade, filter_workers_by_trade
from .models import JobCandidate, MatchResult, WorkerCandidate
from .policies import SUBJECT_JOB, SUBJECT_WORKER, get_policy
from .ranker import rank, validate_limit

logger = logging.getLogger(__name__)


def find_job_matches_for_worker(
    worker: WorkerCandidate,
    jobs: Iterable[JobCandidate],
    limit: int = DEFAULT_LIMIT,
    policy=DEFAULT_POLICY,
    hard_trade_filter: bool = False,
) -> List[MatchResult]:
    """
    Rank jobs for one worker.

    Only active jobs are considered. Trade affinity is part of the score,
    unless hard_trade_filter is set, in which case jobs for other trades
    are dropped before scoring.

    Args:
        worker: The worker looking for jobs
        jobs: Candidate jobs (not modified)
        limit: Maximum number of results, must be > 0
        policy: ScoringPolicyName, its string value, or a ScoringPolicy
        hard_trade_filter: Drop jobs whose trade differs from the worker's

    Returns:
        [MatchResult, ...] with subject_id = job id, best first

    Raises:
        InvalidArgument: Bad limit or unknown policy

    Example:
        >>> matches = find_job_matches_for_worker(worker, jobs, limit=5)
        >>> print(matches[0].subject_id, matches[0].display_score)
    """
    validate_limit(limit)
    scorer = get_policy(policy)

    jobs = list(jobs)
    candidates = eligible_jobs(jobs)
    if hard_trade_filter:
        candidates = filter_by_trade(worker, candidates)

    logger.info(
        f"Matching worker {worker.id} against {len(candidates)}/{len(jobs)} eligible jobs "
        f"(policy={scorer.name.value}, limit={limit})"
    )

    results = [scorer.compute_match(worker, job, subject=SUBJECT_JOB) for job in candidates]
    ranked = rank(results, limit)

    if ranked:
        logger.info(f"Top job for worker {worker.id}: {ranked[0].subject_id} ({ranked[0].final_score:.2f})")
    else:
        logger.info(f"No job matches for worker {worker.id}")
    return ranked


def find_worker_matches_for_job(
    job: JobCandidate,
    workers: Iterable[WorkerCandidate],
    limit: int = DEFAULT_LIMIT,
    policy=DEFAULT_POLICY,
    hard_trade_filter: bool = False,
) -> List[MatchResult]:
    """
    Rank workers for one job.

    A job that is not active has no eligible workers, so the result is empty.

    Args:
        job: The job to staff
        workers: Candidate workers (not modified)
        limit: Maximum number of results, must be > 0
        policy: ScoringPolicyName, its string value, or a ScoringPolicy
        hard_trade_filter: Drop workers whose trade differs from the job's

    Returns:
        [MatchResult, ...] with subject_id = worker id, best first

    Raises:
        InvalidArgument: Bad limit or unknown policy
    """
    validate_limit(limit)
    scorer = get_policy(policy)

    if not job.is_active:
        logger.info(f"Job {job.id} is {job.status.value}, no worker matches")
        return []

    workers = list(workers)
    candidates = filter_workers_by_trade(job, workers) if hard_trade_filter else workers

    logger.info(
        f"Matching job {job.id} against {len(candidates)}/{len(workers)} workers "
        f"(policy={scorer.name.value}, limit={limit})"
    )

    results = [scorer.compute_match(worker, job, subject=SUBJECT_WORKER) for worker in candidates]
    ranked = rank(results, limit)

    if ranked:
        logger.info(f"Top worker for job {job.id}: {ranked[0].subject_id} ({ranked[0].final_score:.2f})")
    else:
        logger.info(f"No worker matches for job {job.id}")
    return ranked
