"""
Job Filtering and Search

Hard filters applied before scoring, plus free-text job search. Every
function here returns a subset in the original relative order (except the
explicit sort helpers at the bottom) and never modifies its input.
"""

import logging
from typing import Any, Iterable, List, Mapping, Union

from .config import DEFAULT_LIMIT, DEFAULT_POLICY
from .models import JobCandidate, SearchCriteria, WorkerCandidate
from .policies import get_policy
from .ranker import validate_limit
from .scoring_engine import trades_match

logger = logging.getLogger(__name__)


def eligible_jobs(jobs: Iterable[JobCandidate]) -> List[JobCandidate]:
    """Only active jobs can be matched."""
    return [job for job in jobs if job.is_active]


def filter_by_trade(worker: WorkerCandidate, jobs: Iterable[JobCandidate]) -> List[JobCandidate]:
    """Strict mode: keep jobs whose required trade equals the worker's (non-empty) trade."""
    return [job for job in jobs if trades_match(worker, job)]


def filter_workers_by_trade(job: JobCandidate, workers: Iterable[WorkerCandidate]) -> List[WorkerCandidate]:
    """Strict mode: keep workers whose (non-empty) trade equals the job's required trade."""
    return [worker for worker in workers if trades_match(worker, job)]


def _skills_overlap(wanted: Iterable[str], job: JobCandidate) -> bool:
    job_skills = job.skill_keys
    for skill in wanted:
        needle = skill.strip().lower()
        if not needle:
            continue
        if any(needle in own or own in needle for own in job_skills):
            return True
    return False


def matches_criteria(job: JobCandidate, criteria: SearchCriteria) -> bool:
    if criteria.search_text:
        needle = criteria.search_text.lower()
        if needle not in job.title.lower() and needle not in job.description.lower():
            return False

    if criteria.category and job.category != criteria.category:
        return False

    if criteria.location and criteria.location.lower() not in job.location.lower():
        return False

    if criteria.min_wage is not None and job.wage_amount < criteria.min_wage:
        return False
    if criteria.max_wage is not None and job.wage_amount > criteria.max_wage:
        return False

    if criteria.skills and not _skills_overlap(criteria.skills, job):
        return False

    return True


def search_jobs(
    jobs: Iterable[JobCandidate],
    criteria: Union[SearchCriteria, Mapping[str, Any], None] = None,
) -> List[JobCandidate]:
    """
    Filter jobs by search criteria. All provided criteria must match.

    - search_text: case-insensitive substring of title or description
    - category: exact match
    - location: case-insensitive substring
    - min_wage / max_wage: inclusive bounds on wage_amount
    - skills: some wanted skill and some job skill contain one another

    Args:
        jobs: Jobs to search
        criteria: SearchCriteria, or a dict with the same (snake or camel case) keys

    Returns:
        Matching jobs in their original order
    """
    if criteria is None:
        criteria = SearchCriteria()
    elif not isinstance(criteria, SearchCriteria):
        criteria = SearchCriteria.model_validate(criteria)

    jobs = list(jobs)
    found = [job for job in jobs if matches_criteria(job, criteria)]
    logger.info(f"Job search: {len(found)}/{len(jobs)} jobs matched {criteria.model_dump(exclude_none=True)}")
    return found


def sort_by_relevance(
    jobs: Iterable[JobCandidate],
    worker: WorkerCandidate,
    policy=DEFAULT_POLICY,
) -> List[JobCandidate]:
    """Reorder jobs by match score for the worker, best first, ties by job id."""
    scorer = get_policy(policy)
    scored = [(scorer.compute_match(worker, job).final_score, job) for job in jobs]
    scored.sort(key=lambda pair: (-pair[0], pair[1].id))
    return [job for _, job in scored]


def trending_jobs(jobs: Iterable[JobCandidate], limit: int = DEFAULT_LIMIT) -> List[JobCandidate]:
    """Jobs with the most applicants first, ties by job id."""
    validate_limit(limit)
    return sorted(jobs, key=lambda job: (-job.applicants, job.id))[:limit]
