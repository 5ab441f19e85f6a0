"""
Builders for test candidates with sensible defaults.
"""

from job_matching.models import JobCandidate, MatchResult, WorkerCandidate


def make_worker(**overrides) -> WorkerCandidate:
    data = {
        "id": "worker_1",
        "trade": "electrician",
        "skills": ["wiring", "panels"],
        "experience_years": 8,
        "rating": 4.5,
        "availability": "immediate",
        "verified": True,
        "total_jobs_completed": 0,
    }
    data.update(overrides)
    return WorkerCandidate(**data)


def make_job(**overrides) -> JobCandidate:
    data = {
        "id": "job_1",
        "trade_required": "electrician",
        "required_skills": ["wiring", "panels", "testing"],
        "wage_amount": 600,
        "wage_period": "daily",
        "location": "Mumbai, MH",
        "status": "active",
        "title": "Electrician needed",
        "description": "Office rewiring",
        "category": "electrical",
    }
    data.update(overrides)
    return JobCandidate(**data)


def make_result(subject_id: str, score: float, counterpart_id: str = "worker_1") -> MatchResult:
    return MatchResult(subject_id=subject_id, counterpart_id=counterpart_id, final_score=score)
