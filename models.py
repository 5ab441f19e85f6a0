from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from job_matching.models import JobCandidate, MatchResult, SearchCriteria, WorkerCandidate


class ApiModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted too."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class JobMatchRequest(ApiModel):
    worker: WorkerCandidate
    jobs: List[JobCandidate] = Field(default_factory=list)
    limit: Optional[int] = Field(default=None, description="Maximum matches to return (default from settings)")
    policy: Optional[str] = Field(default=None, description="weighted|percentage|bonus (default from settings)")


class WorkerMatchRequest(ApiModel):
    job: JobCandidate
    workers: List[WorkerCandidate] = Field(default_factory=list)
    limit: Optional[int] = None
    policy: Optional[str] = None


class JobSearchRequest(ApiModel):
    jobs: List[JobCandidate] = Field(default_factory=list)
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)


class MatchResultOut(ApiModel):
    subject_id: str
    counterpart_id: str
    final_score: int = Field(ge=0, le=100)
    score_breakdown: Dict[str, float] = Field(default_factory=dict)
    reasons: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchResultOut":
        return cls(
            subject_id=result.subject_id,
            counterpart_id=result.counterpart_id,
            final_score=result.display_score,
            score_breakdown=result.score_breakdown,
            reasons=result.reasons,
        )


class MatchListResponse(ApiModel):
    matches: List[MatchResultOut]
    count: int
    policy: str
    candidates_considered: int
    processing_time: str
    request_id: str


class JobListResponse(ApiModel):
    jobs: List[JobCandidate]
    count: int


class Settings(BaseModel):
    matching_policy: str = "weighted"
    default_match_limit: int = 10
    hard_trade_filter: bool = False
    seed_data_path: Optional[str] = None
    rate_limit_requests_per_minute: int = 60
    log_level: str = "INFO"
