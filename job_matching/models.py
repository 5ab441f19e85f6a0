from __future__ import annotations

import datetime as dt
import math
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel


class Availability(str, Enum):
    IMMEDIATE = "immediate"
    FLEXIBLE = "flexible"
    DATED = "dated"


class WagePeriod(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    FIXED = "fixed"


class JobStatus(str, Enum):
    ACTIVE = "active"
    FILLED = "filled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ScoringPolicyName(str, Enum):
    WEIGHTED = "weighted"
    PERCENTAGE = "percentage"
    BONUS = "bonus"


def _fold(value: Optional[str]) -> str:
    return (value or "").strip().lower()


class _Candidate(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class WorkerCandidate(_Candidate):
    """Read-only projection of a worker profile used for matching."""
    id: str
    trade: str = ""
    skills: List[str] = Field(default_factory=list)
    experience_years: float = 0.0
    rating: float = 0.0
    availability: Availability = Availability.FLEXIBLE
    availability_date: Optional[dt.date] = None
    distance_km: Optional[float] = None
    verified: bool = False
    total_jobs_completed: int = 0
    name: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Lowercased shadows, computed once per instance
    _trade_key: str = PrivateAttr(default="")
    _skill_keys: FrozenSet[str] = PrivateAttr(default_factory=frozenset)

    def model_post_init(self, context: Any) -> None:
        self._trade_key = _fold(self.trade)
        self._skill_keys = frozenset(_fold(s) for s in self.skills if _fold(s))

    @property
    def trade_key(self) -> str:
        return self._trade_key

    @property
    def skill_keys(self) -> FrozenSet[str]:
        return self._skill_keys


class JobCandidate(_Candidate):
    """Read-only projection of a job posting used for matching and search."""
    id: str
    trade_required: str = ""
    required_skills: List[str] = Field(default_factory=list)
    date: Optional[dt.date] = None
    wage_amount: float = 0.0
    wage_currency: str = "INR"
    wage_period: WagePeriod = WagePeriod.DAILY
    location: str = ""
    status: JobStatus = JobStatus.ACTIVE
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    employer_id: Optional[str] = None
    applicants: int = 0
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    _trade_key: str = PrivateAttr(default="")
    _skill_keys: List[str] = PrivateAttr(default_factory=list)

    def model_post_init(self, context: Any) -> None:
        self._trade_key = _fold(self.trade_required)
        # Distinct lowercased skills in posting order
        keys: List[str] = []
        for skill in self.required_skills:
            key = _fold(skill)
            if key and key not in keys:
                keys.append(key)
        self._skill_keys = keys

    @property
    def trade_key(self) -> str:
        return self._trade_key

    @property
    def skill_keys(self) -> List[str]:
        return list(self._skill_keys)

    @property
    def is_active(self) -> bool:
        return self.status == JobStatus.ACTIVE


class MatchResult(BaseModel):
    """Score of one (worker, job) pair. Computed on demand, never stored."""
    model_config = ConfigDict(frozen=True)

    subject_id: str
    counterpart_id: str
    final_score: float
    score_breakdown: Dict[str, float] = Field(default_factory=dict)
    reasons: List[str] = Field(default_factory=list)
    policy: ScoringPolicyName = ScoringPolicyName.WEIGHTED

    @property
    def display_score(self) -> int:
        # Half-up rounding, so 72.5 shows as 73
        return int(math.floor(self.final_score + 0.5))


class SearchCriteria(BaseModel):
    """Free-text job search filters. Every field that is set must match."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    category: Optional[str] = None
    location: Optional[str] = None
    min_wage: Optional[float] = None
    max_wage: Optional[float] = None
    skills: Optional[List[str]] = None
    search_text: Optional[str] = None
