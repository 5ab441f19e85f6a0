"""
Scoring Policies

A policy turns the raw component scores of one (worker, job) pair into a
single final score in [0, 100]. Three named policies exist:

- weighted:   normalized weighted sum of skill, experience, availability,
              proximity and rating (the default)
- percentage: fixed point split 40/25/20/10 over skill coverage, completed
              jobs, rating and verification
- bonus:      base 50 plus flat bonuses for trade, experience tier, rating
              and availability

Which one is used is a configuration choice (ScoringPolicyName).
"""

import logging
import math
from typing import Dict, List, Mapping, Optional, Union

from . import scoring_engine as components
from .config import WEIGHTS, PERCENTAGE_WEIGHTS, BONUS_POINTS, BONUS_THRESHOLDS
from .errors import InvalidArgument
from .explainer import explain, explain_bonus
from .models import JobCandidate, MatchResult, ScoringPolicyName, WorkerCandidate

logger = logging.getLogger(__name__)

SUBJECT_JOB = "job"
SUBJECT_WORKER = "worker"


def validate_weights(weights: Mapping[str, float], allowed: Mapping[str, float]) -> Dict[str, float]:
    """
    Check a weight table and return a copy with every factor filled in.

    Raises:
        InvalidArgument: unknown factor, or a weight that is not a
            non-negative finite number
    """
    unknown = sorted(set(weights) - set(allowed))
    if unknown:
        raise InvalidArgument(f"Unknown weight factors: {', '.join(unknown)}")

    table = dict(allowed)
    for factor, weight in weights.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise InvalidArgument(f"Weight for '{factor}' must be a number, got {weight!r}")
        if not math.isfinite(weight) or weight < 0:
            raise InvalidArgument(f"Weight for '{factor}' must be non-negative and finite, got {weight}")
        table[factor] = float(weight)
    return table


class ScoringPolicy:
    """Base class: subclasses provide the breakdown and the weighted total."""

    name: ScoringPolicyName
    default_weights: Mapping[str, float] = {}

    def __init__(self, weights: Optional[Mapping[str, float]] = None):
        self.weights = validate_weights(weights or {}, self.default_weights)

    def breakdown(self, worker: WorkerCandidate, job: JobCandidate) -> Dict[str, float]:
        raise NotImplementedError

    def raw_score(self, breakdown: Mapping[str, float], job: JobCandidate) -> float:
        raise NotImplementedError

    def reason_skills(self, worker: WorkerCandidate, job: JobCandidate) -> List[str]:
        raise NotImplementedError

    def reasons(self, worker: WorkerCandidate, job: JobCandidate) -> List[str]:
        return explain(worker, self.reason_skills(worker, job))

    def final_score(self, breakdown: Mapping[str, float], job: JobCandidate) -> float:
        # Clamp only here, after the whole sum is known
        return components.clamp(self.raw_score(breakdown, job), 0.0, 100.0)

    def compute_match(
        self,
        worker: WorkerCandidate,
        job: JobCandidate,
        subject: str = SUBJECT_JOB,
    ) -> MatchResult:
        """
        Score one pair.

        Args:
            worker: Worker candidate
            job: Job candidate
            subject: Which side is being ranked ("job" or "worker")

        Returns:
            MatchResult whose subject_id is the ranked side's id
        """
        breakdown = self.breakdown(worker, job)
        score = self.final_score(breakdown, job)
        reasons = self.reasons(worker, job)

        if subject == SUBJECT_WORKER:
            subject_id, counterpart_id = worker.id, job.id
        else:
            subject_id, counterpart_id = job.id, worker.id

        logger.debug(f"[{self.name.value}] worker={worker.id} job={job.id} score={score:.2f} breakdown={breakdown}")
        return MatchResult(
            subject_id=subject_id,
            counterpart_id=counterpart_id,
            final_score=score,
            score_breakdown=breakdown,
            reasons=reasons,
            policy=self.name,
        )


class WeightedPolicy(ScoringPolicy):
    """
    Normalized weighted sum.

    Formula:
        raw = skill*3.0 + experience*1.5 + availability*2.0 + proximity*2.0 + rating*1.0
        max = skill_units*3.0 + 1.5 + 2.0 + 2.0 + 1.0
        final = clamp(raw / max * 100, 0, 100)

    skill_units is the number of required skills, or 1 when the job lists
    none. A trade-matched skill-less job therefore clamps at 100.
    """

    name = ScoringPolicyName.WEIGHTED
    default_weights = WEIGHTS

    def breakdown(self, worker: WorkerCandidate, job: JobCandidate) -> Dict[str, float]:
        return {
            "skill": components.skill_score(worker, job),
            "experience": components.experience_bonus(worker),
            "availability": components.availability_score(worker, job),
            "proximity": components.proximity_score(worker),
            "rating": components.rating_score(worker),
            "verification": components.verification_score(worker),
        }

    def max_possible_score(self, job: JobCandidate) -> float:
        w = self.weights
        return (
            components.max_skill_units(job) * w["skill"]
            + w["experience"] + w["availability"] + w["proximity"] + w["rating"]
        )

    def raw_score(self, breakdown: Mapping[str, float], job: JobCandidate) -> float:
        total = sum(breakdown[factor] * weight for factor, weight in self.weights.items())
        max_possible = self.max_possible_score(job)
        if max_possible <= 0:
            return 0.0
        return total / max_possible * 100

    def reason_skills(self, worker: WorkerCandidate, job: JobCandidate) -> List[str]:
        return components.matched_skills(worker, job)


class PercentagePolicy(ScoringPolicy):
    """
    Fixed percentage split.

    Formula:
        final = skill_match_fraction*40 + experience_factor*25
              + rating_fraction*20 + verified*10
    """

    name = ScoringPolicyName.PERCENTAGE
    default_weights = PERCENTAGE_WEIGHTS

    def breakdown(self, worker: WorkerCandidate, job: JobCandidate) -> Dict[str, float]:
        return {
            "skill_match_fraction": components.skill_match_fraction(worker, job),
            "experience_factor": components.experience_factor(worker),
            "rating_fraction": components.rating_score(worker),
            "verification": components.verification_score(worker),
        }

    def raw_score(self, breakdown: Mapping[str, float], job: JobCandidate) -> float:
        return sum(breakdown[factor] * weight for factor, weight in self.weights.items())

    def reason_skills(self, worker: WorkerCandidate, job: JobCandidate) -> List[str]:
        return components.fuzzy_matched_skills(worker, job)


class BonusPolicy(ScoringPolicy):
    """
    Base score plus flat bonuses.

    Formula:
        final = 50 + trade_match*30 + expert*15 + intermediate*10
              + top_rating*5 + availability*5

    Each breakdown entry is 0 or 1. Experience tiers come from
    experience_years; availability counts when it scores a full 1.0.
    """

    name = ScoringPolicyName.BONUS
    default_weights = BONUS_POINTS

    def breakdown(self, worker: WorkerCandidate, job: JobCandidate) -> Dict[str, float]:
        tier = components.experience_tier(worker)
        return {
            "trade_match": 1.0 if components.trades_match(worker, job) else 0.0,
            "expert": 1.0 if tier == "expert" else 0.0,
            "intermediate": 1.0 if tier == "intermediate" else 0.0,
            "top_rating": 1.0 if worker.rating >= BONUS_THRESHOLDS["top_rating"] else 0.0,
            "availability": 1.0 if components.availability_score(worker, job) >= 1.0 else 0.0,
        }

    def raw_score(self, breakdown: Mapping[str, float], job: JobCandidate) -> float:
        return self.weights["base"] + sum(
            breakdown[factor] * weight for factor, weight in self.weights.items() if factor != "base"
        )

    def reasons(self, worker: WorkerCandidate, job: JobCandidate) -> List[str]:
        return explain_bonus(worker, job, components.experience_tier(worker))


POLICIES = {
    ScoringPolicyName.WEIGHTED: WeightedPolicy,
    ScoringPolicyName.PERCENTAGE: PercentagePolicy,
    ScoringPolicyName.BONUS: BonusPolicy,
}


def resolve_policy_name(name: Union[str, ScoringPolicyName]) -> ScoringPolicyName:
    if isinstance(name, ScoringPolicyName):
        return name
    try:
        return ScoringPolicyName(str(name).strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in ScoringPolicyName)
        raise InvalidArgument(f"Unknown scoring policy '{name}' (expected one of: {valid})")


def get_policy(
    name: Union[str, ScoringPolicyName, ScoringPolicy] = ScoringPolicyName.WEIGHTED,
    weights: Optional[Mapping[str, float]] = None,
) -> ScoringPolicy:
    """
    Build the policy registered under name.

    An already constructed ScoringPolicy is returned unchanged.

    Raises:
        InvalidArgument: unknown name or malformed weights
    """
    if isinstance(name, ScoringPolicy):
        return name
    return POLICIES[resolve_policy_name(name)](weights)
