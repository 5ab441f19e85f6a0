"""
Unit tests for scoring policies and weight validation.
"""

import math
import unittest

from job_matching.errors import InvalidArgument
from job_matching.models import ScoringPolicyName
from job_matching.policies import (
    BonusPolicy,
    PercentagePolicy,
    WeightedPolicy,
    get_policy,
)
from factories import make_job, make_worker


class TestWeightedPolicy(unittest.TestCase):
    """Test the canonical normalized weighted policy."""

    def test_electrician_scenario(self):
        """2 of 3 skills, 8 years, immediate, unknown distance, rating 4.5, verified."""
        result = WeightedPolicy().compute_match(make_worker(), make_job())

        breakdown = result.score_breakdown
        self.assertEqual(breakdown["skill"], 2)
        self.assertAlmostEqual(breakdown["experience"], 0.8)
        self.assertEqual(breakdown["availability"], 1.0)
        self.assertEqual(breakdown["proximity"], 0.5)
        self.assertAlmostEqual(breakdown["rating"], 0.9)
        self.assertEqual(breakdown["verification"], 1.0)

        raw = 2 * 3.0 + 0.8 * 1.5 + 1.0 * 2.0 + 0.5 * 2.0 + 0.9 * 1.0
        expected = raw / (3 * 3.0 + 6.5) * 100
        self.assertAlmostEqual(result.final_score, expected, places=9)
        self.assertGreater(result.final_score, 60)
        self.assertLess(result.final_score, 85)
        self.assertEqual(result.display_score, 72)

    def test_max_possible_without_required_skills(self):
        job = make_job(required_skills=[])
        self.assertAlmostEqual(WeightedPolicy().max_possible_score(job), 9.5)

    def test_skill_less_trade_match_clamps_at_100(self):
        """Trade base score of 3 over a single skill unit overflows the maximum."""
        result = WeightedPolicy().compute_match(make_worker(), make_job(required_skills=[]))
        self.assertEqual(result.score_breakdown["skill"], 3)
        self.assertEqual(result.final_score, 100.0)

    def test_skill_less_trade_mismatch(self):
        worker = make_worker(trade="mason")
        result = WeightedPolicy().compute_match(worker, make_job(required_skills=[]))
        raw = 0.8 * 1.5 + 1.0 * 2.0 + 0.5 * 2.0 + 0.9 * 1.0
        self.assertAlmostEqual(result.final_score, raw / 9.5 * 100, places=9)

    def test_perfect_worker_scores_100(self):
        worker = make_worker(
            skills=["wiring", "panels", "testing"], experience_years=12,
            rating=5, distance_km=0,
        )
        self.assertAlmostEqual(WeightedPolicy().compute_match(worker, make_job()).final_score, 100.0)

    def test_subject_side(self):
        policy = WeightedPolicy()
        as_job = policy.compute_match(make_worker(), make_job(), subject="job")
        as_worker = policy.compute_match(make_worker(), make_job(), subject="worker")
        self.assertEqual((as_job.subject_id, as_job.counterpart_id), ("job_1", "worker_1"))
        self.assertEqual((as_worker.subject_id, as_worker.counterpart_id), ("worker_1", "job_1"))

    def test_all_zero_weights_score_zero(self):
        zero = {"skill": 0, "experience": 0, "availability": 0, "proximity": 0, "rating": 0}
        result = WeightedPolicy(zero).compute_match(make_worker(), make_job())
        self.assertEqual(result.final_score, 0.0)

    def test_custom_weights_partial_table(self):
        """Missing factors keep their default weight."""
        policy = WeightedPolicy({"rating": 4})
        self.assertEqual(policy.weights["rating"], 4.0)
        self.assertEqual(policy.weights["skill"], 3.0)


class TestPercentagePolicy(unittest.TestCase):

    def test_split(self):
        worker = make_worker(total_jobs_completed=8)
        result = PercentagePolicy().compute_match(worker, make_job())
        expected = (2 / 3) * 40 + 0.8 * 25 + 0.9 * 20 + 10
        self.assertAlmostEqual(result.final_score, expected, places=9)
        self.assertEqual(result.policy, ScoringPolicyName.PERCENTAGE)

    def test_reasons_use_partial_skill_matches(self):
        worker = make_worker(skills=["pipe"], total_jobs_completed=0, rating=3, verified=False)
        job = make_job(required_skills=["pipe-fitting"])
        result = PercentagePolicy().compute_match(worker, job)
        self.assertEqual(result.reasons, ["Skills: pipe-fitting"])


class TestBonusPolicy(unittest.TestCase):
    """Base 50 plus flat bonuses, no randomness."""

    def test_expert_with_everything_clamps_at_100(self):
        result = BonusPolicy().compute_match(make_worker(), make_job())
        self.assertEqual(result.score_breakdown, {
            "trade_match": 1.0, "expert": 1.0, "intermediate": 0.0,
            "top_rating": 1.0, "availability": 1.0,
        })
        self.assertEqual(result.final_score, 100.0)
        self.assertEqual(result.policy, ScoringPolicyName.BONUS)

    def test_intermediate_flexible(self):
        worker = make_worker(experience_years=5, rating=4.0, availability="flexible")
        self.assertEqual(BonusPolicy().compute_match(worker, make_job()).final_score, 90.0)

    def test_tier_boundaries(self):
        policy = BonusPolicy()
        job = make_job(trade_required="mason")
        scores = [
            policy.compute_match(make_worker(experience_years=years, rating=3, availability="flexible"), job).final_score
            for years in (2.9, 3, 7.9, 8)
        ]
        self.assertEqual(scores, [50.0, 60.0, 60.0, 65.0])

    def test_empty_trades_get_no_trade_bonus(self):
        worker = make_worker(trade="", experience_years=0, rating=0, availability="flexible")
        result = BonusPolicy().compute_match(worker, make_job(trade_required=""))
        self.assertEqual(result.final_score, 50.0)
        self.assertEqual(result.reasons, [])

    def test_reasons(self):
        worker = make_worker(rating=4.8, total_jobs_completed=120)
        result = BonusPolicy().compute_match(worker, make_job(trade_required=" Electrician "))
        self.assertEqual(result.reasons, [
            "Specializes in Electrician",
            "Expert level experience",
            "High rated (4.8★)",
            "120+ jobs completed",
        ])

    def test_fifty_jobs_is_not_many(self):
        worker = make_worker(experience_years=1, rating=4.4, total_jobs_completed=50)
        result = BonusPolicy().compute_match(worker, make_job(trade_required="mason"))
        self.assertEqual(result.reasons, [])

    def test_repeat_runs_identical(self):
        policy = BonusPolicy()
        self.assertEqual(policy.compute_match(make_worker(), make_job()),
                         policy.compute_match(make_worker(), make_job()))

    def test_custom_points(self):
        policy = BonusPolicy({"base": 0, "trade_match": 10})
        worker = make_worker(experience_years=0, rating=0, availability="flexible")
        self.assertEqual(policy.compute_match(worker, make_job()).final_score, 10.0)


class TestBoundedScore(unittest.TestCase):
    """Final score always lands in [0, 100]."""

    def test_extreme_inputs(self):
        workers = [
            make_worker(rating=50, experience_years=100, distance_km=-20, total_jobs_completed=10_000),
            make_worker(rating=-5, experience_years=-1, distance_km=10_000, skills=[], verified=False),
            make_worker(rating=math.inf, distance_km=math.inf),
        ]
        jobs = [make_job(), make_job(required_skills=[]), make_job(trade_required="mason", required_skills=[])]
        for name in ScoringPolicyName:
            policy = get_policy(name)
            for worker in workers:
                for job in jobs:
                    score = policy.compute_match(worker, job).final_score
                    self.assertGreaterEqual(score, 0.0)
                    self.assertLessEqual(score, 100.0)


class TestPolicySelection(unittest.TestCase):

    def test_by_string(self):
        self.assertIsInstance(get_policy("percentage"), PercentagePolicy)
        self.assertIsInstance(get_policy(" Weighted "), WeightedPolicy)

    def test_by_enum(self):
        self.assertIsInstance(get_policy(ScoringPolicyName.WEIGHTED), WeightedPolicy)

    def test_bonus_by_name(self):
        self.assertIsInstance(get_policy("bonus"), BonusPolicy)
        self.assertIsInstance(get_policy(ScoringPolicyName.BONUS), BonusPolicy)

    def test_instance_passthrough(self):
        policy = WeightedPolicy({"skill": 1})
        self.assertIs(get_policy(policy), policy)

    def test_unknown_name(self):
        with self.assertRaises(InvalidArgument):
            get_policy("random-jitter")

    def test_negative_weight_rejected(self):
        with self.assertRaises(InvalidArgument):
            WeightedPolicy({"skill": -1})

    def test_non_finite_weight_rejected(self):
        with self.assertRaises(InvalidArgument):
            WeightedPolicy({"rating": float("nan")})
        with self.assertRaises(InvalidArgument):
            PercentagePolicy({"verification": float("inf")})

    def test_non_numeric_weight_rejected(self):
        with self.assertRaises(InvalidArgument):
            WeightedPolicy({"skill": "3"})

    def test_unknown_factor_rejected(self):
        with self.assertRaises(InvalidArgument):
            WeightedPolicy({"charisma": 1})


if __name__ == "__main__":
    unittest.main()
