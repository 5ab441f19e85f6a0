"""
Unit tests for match reasons.
"""

import unittest

from job_matching.explainer import explain
from factories import make_worker


class TestExplain(unittest.TestCase):

    def test_all_reasons_in_order(self):
        worker = make_worker(total_jobs_completed=45, rating=4.5, verified=True)
        self.assertEqual(
            explain(worker, ["wiring", "panels", "testing"]),
            ["Skills: wiring, panels +more", "Experienced: 45+ jobs", "Top rated: 4.5/5", "Verified"],
        )

    def test_two_skills_no_more_marker(self):
        worker = make_worker(total_jobs_completed=0, rating=2, verified=False)
        self.assertEqual(explain(worker, ["wiring", "panels"]), ["Skills: wiring, panels"])

    def test_whole_rating_printed_without_decimal(self):
        worker = make_worker(total_jobs_completed=0, rating=4.0, verified=False)
        self.assertEqual(explain(worker, []), ["Top rated: 4/5"])

    def test_rating_above_scale_printed_as_maximum(self):
        worker = make_worker(total_jobs_completed=0, rating=7, verified=False)
        self.assertEqual(explain(worker, []), ["Top rated: 5/5"])

    def test_thresholds_are_inclusive(self):
        worker = make_worker(total_jobs_completed=5, rating=3.9, verified=False)
        self.assertEqual(explain(worker, []), ["Experienced: 5+ jobs"])

    def test_nothing_stands_out(self):
        worker = make_worker(total_jobs_completed=4, rating=3.9, verified=False)
        self.assertEqual(explain(worker, []), [])

    def test_deterministic(self):
        worker = make_worker(total_jobs_completed=12, rating=4.8)
        self.assertEqual(explain(worker, ["a", "b"]), explain(worker, ["a", "b"]))


if __name__ == "__main__":
    unittest.main()
