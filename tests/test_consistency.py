"""
test_consistency.py

Tests for the consistency scorer and its three components
(frequency, gap penalty, stability).
"""

import random
import unittest
from datetime import date, timedelta

from consistency import compute_consistency_score, consistency_breakdown


def daily_map(values, start=date(2024, 1, 1), step_days=1):
    """Build {"YYYY-MM-DD": value} for consecutive (or evenly spaced) days."""
    return {
        (start + timedelta(days=i * step_days)).isoformat(): v
        for i, v in enumerate(values)
    }


class TestInsufficientData(unittest.TestCase):

    def test_fewer_than_two_days_is_exactly_0(self):
        for activity in [{}, None, [], 3.5, {"2024-01-01": 9}, {"2024-01-01": 1, "2024-02-30": 1}]:
            with self.subTest(activity=activity):
                self.assertEqual(compute_consistency_score(activity), 0)

    def test_insufficient_score_is_configurable(self):
        self.assertEqual(compute_consistency_score({}, {"insufficient_score": 10}), 10)


class TestFirstAndLastDay(unittest.TestCase):

    def test_reported_even_without_enough_days(self):
        one_day = consistency_breakdown({"2024-05-05": 3})
        self.assertEqual(one_day["first_day_ms"], one_day["last_day_ms"])
        self.assertIsNotNone(one_day["first_day_ms"])

        empty = consistency_breakdown({})
        self.assertIsNone(empty["first_day_ms"])
        self.assertIsNone(empty["last_day_ms"])


class TestScenarios(unittest.TestCase):

    def test_two_weeks_of_daily_activity_scores_high(self):
        activity = daily_map([1] * 14)
        b = consistency_breakdown(activity)

        self.assertGreaterEqual(b["score"], 80)
        self.assertEqual(b["active_days"], 14)
        self.assertEqual(b["span_days"], 14)
        self.assertAlmostEqual(b["gap_penalty"], 0.0)
        self.assertAlmostEqual(b["stability_score"], 25.0)
        self.assertEqual(b["last_day_ms"] - b["first_day_ms"], 13 * 86_400_000)
        self.assertTrue(b["densified"])

    def test_two_isolated_days_score_low(self):
        activity = {"2024-01-01": 5, "2024-03-01": 5}
        b = consistency_breakdown(activity)

        self.assertLess(b["score"], 20)
        self.assertEqual(b["active_days"], 2)
        self.assertEqual(b["span_days"], 61)
        self.assertGreater(b["gap_penalty"], 15)

    def test_missing_counts_still_count_as_days(self):
        b = consistency_breakdown({"2024-01-01": 1, "2024-01-02": None, "2024-01-03": ""})
        self.assertEqual(b["status"], "ok")
        self.assertEqual(b["active_days"], 3)

    def test_negative_value_policies_count_days_differently(self):
        activity = {"2024-01-01": 3, "2024-01-02": -2, "2024-01-03": 3}

        clamped = consistency_breakdown(activity)
        ignored = consistency_breakdown(activity, {"negative_value_policy": "ignore"})

        self.assertEqual(clamped["active_days"], 3)
        self.assertEqual(ignored["active_days"], 2)
        self.assertNotEqual(clamped["frequency_ratio"], ignored["frequency_ratio"])


class TestComponents(unittest.TestCase):

    def test_weekly_activity_has_no_gap_penalty(self):
        activity = daily_map([2] * 8, step_days=7)
        self.assertAlmostEqual(consistency_breakdown(activity)["gap_penalty"], 0.0)

    def test_longer_gaps_cost_more(self):
        biweekly = consistency_breakdown(daily_map([2] * 6, step_days=14))
        monthly = consistency_breakdown(daily_map([2] * 6, step_days=30))
        self.assertGreater(biweekly["gap_penalty"], 0)
        self.assertGreater(monthly["gap_penalty"], biweekly["gap_penalty"])

    def test_regular_beats_sporadic(self):
        regular = daily_map([2] * 30)
        sporadic = {"2024-01-01": 2, "2024-01-09": 30, "2024-01-17": 1, "2024-01-30": 12}
        self.assertGreater(
            compute_consistency_score(regular), compute_consistency_score(sporadic)
        )

    def test_unstable_magnitudes_lower_stability(self):
        steady = consistency_breakdown(daily_map([5] * 20))
        jumpy = consistency_breakdown(daily_map([1, 40] * 10))
        self.assertGreater(steady["stability_score"], jumpy["stability_score"])
        self.assertGreater(jumpy["coefficient_of_variation"], 0)

    def test_all_zero_days_use_plain_std_dev(self):
        b = consistency_breakdown(daily_map([0] * 5))
        self.assertEqual(b["coefficient_of_variation"], 0.0)
        self.assertAlmostEqual(b["stability_score"], 25.0)

    def test_frequency_confidence_for_short_window(self):
        b = consistency_breakdown(daily_map([1] * 7))
        # span 7/14, active days 7/10
        self.assertAlmostEqual(b["confidence"], 0.5 * 0.7)
        self.assertAlmostEqual(b["frequency_ratio"], 0.35)


class TestDensificationBound(unittest.TestCase):

    def test_long_span_uses_sparse_series(self):
        activity = {"2000-01-01": 5, "2024-01-01": 5}
        b = consistency_breakdown(activity)

        self.assertFalse(b["densified"])
        self.assertGreater(b["span_days"], 3 * 365)
        # Two equal active days: no variation once the empty years are skipped
        self.assertAlmostEqual(b["stability_score"], 25.0)

    def test_raising_the_bound_densifies(self):
        activity = {"2000-01-01": 5, "2024-01-01": 5}
        b = consistency_breakdown(activity, {"max_dense_span_days": 10_000})

        self.assertTrue(b["densified"])
        self.assertLess(b["stability_score"], 1.0)

    def test_zero_bound_never_densifies(self):
        b = consistency_breakdown(daily_map([1, 2, 3]), {"max_dense_span_days": 0})
        self.assertFalse(b["densified"])


class TestProperties(unittest.TestCase):

    def test_invalid_keys_do_not_change_result(self):
        clean = daily_map([1, 0, 2, 3, 0, 1, 4, 2], step_days=2)
        noisy = dict(clean)
        noisy.update({"2023-02-30": 8, "not-a-date": 8, "2024-13-01": 8})
        self.assertEqual(compute_consistency_score(noisy), compute_consistency_score(clean))

    def test_idempotent(self):
        activity = daily_map([3, 1, 0, 6, 2], step_days=3)
        self.assertEqual(
            compute_consistency_score(activity), compute_consistency_score(activity)
        )

    def test_always_an_int_within_bounds(self):
        rng = random.Random(99)
        pool = [0, 1, 2, 8, 300, -4, "3", "", float("inf"), None]
        for _ in range(200):
            start = date(2018, 1, 1) + timedelta(days=rng.randint(0, 2000))
            activity = {
                (start + timedelta(days=rng.randint(0, 1500))).isoformat(): rng.choice(pool)
                for _ in range(rng.randint(0, 40))
            }
            score = compute_consistency_score(activity)
            self.assertIsInstance(score, int)
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)


if __name__ == "__main__":
    unittest.main()
