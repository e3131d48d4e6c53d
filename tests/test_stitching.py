"""Tests for extrapolation of truncated days and cumulative stitching."""

import math
import unittest
from pathlib import Path

# Add parent to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from playgraph_extractor.config import ExtrapolationSettings
from playgraph_extractor.models import DomainPoint


def points(*pairs):
    return [DomainPoint(float(g), float(d)) for g, d in pairs]


class TestExtrapolation(unittest.TestCase):
    """Tests for the truncated-day extension."""

    def test_find_bottom_start_index(self):
        from playgraph_extractor.extrapolation import find_bottom_start_index

        series = points((0, 0), (100, -1500), (200, -1992), (300, -2000))

        self.assertEqual(find_bottom_start_index(series, -2000), 2)
        self.assertIsNone(find_bottom_start_index(points((0, 0), (100, -500)), -2000))

    def test_slope_least_squares(self):
        from playgraph_extractor.extrapolation import estimate_slope_before_bottom

        series = points((0, 0), (100, -500), (200, -1000), (300, -1500), (400, -2000))

        self.assertAlmostEqual(estimate_slope_before_bottom(series, 4), -5.0)

    def test_slope_uses_window_before_bottom(self):
        from playgraph_extractor.extrapolation import estimate_slope_before_bottom

        # Flat start outside the two-point window must not affect the fit
        series = points((0, 0), (100, 0), (200, 0), (300, -300), (400, -600), (500, -2000))

        self.assertAlmostEqual(estimate_slope_before_bottom(series, 5, window_size=2), -3.0)

    def test_slope_degenerate_windows(self):
        from playgraph_extractor.extrapolation import estimate_slope_before_bottom

        self.assertEqual(estimate_slope_before_bottom(points((0, 0), (10, -2000)), 1), 0.0)
        same_game = points((100, 0), (100, -500), (100, -1000), (100, -2000))
        self.assertEqual(estimate_slope_before_bottom(same_game, 3), 0.0)

    def test_slope_zero_for_repeated_fractional_game(self):
        from playgraph_extractor.extrapolation import estimate_slope_before_bottom

        series = points((7345.1, -1500), (7345.1, -1700), (7345.1, -1900), (7346.1, -2000))

        self.assertEqual(estimate_slope_before_bottom(series, 3), 0.0)
        for game in (4.3, 11.3, 9999.9):
            for window in (3, 5):
                column = points(*[(game, -100.0 * i) for i in range(window)], (game + 1, -2000))
                self.assertEqual(estimate_slope_before_bottom(column, window, window), 0.0)

    def test_vertical_window_continues_flat(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        series = points((7000.3, -1200), (7345.1, -1500), (7345.1, -1700),
                        (7345.1, -1900), (7345.1, -1995), (7400, -2000))
        settings = ExtrapolationSettings(target_game=7600, window_size=3)

        added = extrapolate_series(series, settings)[len(series):]

        self.assertEqual([p.diff for p in added], [-2000.0] * 4)

    def test_termination_at_target(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        series = points((200, -1000), (300, -1100))
        settings = ExtrapolationSettings(target_game=500, target_min_diff=-3000, step_game=50)

        extended = extrapolate_series(series, settings)

        added = extended[len(series):]
        self.assertEqual([p.game for p in added], [350.0, 400.0, 450.0, 500.0])
        self.assertTrue(all(p.extrapolated for p in added))
        # No floor reached, so the flat continuation keeps the last balance
        self.assertTrue(all(p.diff == -1100.0 for p in added))

    def test_never_overshoots_by_more_than_one_step(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        settings = ExtrapolationSettings(target_game=520, step_game=50)

        extended = extrapolate_series(points((0, 0), (300, 10)), settings)

        self.assertEqual(extended[-1].game, 550.0)
        self.assertLess(extended[-2].game, 520)

    def test_floor_clamp(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        series = points((0, 0), (100, -500), (200, -1000), (300, -1500),
                        (400, -1995), (500, -2000))
        settings = ExtrapolationSettings(target_game=800, target_min_diff=-2600, step_game=50)

        extended = extrapolate_series(series, settings)
        added = extended[len(series):]

        self.assertEqual([p.diff for p in added[:2]], [-2250.0, -2500.0])
        for p in added[2:]:
            self.assertEqual(p.diff, -2600.0)
        self.assertEqual(added[-1].game, 800.0)

    def test_originals_untouched(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        series = points((0, 0), (300, -100))
        snapshot = list(series)

        extended = extrapolate_series(series, ExtrapolationSettings(target_game=400))

        self.assertEqual(series, snapshot)
        self.assertEqual(extended[:2], snapshot)
        self.assertFalse(any(p.extrapolated for p in extended[:2]))

    def test_empty_and_invalid_step(self):
        from playgraph_extractor.extrapolation import extrapolate_series

        self.assertEqual(extrapolate_series([]), [])
        with self.assertRaises(ValueError):
            extrapolate_series(points((0, 0)), ExtrapolationSettings(step_game=0))


class TestCumulativeStitcher(unittest.TestCase):
    """Tests for day concatenation."""

    def test_two_day_example(self):
        from playgraph_extractor.stitcher import stitch_days

        day_series = {
            "2024-01-01": points((0, 0), (100, 50)),
            "2024-01-02": points((0, 50), (80, 20)),
        }

        result = stitch_days(day_series)

        self.assertEqual(
            [(p.cum_game, p.cum_diff, p.day) for p in result],
            [(0.0, 0.0, "2024-01-01"), (100.0, 50.0, "2024-01-01"), (180.0, 20.0, "2024-01-02")]
        )

    def test_days_not_starting_at_zero(self):
        from playgraph_extractor.stitcher import stitch_days

        day_series = {
            "2024-01-01": points((10, 100), (110, 150)),
            "2024-01-02": points((5, -40), (55, -90)),
        }

        result = stitch_days(day_series)

        self.assertEqual(result[0].cum_diff, 0.0)
        self.assertEqual((result[-1].cum_game, result[-1].cum_diff), (150.0, 0.0))

    def test_days_ordered_chronologically(self):
        from playgraph_extractor.stitcher import stitch_days

        day_series = {
            "2024-02-01": points((0, 0), (10, 10)),
            "2024-01-01": points((0, 0), (100, -100)),
        }

        result = stitch_days(day_series)

        self.assertEqual([p.day for p in result], ["2024-01-01", "2024-01-01", "2024-02-01"])
        self.assertEqual(result[-1].cum_game, 110.0)

    def test_strictly_increasing_and_idempotent(self):
        from playgraph_extractor.stitcher import stitch_days

        day_series = {
            f"2024-03-{day:02d}": points(*[(g, (g * day) % 37 - 18) for g in range(0, 500, 25)])
            for day in range(1, 8)
        }

        first = stitch_days(day_series)
        second = stitch_days(day_series)

        self.assertEqual(first, second)
        for a, b in zip(first, first[1:]):
            self.assertLess(a.cum_game, b.cum_game)

    def test_zero_based(self):
        from playgraph_extractor.stitcher import stitch_days

        result = stitch_days({"2024-01-01": points((50, 700), (60, 720))})

        self.assertEqual(result[0].cum_diff, 0.0)
        self.assertEqual(result[-1].cum_diff, 20.0)

    def test_non_finite_points_dropped(self):
        from playgraph_extractor.stitcher import stitch_days

        day = [DomainPoint(0.0, 0.0), DomainPoint(math.nan, 5.0),
               DomainPoint(50.0, math.inf), DomainPoint(100.0, 30.0)]

        result = stitch_days({"2024-01-01": day})

        self.assertEqual([(p.cum_game, p.cum_diff) for p in result], [(0.0, 0.0), (100.0, 30.0)])

    def test_backwards_games_raise(self):
        from playgraph_extractor.errors import StitchIntegrityError
        from playgraph_extractor.stitcher import stitch_days

        day_series = {"2024-01-01": points((0, 0), (100, 10), (50, 20))}

        with self.assertRaises(StitchIntegrityError) as ctx:
            stitch_days(day_series)
        self.assertEqual(ctx.exception.index, 2)

    def test_extrapolated_flag_carried(self):
        from playgraph_extractor.stitcher import stitch_days

        day = points((0, 0), (100, -10)) + [DomainPoint(150.0, -20.0, extrapolated=True)]

        result = stitch_days({"2024-08-31": day})

        self.assertEqual([p.extrapolated for p in result], [False, False, True])

    def test_explicit_order_and_missing_days(self):
        from playgraph_extractor.stitcher import stitch_days

        day_series = {"a": points((0, 0), (10, 1)), "b": points((0, 0), (5, 2)), "c": []}

        result = stitch_days(day_series, day_order=["b", "missing", "c", "a"])

        self.assertEqual([p.day for p in result], ["b", "b", "a"])
        self.assertEqual(result[-1].cum_game, 15.0)

    def test_empty(self):
        from playgraph_extractor.stitcher import stitch_days

        self.assertEqual(stitch_days({}), [])


if __name__ == "__main__":
    unittest.main()
