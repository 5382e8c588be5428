"""Unit tests for rolling statistics, smoothing and sequence construction."""

import math
import unittest

import numpy as np

from campaign_analytics.data_pipeline.windowing import (
    apply_moving_average,
    calculate_statistical_features,
    create_time_series_sequences,
)
from campaign_analytics.exceptions import InvalidWindowError


class TestStatisticalFeatures(unittest.TestCase):
    """Trailing-window descriptive statistics."""

    def test_window_excludes_current_point(self) -> None:
        features = calculate_statistical_features(list(range(1, 11)), window_size=3)
        self.assertEqual([f.index for f in features], list(range(3, 10)))
        first = features[0]
        # window [1, 2, 3] describes the value 4
        self.assertEqual(first.value, 4.0)
        self.assertAlmostEqual(first.mean, 2.0)
        self.assertAlmostEqual(first.variance, 2 / 3)
        self.assertAlmostEqual(first.std_dev, math.sqrt(2 / 3))
        self.assertAlmostEqual(first.median, 2.0)
        self.assertEqual((first.min, first.max), (1.0, 3.0))
        last = features[-1]
        self.assertEqual(last.value, 10.0)
        self.assertAlmostEqual(last.mean, 8.0)

    def test_even_window_median(self) -> None:
        features = calculate_statistical_features([4, 1, 3, 2, 10], window_size=4)
        self.assertEqual(len(features), 1)
        self.assertAlmostEqual(features[0].median, 2.5)
        self.assertAlmostEqual(features[0].mean, 2.5)
        # population variance, not sample variance
        self.assertAlmostEqual(features[0].variance, 1.25)

    def test_constant_window_has_zero_spread(self) -> None:
        features = calculate_statistical_features([5] * 10, window_size=4)
        self.assertTrue(all(f.std_dev == 0 and f.variance == 0 for f in features))

    def test_short_series_produces_nothing(self) -> None:
        self.assertEqual(calculate_statistical_features([1, 2, 3], window_size=3), [])
        self.assertEqual(calculate_statistical_features(list(range(7))), [])
        self.assertEqual(len(calculate_statistical_features(list(range(8)))), 1)

    def test_large_offset_keeps_precision(self) -> None:
        """Windows far from zero match a direct computation on each slice."""
        np.random.seed(42)
        series = 1e9 + np.random.normal(0, 1, 60)
        features = calculate_statistical_features(series.tolist(), window_size=7)
        self.assertEqual(len(features), 53)
        for f in features:
            window = series[f.index - 7:f.index]
            self.assertLessEqual(abs(f.variance - np.var(window)), 1e-9)
            self.assertAlmostEqual(f.mean, np.mean(window), delta=1e-6)

    def test_invalid_window(self) -> None:
        with self.assertRaises(InvalidWindowError):
            calculate_statistical_features([1, 2, 3], window_size=0)


class TestMovingAverage(unittest.TestCase):
    """Centered smoothing with shrinking edge windows."""

    def test_edges_use_shrinking_window(self) -> None:
        smoothed = apply_moving_average([1, 2, 3, 4, 5], 3)
        self.assertEqual(len(smoothed), 5)
        expected = [1.5, 2.0, 3.0, 4.0, 4.5]
        for got, want in zip(smoothed, expected):
            self.assertAlmostEqual(got, want)

    def test_default_window(self) -> None:
        expected = [2.0, 2.5, 3.0, 3.5, 4.0]
        for got, want in zip(apply_moving_average([1, 2, 3, 4, 5]), expected):
            self.assertAlmostEqual(got, want)

    def test_even_window_behaves_like_next_odd(self) -> None:
        data = [3, 8, 1, 9, 4, 7, 2]
        self.assertEqual(apply_moving_average(data, 4), apply_moving_average(data, 5))

    def test_window_of_one_is_identity(self) -> None:
        self.assertEqual(apply_moving_average([3, 8, 1], 1), [3.0, 8.0, 1.0])

    def test_empty_series(self) -> None:
        self.assertEqual(apply_moving_average([]), [])

    def test_invalid_window(self) -> None:
        with self.assertRaises(ValueError):
            apply_moving_average([1, 2], -1)


class TestTimeSeriesSequences(unittest.TestCase):
    """Sliding (sequence, next value) pairs."""

    def test_pairs(self) -> None:
        result = create_time_series_sequences([1, 2, 3, 4, 5, 6], sequence_length=3)
        self.assertEqual(result.sequences, [[1, 2, 3], [2, 3, 4], [3, 4, 5]])
        self.assertEqual(result.targets, [4, 5, 6])

    def test_series_not_longer_than_sequence(self) -> None:
        for data in ([], [1, 2], [1, 2, 3]):
            result = create_time_series_sequences(data, sequence_length=3)
            self.assertEqual(result.sequences, [])
            self.assertEqual(result.targets, [])

    def test_default_length(self) -> None:
        result = create_time_series_sequences(list(range(31)))
        self.assertEqual(len(result.sequences), 1)
        self.assertEqual(len(result.sequences[0]), 30)
        self.assertEqual(result.targets, [30.0])

    def test_invalid_length(self) -> None:
        with self.assertRaises(InvalidWindowError):
            create_time_series_sequences([1, 2, 3], sequence_length=0)


if __name__ == '__main__':
    unittest.main()
