"""Unit tests for min-max scaling and IQR outlier detection."""

import unittest

import numpy as np

from campaign_analytics.data_pipeline.normalization import denormalize_data, detect_outliers, normalize_data


class TestNormalization(unittest.TestCase):
    """Scaling into [0, 1] and back."""

    def setUp(self) -> None:
        np.random.seed(42)
        self.spend = np.random.normal(250, 40, 60).tolist()

    def test_round_trip(self) -> None:
        """Denormalising the scaled series restores the original values."""
        result = normalize_data(self.spend)
        restored = denormalize_data(result.normalized, result.min, result.max)
        self.assertTrue(np.allclose(restored, self.spend, rtol=0, atol=1e-9))

    def test_scaled_range_and_order(self) -> None:
        result = normalize_data([0, 5, 10, 2.5])
        self.assertEqual(result.normalized, [0.0, 0.5, 1.0, 0.25])
        self.assertEqual((result.min, result.max), (0.0, 10.0))

    def test_constant_series_maps_to_midpoint(self) -> None:
        result = normalize_data([5, 5, 5])
        self.assertEqual(result.normalized, [0.5, 0.5, 0.5])
        self.assertEqual(result.min, 5)
        self.assertEqual(result.max, 5)

    def test_empty_series(self) -> None:
        result = normalize_data([])
        self.assertEqual(result.normalized, [])
        self.assertEqual((result.min, result.max), (0.0, 1.0))

    def test_result_is_json_safe(self) -> None:
        result = normalize_data(self.spend)
        self.assertEqual(type(result).model_validate_json(result.model_dump_json()), result)


class TestDetectOutliers(unittest.TestCase):
    """Index-based quartiles and 1.5 IQR fences."""

    def test_flags_spike(self) -> None:
        """A single extreme value is flagged and removed from the cleaned series."""
        data = [10, 12, 12, 13, 12, 11, 200]
        result = detect_outliers(data)
        self.assertEqual([(o.index, o.value) for o in result.outliers], [(6, 200.0)])
        self.assertEqual(result.cleaned, [10, 12, 12, 13, 12, 11])
        # sorted: [10, 11, 12, 12, 12, 13, 200]; q1 = sorted[1], q3 = sorted[5]
        self.assertEqual((result.q1, result.q3, result.iqr), (11.0, 13.0, 2.0))
        self.assertEqual(result.bounds.lower, 8.0)
        self.assertEqual(result.bounds.upper, 16.0)

    def test_low_outlier_keeps_original_index(self) -> None:
        result = detect_outliers([10, 11, -50, 12, 13])
        self.assertEqual([(o.index, o.value) for o in result.outliers], [(2, -50.0)])
        self.assertEqual(result.cleaned, [10, 11, 12, 13])

    def test_quartiles_are_not_interpolated(self) -> None:
        """With two values q1 is the smaller and q3 the larger one."""
        result = detect_outliers([100, 1])
        self.assertEqual((result.q1, result.q3, result.iqr), (1.0, 100.0, 99.0))
        self.assertEqual(result.outliers, [])

    def test_fences_are_exclusive(self) -> None:
        # q1 = 2, q3 = 4, iqr = 2
        self.assertEqual(len(detect_outliers([1, 2, 3, 4, 10]).outliers), 1)
        self.assertEqual(detect_outliers([1, 2, 3, 4, 10], multiplier=3).outliers, [])

    def test_single_value(self) -> None:
        result = detect_outliers([7])
        self.assertEqual((result.q1, result.q3, result.iqr), (7.0, 7.0, 0.0))
        self.assertEqual(result.cleaned, [7.0])
        self.assertEqual(result.outliers, [])

    def test_empty_series(self) -> None:
        result = detect_outliers([])
        self.assertEqual(result.outliers, [])
        self.assertEqual(result.cleaned, [])
        self.assertIsNone(result.q1)
        self.assertIsNone(result.q3)
        self.assertIsNone(result.iqr)
        self.assertIsNone(result.bounds.lower)
        self.assertIsNone(result.bounds.upper)

    def test_input_is_not_modified(self) -> None:
        data = [3, 1, 2, 90]
        detect_outliers(data)
        self.assertEqual(data, [3, 1, 2, 90])


if __name__ == '__main__':
    unittest.main()
