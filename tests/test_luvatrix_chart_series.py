from __future__ import annotations

from decimal import Decimal
import math
import unittest

import numpy as np

from luvatrix_chart import ChartDataError
from luvatrix_chart.coerce import coerce_series, force_num
from luvatrix_chart.series import DataSeries, ZoomWindow, max_series_length, min_max


class ForceNumTests(unittest.TestCase):
    def test_forces_a_number(self) -> None:
        self.assertEqual(force_num(1), 1)
        self.assertEqual(force_num(1.1), 1.1)
        self.assertEqual(force_num("1"), 1)
        self.assertEqual(force_num("1.1"), 1.1)
        self.assertEqual(force_num(" 2.5 "), 2.5)
        self.assertEqual(force_num(Decimal("2.25")), 2.25)
        self.assertEqual(force_num(np.int64(7)), 7)

    def test_invalid_input_becomes_zero(self) -> None:
        self.assertEqual(force_num("wut"), 0)
        self.assertEqual(force_num(None), 0)
        self.assertEqual(force_num(float("nan")), 0)
        self.assertEqual(force_num(math.inf), 0)
        self.assertEqual(force_num(object()), 0)
        self.assertEqual(force_num(10**400), 0)
        self.assertEqual(force_num(Decimal("sNaN")), 0)
        self.assertEqual(force_num(Decimal("Infinity")), 0)

    def test_invalid_input_is_logged_at_debug(self) -> None:
        with self.assertLogs("luvatrix_chart.coerce", level="DEBUG"):
            force_num("wut")

    def test_strict_mode_raises(self) -> None:
        with self.assertRaises(ChartDataError):
            force_num("wut", strict=True)
        self.assertEqual(force_num("3", strict=True), 3)
        with self.assertRaises(ChartDataError):
            force_num(10**400, strict=True)


class CoerceSeriesTests(unittest.TestCase):
    def test_gaps_are_kept_and_junk_is_zeroed(self) -> None:
        self.assertEqual(coerce_series([1, None, "x", float("nan"), "4"]), (1.0, None, 0.0, None, 4.0))

    def test_nan_of_any_numeric_type_is_a_gap(self) -> None:
        values = [np.float32("nan"), Decimal("NaN"), Decimal("sNaN"), np.float64(2.5), Decimal("1.5")]
        self.assertEqual(coerce_series(values), (None, None, None, 2.5, 1.5))

    def test_numpy_input(self) -> None:
        values = coerce_series(np.asarray([1.0, np.nan, 3.0]))
        self.assertEqual(values, (1.0, None, 3.0))

    def test_rejects_scalars_and_2d(self) -> None:
        with self.assertRaises(ChartDataError):
            coerce_series("123")
        with self.assertRaises(ChartDataError):
            coerce_series(np.zeros((2, 2)))

    def test_pandas_series(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")

        values = coerce_series(pd.Series([1.0, None, 3.0]))
        self.assertEqual(values, (1.0, None, 3.0))

    def test_torch_tensor(self) -> None:
        try:
            import torch
        except Exception:
            self.skipTest("torch is not installed")

        values = coerce_series(torch.tensor([1, 2, 3], dtype=torch.int64))
        self.assertEqual(values, (1.0, 2.0, 3.0))


class RangeAggregatorTests(unittest.TestCase):
    def test_min_max_single_and_multiple_series(self) -> None:
        single = [{"name": "d0", "values": [-100, 0, 100]}]
        multiple = [
            {"name": "d0", "values": [-100, 0, 100]},
            {"name": "d1", "values": [-99, 0, 99]},
        ]
        rng = min_max(single)
        self.assertEqual((rng.min, rng.max), (-100, 100))
        rng = min_max(multiple)
        self.assertEqual((rng.min, rng.max), (-100, 100))

    def test_positive_data_clamps_min_to_zero(self) -> None:
        rng = min_max([DataSeries.from_values([3, 5, 9])])
        self.assertEqual((rng.min, rng.max), (0, 9))
        raw = min_max([[3, 5, 9]], clamp_zero=False)
        self.assertEqual(raw.min, 3)

    def test_gaps_are_ignored(self) -> None:
        rng = min_max([[None, -4, None, 12]])
        self.assertEqual((rng.min, rng.max), (-4, 12))

    def test_all_gaps_give_degenerate_range(self) -> None:
        rng = min_max([[None, None]])
        self.assertEqual(rng.min, math.inf)
        self.assertEqual(rng.max, -math.inf)
        self.assertTrue(rng.is_empty)
        self.assertTrue(min_max([]).is_empty)

    def test_window_restricts_scan(self) -> None:
        rng = min_max([[1, -50, 7, 100]], ZoomWindow(0, 2))
        self.assertEqual((rng.min, rng.max), (-50, 7))

    def test_max_series_length(self) -> None:
        dataset = [
            {"name": "d0", "values": [0, 1, 2, 3, 4]},
            {"name": "d1", "values": [0, 1, 2]},
        ]
        self.assertEqual(max_series_length(dataset), 5)
        self.assertEqual(max_series_length(dataset, ZoomWindow(1, 3)), 3)
        self.assertEqual(max_series_length([]), 0)


class ZoomWindowTests(unittest.TestCase):
    def test_select_orders_bounds(self) -> None:
        self.assertEqual(ZoomWindow.select(5, 2, 10), ZoomWindow(2, 5))

    def test_select_same_index_resets(self) -> None:
        self.assertEqual(ZoomWindow.select(3, 3, 10), ZoomWindow(0, 9))

    def test_invalid_bounds(self) -> None:
        with self.assertRaises(ValueError):
            ZoomWindow(-1, 2)
        with self.assertRaises(ValueError):
            ZoomWindow(4, 2)

    def test_windowed_series_and_size(self) -> None:
        series = DataSeries.from_values([0, 1, 2, 3, 4], name="d0")
        self.assertEqual(series.windowed(ZoomWindow(1, 2)).values, (1.0, 2.0))
        self.assertEqual(series.windowed(None), series)
        self.assertEqual(ZoomWindow(3, 9).size(5), 2)


if __name__ == "__main__":
    unittest.main()
