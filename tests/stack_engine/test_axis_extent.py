"""Unit tests for AxisExtentCalculator and padding arithmetic."""

import datetime as dt
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from nicestack.stack_engine import padding
from nicestack.stack_engine.axis_extent import AxisExtentCalculator
from nicestack.stack_engine.stack_composer import StackSnapshot, StackedLayer
from nicestack.stack_engine.value_extractor import Point


def stacked_point(x, y, y0):
    return Point(x=x, y=y, data=None, name="L", y0=y0, y1=y0 + y)


def test_extents_follow_footprint_of_positive_values():
    pts = [stacked_point(1, 10, 0), stacked_point(2, 20, 0), stacked_point(1, 5, 10), stacked_point(2, 15, 20)]
    calc = AxisExtentCalculator()
    assert calc.y_axis_max(pts) == 35
    assert calc.y_axis_min(pts) == 0
    assert calc.x_axis_min(pts) == 1
    assert calc.x_axis_max(pts) == 2


def test_extents_follow_footprint_of_negative_values():
    """Negative values reach down to y + y0; positive baselines still count."""
    pts = [stacked_point(1, -10, 0), stacked_point(1, 4, -10)]
    calc = AxisExtentCalculator()
    assert calc.y_axis_min(pts) == -10
    assert calc.y_axis_max(pts) == 0


def test_empty_points_yield_none():
    calc = AxisExtentCalculator(x_padding=1, y_padding=1)
    assert calc.y_axis_min([]) is None
    assert calc.y_axis_max([]) is None
    assert calc.x_axis_min([]) is None
    assert calc.x_axis_max([]) is None
    extents = calc.extents(StackSnapshot())
    assert not extents.has_data


def test_nan_values_are_ignored():
    pts = [stacked_point(1, float("nan"), 3.0), stacked_point(float("nan"), 2, 0)]
    calc = AxisExtentCalculator()
    assert calc.y_axis_max(pts) == 3.0
    assert calc.x_axis_min(pts) == 1


@pytest.mark.parametrize("pad_amount", [0, 1, 2.5, 10])
def test_padding_widens_extents_monotonically(pad_amount):
    pts = [stacked_point(1, 10, 0), stacked_point(3, -4, 2)]
    base = AxisExtentCalculator()
    padded = AxisExtentCalculator(x_padding=pad_amount, y_padding=pad_amount)
    assert padded.y_axis_min(pts) <= base.y_axis_min(pts)
    assert padded.y_axis_max(pts) >= base.y_axis_max(pts)
    assert padded.x_axis_min(pts) <= base.x_axis_min(pts)
    assert padded.x_axis_max(pts) >= base.x_axis_max(pts)
    assert padded.y_axis_max(pts) - base.y_axis_max(pts) == pytest.approx(pad_amount)


def test_extents_from_snapshot_use_domain_values_only():
    inside = stacked_point(2, 5, 0)
    outside = stacked_point(9, 100, 0)
    layer = StackedLayer(name="L", accessor=None, values=[inside, outside], domain_values=[inside])
    extents = AxisExtentCalculator().extents(StackSnapshot(layers=[layer]))
    assert (extents.x_min, extents.x_max, extents.y_min, extents.y_max) == (2, 2, 0, 5)


def test_percentage_padding():
    assert padding.add(100, "10%") == pytest.approx(110)
    assert padding.add(-100, "10%") == pytest.approx(-90)
    assert padding.subtract(100, "10%") == pytest.approx(90)
    assert padding.subtract(-100, "10%") == pytest.approx(-110)


def test_string_padding_without_sign_is_a_percentage():
    """A bare numeric string pads by that percentage, like "10%"."""
    assert padding.add(200, "10") == pytest.approx(220)
    assert padding.subtract(200, "10") == pytest.approx(180)
    assert padding.add(200, "10") == pytest.approx(padding.add(200, "10%"))


def test_malformed_padding_raises():
    with pytest.raises(ValueError):
        padding.add(1, "lots")


def test_time_padding_defaults_to_days():
    ts = pd.Timestamp("2024-01-10")
    assert padding.add(ts, 2) == pd.Timestamp("2024-01-12")
    assert padding.subtract(ts, 2) == pd.Timestamp("2024-01-08")


def test_time_padding_units():
    ts = dt.datetime(2024, 1, 31, 12, 0)
    assert padding.add(ts, 1, "month") == pd.Timestamp("2024-02-29 12:00")
    assert padding.add(ts, 3, "hours") == pd.Timestamp("2024-01-31 15:00")
    assert padding.subtract(ts, 1, "week") == pd.Timestamp("2024-01-24 12:00")
    assert padding.add(ts, 1500, "millis") == pd.Timestamp("2024-01-31 12:00:01.500")


def test_time_padding_accepts_numpy_datetime():
    ts = np.datetime64("2024-03-01")
    assert padding.add(ts, 1, "year") == pd.Timestamp("2025-03-01")


def test_unknown_time_unit_raises():
    with pytest.raises(ValueError):
        padding.add(pd.Timestamp("2024-01-01"), 1, "fortnight")


def test_x_extent_with_timestamp_keys():
    pts = [stacked_point(pd.Timestamp("2024-01-02"), 1, 0), stacked_point(pd.Timestamp("2024-01-05"), 1, 0)]
    calc = AxisExtentCalculator(x_padding=1, x_padding_unit="day")
    assert calc.x_axis_min(pts) == pd.Timestamp("2024-01-01")
    assert calc.x_axis_max(pts) == pd.Timestamp("2024-01-06")


def test_decimal_values_produce_float_extents():
    """Extents read the composed floats, so Decimal rows do not break them."""
    pts = [
        Point(x=1, y=Decimal("10"), data=None, name="A", y0=0.0, y1=10.0),
        Point(x=1, y=Decimal("-4"), data=None, name="B", y0=10.0, y1=6.0),
    ]
    calc = AxisExtentCalculator()
    assert calc.y_axis_max(pts) == 10.0
    assert calc.y_axis_min(pts) == 0.0
