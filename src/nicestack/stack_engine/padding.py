"""Axis padding arithmetic.

Padding may be a plain number or a percentage string such as ``"10%"``;
any string counts as a percentage, with or without the ``%`` sign. For
timestamp keys the amount is a number of time units (``padding_unit``).
"""

from __future__ import annotations

import datetime as dt
import math
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

Padding = Union[int, float, str]

_TIMEDELTA_UNITS = {
    "second": "s",
    "minute": "min",
    "hour": "h",
    "day": "D",
    "week": "W",
}
_CALENDAR_UNITS = {
    "month": "months",
    "year": "years",
}
DEFAULT_TIME_UNIT = "day"


def is_timestamp(value: Any) -> bool:
    return isinstance(value, (dt.datetime, dt.date, np.datetime64))


def _normalize_unit(unit: Optional[str]) -> str:
    if unit is None:
        return DEFAULT_TIME_UNIT
    u = str(unit).strip().lower()
    if u in ("ms", "millis", "millisecond", "milliseconds"):
        return "millis"
    if u.endswith("s") and u[:-1] in _TIMEDELTA_UNITS.keys() | _CALENDAR_UNITS.keys():
        u = u[:-1]
    if u not in _TIMEDELTA_UNITS and u not in _CALENDAR_UNITS:
        raise ValueError(f"Unknown padding unit {unit!r}")
    return u


def _parse_amount(padding: Padding) -> tuple[float, bool]:
    """Return ``(amount, is_percentage)``."""
    if isinstance(padding, str):
        text = padding.strip()
        try:
            return float(text.replace("%", "")), True
        except ValueError as exc:
            raise ValueError(f"Malformed padding {padding!r}") from exc
    return float(padding), False


def _offset_timestamp(value: Any, amount: float, unit: Optional[str]) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    u = _normalize_unit(unit)
    if u == "millis":
        return ts + pd.Timedelta(amount, unit="ms")
    # time intervals move in whole steps
    steps = math.floor(amount)
    if u in _CALENDAR_UNITS:
        return ts + pd.DateOffset(**{_CALENDAR_UNITS[u]: steps})
    return ts + pd.Timedelta(steps, unit=_TIMEDELTA_UNITS[u])


def add(value: Any, padding: Padding, unit: Optional[str] = None) -> Any:
    """Move ``value`` up (or later) by ``padding``; None stays None."""
    if value is None:
        return None
    amount, is_pct = _parse_amount(padding)
    if is_timestamp(value):
        return _offset_timestamp(value, amount, unit)
    if is_pct:
        fraction = amount / 100.0
        return value * (1 + fraction) if value > 0 else value * (1 - fraction)
    return value + amount


def subtract(value: Any, padding: Padding, unit: Optional[str] = None) -> Any:
    """Move ``value`` down (or earlier) by ``padding``; None stays None."""
    if value is None:
        return None
    amount, is_pct = _parse_amount(padding)
    if is_timestamp(value):
        return _offset_timestamp(value, -amount, unit)
    if is_pct:
        fraction = amount / 100.0
        return value * (1 + fraction) if value < 0 else value * (1 - fraction)
    return value - amount
