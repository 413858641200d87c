"""Axis extents of a stacked composition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from nicestack.stack_engine import padding as pad
from nicestack.stack_engine.stack_composer import StackSnapshot
from nicestack.stack_engine.value_extractor import Point


@dataclass(frozen=True)
class AxisExtents:
    """Padded axis bounds; a None field means there was no data."""

    x_min: Any
    x_max: Any
    y_min: Optional[float]
    y_max: Optional[float]

    @property
    def has_data(self) -> bool:
        return self.y_min is not None and self.x_min is not None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(value != value)
    except (TypeError, ValueError):
        return False


def _extreme(values: Iterable[Any], pick: Callable[..., Any]) -> Any:
    present = [v for v in values if not _is_missing(v)]
    if not present:
        return None
    return pick(present)


def _y_bottom(p: Point) -> Any:
    if p.y0 is None:
        return None
    return p.y1 if p.y1 is not None and p.y1 < p.y0 else p.y0


def _y_top(p: Point) -> Any:
    if p.y0 is None:
        return None
    return p.y1 if p.y1 is not None and p.y1 > p.y0 else p.y0


class AxisExtentCalculator:
    """Min/max over the flattened in-domain points, widened by padding.

    The y extent follows each point's footprint: from its baseline to its
    top for positive values, to its bottom for negative ones.

    Attributes:
        x_padding: Number, percentage string, or time-unit count for timestamp keys.
        x_padding_unit: Time unit for x padding on timestamp keys (default day).
        y_padding: Number or percentage string.
    """

    def __init__(
        self,
        *,
        x_padding: pad.Padding = 0,
        x_padding_unit: Optional[str] = None,
        y_padding: pad.Padding = 0,
    ) -> None:
        self.x_padding = x_padding
        self.x_padding_unit = x_padding_unit
        self.y_padding = y_padding

    def y_axis_min(self, points: list[Point]) -> Optional[float]:
        m = _extreme((_y_bottom(p) for p in points), min)
        return pad.subtract(m, self.y_padding)

    def y_axis_max(self, points: list[Point]) -> Optional[float]:
        m = _extreme((_y_top(p) for p in points), max)
        return pad.add(m, self.y_padding)

    def x_axis_min(self, points: list[Point]) -> Any:
        m = _extreme((p.x for p in points), min)
        return pad.subtract(m, self.x_padding, self.x_padding_unit)

    def x_axis_max(self, points: list[Point]) -> Any:
        m = _extreme((p.x for p in points), max)
        return pad.add(m, self.x_padding, self.x_padding_unit)

    def extents(self, snapshot: StackSnapshot) -> AxisExtents:
        points = snapshot.flatten()
        return AxisExtents(
            x_min=self.x_axis_min(points),
            x_max=self.x_axis_max(points),
            y_min=self.y_axis_min(points),
            y_max=self.y_axis_max(points),
        )
