"""Turn raw group rows into stackable points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from nicestack.stack_engine.layer_registry import Accessor, Layer, as_binary_accessor


def default_key_accessor(row: Any, index: int = 0) -> Any:
    """Read ``row["key"]`` (crossfilter-style group rows)."""
    return row["key"]


def default_value_accessor(row: Any, index: int = 0) -> Any:
    """Read ``row["value"]`` (crossfilter-style group rows)."""
    return row["value"]


@dataclass
class SharedAccessors:
    """Key and value accessors shared by every layer of a chart.

    A layer's own accessor, when set, replaces ``value_accessor`` for that
    layer only. All layers always share ``key_accessor`` and therefore the
    same key space.
    """

    key_accessor: Accessor = default_key_accessor
    value_accessor: Accessor = default_value_accessor

    def __post_init__(self) -> None:
        self.key_accessor = as_binary_accessor(self.key_accessor)
        self.value_accessor = as_binary_accessor(self.value_accessor)


@dataclass
class Point:
    """One derived point of a layer; lives for a single composition pass."""

    x: Any
    y: Any
    data: Any
    name: str
    y0: Optional[float] = field(default=None)
    y1: Optional[float] = field(default=None)


def copy_row(row: Any) -> Any:
    """Shallow copy of a row so extraction never touches the data source."""
    if isinstance(row, dict):
        return dict(row)
    return row


class ValueExtractor:
    """Maps each row of a layer to ``Point(x, y, data, name)``."""

    def __init__(self, accessors: SharedAccessors) -> None:
        self.accessors = accessors

    def raw_rows(self, layer: Layer) -> list[Any]:
        """Defensive copy of the rows currently exposed by the layer's source."""
        return [copy_row(row) for row in layer.source.all()]

    def extract(self, layer: Layer, rows: Optional[list[Any]] = None) -> list[Point]:
        """Build the full (unfiltered) point list for ``layer``.

        Args:
            layer: Layer to extract.
            rows: Rows to use instead of reading the layer's source again.
        """
        if rows is None:
            rows = self.raw_rows(layer)
        key_fn: Callable[[Any, int], Any] = self.accessors.key_accessor
        value_fn = layer.resolve_accessor(self.accessors.value_accessor)
        return [
            Point(x=key_fn(row, i), y=value_fn(row, i), data=row, name=layer.name)
            for i, row in enumerate(rows)
        ]
