"""Data source adapters exposing ``all()`` rows to the stack engine.

The engine never aggregates; these adapters only present already grouped
data as an ordered list of ``{key, value}``-style rows.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import pandas as pd


class StaticGroup:
    """Fixed list of rows."""

    def __init__(self, rows: Iterable[Any]) -> None:
        self._rows = list(rows)

    def all(self) -> list[Any]:
        return list(self._rows)


class DataFrameGroup:
    """Rows of a pandas DataFrame, one dict per row, in frame order.

    Args:
        df: Grouped data, one row per key.
        key_col: Column exposed as ``row["key"]``.
        value_col: Column exposed as ``row["value"]``; other columns are kept
            as-is so per-layer accessors can read them.

    Raises:
        ValueError: If ``key_col`` or ``value_col`` is missing from ``df``.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        *,
        key_col: str = "key",
        value_col: Optional[str] = "value",
    ) -> None:
        if key_col not in df.columns:
            raise ValueError(f"df must contain key column {key_col!r}")
        if value_col is not None and value_col not in df.columns:
            raise ValueError(f"df must contain value column {value_col!r}")
        self.df = df
        self.key_col = key_col
        self.value_col = value_col

    def all(self) -> list[dict[str, Any]]:
        records = self.df.to_dict(orient="records")
        rows: list[dict[str, Any]] = []
        for rec in records:
            row = dict(rec)
            row["key"] = rec[self.key_col]
            if self.value_col is not None:
                row["value"] = rec[self.value_col]
            rows.append(row)
        return rows
