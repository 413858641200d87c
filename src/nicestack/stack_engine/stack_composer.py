"""Cumulative stacking of aligned layers.

The composer takes the visible, domain-filtered layers in registry order and
writes a baseline ``y0`` and top ``y1 = y0 + y`` onto every point. Stacking is
purely cumulative: positive and negative values are not split into separate
bands above and below zero, so mixed-sign layers overlap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np
import pandas as pd

from nicestack.utils.logging import get_logger
from nicestack.stack_engine.errors import StackAlignmentError
from nicestack.stack_engine.layer_registry import Accessor
from nicestack.stack_engine.value_extractor import Point

logger = get_logger(__name__)

Baseline = Union[float, Sequence[float]]


@dataclass
class StackedLayer:
    """One visible layer of a composition pass.

    Attributes:
        name: Layer name.
        accessor: The layer's own value accessor, or None when it uses the shared one.
        raw_data: Copied rows the points were built from.
        values: Points used for stacking and rendering (unfiltered when the
            evade-filter flag is set).
        domain_values: Points inside the domain; the same objects as in ``values``.
    """

    name: str
    accessor: Optional[Accessor]
    raw_data: list[Any] = field(default_factory=list)
    values: list[Point] = field(default_factory=list)
    domain_values: list[Point] = field(default_factory=list)


@dataclass
class StackSnapshot:
    """Result of one composition pass, layers in stack order."""

    layers: list[StackedLayer] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.layers

    @property
    def names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    def flatten(self) -> list[Point]:
        """All in-domain points of every layer, layer by layer."""
        return [p for layer in self.layers for p in layer.domain_values]

    def layer(self, name: str) -> Optional[StackedLayer]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def to_frame(self, *, domain_only: bool = False) -> pd.DataFrame:
        """Long-form DataFrame with columns ``name, x, y, y0, y1``."""
        records = [
            {"name": p.name, "x": p.x, "y": p.y, "y0": p.y0, "y1": p.y1}
            for layer in self.layers
            for p in (layer.domain_values if domain_only else layer.values)
        ]
        return pd.DataFrame.from_records(records, columns=["name", "x", "y", "y0", "y1"])

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[StackedLayer]:
        return iter(self.layers)


def _as_float(value: Any) -> float:
    if value is None:
        return math.nan
    return float(value)


def _same_key(a: Any, b: Any) -> bool:
    if a is b:
        return True
    try:
        if bool(a == b):
            return True
    except (TypeError, ValueError):
        return False
    # NaN keys never compare equal to themselves
    return a != a and b != b


class StackComposer:
    """Computes per-key cumulative baselines across layers.

    Args:
        baseline: Base of the first layer; a scalar, or one value per key.
    """

    def __init__(self, baseline: Baseline = 0.0) -> None:
        self.baseline = baseline

    def compose(self, layers: list[StackedLayer]) -> StackSnapshot:
        """Stack ``layers`` in the given order and return the snapshot.

        Raises:
            StackAlignmentError: If any layer's points do not line up with the
                first layer's keys, or the baseline has the wrong length.
        """
        if not layers:
            return StackSnapshot(layers=[])

        keys = [p.x for p in layers[0].values]
        self._check_alignment(keys, layers)

        n_keys = len(keys)
        y = np.array(
            [[_as_float(p.y) for p in layer.values] for layer in layers],
            dtype=np.float64,
        ).reshape(len(layers), n_keys)

        base = self._baseline_array(n_keys)
        # a missing value contributes nothing to the layers above it
        contrib = np.where(np.isnan(y), 0.0, y)
        below = np.zeros_like(contrib)
        below[1:, :] = np.cumsum(contrib, axis=0)[:-1, :]
        y0 = base + below
        y1 = y0 + y

        for j, layer in enumerate(layers):
            for i, point in enumerate(layer.values):
                point.y0 = float(y0[j, i])
                point.y1 = float(y1[j, i])

        logger.debug(f"Stacked {len(layers)} layers over {n_keys} keys")
        return StackSnapshot(layers=list(layers))

    def _baseline_array(self, n_keys: int) -> np.ndarray:
        if np.isscalar(self.baseline):
            return np.full(n_keys, float(self.baseline), dtype=np.float64)
        base = np.asarray(self.baseline, dtype=np.float64).reshape(-1)
        if base.size != n_keys:
            message = f"Baseline has {base.size} values but the key axis has {n_keys} keys"
            logger.warning(message)
            raise StackAlignmentError(message, expected_length=n_keys, actual_length=int(base.size))
        return base

    def _check_alignment(self, keys: list[Any], layers: list[StackedLayer]) -> None:
        first = layers[0].name
        for layer in layers[1:]:
            if len(layer.values) != len(keys):
                message = (
                    f"Layer key mismatch: layer {layer.name!r} has {len(layer.values)} points, "
                    f"first layer {first!r} has {len(keys)}"
                )
                logger.warning(message)
                raise StackAlignmentError(
                    message,
                    layer_name=layer.name,
                    expected_length=len(keys),
                    actual_length=len(layer.values),
                )
            for i, (expected, point) in enumerate(zip(keys, layer.values)):
                if not _same_key(expected, point.x):
                    message = (
                        f"Layer key mismatch: layer {layer.name!r} has key {point.x!r} at index {i}, "
                        f"first layer {first!r} has {expected!r}"
                    )
                    logger.warning(message)
                    raise StackAlignmentError(
                        message,
                        layer_name=layer.name,
                        expected_length=len(keys),
                        actual_length=len(layer.values),
                        index=i,
                        expected_key=expected,
                        actual_key=point.x,
                    )
