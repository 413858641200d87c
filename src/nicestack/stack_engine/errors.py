"""Exceptions raised by the stack engine."""

from __future__ import annotations

from typing import Any, Optional


class StackAlignmentError(ValueError):
    """Layers in one stacking pass do not share the same key axis.

    Raised when a visible layer has a different number of points than the
    first visible layer, when a key differs at some index, or when an injected
    per-key baseline does not match the key axis length.

    Attributes:
        layer_name: Name of the offending layer (None for a baseline mismatch).
        expected_length: Number of keys on the canonical key axis.
        actual_length: Number of points in the offending layer (or baseline).
        index: First mismatching key index, if the lengths agree.
        expected_key: Key of the first layer at ``index``.
        actual_key: Key of the offending layer at ``index``.
    """

    def __init__(
        self,
        message: str,
        *,
        layer_name: Optional[str] = None,
        expected_length: Optional[int] = None,
        actual_length: Optional[int] = None,
        index: Optional[int] = None,
        expected_key: Any = None,
        actual_key: Any = None,
    ) -> None:
        super().__init__(message)
        self.layer_name = layer_name
        self.expected_length = expected_length
        self.actual_length = actual_length
        self.index = index
        self.expected_key = expected_key
        self.actual_key = actual_key
