"""Configuration state for a StackEngine.

StackState holds the flags and padding options of one stacked chart and can be
serialized to a plain dict. It is never written to disk by nicestack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from nicestack.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StackState:
    """Options of a stacked chart.

    Attributes:
        hidable_stacks: Legend clicks may hide/show layers (legend_toggle).
        evade_domain_filter: Keep out-of-domain points in ``values`` for clipped rendering.
        x_axis_padding: Number, percentage string ("5%"), or time-unit count for timestamp keys.
        x_axis_padding_unit: Time unit of x padding on timestamp keys (None = day).
        y_axis_padding: Number or percentage string.
        cache_composition: Reuse the last snapshot until layers, visibility,
            domain, evade flag or accessors change.
    """
    hidable_stacks: bool = False
    evade_domain_filter: bool = False
    x_axis_padding: Union[int, float, str] = 0
    x_axis_padding_unit: Optional[str] = None
    y_axis_padding: Union[int, float, str] = 0
    cache_composition: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize StackState to a dictionary."""
        return {
            "hidable_stacks": self.hidable_stacks,
            "evade_domain_filter": self.evade_domain_filter,
            "x_axis_padding": self.x_axis_padding,
            "x_axis_padding_unit": self.x_axis_padding_unit,
            "y_axis_padding": self.y_axis_padding,
            "cache_composition": self.cache_composition,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StackState":
        """Tolerant loader.

        - unknown keys are ignored with a warning
        - missing keys use defaults
        - paddings that are neither numbers nor strings fall back to 0
        """
        known_keys = set(cls().to_dict().keys())
        for key in data.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in stack state, ignoring")

        unit = data.get("x_axis_padding_unit")
        return cls(
            hidable_stacks=bool(data.get("hidable_stacks", False)),
            evade_domain_filter=bool(data.get("evade_domain_filter", False)),
            x_axis_padding=_padding_value(data.get("x_axis_padding", 0), "x_axis_padding"),
            x_axis_padding_unit=str(unit) if unit is not None else None,
            y_axis_padding=_padding_value(data.get("y_axis_padding", 0), "y_axis_padding"),
            cache_composition=bool(data.get("cache_composition", False)),
        )


def _padding_value(value: Any, label: str) -> Union[int, float, str]:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        logger.warning(f"{label}={value!r} is not a number or string, using 0")
        return 0
    return value
