"""Legend records and per-layer tooltip titles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from nicestack.stack_engine.layer_registry import Layer
from nicestack.stack_engine.visibility import VisibilityController

TitleFn = Callable[[Any], str]
ColorProvider = Callable[[Layer, int], Any]


@dataclass(frozen=True)
class LegendEntry:
    """Display-ready description of one layer for a legend."""

    name: str
    hidden: bool
    color: Any


class LegendBuilder:
    """Builds legend entries for every layer, hidden ones included.

    Hiding a layer removes it from composition, not from the legend.
    """

    def __init__(self, color_provider: ColorProvider) -> None:
        self.color_provider = color_provider

    def legendables(
        self,
        layers: Sequence[Layer],
        visibility: VisibilityController,
    ) -> list[LegendEntry]:
        return [
            LegendEntry(
                name=layer.name,
                hidden=visibility.is_hidden(layer.name),
                color=self.color_provider(layer, i),
            )
            for i, layer in enumerate(layers)
        ]


class TitleRegistry:
    """Tooltip title functions, per layer with a chart-wide fallback."""

    def __init__(self, default: TitleFn) -> None:
        self._default = default
        self._titles: dict[str, TitleFn] = {}

    @property
    def default(self) -> TitleFn:
        return self._default

    def set_default(self, fn: TitleFn) -> None:
        self._default = fn

    def set_title(self, stack_name: str, fn: TitleFn) -> None:
        self._titles[stack_name] = fn

    def get_title(self, stack_name: Optional[str] = None) -> TitleFn:
        """Title function for ``stack_name``; the default for unknown or missing names."""
        if stack_name is None:
            return self._default
        return self._titles.get(stack_name, self._default)

    def has_title(self, stack_name: str) -> bool:
        return stack_name in self._titles

    def clear(self) -> None:
        """Drop per-layer titles; the default is kept."""
        self._titles = {}
