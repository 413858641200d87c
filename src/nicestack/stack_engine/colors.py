"""Default layer colors from Plotly's qualitative palettes."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import plotly.colors

from nicestack.stack_engine.layer_registry import Layer

DEFAULT_PALETTE = "Plotly"


def resolve_palette(palette: Optional[Union[str, Sequence[str]]] = None) -> list[str]:
    """Return a list of colors for a palette name (e.g. "D3", "Set2") or a color list.

    Raises:
        ValueError: If the palette name is unknown or the color list is empty.
    """
    if palette is None:
        palette = DEFAULT_PALETTE
    if isinstance(palette, str):
        colors = getattr(plotly.colors.qualitative, palette, None)
        if not isinstance(colors, (list, tuple)):
            raise ValueError(f"Unknown qualitative palette {palette!r}")
        return list(colors)
    colors = list(palette)
    if not colors:
        raise ValueError("palette must contain at least one color")
    return colors


class PaletteColorProvider:
    """Color provider ``(layer, index) -> color`` cycling a palette by layer index."""

    def __init__(self, palette: Optional[Union[str, Sequence[str]]] = None) -> None:
        self.colors = resolve_palette(palette)

    def __call__(self, layer: Layer, index: int) -> str:
        return self.colors[index % len(self.colors)]
