"""Hidden/visible state of named layers."""

from __future__ import annotations

from typing import Union

from nicestack.stack_engine.layer_registry import Layer


class VisibilityController:
    """Tracks which layer names are hidden. Absence means visible.

    Only state changes here; recomposition and redraw are up to the caller.
    """

    def __init__(self) -> None:
        self._hidden: set[str] = set()
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def hide(self, name: str) -> None:
        if name not in self._hidden:
            self._hidden.add(name)
            self._version += 1

    def show(self, name: str) -> None:
        if name in self._hidden:
            self._hidden.discard(name)
            self._version += 1

    def toggle(self, name: str) -> bool:
        """Flip the hidden state of ``name``; returns the new hidden state."""
        if self.is_hidden(name):
            self.show(name)
            return False
        self.hide(name)
        return True

    def is_hidden(self, name: str) -> bool:
        return name in self._hidden

    def is_visible(self, layer: Union[Layer, str]) -> bool:
        name = layer.name if isinstance(layer, Layer) else layer
        return not self.is_hidden(name)

    def hidden_names(self) -> frozenset[str]:
        return frozenset(self._hidden)

    def reset(self) -> None:
        """Make every layer visible again."""
        if self._hidden:
            self._hidden.clear()
            self._version += 1
