"""Ordered registry of named stack layers.

Each layer binds a data source (anything exposing ``all()``) to a unique name
and an optional per-layer value accessor that overrides the shared one.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Protocol, Sequence

from nicestack.utils.logging import get_logger

logger = get_logger(__name__)

Accessor = Callable[[Any, int], Any]


class DataSource(Protocol):
    """Anything that yields the rows of one series, e.g. a grouping result."""

    def all(self) -> Sequence[Any]:
        ...


def as_binary_accessor(fn: Callable[..., Any]) -> Accessor:
    """Adapt a ``(row)`` or ``(row, index)`` callable to the ``(row, index)`` form.

    Builtins and C callables such as ``operator.itemgetter`` are treated as
    unary, since their ``*args`` signatures do not say what they accept.
    """
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return lambda row, index: fn(row)

    positional = sum(
        1
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )
    if positional >= 2:
        return fn
    var_positional = any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params)
    if var_positional and (inspect.isfunction(fn) or inspect.ismethod(fn)):
        return fn
    return lambda row, index: fn(row)


@dataclass
class Layer:
    """One named series participating in a stack.

    Attributes:
        name: Unique name within the registry; used for visibility, titles and legends.
        source: Data source handle; only its ``all()`` is ever called.
        accessor: Optional ``(row, index) -> number`` overriding the shared value accessor.
    """

    name: str
    source: DataSource
    accessor: Optional[Accessor] = None

    def resolve_accessor(self, shared: Accessor) -> Accessor:
        """Return the layer accessor, or ``shared`` when the layer has none."""
        return self.accessor if self.accessor is not None else shared


class LayerRegistry:
    """Ordered collection of uniquely named layers.

    ``version`` increases on every mutation so callers can key caches on it.
    """

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def attach(
        self,
        source: DataSource,
        name: Optional[str] = None,
        accessor: Optional[Callable[..., Any]] = None,
    ) -> Layer:
        """Append a layer and return it.

        Args:
            source: Data source exposing ``all()``.
            name: Layer name. When omitted (or not a string) the pre-append
                registry length is used, e.g. ``"0"`` for the first layer.
            accessor: Optional ``(row)`` or ``(row, index)`` value accessor.
                Non-callables are ignored.

        Returns:
            The new Layer.

        Raises:
            ValueError: If ``name`` is already used by another layer.
        """
        if name is not None and not isinstance(name, str):
            logger.warning(f"Layer name {name!r} is not a string, generating one")
            name = None

        if name is None:
            name = self._generate_name()
        elif self.find(name) is not None:
            logger.warning(f"Rejecting duplicate layer name {name!r}")
            raise ValueError(f"Layer name {name!r} is already registered")

        layer_accessor: Optional[Accessor] = None
        if accessor is not None:
            if callable(accessor):
                layer_accessor = as_binary_accessor(accessor)
            else:
                logger.warning(f"Ignoring non-callable accessor for layer {name!r}: {accessor!r}")

        layer = Layer(name=name, source=source, accessor=layer_accessor)
        self._layers.append(layer)
        self._version += 1
        logger.debug(f"Attached layer {name!r} at index {len(self._layers) - 1}")
        return layer

    def _generate_name(self) -> str:
        taken = set(self.names())
        candidate = len(self._layers)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def layers(self) -> tuple[Layer, ...]:
        """Current layers in registry order (read-only view)."""
        return tuple(self._layers)

    def names(self) -> list[str]:
        return [layer.name for layer in self._layers]

    def find(self, name: str) -> Optional[Layer]:
        for layer in self._layers:
            if layer.name == name:
                return layer
        return None

    def value_accessor_at(self, index: int, shared: Accessor) -> Accessor:
        """Value accessor used for the layer at ``index`` (IndexError if out of range)."""
        return self._layers[index].resolve_accessor(shared)

    def clear(self) -> None:
        """Remove all layers."""
        if self._layers:
            logger.debug(f"Clearing {len(self._layers)} layers")
        self._layers = []
        self._version += 1

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(tuple(self._layers))
