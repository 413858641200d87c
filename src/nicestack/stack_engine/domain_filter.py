"""Domain filtering of stack points.

Points are filtered against the current key-axis domain before stacking. Only
a fixed (non-elastic, non-ordinal) domain actually filters; ordinal and
elastic domains let every point through.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Sequence

from nicestack.stack_engine.value_extractor import Point


class DomainMode(Enum):
    """How the key-axis domain constrains visible points."""
    NONE = "none"          # no domain provider attached
    FIXED = "fixed"        # inclusive [min, max] window
    ORDINAL = "ordinal"    # categorical keys; pass-through
    ELASTIC = "elastic"    # domain follows the data; pass-through


class DomainProvider(Protocol):
    """Source of the current key-axis domain (usually the chart's x scale)."""

    def domain(self) -> Sequence[Any]:
        ...

    def is_ordinal(self) -> bool:
        ...

    def is_elastic(self) -> bool:
        ...


@dataclass(frozen=True)
class XDomain:
    """Static DomainProvider.

    Attributes:
        values: ``(min, max)`` for a continuous axis, or the category list for an ordinal one.
        ordinal: Keys are categorical.
        elastic: Domain auto-expands to the data.
    """

    values: Sequence[Any]
    ordinal: bool = False
    elastic: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    def domain(self) -> Sequence[Any]:
        return self.values

    def is_ordinal(self) -> bool:
        return self.ordinal

    def is_elastic(self) -> bool:
        return self.elastic


def _accept_all(point: Point) -> bool:
    return True


class DomainFilter:
    """Decides whether a point lies in the visible window of a domain provider."""

    def __init__(self, provider: Optional[DomainProvider] = None) -> None:
        self.provider = provider

    @property
    def mode(self) -> DomainMode:
        if self.provider is None:
            return DomainMode.NONE
        if self.provider.is_ordinal():
            return DomainMode.ORDINAL
        if self.provider.is_elastic():
            return DomainMode.ELASTIC
        return DomainMode.FIXED

    def predicate(self) -> Callable[[Point], bool]:
        """Return the point predicate for the current mode.

        Ordinal domains are not filtered by membership: every point passes.
        Callers may rely on receiving all ordinal keys, so this stays a
        pass-through until membership filtering is decided on.
        """
        mode = self.mode
        if mode is not DomainMode.FIXED:
            return _accept_all

        bounds = list(self.provider.domain())  # type: ignore[union-attr]
        if not bounds:
            return _accept_all
        lo, hi = bounds[0], bounds[-1]

        def in_domain(p: Point) -> bool:
            try:
                return bool(lo <= p.x <= hi)
            except TypeError:
                # keys not comparable with the bounds fall outside the domain
                return False

        return in_domain

    def apply(self, points: list[Point]) -> list[Point]:
        """Points inside the domain, in their original order."""
        keep = self.predicate()
        return [p for p in points if keep(p)]

    def cache_token(self) -> tuple[Any, ...]:
        """Hashable description of the current domain, for composition caches."""
        if self.provider is None:
            return (DomainMode.NONE,)
        return (self.mode, tuple(self.provider.domain()))
