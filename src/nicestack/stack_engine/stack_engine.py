"""Stacked-series engine a chart holds and delegates into.

StackEngine wires the layer registry, visibility, value extraction, domain
filtering, stacking, extents, titles and legends together. It never renders:
``legend_toggle`` only asks the host chart to re-render through the render
trigger callback.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

import numpy as np

from nicestack.utils.logging import get_logger
from nicestack.stack_engine.axis_extent import AxisExtentCalculator, AxisExtents
from nicestack.stack_engine.colors import PaletteColorProvider
from nicestack.stack_engine.domain_filter import DomainFilter, DomainProvider
from nicestack.stack_engine.layer_registry import (
    Accessor,
    DataSource,
    Layer,
    LayerRegistry,
    as_binary_accessor,
)
from nicestack.stack_engine.legend import (
    ColorProvider,
    LegendBuilder,
    LegendEntry,
    TitleFn,
    TitleRegistry,
)
from nicestack.stack_engine.stack_composer import (
    Baseline,
    StackComposer,
    StackedLayer,
    StackSnapshot,
)
from nicestack.stack_engine.stack_state import StackState
from nicestack.stack_engine.value_extractor import Point, SharedAccessors, ValueExtractor
from nicestack.stack_engine.visibility import VisibilityController

logger = get_logger(__name__)


class StackEngine:
    """Composes named layers into a stack and derives extents and legend data.

    **Public API:**

    - **stack(source, name, accessor)** / **group(source, name, value_accessor)**: add or replace layers.
    - **compose()**: build a StackSnapshot of the visible layers (raises StackAlignmentError).
    - **x_axis_min/max(), y_axis_min/max(), extents()**: padded extents, None when there is no data.
    - **hide_stack / show_stack / legend_toggle / legendables()**: visibility and legend.
    - **title() / set_title()**: tooltip title functions.

    Args:
        state: Chart options; defaults to StackState().
        domain: Key-axis domain provider; None disables domain filtering.
        accessors: Shared key/value accessors.
        color_provider: ``(layer, index) -> color`` for legend entries.
        render_trigger: Zero-argument callback asking the host chart to re-render.
        baseline: Base of the first layer (scalar or one value per key).
        ordering: Sort key for rows in ordinal_x_domain(); defaults to the key accessor.
    """

    def __init__(
        self,
        *,
        state: Optional[StackState] = None,
        domain: Optional[DomainProvider] = None,
        accessors: Optional[SharedAccessors] = None,
        color_provider: Optional[ColorProvider] = None,
        render_trigger: Optional[Callable[[], Any]] = None,
        baseline: Baseline = 0.0,
        ordering: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.state = state if state is not None else StackState()
        self.accessors = accessors if accessors is not None else SharedAccessors()
        self.registry = LayerRegistry()
        self.visibility = VisibilityController()
        self.domain_filter = DomainFilter(domain)
        self.composer = StackComposer(baseline)
        self.legend_builder = LegendBuilder(color_provider or PaletteColorProvider())
        self.titles = TitleRegistry(self._default_title)
        self.render_trigger = render_trigger
        self.ordering = ordering
        self.group_name: Optional[str] = None

        self._cached: Optional[StackSnapshot] = None
        self._cache_token: Optional[tuple[Any, ...]] = None

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def stack(
        self,
        source: DataSource,
        name: Optional[str] = None,
        accessor: Optional[Callable[..., Any]] = None,
    ) -> Layer:
        """Stack a new data source on top of the existing layers.

        All layers share the key accessor and therefore the same keys; ``accessor``
        overrides the shared value accessor for this layer only.
        """
        return self.registry.attach(source, name, accessor)

    def group(
        self,
        source: DataSource,
        name: Optional[str] = None,
        value_accessor: Optional[Callable[..., Any]] = None,
    ) -> Layer:
        """Replace every layer with ``source`` as the single (first) layer.

        Per-layer titles are dropped. ``value_accessor``, when given, becomes
        the shared value accessor.
        """
        logger.info(f"Replacing {len(self.registry)} layers with group {name!r}")
        self.registry.clear()
        self.titles.clear()
        self.group_name = name
        layer = self.registry.attach(source, name)
        if value_accessor is not None:
            self.set_value_accessor(value_accessor)
        return layer

    def layers(self) -> tuple[Layer, ...]:
        return self.registry.layers()

    def clear(self) -> None:
        self.registry.clear()

    def set_key_accessor(self, fn: Callable[..., Any]) -> None:
        self.accessors.key_accessor = as_binary_accessor(fn)

    def set_value_accessor(self, fn: Callable[..., Any]) -> None:
        self.accessors.value_accessor = as_binary_accessor(fn)

    def value_accessor_at(self, index: int) -> Accessor:
        """Value accessor of the layer at ``index``: its own or the shared one."""
        return self.registry.value_accessor_at(index, self.accessors.value_accessor)

    def set_domain(self, domain: Optional[DomainProvider]) -> None:
        self.domain_filter = DomainFilter(domain)

    def data(self) -> list[dict[str, Any]]:
        """Copied rows of every layer (hidden ones included) with name and accessor."""
        extractor = ValueExtractor(self.accessors)
        return [
            {"name": layer.name, "accessor": layer.accessor, "raw_data": extractor.raw_rows(layer)}
            for layer in self.registry
        ]

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def compose(self) -> StackSnapshot:
        """Extract, filter and stack the visible layers.

        Returns:
            StackSnapshot of the visible layers in registry order; empty when
            no layer is visible.

        Raises:
            StackAlignmentError: If visible layers do not share the first layer's keys.
        """
        token: Optional[tuple[Any, ...]] = None
        if self.state.cache_composition:
            token = self._composition_token()
            if self._cached is not None and token == self._cache_token:
                return self._cached

        extractor = ValueExtractor(self.accessors)
        keep = self.domain_filter.predicate()
        stacked: list[StackedLayer] = []
        for layer in self.registry:
            if not self.visibility.is_visible(layer):
                continue
            rows = extractor.raw_rows(layer)
            all_values = extractor.extract(layer, rows)
            domain_values = [p for p in all_values if keep(p)]
            values = all_values if self.state.evade_domain_filter else domain_values
            stacked.append(
                StackedLayer(
                    name=layer.name,
                    accessor=layer.accessor,
                    raw_data=rows,
                    values=values,
                    domain_values=domain_values,
                )
            )

        logger.debug(
            f"compose: visible={len(stacked)}/{len(self.registry)}, "
            f"domain_mode={self.domain_filter.mode.value}, evade={self.state.evade_domain_filter}"
        )
        snapshot = self.composer.compose(stacked)

        if token is not None:
            self._cached = snapshot
            self._cache_token = token
        return snapshot

    def invalidate(self) -> None:
        """Drop a cached snapshot, e.g. after a data source changed."""
        self._cached = None
        self._cache_token = None

    def _composition_token(self) -> tuple[Any, ...]:
        baseline = tuple(np.atleast_1d(np.asarray(self.composer.baseline, dtype=np.float64)).tolist())
        return (
            self.registry.version,
            self.visibility.version,
            self.domain_filter.cache_token(),
            self.state.evade_domain_filter,
            id(self.accessors.key_accessor),
            id(self.accessors.value_accessor),
            baseline,
        )

    def flatten_stack(self) -> list[Point]:
        """In-domain points of every visible layer."""
        return self.compose().flatten()

    def layer_summaries(self) -> list[dict[str, str]]:
        """``[{"name": ...}]`` for each composed layer."""
        return [{"name": layer.name} for layer in self.compose().layers]

    def ordinal_x_domain(self) -> list[Any]:
        """Keys of the flattened stack ordered by ``ordering``, first occurrence kept."""
        key_fn = self.accessors.key_accessor
        order = self.ordering or (lambda row: key_fn(row, 0))
        rows = [p.data for p in self.flatten_stack()]
        keys: list[Any] = []
        for i, row in enumerate(sorted(rows, key=order)):
            k = key_fn(row, i)
            if k not in keys:
                keys.append(k)
        return keys

    # ------------------------------------------------------------------
    # Extents
    # ------------------------------------------------------------------

    def _extent_calculator(self) -> AxisExtentCalculator:
        return AxisExtentCalculator(
            x_padding=self.state.x_axis_padding,
            x_padding_unit=self.state.x_axis_padding_unit,
            y_padding=self.state.y_axis_padding,
        )

    def y_axis_min(self) -> Optional[float]:
        return self._extent_calculator().y_axis_min(self.flatten_stack())

    def y_axis_max(self) -> Optional[float]:
        return self._extent_calculator().y_axis_max(self.flatten_stack())

    def x_axis_min(self) -> Any:
        return self._extent_calculator().x_axis_min(self.flatten_stack())

    def x_axis_max(self) -> Any:
        return self._extent_calculator().x_axis_max(self.flatten_stack())

    def extents(self) -> AxisExtents:
        return self._extent_calculator().extents(self.compose())

    # ------------------------------------------------------------------
    # Visibility & legend
    # ------------------------------------------------------------------

    def hide_stack(self, stack_name: str) -> None:
        """Hide a layer. The host chart must re-render for this to appear."""
        self.visibility.hide(stack_name)

    def show_stack(self, stack_name: str) -> None:
        """Show a layer. The host chart must re-render for this to appear."""
        self.visibility.show(stack_name)

    def get_color(self, layer: Layer, index: int) -> Any:
        return self.legend_builder.color_provider(layer, index)

    def legendables(self) -> list[LegendEntry]:
        return self.legend_builder.legendables(self.registry.layers(), self.visibility)

    def is_legendable_hidden(self, item: Union[LegendEntry, str]) -> bool:
        name = item.name if isinstance(item, LegendEntry) else item
        layer = self.registry.find(name)
        return self.visibility.is_hidden(layer.name) if layer is not None else False

    def legend_toggle(self, item: Union[LegendEntry, str]) -> bool:
        """Flip a layer's visibility from a legend click and request a re-render.

        Returns:
            False (and does nothing) unless ``state.hidable_stacks`` is enabled.
        """
        if not self.state.hidable_stacks:
            return False
        name = item.name if isinstance(item, LegendEntry) else item
        if self.is_legendable_hidden(name):
            self.show_stack(name)
        else:
            self.hide_stack(name)
        if self.render_trigger is not None:
            self.render_trigger()
        else:
            logger.debug(f"legend_toggle({name!r}): no render trigger set")
        return True

    # ------------------------------------------------------------------
    # Titles
    # ------------------------------------------------------------------

    def _default_title(self, row: Any) -> str:
        key = self.accessors.key_accessor(row, 0)
        value = self.accessors.value_accessor(row, 0)
        return f"{key}: {value}"

    def title(self, stack_name: Optional[str] = None) -> TitleFn:
        """Title function of ``stack_name``, or the chart-wide default."""
        return self.titles.get_title(stack_name)

    def set_title(
        self,
        stack_name: Union[str, TitleFn],
        title_accessor: Optional[TitleFn] = None,
    ) -> None:
        """Set a title function.

        ``set_title(fn)`` sets the chart-wide default, as does naming the
        current group. ``set_title(name, fn)`` sets a per-layer title.
        """
        if callable(stack_name):
            self.titles.set_default(stack_name)
            return
        if title_accessor is None:
            raise ValueError("title_accessor is required when a stack name is given")
        if stack_name == self.group_name:
            self.titles.set_default(title_accessor)
            return
        self.titles.set_title(stack_name, title_accessor)
