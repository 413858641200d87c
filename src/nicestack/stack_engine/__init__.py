"""Stacked-series composition: layers, domain filtering, stacking, extents and legends."""

from nicestack.stack_engine.axis_extent import AxisExtentCalculator, AxisExtents
from nicestack.stack_engine.colors import PaletteColorProvider
from nicestack.stack_engine.domain_filter import DomainFilter, DomainMode, XDomain
from nicestack.stack_engine.errors import StackAlignmentError
from nicestack.stack_engine.layer_registry import Layer, LayerRegistry
from nicestack.stack_engine.legend import LegendBuilder, LegendEntry, TitleRegistry
from nicestack.stack_engine.sources import DataFrameGroup, StaticGroup
from nicestack.stack_engine.stack_composer import StackComposer, StackedLayer, StackSnapshot
from nicestack.stack_engine.stack_engine import StackEngine
from nicestack.stack_engine.stack_state import StackState
from nicestack.stack_engine.value_extractor import Point, SharedAccessors, ValueExtractor
from nicestack.stack_engine.visibility import VisibilityController

__all__ = [
    "AxisExtentCalculator",
    "AxisExtents",
    "DataFrameGroup",
    "DomainFilter",
    "DomainMode",
    "Layer",
    "LayerRegistry",
    "LegendBuilder",
    "LegendEntry",
    "PaletteColorProvider",
    "Point",
    "SharedAccessors",
    "StackAlignmentError",
    "StackComposer",
    "StackEngine",
    "StackSnapshot",
    "StackState",
    "StackedLayer",
    "StaticGroup",
    "TitleRegistry",
    "ValueExtractor",
    "VisibilityController",
    "XDomain",
]
