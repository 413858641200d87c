"""Unit tests for VisibilityController, LegendBuilder, TitleRegistry and colors."""

import plotly.colors
import pytest

from nicestack.stack_engine.colors import PaletteColorProvider, resolve_palette
from nicestack.stack_engine.layer_registry import LayerRegistry
from nicestack.stack_engine.legend import LegendBuilder, LegendEntry, TitleRegistry
from nicestack.stack_engine.sources import StaticGroup
from nicestack.stack_engine.visibility import VisibilityController


def test_hide_is_idempotent():
    vis = VisibilityController()
    vis.hide("A")
    once = vis.hidden_names()
    vis.hide("A")
    assert vis.hidden_names() == once == frozenset({"A"})


def test_hide_then_show_restores():
    vis = VisibilityController()
    before = vis.hidden_names()
    vis.hide("A")
    vis.show("A")
    assert vis.hidden_names() == before
    assert not vis.is_hidden("A")


def test_show_unknown_is_noop():
    vis = VisibilityController()
    version = vis.version
    vis.show("nobody")
    assert vis.version == version


def test_toggle_returns_new_state():
    vis = VisibilityController()
    assert vis.toggle("A") is True
    assert vis.toggle("A") is False
    assert vis.is_visible("A")


def test_reset_shows_everything():
    vis = VisibilityController()
    vis.hide("A")
    vis.hide("B")
    vis.reset()
    assert vis.hidden_names() == frozenset()


def test_legendables_include_hidden_layers():
    reg = LayerRegistry()
    for name in ("A", "B", "C"):
        reg.attach(StaticGroup([]), name)
    vis = VisibilityController()
    vis.hide("B")
    builder = LegendBuilder(lambda layer, i: f"color-{i}")

    entries = builder.legendables(reg.layers(), vis)
    assert entries == [
        LegendEntry(name="A", hidden=False, color="color-0"),
        LegendEntry(name="B", hidden=True, color="color-1"),
        LegendEntry(name="C", hidden=False, color="color-2"),
    ]


def test_title_registry_falls_back_to_default():
    default = lambda row: "default"
    titles = TitleRegistry(default)
    per_layer = lambda row: "per-layer"
    titles.set_title("A", per_layer)

    assert titles.get_title("A") is per_layer
    assert titles.get_title("unknown") is default
    assert titles.get_title() is default


def test_title_registry_clear_keeps_default():
    default = lambda row: "default"
    titles = TitleRegistry(default)
    titles.set_title("A", lambda row: "a")
    titles.clear()
    assert not titles.has_title("A")
    assert titles.get_title("A") is default


def test_palette_color_provider_cycles():
    provider = PaletteColorProvider(["red", "blue"])
    reg = LayerRegistry()
    layer = reg.attach(StaticGroup([]), "A")
    assert [provider(layer, i) for i in range(3)] == ["red", "blue", "red"]


def test_default_palette_is_plotly():
    assert resolve_palette() == list(plotly.colors.qualitative.Plotly)
    assert resolve_palette("D3") == list(plotly.colors.qualitative.D3)


def test_unknown_palette_raises():
    with pytest.raises(ValueError):
        resolve_palette("NoSuchPalette")
    with pytest.raises(ValueError):
        resolve_palette([])
