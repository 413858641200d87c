"""Unit tests for DomainFilter modes and ValueExtractor."""

from nicestack.stack_engine.domain_filter import DomainFilter, DomainMode, XDomain
from nicestack.stack_engine.layer_registry import LayerRegistry
from nicestack.stack_engine.sources import StaticGroup
from nicestack.stack_engine.value_extractor import Point, SharedAccessors, ValueExtractor


def points(*keys):
    return [Point(x=k, y=1, data=None, name="A") for k in keys]


def test_no_provider_passes_everything():
    f = DomainFilter()
    assert f.mode is DomainMode.NONE
    assert len(f.apply(points(-100, 0, 100))) == 3


def test_fixed_domain_is_inclusive():
    f = DomainFilter(XDomain((1, 3)))
    assert f.mode is DomainMode.FIXED
    kept = f.apply(points(0, 1, 2, 3, 4))
    assert [p.x for p in kept] == [1, 2, 3]


def test_fixed_domain_uses_first_and_last_bound():
    f = DomainFilter(XDomain((1, 2, 5)))
    assert [p.x for p in f.apply(points(0, 4, 6))] == [4]


def test_ordinal_domain_passes_everything():
    """Ordinal domains are not filtered by membership."""
    f = DomainFilter(XDomain(("a", "b"), ordinal=True))
    assert f.mode is DomainMode.ORDINAL
    assert [p.x for p in f.apply(points("a", "z"))] == ["a", "z"]


def test_elastic_domain_passes_everything():
    f = DomainFilter(XDomain((1, 2), elastic=True))
    assert f.mode is DomainMode.ELASTIC
    assert len(f.apply(points(0, 5))) == 2


def test_ordinal_takes_precedence_over_elastic():
    f = DomainFilter(XDomain((1, 2), ordinal=True, elastic=True))
    assert f.mode is DomainMode.ORDINAL


def test_empty_fixed_domain_passes_everything():
    f = DomainFilter(XDomain(()))
    assert len(f.apply(points(1, 2))) == 2


def test_apply_keeps_order():
    f = DomainFilter(XDomain((0, 10)))
    assert [p.x for p in f.apply(points(5, 1, 3))] == [5, 1, 3]


def test_extractor_uses_layer_accessor_over_shared():
    reg = LayerRegistry()
    source = StaticGroup([{"key": 1, "value": 2, "other": 7}])
    shared_layer = reg.attach(source, "shared")
    own_layer = reg.attach(source, "own", lambda row: row["other"])
    extractor = ValueExtractor(SharedAccessors())

    (p,) = extractor.extract(shared_layer)
    assert (p.x, p.y, p.name) == (1, 2, "shared")
    (q,) = extractor.extract(own_layer)
    assert (q.x, q.y, q.name) == (1, 7, "own")


def test_extractor_passes_row_index():
    reg = LayerRegistry()
    layer = reg.attach(StaticGroup([{"v": 0}, {"v": 0}, {"v": 0}]), "A")
    accessors = SharedAccessors(key_accessor=lambda row, i: i, value_accessor=lambda row, i: i * 2)
    pts = ValueExtractor(accessors).extract(layer)
    assert [(p.x, p.y) for p in pts] == [(0, 0), (1, 2), (2, 4)]


def test_extractor_does_not_mutate_source_rows():
    original = [{"key": 1, "value": 2}]
    reg = LayerRegistry()
    layer = reg.attach(StaticGroup(original), "A")
    pts = ValueExtractor(SharedAccessors()).extract(layer)
    pts[0].data["value"] = 99
    assert original[0]["value"] == 2


def test_fixed_domain_drops_keys_that_cannot_be_compared():
    f = DomainFilter(XDomain((1, 2)))
    assert [p.x for p in f.apply(points(None, 1, "b", 2))] == [1, 2]
