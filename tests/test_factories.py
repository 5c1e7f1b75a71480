from __future__ import annotations

import pytest

from spatialrules.countries import AustriaSpatialRule, GermanySpatialRule
from spatialrules.factories import SpatialRuleDefaultFactory, SpatialRuleListFactory
from spatialrules.geometry import Polygon
from spatialrules.rules import SpatialRule

BORDER = [Polygon([(0, 0), (0, 1), (1, 1), (1, 0)])]


def test_list_factory_from_instances() -> None:
    deu = GermanySpatialRule()
    factory = SpatialRuleListFactory([deu, AustriaSpatialRule()])
    assert sorted(factory.rule_ids) == ["AUT", "DEU"]
    rule = factory.create_spatial_rule("DEU", BORDER)
    assert rule is deu
    assert rule.borders == BORDER


def test_list_factory_from_comma_separated_names() -> None:
    factory = SpatialRuleListFactory("GermanySpatialRule, spatialrules.countries.AustriaSpatialRule")
    assert sorted(factory.rule_ids) == ["AUT", "DEU"]


def test_list_factory_unknown_id_returns_none() -> None:
    factory = SpatialRuleListFactory(["GermanySpatialRule"])
    assert factory.create_spatial_rule("FRA", BORDER) is None


def test_list_factory_none_id_fails() -> None:
    factory = SpatialRuleListFactory(["GermanySpatialRule"])
    with pytest.raises(ValueError, match="cannot be None"):
        factory.create_spatial_rule(None, BORDER)


@pytest.mark.parametrize("rules", [[], "", " , "])
def test_list_factory_requires_a_rule(rules) -> None:
    with pytest.raises(ValueError, match="at least one rule"):
        SpatialRuleListFactory(rules)


def test_list_factory_unknown_name_fails_at_construction() -> None:
    with pytest.raises(ValueError, match="Cannot find SpatialRule"):
        SpatialRuleListFactory("GermanySpatialRule,AtlantisSpatialRule")


def test_list_factory_returns_same_instance_and_overwrites_borders() -> None:
    factory = SpatialRuleListFactory("GermanySpatialRule")
    other = [Polygon([(5, 5), (5, 6), (6, 6)])]
    first = factory.create_spatial_rule("DEU", BORDER)
    second = factory.create_spatial_rule("DEU", other)
    assert first is second
    assert first.borders == other


def test_default_factory_creates_fresh_rules() -> None:
    factory = SpatialRuleDefaultFactory()
    a = factory.create_spatial_rule("X", BORDER)
    b = factory.create_spatial_rule("X", BORDER)
    assert isinstance(a, SpatialRule)
    assert a is not b
    assert (a.id, a.borders) == ("X", BORDER)
