# spatialrules/factories.py
# Factories turning a feature id plus its polygons into a SpatialRule.
#
#   - SpatialRuleListFactory   : fixed catalog of rules keyed by id; unknown ids map to None
#   - SpatialRuleDefaultFactory: one fresh generic rule per id

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Union
import logging

from .geometry import Polygon
from .rules import SpatialRule, resolve_rule_type

logger = logging.getLogger(__name__)


class SpatialRuleFactory(ABC):

    @abstractmethod
    def create_spatial_rule(self, id: str, polygons: Sequence[Polygon]) -> Optional[SpatialRule]:
        """
        Create the rule for `id` with `polygons` as its borders, or None if
        the feature should be left out of the lookup.
        """


class SpatialRuleListFactory(SpatialRuleFactory):
    """
    Registry of pre-built rules.

    Accepts SpatialRule instances, rule type names, or one comma-separated
    string of names:

        SpatialRuleListFactory([GermanySpatialRule(), AustriaSpatialRule()])
        SpatialRuleListFactory("GermanySpatialRule,AustriaSpatialRule")
        SpatialRuleListFactory(["GermanySpatialRule", "myapp.rules.CustomRule"])

    Names are resolved once, here. The registry hands out the same rule
    instance on every call for an id and overwrites its borders each time,
    so one factory must not serve two builds concurrently.
    """

    def __init__(self, rules: Union[str, Sequence[Union[str, SpatialRule]]]) -> None:
        if isinstance(rules, str):
            rules = rules.split(",")
        names_or_rules = [r for r in rules if not (isinstance(r, str) and not r.strip())]
        if len(names_or_rules) == 0:
            msg = "You have to pass at least one rule"
            logger.error(msg)
            raise ValueError(msg)

        self._rule_map: Dict[str, SpatialRule] = {}
        for r in names_or_rules:
            rule = resolve_rule_type(r) if isinstance(r, str) else r
            if not isinstance(rule, SpatialRule):
                msg = f"Cannot use {type(rule).__name__} as a SpatialRule"
                logger.error(msg)
                raise ValueError(msg)
            self._rule_map[rule.id] = rule

    @property
    def rule_ids(self) -> List[str]:
        return list(self._rule_map)

    def create_spatial_rule(self, id: str, polygons: Sequence[Polygon]) -> Optional[SpatialRule]:
        if id is None:
            raise ValueError("ID cannot be None to find a SpatialRule")
        rule = self._rule_map.get(id)
        if rule is None:
            return None
        return rule.set_borders(polygons)


class SpatialRuleDefaultFactory(SpatialRuleFactory):
    """One generic SpatialRule per distinct id found in the data."""

    def create_spatial_rule(self, id: str, polygons: Sequence[Polygon]) -> Optional[SpatialRule]:
        return SpatialRule(id, polygons)
