# spatialrules/builder.py
# Builds a SpatialRuleLookup from a GeoJSON feature collection and a rule factory.

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union
import logging

from .factories import SpatialRuleFactory, SpatialRuleListFactory
from .features import Feature
from .geometry import BBox
from .lookup import SpatialRuleLookup
from .rules import SpatialRule

logger = logging.getLogger(__name__)

DEFAULT_ID_PROPERTY = "ISO_A3"
UNKNOWN_ID_PREFIX = "_unknown_id_"


class SpatialRuleLookupBuilder:
    """
    Connects features to rules through the feature property `id_property`
    and creates a lookup over the area where rules and `bounds` overlap.

    Pipeline (one-shot, per build call):
      1) Skip features without polygon geometry.
      2) Read the id from `properties[id_property]`; a missing or empty id
         becomes "_unknown_id_<n>", numbered in encounter order from 0.
      3) Reject duplicate ids (ValueError naming the id and the property).
      4) Ask the factory for a rule; None drops the feature.
      5) Union the extents of every accepted rule's polygons.
      6) Intersect the union with `bounds`; no rules or no overlap gives None.
      7) Create the lookup over the intersection and add the rules in order.

    Parameters (defaults, overridable per build call):
      id_property: str   = "ISO_A3"
      resolution:  float = 0.1
      exact:       bool  = False
      logger:      logging.Logger, where build summaries are reported
    """

    def __init__(self, **kwargs):
        self.params: Dict[str, Any] = dict(
            id_property=kwargs.get("id_property", DEFAULT_ID_PROPERTY),
            resolution=kwargs.get("resolution", 0.1),
            exact=kwargs.get("exact", False),
        )
        self.logger: logging.Logger = kwargs.get("logger") or logger

    # ------------------------- Public API -------------------------

    def build(self,
              id_property: Optional[str],
              factory: SpatialRuleFactory,
              features: Iterable[Feature],
              bounds: BBox,
              resolution: Optional[float] = None,
              exact: Optional[bool] = None) -> Optional[SpatialRuleLookup]:
        """
        Returns the populated lookup, or None if no rule was accepted or the
        accepted rules do not overlap `bounds`.
        """
        if id_property is None:
            id_property = self.params["id_property"]
        if resolution is None:
            resolution = float(self.params["resolution"])
        if exact is None:
            exact = bool(self.params["exact"])

        polygon_bounds = BBox.create_inverse()
        rules: List[SpatialRule] = []
        ids: Set[str] = set()
        unknown_counter = 0

        for feature in features:
            geometry = feature.geometry
            if geometry is None or not geometry.is_polygon():
                self.logger.debug("Skipping feature without polygon geometry: %s", feature.properties)
                continue

            borders = geometry.as_polygons()
            id = feature.get_property(id_property)
            if id is None or id == "":
                id = f"{UNKNOWN_ID_PREFIX}{unknown_counter}"
                unknown_counter += 1
            else:
                id = str(id)

            if id in ids:
                raise ValueError(f"The id {id} was already used. Either leave the json property "
                                 f"'{id_property}' empty or use an unique id.")
            ids.add(id)

            rule = factory.create_spatial_rule(id, borders)
            if rule is None:
                self.logger.debug("No rule for id %s, skipping feature", id)
                continue
            rules.append(rule)

            for polygon in borders:
                polygon_bounds.update(polygon.min_lat, polygon.min_lon)
                polygon_bounds.update(polygon.max_lat, polygon.max_lon)

        if not rules:
            return None

        if not polygon_bounds.is_valid():
            raise RuntimeError(f"No associated polygons found in features for rules {rules}")

        # Only create a lookup if there are rules inside the given bounds
        calculated_bounds = polygon_bounds.calculate_intersection(bounds)
        if calculated_bounds is None:
            self.logger.info("Rules bounds %s do not intersect %s, no lookup created", polygon_bounds, bounds)
            return None

        lookup = SpatialRuleLookup(calculated_bounds, resolution, exact)
        for rule in rules:
            lookup.add_rule(rule)

        self.logger.info("Created the SpatialRuleLookup with %d rules and a BBox of %s and the following rules: %s",
                         len(rules), calculated_bounds, [r.id for r in rules])
        return lookup

    def build_from_names(self,
                         rule_names: Union[str, Sequence[str]],
                         features: Iterable[Feature],
                         bounds: BBox,
                         resolution: Optional[float] = None,
                         exact: Optional[bool] = None) -> Optional[SpatialRuleLookup]:
        """
        Single-registry setup: rules named in `rule_names` (comma-separated
        string or list), matched on the default "ISO_A3" property.
        """
        return self.build(DEFAULT_ID_PROPERTY, SpatialRuleListFactory(rule_names),
                          features, bounds, resolution, exact)


# ------------------------- Convenience API -------------------------

def build_spatial_rule_lookup(factory: Union[SpatialRuleFactory, str, Sequence[str]],
                              features: Iterable[Feature],
                              bounds: BBox,
                              **kwargs) -> Optional[SpatialRuleLookup]:
    """
    Functional wrapper around SpatialRuleLookupBuilder for quick use:
        lookup = build_spatial_rule_lookup("GermanySpatialRule", features, bounds, resolution=0.05)
    Rule names are accepted in place of a factory.
    """
    if not isinstance(factory, SpatialRuleFactory):
        factory = SpatialRuleListFactory(factory)
    builder = SpatialRuleLookupBuilder(**kwargs)
    return builder.build(None, factory, features, bounds)
