# spatialrules/__init__.py
# Public package API for building point -> SpatialRule lookups from GeoJSON.

from .builder import SpatialRuleLookupBuilder, build_spatial_rule_lookup
from .factories import SpatialRuleFactory, SpatialRuleListFactory, SpatialRuleDefaultFactory
from .features import Feature, FeatureCollection, Geometry
from .geometry import BBox, Polygon
from .lookup import SpatialRuleLookup
from .rules import SpatialRule, register_rule_type, resolve_rule_type

__all__ = [
    "SpatialRuleLookupBuilder",
    "build_spatial_rule_lookup",
    "SpatialRuleFactory",
    "SpatialRuleListFactory",
    "SpatialRuleDefaultFactory",
    "Feature",
    "FeatureCollection",
    "Geometry",
    "BBox",
    "Polygon",
    "SpatialRuleLookup",
    "SpatialRule",
    "register_rule_type",
    "resolve_rule_type",
]

__version__ = "0.1.0"
