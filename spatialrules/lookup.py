# spatialrules/lookup.py
# R-tree backed point -> SpatialRule lookup.
# The builder only relies on:
#   - SpatialRuleLookup(bounds, resolution, exact)
#   - SpatialRuleLookup.add_rule(rule)
#
# Every border polygon of every rule is inserted into a libspatialindex
# R-tree under an integer id; queries fetch the candidate polygons whose
# boxes contain the point, then test containment.
#
# bbox format inside the tree: (min_lon, min_lat, max_lon, max_lat)

from __future__ import annotations
from typing import List, Optional, Tuple
import math

from rtree import index as rtree_index

from .geometry import BBox, Polygon
from .rules import SpatialRule


class SpatialRuleLookup:
    """
    Point lookup over a fixed region.

    Parameters
    ----------
    bounds     : region the lookup covers; points outside resolve to None.
    resolution : grid cell size in degrees. With exact=False a query point is
                 snapped to the centre of its cell before testing, so every
                 point of a cell resolves to the same rule.
    exact      : test the query point itself instead of its cell centre.

    When borders of several rules cover a point, the rule added first wins.
    """

    def __init__(self, bounds: BBox, resolution: float = 0.1, exact: bool = False) -> None:
        if not bounds.is_valid():
            raise ValueError(f"Invalid bounds for SpatialRuleLookup: {bounds}")
        if not resolution > 0:
            raise ValueError(f"Resolution must be positive, got {resolution}.")
        self.bounds = bounds.copy()
        self.resolution = float(resolution)
        self.exact = bool(exact)

        p = rtree_index.Property()
        self._idx = rtree_index.Index(properties=p)
        self._rules: List[SpatialRule] = []
        # tree item id -> (rule position, polygon)
        self._entries: List[Tuple[int, Polygon]] = []

    # ------------------------- Construction -------------------------

    def add_rule(self, rule: SpatialRule) -> None:
        if rule is None:
            raise ValueError("Cannot add None to a SpatialRuleLookup")
        rule_pos = len(self._rules)
        self._rules.append(rule)
        for polygon in rule.borders:
            if not polygon.bbox.intersects(self.bounds):
                continue
            item_id = len(self._entries)
            self._entries.append((rule_pos, polygon))
            self._idx.insert(item_id, polygon.bbox.to_rtree())

    # ------------------------- Queries -------------------------

    def lookup_rule(self, lat: float, lon: float) -> Optional[SpatialRule]:
        if not self.bounds.contains(lat, lon):
            return None
        if not self.exact:
            lat, lon = self._cell_center(lat, lon)

        best: Optional[int] = None
        for item_id in self._idx.intersection((lon, lat, lon, lat)):
            rule_pos, polygon = self._entries[item_id]
            if best is not None and rule_pos >= best:
                continue
            if polygon.contains(lat, lon):
                best = rule_pos
        return None if best is None else self._rules[best]

    def _cell_center(self, lat: float, lon: float) -> Tuple[float, float]:
        r = self.resolution
        row = math.floor((lat - self.bounds.min_lat) / r)
        col = math.floor((lon - self.bounds.min_lon) / r)
        return (self.bounds.min_lat + (row + 0.5) * r,
                self.bounds.min_lon + (col + 0.5) * r)

    @property
    def rules(self) -> List[SpatialRule]:
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return (f"SpatialRuleLookup(rules={len(self._rules)}, bounds={self.bounds}, "
                f"resolution={self.resolution}, exact={self.exact})")
