# spatialrules/geometry.py
# Lat/lon geometry primitives used by the rule lookup builder.
#   - BBox: mutable axis-aligned box with an "inverse" (empty) seed state
#   - Polygon: immutable ring with precomputed extents and point containment
#
# Coordinates are (lat, lon) throughout. The R-tree wants (x1, y1, x2, y2),
# which is (min_lon, min_lat, max_lon, max_lat); use BBox.to_rtree().

from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple
import math
import numpy as np


RTreeBox = Tuple[float, float, float, float]


class BBox:
    """
    Axis-aligned lat/lon rectangle (inclusive edges).

    A box created with BBox.create_inverse() is invalid until the first
    update(); this is the seed used when accumulating the union of extents.
    """

    __slots__ = ("min_lat", "max_lat", "min_lon", "max_lon")

    def __init__(self, min_lat: float, max_lat: float, min_lon: float, max_lon: float) -> None:
        self.min_lat = float(min_lat)
        self.max_lat = float(max_lat)
        self.min_lon = float(min_lon)
        self.max_lon = float(max_lon)

    @classmethod
    def create_inverse(cls) -> "BBox":
        return cls(math.inf, -math.inf, math.inf, -math.inf)

    @classmethod
    def from_points(cls, points: Iterable[Tuple[float, float]]) -> "BBox":
        box = cls.create_inverse()
        for lat, lon in points:
            box.update(lat, lon)
        return box

    def is_valid(self) -> bool:
        values = (self.min_lat, self.max_lat, self.min_lon, self.max_lon)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.min_lat <= self.max_lat and self.min_lon <= self.max_lon

    def update(self, lat: float, lon: float) -> None:
        lat, lon = float(lat), float(lon)
        if lat < self.min_lat:
            self.min_lat = lat
        if lat > self.max_lat:
            self.max_lat = lat
        if lon < self.min_lon:
            self.min_lon = lon
        if lon > self.max_lon:
            self.max_lon = lon

    def intersects(self, other: "BBox") -> bool:
        """Rectangle intersection test (inclusive edges)."""
        if self.max_lat < other.min_lat or other.max_lat < self.min_lat:
            return False
        if self.max_lon < other.min_lon or other.max_lon < self.min_lon:
            return False
        return True

    def calculate_intersection(self, other: "BBox") -> Optional["BBox"]:
        """
        Overlap of two boxes, or None when they are disjoint.
        An invalid box never overlaps anything.
        """
        if not (self.is_valid() and other.is_valid()):
            return None
        if not self.intersects(other):
            return None
        return BBox(max(self.min_lat, other.min_lat),
                    min(self.max_lat, other.max_lat),
                    max(self.min_lon, other.min_lon),
                    min(self.max_lon, other.max_lon))

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon

    def to_rtree(self) -> RTreeBox:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def copy(self) -> "BBox":
        return BBox(self.min_lat, self.max_lat, self.min_lon, self.max_lon)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BBox):
            return NotImplemented
        return (self.min_lat, self.max_lat, self.min_lon, self.max_lon) == \
               (other.min_lat, other.max_lat, other.min_lon, other.max_lon)

    def __repr__(self) -> str:
        return f"BBox(lat=[{self.min_lat}, {self.max_lat}], lon=[{self.min_lon}, {self.max_lon}])"


class Polygon:
    """
    Closed ring of (lat, lon) points. The coordinates are kept in a read-only
    numpy array of shape (N, 2); the extents are computed once.
    """

    __slots__ = ("_points", "min_lat", "max_lat", "min_lon", "max_lon")

    def __init__(self, points: Sequence[Tuple[float, float]]) -> None:
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"Polygon: expected a sequence of (lat, lon) pairs, got shape {pts.shape}.")
        # A closing point equal to the first one is redundant for ray casting
        if pts.shape[0] > 1 and np.array_equal(pts[0], pts[-1]):
            pts = pts[:-1]
        if pts.shape[0] < 3:
            raise ValueError("Polygon: at least 3 distinct points are required.")
        pts.setflags(write=False)
        self._points = pts
        self.min_lat, self.min_lon = (float(v) for v in pts.min(axis=0))
        self.max_lat, self.max_lon = (float(v) for v in pts.max(axis=0))

    @classmethod
    def from_lonlat(cls, coords: Sequence[Sequence[float]]) -> "Polygon":
        """Build from GeoJSON ordered [lon, lat] positions."""
        return cls([(float(c[1]), float(c[0])) for c in coords])

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def bbox(self) -> BBox:
        return BBox(self.min_lat, self.max_lat, self.min_lon, self.max_lon)

    def contains(self, lat: float, lon: float) -> bool:
        """
        Even-odd ray casting along the latitude axis. Points on an edge count as inside.
        """
        if not (self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon):
            return False
        lat1 = self._points[:, 0]
        lon1 = self._points[:, 1]
        lat2 = np.roll(lat1, -1)
        lon2 = np.roll(lon1, -1)

        # Boundary: collinear with the segment and within its extent
        cross = (lat - lat1) * (lon2 - lon1) - (lon - lon1) * (lat2 - lat1)
        on_edge = (np.abs(cross) <= 1e-12) \
            & (np.minimum(lat1, lat2) <= lat) & (lat <= np.maximum(lat1, lat2)) \
            & (np.minimum(lon1, lon2) <= lon) & (lon <= np.maximum(lon1, lon2))
        if on_edge.any():
            return True

        straddles = (lon1 > lon) != (lon2 > lon)
        with np.errstate(divide="ignore", invalid="ignore"):
            lat_at_lon = lat1 + (lon - lon1) * (lat2 - lat1) / (lon2 - lon1)
        crossings = np.count_nonzero(straddles & (lat < lat_at_lon))
        return bool(crossings % 2)

    def __len__(self) -> int:
        return int(self._points.shape[0])

    def __repr__(self) -> str:
        return (f"Polygon({len(self)} points, lat=[{self.min_lat}, {self.max_lat}], "
                f"lon=[{self.min_lon}, {self.max_lon}])")
