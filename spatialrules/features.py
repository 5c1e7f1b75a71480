# spatialrules/features.py
# In-memory GeoJSON feature model consumed by the rule lookup builder.
# Only the parts the builder needs are modelled: a geometry type, the outer
# rings of polygon parts, and the property map.

from __future__ import annotations
from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .geometry import Polygon

# -----------------------------
# Types
# -----------------------------

POLYGON_TYPES = ("Polygon", "MultiPolygon")


# -----------------------------
# Data structures
# -----------------------------

@dataclass
class Geometry:
    """
    Parsed geometry of one feature.
      - type     : GeoJSON geometry type ("Polygon", "MultiPolygon", "Point", ...)
      - polygons : outer ring of every polygon part; empty for other types
    """
    type: str
    polygons: List[Polygon] = field(default_factory=list)

    def is_polygon(self) -> bool:
        return self.type in POLYGON_TYPES

    def as_polygons(self) -> List[Polygon]:
        if not self.is_polygon():
            raise ValueError(f"Geometry of type '{self.type}' has no polygons.")
        return list(self.polygons)

    @staticmethod
    def from_json_dict(d: Dict[str, Any]) -> "Geometry":
        geom_type = str(d.get("type", ""))
        coords = d.get("coordinates")
        if geom_type == "Polygon":
            parts = [coords] if coords else []
        elif geom_type == "MultiPolygon":
            parts = list(coords or [])
        else:
            return Geometry(type=geom_type)
        # Holes are ignored; a rule's border is the outer ring of each part
        polygons = [Polygon.from_lonlat(part[0]) for part in parts if part]
        return Geometry(type=geom_type, polygons=polygons)


@dataclass
class Feature:
    geometry: Optional[Geometry]
    properties: Dict[str, Any] = field(default_factory=dict)

    def get_property(self, key: str) -> Any:
        return self.properties.get(key)

    @staticmethod
    def from_json_dict(d: Dict[str, Any]) -> "Feature":
        geom = d.get("geometry")
        return Feature(
            geometry=Geometry.from_json_dict(geom) if geom else None,
            properties=dict(d.get("properties") or {}),
        )


@dataclass
class FeatureCollection:
    features: List[Feature] = field(default_factory=list)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    # ---------------- Creation / I/O ----------------

    @staticmethod
    def from_json_dict(d: Dict[str, Any]) -> "FeatureCollection":
        """
        Construct from a GeoJSON FeatureCollection dict.
        """
        if d.get("type") != "FeatureCollection":
            raise ValueError(f"Expected a GeoJSON FeatureCollection, got type '{d.get('type')}'.")
        return FeatureCollection(features=[Feature.from_json_dict(f) for f in d.get("features", [])])

    @staticmethod
    def from_file(path: Union[str, Path]) -> "FeatureCollection":
        with open(path, "r", encoding="utf-8") as f:
            return FeatureCollection.from_json_dict(json.load(f))
