from __future__ import annotations

from typing import Any, Dict, Optional

import pytest

from spatialrules import Feature, FeatureCollection


def square_geojson(min_lat: float, min_lon: float, size: float = 1.0) -> Dict[str, Any]:
    ring = [
        [min_lon, min_lat],
        [min_lon + size, min_lat],
        [min_lon + size, min_lat + size],
        [min_lon, min_lat + size],
        [min_lon, min_lat],
    ]
    return {"type": "Polygon", "coordinates": [ring]}


def feature_dict(geometry: Optional[Dict[str, Any]], **properties: Any) -> Dict[str, Any]:
    return {"type": "Feature", "properties": properties, "geometry": geometry}


@pytest.fixture
def square_feature():
    def _make(min_lat: float, min_lon: float, size: float = 1.0, **properties: Any) -> Feature:
        return Feature.from_json_dict(feature_dict(square_geojson(min_lat, min_lon, size), **properties))
    return _make


@pytest.fixture
def collection():
    def _make(*features: Dict[str, Any]) -> FeatureCollection:
        return FeatureCollection.from_json_dict({"type": "FeatureCollection", "features": list(features)})
    return _make
