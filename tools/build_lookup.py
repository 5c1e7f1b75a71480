"""
build_lookup.py: spatial rule lookup builder
=============================================

Builds a SpatialRuleLookup from a GeoJSON FeatureCollection and, optionally,
resolves a CSV of points to rule ids.

Usage
-----
python tools/build_lookup.py \
  --geojson countries.geojson \
  --rules GermanySpatialRule,AustriaSpatialRule \
  --bounds 45,56,5,18 \
  --points points.csv \
  --out_csv ./resolved.csv

Without --rules every polygon feature becomes a generic rule named after its
--id_property value.

Points CSV
----------
Needs "lat" and "lon" columns; the output adds a "rule_id" column (empty when
no rule applies).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from spatialrules import (
    BBox,
    FeatureCollection,
    SpatialRuleDefaultFactory,
    SpatialRuleListFactory,
    SpatialRuleLookup,
    SpatialRuleLookupBuilder,
)


# =====================
# Helpers
# =====================
def parse_bounds(text: str) -> BBox:
    """"min_lat,max_lat,min_lon,max_lon" -> BBox"""
    parts = [float(v) for v in text.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError("bounds must be min_lat,max_lat,min_lon,max_lon")
    return BBox(*parts)


def resolve_points(lookup: SpatialRuleLookup, points: pd.DataFrame) -> pd.DataFrame:
    rule_ids: List[Optional[str]] = []
    for lat, lon in tqdm(zip(points["lat"], points["lon"]), total=len(points), desc="Resolving"):
        rule = lookup.lookup_rule(float(lat), float(lon))
        rule_ids.append(rule.id if rule is not None else None)
    out = points.copy()
    out["rule_id"] = rule_ids
    return out


# =====================
# CLI
# =====================
def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--geojson", required=True, help="GeoJSON FeatureCollection with rule borders")
    p.add_argument("--rules", default=None, help="Comma-separated rule type names; default: one rule per id")
    p.add_argument("--id_property", default="ISO_A3", help="Feature property holding the rule id")
    p.add_argument("--bounds", type=parse_bounds, default=BBox(-90, 90, -180, 180),
                   help="Region of interest: min_lat,max_lat,min_lon,max_lon")
    p.add_argument("--resolution", type=float, default=0.1, help="Lookup cell size in degrees")
    p.add_argument("--exact", action="store_true", help="Test query points exactly instead of per cell")
    p.add_argument("--points", default=None, help="CSV with lat,lon columns to resolve")
    p.add_argument("--out_csv", default=None, help="Path to output CSV (requires --points)")
    return p.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    features = FeatureCollection.from_file(args.geojson)
    factory = SpatialRuleListFactory(args.rules) if args.rules else SpatialRuleDefaultFactory()
    builder = SpatialRuleLookupBuilder(resolution=args.resolution, exact=args.exact)
    lookup = builder.build(args.id_property, factory, features, args.bounds)
    if lookup is None:
        print("No rules apply inside the given bounds.")
        sys.exit(1)
    print(f"Built {lookup}")

    if args.points:
        resolved = resolve_points(lookup, pd.read_csv(args.points))
        if args.out_csv:
            resolved.to_csv(args.out_csv, index=False)
            print(f"\n✅ Resolved points saved to: {args.out_csv}")
        else:
            print(resolved.to_string(index=False))


if __name__ == "__main__":
    main()
