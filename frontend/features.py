"""Helpers that flatten the backend's GeoJSON features into map and table rows."""
from typing import Any, Dict, List


def features_to_rows(features: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    One row per point feature: lat/lon for st.map plus every property.
    Non-point geometries are skipped. Rows are ordered by distance_km when present.
    """
    rows = []
    for feature in features or []:
        geometry = feature.get("geometry") or {}
        if geometry.get("type") != "Point":
            continue
        lon, lat = geometry["coordinates"][:2]
        row = {"lat": lat, "lon": lon}
        for key, value in (feature.get("properties") or {}).items():
            if key not in row:
                row[key] = value
        rows.append(row)

    return sorted(rows, key=lambda r: r.get("distance_km", float("inf")))
