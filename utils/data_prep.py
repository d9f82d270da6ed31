"""
Philadelphia Energy Burden Explorer: Data Preparation
Join observed burden values and band colors onto tract geometries for the choropleth.
"""
import logging

from shapely.geometry import mapping

from utils.classify import classify_burden
from utils.popup import build_tract_tooltip, format_percent

logger = logging.getLogger(__name__)


def build_tract_features(index, lookup) -> dict:
    """
    Build a GeoJSON FeatureCollection with one feature per tract.

    Properties: GEOID, burden_pct (float or None), burden_display,
    burden_label, burden_color, tooltip.
    """
    features = []
    matched = 0
    for tract in index:
        value = lookup.value_for(tract.geoid)
        if value is not None:
            matched += 1
        label, color = classify_burden(value)
        features.append({
            "type": "Feature",
            "geometry": mapping(tract.geometry),
            "properties": {
                "GEOID": tract.geoid,
                "burden_pct": value,
                "burden_display": format_percent(value),
                "burden_label": label,
                "burden_color": color,
                "tooltip": build_tract_tooltip(tract.geoid, value),
            },
        })

    total = len(features)
    if total:
        logger.info(f"Burden join: {matched}/{total} tracts matched ({matched/total*100:.1f}%)")
    else:
        logger.warning("No tracts to render")

    return {"type": "FeatureCollection", "features": features}


def summarize_bands(feature_collection: dict, bands: list[dict]) -> dict[str, int]:
    """Count tracts per band label (plus "No data")."""
    counts = {band["label"]: 0 for band in bands}
    for feature in feature_collection["features"]:
        label = feature["properties"]["burden_label"]
        counts[label] = counts.get(label, 0) + 1
    return counts
