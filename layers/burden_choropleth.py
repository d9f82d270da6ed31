"""
Philadelphia Energy Burden Explorer: Observed Burden Choropleth
Tract polygons shaded by observed energy burden band.
"""
import logging

import branca.colormap as cm
import folium

import config

logger = logging.getLogger(__name__)


def build_band_colormap(bands: list[dict], vmax: float = 15.0) -> cm.StepColormap:
    """Step legend for the burden bands, lowest band first."""
    ordered = list(reversed(bands))
    thresholds = [b["above"] for b in bands if b["above"] is not None]
    index = [0.0] + sorted(float(t) for t in thresholds) + [max(vmax, max(thresholds) + 1)]
    return cm.StepColormap(
        colors=[b["color"] for b in ordered],
        index=index,
        vmin=index[0],
        vmax=index[-1],
        caption="Observed Energy Burden (% of income)",
    )


def build_burden_layer(
    feature_collection: dict,
    bands: list[dict] | None = None,
) -> folium.FeatureGroup:
    """
    Build the tract choropleth FeatureGroup.

    Each feature already carries its band color and tooltip text (see
    utils.data_prep.build_tract_features); this layer only styles them.
    """
    if bands is None:
        bands = config.BURDEN_BANDS

    fg = folium.FeatureGroup(name="Observed Energy Burden", show=True)
    if not feature_collection["features"]:
        logger.warning("No tract features; choropleth layer is empty")
        return fg

    def style_function(feature):
        return {
            "fillColor": feature["properties"].get("burden_color", config.NO_DATA_COLOR),
            "fillOpacity": config.TRACT_FILL_OPACITY,
            "color": "#666",
            "weight": 0.5,
            "opacity": config.TRACT_LINE_OPACITY,
        }

    def highlight_function(feature):
        return {"weight": 2, "color": config.HIGHLIGHT_COLOR}

    geojson_layer = folium.GeoJson(
        feature_collection,
        style_function=style_function,
        highlight_function=highlight_function,
        tooltip=folium.GeoJsonTooltip(
            fields=["GEOID", "burden_display", "burden_label"],
            aliases=["Tract:", "Energy burden:", "Band:"],
            style="font-family:Arial,sans-serif;font-size:12px;",
        ),
    )
    geojson_layer.add_to(fg)

    values = [
        f["properties"]["burden_pct"]
        for f in feature_collection["features"]
        if f["properties"].get("burden_pct") is not None
    ]
    colormap = build_band_colormap(bands, vmax=max(values) if values else 15.0)
    colormap.add_to(fg)

    logger.info(f"Choropleth layer built with {len(feature_collection['features'])} tracts")
    return fg
