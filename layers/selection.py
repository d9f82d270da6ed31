"""
Philadelphia Energy Burden Explorer: Selection Layer
Folium rendering surface for the session's marker and highlighted tract.
"""
import logging

import folium
from shapely.geometry import mapping

import config
from utils.session import HighlightOverlay, MarkerOverlay

logger = logging.getLogger(__name__)


class FoliumSurface:
    """
    Collects draw/erase/center commands from the session handlers and
    renders whatever is still active onto a folium map.
    """

    def __init__(self, center: list | None = None, zoom: int | None = None):
        self.center_point = list(center or config.DEFAULT_CENTER)
        self.zoom = zoom or config.DEFAULT_ZOOM
        self.overlays: list = []

    def draw(self, overlay) -> None:
        self.overlays.append(overlay)

    def erase(self, overlay) -> None:
        # identity, not equality: two markers at the same spot are still distinct
        self.overlays = [o for o in self.overlays if o is not overlay]

    def center(self, lat: float, lon: float, zoom: int) -> None:
        self.center_point = [lat, lon]
        self.zoom = zoom

    def build_layer(self) -> folium.FeatureGroup:
        fg = folium.FeatureGroup(name="Selected Location", show=True)
        for overlay in self.overlays:
            if isinstance(overlay, HighlightOverlay):
                color = overlay.color
                folium.GeoJson(
                    mapping(overlay.tract.geometry),
                    style_function=lambda feature, color=color: {
                        "fillColor": color,
                        "fillOpacity": 0.8,
                        "color": config.HIGHLIGHT_COLOR,
                        "weight": 3,
                    },
                    tooltip=folium.Tooltip(overlay.tooltip),
                ).add_to(fg)
            elif isinstance(overlay, MarkerOverlay):
                folium.Marker(
                    location=[overlay.lat, overlay.lon],
                    tooltip=folium.Tooltip(overlay.tooltip),
                ).add_to(fg)
            else:
                logger.warning(f"Ignoring unknown overlay type {type(overlay).__name__}")
        return fg
