"""
Philadelphia Energy Burden Explorer: Tract Geometry Index
Holds the loaded tract polygons and answers "which tract contains this point".
"""
import logging
from dataclasses import dataclass

from shapely.geometry import Point, shape
from shapely.geometry.base import BaseGeometry

from config import TRACT_ID_FIELDS, TRACT_NAME_FIELDS
from utils.normalize import normalize_geoid

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Tract:
    """A census tract polygon in lon/lat with its normalized 11-char GEOID."""
    geoid: str
    geometry: BaseGeometry
    raw_geoid: str = ""
    name: str = ""

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return self.geometry.bounds

    def contains_point(self, lon: float, lat: float) -> bool:
        """Boundary points count as contained."""
        min_lon, min_lat, max_lon, max_lat = self.bounds
        if not (min_lon <= lon <= max_lon and min_lat <= lat <= max_lat):
            return False
        return self.geometry.covers(Point(lon, lat))


def _detect_field(properties: dict, candidates: list[str]) -> str | None:
    for candidate in candidates:
        if candidate in properties:
            return candidate
    return None


class TractIndex:
    """
    Ordered, immutable set of tracts.

    Lookups scan in load order and return the first tract whose polygon
    covers the point. Overlapping tracts are not deduplicated; load order
    is the tie-break.
    """

    def __init__(self, tracts):
        self._tracts = tuple(tracts)

    def __len__(self) -> int:
        return len(self._tracts)

    def __iter__(self):
        return iter(self._tracts)

    @classmethod
    def from_geojson(cls, geojson: dict, id_field: str | None = None) -> "TractIndex":
        """Build an index from a GeoJSON FeatureCollection of tract polygons."""
        features = geojson.get("features", [])

        tracts = []
        skipped = 0
        unnamed = 0
        for feature in features:
            geometry = feature.get("geometry")
            if not geometry:
                skipped += 1
                continue
            props = feature.get("properties") or {}
            field = id_field or _detect_field(props, TRACT_ID_FIELDS)
            raw_geoid = props.get(field) if field else None
            if raw_geoid is None:
                raw_geoid = feature.get("id")
            geoid = normalize_geoid(raw_geoid)
            if not geoid:
                unnamed += 1
                continue
            name_field = _detect_field(props, TRACT_NAME_FIELDS)
            tracts.append(Tract(
                geoid=geoid,
                geometry=shape(geometry),
                raw_geoid=str(raw_geoid),
                name=str(props[name_field]) if name_field else "",
            ))

        if skipped:
            logger.warning(f"Skipped {skipped} tract features with no geometry")
        if unnamed:
            logger.warning(f"Skipped {unnamed} tract features with no id. Tried {TRACT_ID_FIELDS} and feature.id")
        logger.info(f"Indexed {len(tracts)} tracts")
        return cls(tracts)

    def locate_containing_tract(self, lon: float, lat: float) -> Tract | None:
        """Return the first tract covering (lon, lat), or None outside all tracts."""
        for tract in self._tracts:
            if tract.contains_point(lon, lat):
                return tract
        return None

    def get(self, geoid) -> Tract | None:
        key = normalize_geoid(geoid)
        for tract in self._tracts:
            if tract.geoid == key:
                return tract
        return None
