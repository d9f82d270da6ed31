"""
Philadelphia Energy Burden Explorer: Data Loading Utilities
Loads Philadelphia tract boundaries (local GeoJSON, else Census cartographic
boundary download) and the observed energy burden table.
"""
import io
import json
import logging
import os
import zipfile

import requests

from utils.burden_lookup import BurdenLookup, load_burden_lookup
from utils.geometry import TractIndex

logger = logging.getLogger(__name__)

TRACT_BOUNDARY_URL = "https://www2.census.gov/geo/tiger/GENZ2020/shp/cb_2020_{state_fips}_tract_500k.zip"


def download_tract_geojson(
    cache_path: str,
    state_fips: str = "42",
    county_fips: str = "101",
    cache_dir: str | None = None,
) -> dict:
    """
    Download the state tract shapefile from Census, keep one county, and
    write it to cache_path as WGS84 GeoJSON.
    """
    import geopandas as gpd

    url = TRACT_BOUNDARY_URL.format(state_fips=state_fips)
    logger.info(f"Downloading tract boundaries from {url}...")
    try:
        resp = requests.get(url, timeout=120)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise ValueError(f"Failed to download tract boundaries from {url}: {e}")

    shp_dir = os.path.join(cache_dir or os.path.dirname(cache_path) or ".", f"tracts_{state_fips}")
    os.makedirs(shp_dir, exist_ok=True)
    with zipfile.ZipFile(io.BytesIO(resp.content)) as zf:
        zf.extractall(shp_dir)

    shp_files = [f for f in os.listdir(shp_dir) if f.endswith(".shp")]
    if not shp_files:
        raise ValueError(f"No .shp file found in {shp_dir} after extraction")

    gdf = gpd.read_file(os.path.join(shp_dir, shp_files[0]))
    if "COUNTYFP" in gdf.columns:
        gdf = gdf[gdf["COUNTYFP"].astype(str).str.zfill(3) == county_fips]
    if gdf.crs and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs(epsg=4326)

    geojson = json.loads(gdf.to_json())
    logger.info(f"Filtered to {len(geojson['features'])} tracts in county {state_fips}{county_fips}")

    os.makedirs(os.path.dirname(cache_path) or ".", exist_ok=True)
    with open(cache_path, "w") as f:
        json.dump(geojson, f)
    logger.info(f"Cached tract boundaries to {cache_path}")

    return geojson


def load_tract_geojson(
    geojson_path: str,
    state_fips: str = "42",
    county_fips: str = "101",
    download: bool = True,
) -> dict:
    """Load tract polygons from geojson_path, downloading them first if missing."""
    if os.path.exists(geojson_path):
        logger.info(f"Loading tract boundaries from {geojson_path}")
        with open(geojson_path, "r") as f:
            return json.load(f)

    if not download:
        raise ValueError(f"Tract boundaries not found at {geojson_path}")
    return download_tract_geojson(geojson_path, state_fips=state_fips, county_fips=county_fips)


def load_tract_index(geojson_path: str, **kwargs) -> TractIndex:
    return TractIndex.from_geojson(load_tract_geojson(geojson_path, **kwargs))


def load_observed_burden(csv_path: str) -> BurdenLookup:
    """
    Observed tract burden table. A missing file degrades to an empty lookup
    (every tract renders as "No data") instead of failing the build.
    """
    try:
        return load_burden_lookup(csv_path)
    except ValueError as e:
        logger.warning(f"Could not load observed burden data: {e}")
        return BurdenLookup()
