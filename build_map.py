"""
Philadelphia Energy Burden Explorer: Build Script
Loads tracts and observed burden, optionally locates an address or point and
predicts a household burden, then writes the Leaflet map.
"""
import argparse
import logging
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import folium

from layers.burden_choropleth import build_burden_layer
from layers.selection import FoliumSurface
from utils.branding import (
    build_title_bar,
    build_legend,
    build_attribution,
    build_reset_view_button,
    build_popup_styles,
    build_result_panel,
)
from utils.data_prep import build_tract_features, summarize_bands
from utils.data_sources import load_tract_index, load_observed_burden
from utils.geocode import Autocomplete, GeocodingError, geocode, reverse_geocode
from utils.predictor import BurdenPredictor, UnknownCategoryError
from utils.session import (
    LocationNotFoundError,
    MissingInputError,
    SessionState,
    calculate_burden,
    search_address,
    select_location,
)
import config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

USER_FACING_ERRORS = (MissingInputError, LocationNotFoundError, UnknownCategoryError)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the Philadelphia energy burden map.")
    where = parser.add_mutually_exclusive_group()
    where.add_argument("--address", help="Address to locate (forward geocoded)")
    where.add_argument("--suggest", metavar="TEXT", help="Print address suggestions and exit")
    parser.add_argument("--lat", type=float, help="Latitude of a map point to locate")
    parser.add_argument("--lon", type=float, help="Longitude of a map point to locate")
    parser.add_argument("--housing", default="", help="Housing type, e.g. 'RENTER 2 UNIT'")
    parser.add_argument("--income", default="", help="Income bracket, e.g. '$20k–$30k'")
    parser.add_argument("--strict", action="store_true",
                        help="Reject unknown housing/income labels instead of ignoring them")
    parser.add_argument("--list-options", action="store_true",
                        help="Print the housing and income options and exit")
    parser.add_argument("--tracts", default=config.TRACT_GEOJSON, help="Tract GeoJSON path")
    parser.add_argument("--burden", default=config.BURDEN_CSV, help="Observed burden CSV path")
    parser.add_argument("--output", default=config.OUTPUT_HTML, help="Output HTML path")
    args = parser.parse_args(argv)

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    if args.lat is not None and args.address:
        parser.error("use either --address or --lat/--lon, not both")
    return args


def run_session(args, index, lookup, predictor, surface,
                geocoder=geocode, reverse_geocoder=reverse_geocode) -> tuple[SessionState, str]:
    """
    Drive the session handlers from CLI arguments.

    Returns the final state and a user-facing message ("" when all went well).
    Failures are logged and reported, never raised.
    """
    state = SessionState()
    try:
        if args.address:
            state = search_address(state, args.address, index, geocoder, lookup=lookup, surface=surface)
        elif args.lat is not None:
            address = ""
            try:
                address = reverse_geocoder(args.lat, args.lon) or ""
            except GeocodingError as e:
                logger.warning(f"Reverse geocoding failed: {e}")
            state = select_location(state, args.lon, args.lat, index,
                                    lookup=lookup, surface=surface, address=address)
        elif not (args.housing or args.income):
            return state, ""

        if args.housing or args.income:
            state = calculate_burden(state, args.housing, args.income, predictor, lookup=lookup)
    except USER_FACING_ERRORS as e:
        logger.warning(str(e))
        return state, str(e)
    except GeocodingError as e:
        logger.error(f"Geocoding failed: {e}")
        return state, "Address lookup is unavailable right now. Please try again."

    return state, ""


def build_map(index, lookup, state: SessionState, surface: FoliumSurface, message: str = "") -> folium.Map:
    features = build_tract_features(index, lookup)
    for label, count in summarize_bands(features, config.BURDEN_BANDS).items():
        logger.info(f"  {label}: {count} tracts")

    m = folium.Map(
        location=surface.center_point,
        zoom_start=surface.zoom,
        tiles=config.TILE_PROVIDER,
        prefer_canvas=True,
    )

    # Layer z-order: choropleth (bottom) -> selection (top)
    build_burden_layer(features).add_to(m)
    if surface.overlays:
        surface.build_layer().add_to(m)

    folium.LayerControl(collapsed=False).add_to(m)

    m.get_root().html.add_child(build_popup_styles())
    m.get_root().html.add_child(build_title_bar())
    m.get_root().html.add_child(build_legend(config.BURDEN_BANDS))
    m.get_root().html.add_child(build_attribution())
    m.get_root().html.add_child(
        build_reset_view_button(config.DEFAULT_CENTER, config.DEFAULT_ZOOM)
    )
    m.get_root().html.add_child(build_result_panel(state, message))
    return m


def main(argv=None) -> int:
    args = parse_args(argv)
    predictor = BurdenPredictor(strict=args.strict)

    if args.list_options:
        print("Housing types:")
        for label in predictor.housing_labels:
            print(f"  {label}")
        print("Income brackets:")
        for label in predictor.income_labels:
            print(f"  {label}")
        return 0

    if args.suggest:
        for item in Autocomplete().suggest(args.suggest):
            print(f"{item['label']}  ({item['lat']:.5f}, {item['lon']:.5f})")
        return 0

    logger.info("=== Philadelphia Energy Burden Explorer ===")
    try:
        index = load_tract_index(args.tracts, state_fips=config.STATE_FIPS, county_fips=config.COUNTY_FIPS)
    except ValueError as e:
        logger.error(f"Could not load tract boundaries: {e}")
        return 1
    lookup = load_observed_burden(args.burden)

    surface = FoliumSurface()
    state, message = run_session(args, index, lookup, predictor, surface,
                                 geocoder=geocode, reverse_geocoder=reverse_geocode)
    if state.estimate is not None:
        logger.info(f"Predicted energy burden: {state.estimate.predicted:.1f}%")

    m = build_map(index, lookup, state, surface, message)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    m.save(args.output)
    file_size_mb = os.path.getsize(args.output) / (1024 * 1024)
    logger.info(f"Map saved to {args.output} ({file_size_mb:.1f} MB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
