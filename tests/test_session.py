"""Tests for session state transitions and overlay bookkeeping."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from utils.burden_lookup import BurdenLookup
from utils.classify import color_for
from utils.geometry import TractIndex
from utils.predictor import BurdenPredictor
from utils.session import (
    HighlightOverlay,
    LocationNotFoundError,
    MarkerOverlay,
    MissingInputError,
    SessionState,
    calculate_burden,
    clear_session,
    search_address,
    select_location,
)


class RecordingSurface:
    """Map surface that logs every command and tracks what is on screen."""

    def __init__(self):
        self.calls = []
        self.active = []

    def draw(self, overlay):
        self.calls.append(("draw", overlay))
        self.active.append(overlay)

    def erase(self, overlay):
        self.calls.append(("erase", overlay))
        self.active = [o for o in self.active if o is not overlay]

    def center(self, lat, lon, zoom):
        self.calls.append(("center", (lat, lon, zoom)))


def square(x0, y0, x1, y1):
    return {"type": "Polygon", "coordinates": [[[x0, y0], [x1, y0], [x1, y1], [x0, y1], [x0, y0]]]}


@pytest.fixture()
def index():
    return TractIndex.from_geojson({"features": [
        {"type": "Feature", "geometry": square(-75.2, 39.9, -75.1, 40.0),
         "properties": {"GEOID": "421010001001"}},
        {"type": "Feature", "geometry": square(-75.1, 39.9, -75.0, 40.0),
         "properties": {"GEOID": "42101000200"}},
    ]})


@pytest.fixture()
def lookup():
    return BurdenLookup.from_records([("421010001001", "8.5")])


@pytest.fixture()
def surface():
    return RecordingSurface()


def test_initial_state_is_empty():
    state = SessionState()
    assert state.status == "empty"
    assert state.overlays == []


def test_end_to_end_locate_and_color(index, lookup, surface):
    state = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup, surface=surface)
    assert state.status == "located"
    assert state.tract_geoid == "42101000100"
    assert lookup.value_for(state.tract_geoid) == 8.5
    assert color_for(8.5) == config.BURDEN_BANDS[1]["color"]  # the ">7" band
    assert state.highlight.color == config.BURDEN_BANDS[1]["color"]
    assert state.marker == MarkerOverlay(lat=39.95, lon=-75.15, tooltip=state.marker.tooltip)
    assert surface.calls[0] == ("center", (39.95, -75.15, config.LOCATED_ZOOM))


def test_new_selection_replaces_old_overlays(index, lookup, surface):
    first = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup, surface=surface)
    second = select_location(first, -75.05, 39.95, index, lookup=lookup, surface=surface)

    assert second.tract_geoid == "42101000200"
    assert len(surface.active) == 2
    assert first.marker not in surface.active
    assert first.highlight not in surface.active

    # old overlays are erased before the new ones are drawn
    kinds = [c[0] for c in surface.calls]
    second_round = kinds[kinds.index("erase"):]
    assert second_round[:2] == ["erase", "erase"]
    assert "draw" in second_round[2:]


def test_unmatched_tract_highlight_uses_no_data_color(index, surface):
    state = select_location(SessionState(), -75.05, 39.95, index, lookup=BurdenLookup(), surface=surface)
    assert state.highlight.color == config.NO_DATA_COLOR
    assert "No data" in state.highlight.tooltip


def test_point_outside_tracts_is_located_without_tract(index, lookup, surface):
    located = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup, surface=surface)
    state = select_location(located, -74.0, 39.95, index, lookup=lookup, surface=surface)
    assert state.status == "located"
    assert state.tract_geoid is None
    assert state.highlight is None
    assert surface.active == [state.marker]


def test_clear_resets_everything(index, lookup, surface):
    state = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup,
                            surface=surface, address="1400 John F Kennedy Blvd")
    state = calculate_burden(state, "RENTER 2 UNIT", "$20k–$30k", BurdenPredictor(), lookup=lookup)

    cleared = clear_session(state, surface)
    assert cleared == SessionState()
    assert cleared.status == "empty"
    assert cleared.tract_geoid is None
    assert cleared.marker is None and cleared.highlight is None
    assert cleared.address == "" and cleared.housing == "" and cleared.income == ""
    assert cleared.estimate is None
    assert surface.active == []


def test_handlers_do_not_mutate_input_state(index, lookup):
    original = SessionState()
    select_location(original, -75.15, 39.95, index, lookup=lookup)
    assert original == SessionState()


def test_calculate_requires_location():
    with pytest.raises(MissingInputError):
        calculate_burden(SessionState(), "RENTER 2 UNIT", "Under $20k", BurdenPredictor())


def test_calculate_requires_both_selections(index, lookup):
    state = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup)
    with pytest.raises(MissingInputError, match="housing and income"):
        calculate_burden(state, "", "Under $20k", BurdenPredictor())
    with pytest.raises(MissingInputError):
        calculate_burden(state, "RENTER 2 UNIT", None, BurdenPredictor())


def test_calculate_keeps_observed_and_predicted_separate(index, lookup):
    state = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup)
    state = calculate_burden(state, "RENTER 2 UNIT", "$20k–$30k", BurdenPredictor(), lookup=lookup)
    est = state.estimate
    assert est.tract_geoid == "42101000100"
    assert est.predicted == pytest.approx(21.86)
    assert est.observed == 8.5
    assert est.band_color == config.BURDEN_BANDS[0]["color"]
    assert state.housing == "RENTER 2 UNIT"


def test_new_location_drops_previous_estimate(index, lookup):
    state = select_location(SessionState(), -75.15, 39.95, index, lookup=lookup)
    state = calculate_burden(state, "RENTER 2 UNIT", "Under $20k", BurdenPredictor())
    state = select_location(state, -75.05, 39.95, index, lookup=lookup)
    assert state.estimate is None
    assert state.housing == "RENTER 2 UNIT"


def test_search_address_uses_geocoder(index, lookup, surface):
    seen = []

    def fake_geocoder(address):
        seen.append(address)
        return (39.95, -75.15)

    state = search_address(SessionState(), "  1400  JFK Blvd ", index, fake_geocoder,
                           lookup=lookup, surface=surface)
    assert seen == ["1400 JFK Blvd"]
    assert state.address == "1400 JFK Blvd"
    assert state.tract_geoid == "42101000100"
    assert isinstance(state.highlight, HighlightOverlay)


def test_search_address_blank(index):
    with pytest.raises(MissingInputError, match="Enter an address"):
        search_address(SessionState(), "   ", index, lambda a: (0, 0))


def test_search_address_not_found(index):
    with pytest.raises(LocationNotFoundError):
        search_address(SessionState(), "nowhere", index, lambda a: None)
