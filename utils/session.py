"""
Philadelphia Energy Burden Explorer: Session State
The current selection (location, tract, overlays, inputs) as an explicit
immutable state object. Handlers take a state and return a new one.

States: "empty" (nothing selected) and "located" (a point was resolved; the
tract may be None if the point falls outside every loaded tract). Only
clear_session() goes back to "empty".
"""
import logging
from dataclasses import dataclass, replace
from typing import Protocol

import config
from utils.classify import classify_burden
from utils.geometry import Tract
from utils.popup import build_marker_tooltip, build_tract_tooltip

logger = logging.getLogger(__name__)


class MissingInputError(ValueError):
    """A required input (address, selection, prior location) is absent."""


class LocationNotFoundError(ValueError):
    """The geocoder found nothing for the given address."""


@dataclass(frozen=True)
class MarkerOverlay:
    lat: float
    lon: float
    tooltip: str = ""


@dataclass(frozen=True, eq=False)
class HighlightOverlay:
    tract: Tract
    color: str
    tooltip: str = ""


@dataclass(frozen=True)
class BurdenEstimate:
    tract_geoid: str
    housing: str
    income: str
    predicted: float
    band_label: str
    band_color: str
    observed: float | None = None


class MapSurface(Protocol):
    """Anything that can show and retract overlays (the map renderer)."""

    def draw(self, overlay) -> None: ...

    def erase(self, overlay) -> None: ...

    def center(self, lat: float, lon: float, zoom: int) -> None: ...


@dataclass(frozen=True)
class SessionState:
    location: tuple[float, float] | None = None  # (lon, lat)
    tract_geoid: str | None = None
    marker: MarkerOverlay | None = None
    highlight: HighlightOverlay | None = None
    address: str = ""
    housing: str = ""
    income: str = ""
    estimate: BurdenEstimate | None = None

    @property
    def status(self) -> str:
        return "empty" if self.location is None else "located"

    @property
    def overlays(self) -> list:
        return [o for o in (self.highlight, self.marker) if o is not None]


def _retract(state: SessionState, surface: MapSurface | None) -> None:
    if surface is None:
        return
    for overlay in state.overlays:
        surface.erase(overlay)


def select_location(
    state: SessionState,
    lon: float,
    lat: float,
    index,
    lookup=None,
    surface: MapSurface | None = None,
    address: str = "",
    zoom: int | None = None,
) -> SessionState:
    """
    Resolve the tract under (lon, lat) and move to the located state.

    The previous marker and highlight are erased before the new ones are
    drawn, so at most one of each is ever on the surface.
    """
    tract = index.locate_containing_tract(lon, lat)
    geoid = tract.geoid if tract is not None else None
    if tract is None:
        logger.warning(f"No tract contains ({lat:.5f}, {lon:.5f})")
    else:
        logger.info(f"Located ({lat:.5f}, {lon:.5f}) in tract {geoid}")

    marker = MarkerOverlay(lat=lat, lon=lon, tooltip=build_marker_tooltip(address, geoid))
    highlight = None
    if tract is not None:
        value = lookup.value_for(geoid) if lookup is not None else None
        highlight = HighlightOverlay(
            tract=tract,
            color=classify_burden(value)[1],
            tooltip=build_tract_tooltip(geoid, value),
        )

    _retract(state, surface)
    if surface is not None:
        surface.center(lat, lon, zoom or config.LOCATED_ZOOM)
        if highlight is not None:
            surface.draw(highlight)
        surface.draw(marker)

    return SessionState(
        location=(lon, lat),
        tract_geoid=geoid,
        marker=marker,
        highlight=highlight,
        address=address,
        housing=state.housing,
        income=state.income,
    )


def search_address(
    state: SessionState,
    address: str,
    index,
    geocoder,
    lookup=None,
    surface: MapSurface | None = None,
) -> SessionState:
    """
    Geocode an address and select it.

    Raises MissingInputError for a blank address and LocationNotFoundError
    when the geocoder has no match. Geocoder transport errors propagate.
    """
    address = " ".join((address or "").split())
    if not address:
        raise MissingInputError("Enter an address.")

    result = geocoder(address)
    if result is None:
        raise LocationNotFoundError(f"Could not find that address: {address}")

    lat, lon = result
    return select_location(state, lon, lat, index, lookup=lookup, surface=surface, address=address)


def calculate_burden(
    state: SessionState,
    housing: str,
    income: str,
    predictor,
    lookup=None,
) -> SessionState:
    """Predict the burden for the located tract's household inputs."""
    if state.tract_geoid is None:
        raise MissingInputError("Search for an address inside Philadelphia first.")
    if not housing or not income:
        raise MissingInputError("Select housing and income.")

    predicted = predictor.predict(housing, income)
    band_label, band_color = classify_burden(predicted)
    estimate = BurdenEstimate(
        tract_geoid=state.tract_geoid,
        housing=housing,
        income=income,
        predicted=predicted,
        band_label=band_label,
        band_color=band_color,
        observed=lookup.value_for(state.tract_geoid) if lookup is not None else None,
    )
    logger.info(
        f"Predicted energy burden {predicted:.1f}% for {housing!r} / {income!r} "
        f"in tract {state.tract_geoid}"
    )
    return replace(state, housing=housing, income=income, estimate=estimate)


def clear_session(state: SessionState, surface: MapSurface | None = None) -> SessionState:
    """Retract all overlays and return to the empty state, inputs included."""
    _retract(state, surface)
    return SessionState()
