"""
Philadelphia Energy Burden Explorer: Geocoding
Forward/reverse geocoding and bounded address suggestions via Nominatim.

All lookups are best-effort. "No result" returns None (or []); transport
and decode failures raise GeocodingError for the caller to log and report.
"""
import logging

import requests

import config

logger = logging.getLogger(__name__)


class GeocodingError(RuntimeError):
    """The geocoding service could not be reached or returned garbage."""


def _get_json(path: str, params: dict, timeout: float | None = None):
    url = f"{config.NOMINATIM_URL.rstrip('/')}/{path}"
    try:
        resp = requests.get(
            url,
            params=params,
            headers={"User-Agent": config.GEOCODER_USER_AGENT},
            timeout=timeout or config.GEOCODE_TIMEOUT,
        )
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise GeocodingError(f"Geocoding request to {url} failed: {e}") from e
    except ValueError as e:
        raise GeocodingError(f"Geocoding response from {url} was not JSON: {e}") from e


def _viewbox(bbox: dict) -> str:
    # Nominatim order: left,top,right,bottom
    return f"{bbox['min_lon']},{bbox['max_lat']},{bbox['max_lon']},{bbox['min_lat']}"


def geocode(address: str, timeout: float | None = None) -> tuple[float, float] | None:
    """Resolve free text to (lat, lon) of the best match, or None."""
    data = _get_json(
        "search",
        {"q": address, "format": "json", "limit": 1},
        timeout=timeout,
    )
    if not data:
        logger.info(f"No geocoding result for '{address}'")
        return None
    try:
        return float(data[0]["lat"]), float(data[0]["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise GeocodingError(f"Malformed geocoding result for '{address}': {e}") from e


def reverse_geocode(lat: float, lon: float, timeout: float | None = None) -> str | None:
    """Display address for a coordinate, or None if the service has none."""
    data = _get_json(
        "reverse",
        {"format": "jsonv2", "lat": lat, "lon": lon, "zoom": 18, "addressdetails": 0},
        timeout=timeout,
    )
    if not isinstance(data, dict) or "error" in data:
        return None
    return data.get("display_name") or None


def suggest_addresses(text: str, limit: int | None = None, timeout: float | None = None) -> list[dict]:
    """
    Address suggestions restricted to the Philadelphia bounding box.

    Returns [{"label": str, "lat": float, "lon": float}, ...].
    """
    data = _get_json(
        "search",
        {
            "q": text,
            "format": "json",
            "limit": limit or config.AUTOCOMPLETE_LIMIT,
            "viewbox": _viewbox(config.PHILLY_BBOX),
            "bounded": 1,
        },
        timeout=timeout,
    )
    suggestions = []
    for item in data or []:
        try:
            suggestions.append({
                "label": item["display_name"],
                "lat": float(item["lat"]),
                "lon": float(item["lon"]),
            })
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Dropping malformed suggestion: {item!r}")
    return suggestions


class LatestQueryGuard:
    """
    Last-request-wins check for overlapping lookups.

    Call begin() when a query is issued; a response whose query is no
    longer the latest is stale and should be ignored. Nothing is cancelled.
    """

    def __init__(self):
        self.latest: str | None = None

    def begin(self, query: str) -> str:
        self.latest = query
        return query

    def is_current(self, query: str) -> bool:
        return query == self.latest

    def reset(self) -> None:
        self.latest = None


class Autocomplete:
    """Bounded address suggestions that drop responses for superseded input."""

    def __init__(self, fetch=suggest_addresses, min_chars: int | None = None):
        self.fetch = fetch
        self.min_chars = config.AUTOCOMPLETE_MIN_CHARS if min_chars is None else min_chars
        self.guard = LatestQueryGuard()

    def request(self, text: str) -> str | None:
        """Register new input text; returns the query to fetch, or None if too short."""
        query = " ".join((text or "").split())
        if len(query) < self.min_chars:
            self.guard.reset()
            return None
        return self.guard.begin(query)

    def accept(self, query: str, results: list[dict]) -> list[dict] | None:
        """Results for query, or None if a newer query has been issued since."""
        if not self.guard.is_current(query):
            logger.debug(f"Discarding stale suggestions for '{query}'")
            return None
        return results

    def suggest(self, text: str) -> list[dict]:
        query = self.request(text)
        if query is None:
            return []
        try:
            results = self.fetch(query)
        except GeocodingError as e:
            logger.warning(f"Address suggestions unavailable: {e}")
            return []
        return self.accept(query, results) or []
