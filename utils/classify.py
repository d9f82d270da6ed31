"""
Philadelphia Energy Burden Explorer: Burden Band Classification
Maps a burden percentage onto the fixed five-band color ladder.
"""
import math

from config import BURDEN_BANDS, NO_DATA_COLOR, NO_DATA_LABEL


def classify_burden(value, bands: list[dict] | None = None) -> tuple[str, str]:
    """
    Given a burden percentage and the BURDEN_BANDS config,
    return (band_label, band_color).

    Comparisons are strict: a value exactly on a threshold belongs to the
    band below it. Missing values get the "No data" color.
    """
    if bands is None:
        bands = BURDEN_BANDS

    if value is None:
        return (NO_DATA_LABEL, NO_DATA_COLOR)
    try:
        num = float(value)
    except (TypeError, ValueError):
        return (NO_DATA_LABEL, NO_DATA_COLOR)
    if math.isnan(num):
        return (NO_DATA_LABEL, NO_DATA_COLOR)

    for band in bands:
        if band["above"] is None or num > band["above"]:
            return (band["label"], band["color"])

    return (NO_DATA_LABEL, NO_DATA_COLOR)


def color_for(value, bands: list[dict] | None = None) -> str:
    return classify_burden(value, bands)[1]
