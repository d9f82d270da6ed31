"""
Philadelphia Energy Burden Explorer: Key Normalization
Canonical comparison keys for category labels, income brackets and tract GEOIDs.
"""
import math

from config import GEOID_LENGTH

_RANGE_DASHES = ("–", "—")  # en dash, em dash


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def normalize_text(value) -> str:
    """Trim, collapse whitespace runs to one space, uppercase."""
    if _is_missing(value):
        return ""
    return " ".join(str(value).split()).upper()


def normalize_income(value) -> str:
    """
    Income bracket key: uppercase, dashes unified to '-', all whitespace removed.

    "$20k–$30k", "$20K - $30K" and "$20k-$30k" all become "$20K-$30K".
    """
    if _is_missing(value):
        return ""
    text = str(value).upper()
    for dash in _RANGE_DASHES:
        text = text.replace(dash, "-")
    return "".join(text.split())


def normalize_geoid(value) -> str:
    """First 11 characters of the trimmed id. Truncates, does not validate."""
    if _is_missing(value):
        return ""
    return str(value).strip()[:GEOID_LENGTH].strip()
