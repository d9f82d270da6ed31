"""
Philadelphia Energy Burden Explorer: Observed Burden Lookup
Tract GEOID -> observed energy burden %, used to shade the choropleth.
"""
import logging
import os

import numpy as np
import pandas as pd

from config import BURDEN_ID_COLUMNS, BURDEN_VALUE_COLUMNS
from utils.normalize import normalize_geoid

logger = logging.getLogger(__name__)


class BurdenLookup:
    """
    Read-only mapping of normalized tract GEOID to observed burden percentage.

    Only finite numbers are kept. When an id appears more than once in the
    source, the last row wins.
    """

    def __init__(self, values: dict[str, float] | None = None):
        self._values = dict(values or {})

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, geoid) -> bool:
        return normalize_geoid(geoid) in self._values

    def value_for(self, geoid) -> float | None:
        return self._values.get(normalize_geoid(geoid))

    def items(self):
        return self._values.items()

    @classmethod
    def from_frame(cls, df: pd.DataFrame, id_column: str, value_column: str) -> "BurdenLookup":
        ids = df[id_column].map(normalize_geoid)
        values = pd.to_numeric(df[value_column], errors="coerce").astype(float)
        keep = np.isfinite(values) & (ids != "")

        skipped = int((~keep).sum())
        if skipped:
            logger.warning(f"Skipped {skipped} burden rows with missing id or non-numeric value")

        kept_ids = ids[keep]
        duplicates = int(kept_ids.duplicated().sum())
        if duplicates:
            logger.warning(f"{duplicates} duplicate tract ids in burden data; keeping the last value")

        lookup = cls(dict(zip(kept_ids.tolist(), values[keep].tolist())))
        logger.info(f"Loaded observed burden for {len(lookup)} tracts")
        return lookup

    @classmethod
    def from_records(cls, records) -> "BurdenLookup":
        """Build from (geoid, value) pairs; unparseable values are skipped."""
        df = pd.DataFrame(list(records), columns=["GEOID", "burden_pct"], dtype=object)
        return cls.from_frame(df, "GEOID", "burden_pct")


def _detect_column(columns, candidates: list[str], kind: str) -> str:
    for candidate in candidates:
        if candidate in columns:
            return candidate
    raise ValueError(f"No {kind} column found in burden data. Columns: {list(columns)}")


def load_burden_lookup(
    csv_path: str,
    id_column: str | None = None,
    value_column: str | None = None,
) -> BurdenLookup:
    """
    Load the observed burden table from CSV.

    Every column is read as text so GEOIDs keep their leading zeros; the
    value column is parsed afterwards.
    """
    if not os.path.exists(csv_path):
        raise ValueError(f"Burden data not found at {csv_path}")

    logger.info(f"Loading observed burden data from {csv_path}")
    df = pd.read_csv(csv_path, dtype=str, encoding="utf-8-sig")
    df.columns = df.columns.str.strip()

    if id_column is None:
        id_column = _detect_column(df.columns, BURDEN_ID_COLUMNS, "tract id")
    if value_column is None:
        value_column = _detect_column(df.columns, BURDEN_VALUE_COLUMNS, "burden value")

    return BurdenLookup.from_frame(df, id_column, value_column)
