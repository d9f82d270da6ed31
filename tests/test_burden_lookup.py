"""Tests for the observed tract burden lookup."""
import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.burden_lookup import BurdenLookup, load_burden_lookup
from utils.data_sources import load_observed_burden


def test_from_records_normalizes_ids():
    lookup = BurdenLookup.from_records([("421010001001", "8.5")])
    assert lookup.value_for("42101000100") == 8.5
    assert lookup.value_for("421010001001") == 8.5
    assert "42101000100" in lookup


def test_non_numeric_and_missing_values_skipped():
    lookup = BurdenLookup.from_records([
        ("42101000100", "8.5"),
        ("42101000200", "n/a"),
        ("42101000300", None),
        ("42101000400", ""),
        ("42101000500", "inf"),
        (None, "3.0"),
    ])
    assert len(lookup) == 1
    assert lookup.value_for("42101000200") is None
    assert lookup.value_for("42101000500") is None


def test_duplicate_ids_last_value_wins():
    lookup = BurdenLookup.from_records([
        ("421010001001", "3.0"),
        ("421010001002", "9.0"),  # same tract after truncation
    ])
    assert len(lookup) == 1
    assert lookup.value_for("42101000100") == 9.0


def test_values_are_plain_floats():
    lookup = BurdenLookup.from_records([("42101000100", 4)])
    value = lookup.value_for("42101000100")
    assert type(value) is float


def test_unknown_id_returns_none():
    assert BurdenLookup().value_for("42101999999") is None
    assert BurdenLookup().value_for(None) is None


def test_load_csv_detects_columns_and_keeps_leading_zeros(tmp_path):
    path = tmp_path / "burden.csv"
    pd.DataFrame({
        "GEOID": ["01001020100", "42101000100"],
        "burden_pct": ["2.5", "bad"],
    }).to_csv(path, index=False)

    lookup = load_burden_lookup(str(path))
    assert lookup.value_for("01001020100") == 2.5
    assert lookup.value_for("42101000100") is None


def test_load_csv_explicit_columns(tmp_path):
    path = tmp_path / "burden.csv"
    path.write_text("tract_id,pct\n421010001001,8.5\n")
    lookup = load_burden_lookup(str(path), id_column="tract_id", value_column="pct")
    assert lookup.value_for("42101000100") == 8.5


def test_load_csv_without_known_columns(tmp_path):
    path = tmp_path / "burden.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(ValueError, match="No tract id column"):
        load_burden_lookup(str(path))


def test_missing_file_degrades_to_empty_lookup(tmp_path):
    lookup = load_observed_burden(str(tmp_path / "missing.csv"))
    assert len(lookup) == 0
