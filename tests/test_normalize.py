"""Tests for label and GEOID normalization."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.normalize import normalize_geoid, normalize_income, normalize_text


def test_text_trims_collapses_and_uppercases():
    assert normalize_text("  renter   2\tunit ") == "RENTER 2 UNIT"


@pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
def test_missing_inputs_become_empty(value):
    assert normalize_text(value) == ""
    assert normalize_income(value) == ""
    assert normalize_geoid(value) == ""


def test_income_spellings_share_one_key():
    keys = {normalize_income(v) for v in ["$20k–$30k", "$20K - $30K", "$20k-$30k"]}
    assert keys == {"$20K-$30K"}, f"Got {keys}"


def test_income_strips_all_whitespace():
    assert normalize_income(" Under  $20k ") == "UNDER$20K"


def test_geoid_truncates_to_tract_level():
    assert normalize_geoid("421010001001") == "42101000100"
    assert normalize_geoid("  42101000100  ") == "42101000100"
    assert normalize_geoid(42101000100) == "42101000100"


def test_geoid_short_values_pass_through():
    assert normalize_geoid("4210") == "4210"


@pytest.mark.parametrize("value", [
    "421010001001",
    "  4210100010099999",
    "abcdefghij klmnop",
    "a b",
    12345678901234,
    None,
])
def test_geoid_idempotent_and_bounded(value):
    once = normalize_geoid(value)
    assert normalize_geoid(once) == once
    assert len(once) <= 11
