"""
Philadelphia Energy Burden Explorer: Burden Predictor
Closed-form linear model: intercept + housing-type coefficient + income-bracket coefficient.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from config import REGRESSION_COEFFICIENTS
from utils.normalize import normalize_income, normalize_text


class UnknownCategoryError(ValueError):
    """A housing or income label has no coefficient (strict mode only)."""


def _normalized_table(raw: Mapping[str, float], normalizer, kind: str) -> Mapping[str, float]:
    table = {}
    for label, coef in raw.items():
        key = normalizer(label)
        if key in table:
            raise ValueError(f"Duplicate {kind} label after normalization: {label!r} -> {key!r}")
        table[key] = float(coef)
    return MappingProxyType(table)


@dataclass(frozen=True)
class RegressionCoefficients:
    intercept: float
    housing: Mapping[str, float]
    income: Mapping[str, float]
    housing_labels: tuple[str, ...] = ()
    income_labels: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict) -> "RegressionCoefficients":
        """Build from {"intercept": float, "housing": {...}, "income": {...}}."""
        return cls(
            intercept=float(raw["intercept"]),
            housing=_normalized_table(raw["housing"], normalize_text, "housing"),
            income=_normalized_table(raw["income"], normalize_income, "income"),
            housing_labels=tuple(raw["housing"]),
            income_labels=tuple(raw["income"]),
        )


class BurdenPredictor:
    """
    Predicts a household's energy burden (% of income) from housing type and
    income bracket.

    Unknown labels contribute zero unless strict=True, in which case they
    raise UnknownCategoryError. The result is floored at 0.
    """

    def __init__(self, coefficients: RegressionCoefficients | None = None, strict: bool = False):
        if coefficients is None:
            coefficients = RegressionCoefficients.from_dict(REGRESSION_COEFFICIENTS)
        self.coefficients = coefficients
        self.strict = strict

    @property
    def housing_labels(self) -> tuple[str, ...]:
        return self.coefficients.housing_labels

    @property
    def income_labels(self) -> tuple[str, ...]:
        return self.coefficients.income_labels

    def _lookup(self, table: Mapping[str, float], key: str, label, kind: str) -> float | None:
        coef = table.get(key)
        if coef is None and self.strict:
            raise UnknownCategoryError(f"Unknown {kind} category: {label!r}")
        return coef

    def predict(self, housing, income) -> float:
        c = self.coefficients
        y = c.intercept

        housing_coef = self._lookup(c.housing, normalize_text(housing), housing, "housing")
        if housing_coef is not None:
            y += housing_coef

        income_coef = self._lookup(c.income, normalize_income(income), income, "income")
        if income_coef is not None:
            y += income_coef

        return max(0.0, y)
