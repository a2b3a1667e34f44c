"""
Net Promoter Score aggregation.

NPS = (Promoters - Detractors) / classified responses, on a [-1, 1] scale.
Responses outside the scale are excluded and reported in the returned
diagnostics rather than raised.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from . import diagnostics as diag
from .categories import CategoryTally
from .classify import CoercedSample, classify_value, coerce_responses, tally_categories
from .diagnostics import Diagnostic
from .partition import DEFAULT_PARTITION, ScalePartition


class ScoreResult(BaseModel):
    """An NPS value together with its tally and any diagnostics."""

    model_config = ConfigDict(frozen=True)

    value: float
    tally: CategoryTally
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def n(self) -> int:
        return self.tally.n

    def __float__(self) -> float:
        return self.value


def nps_from_tally(tally: CategoryTally) -> float:
    """NPS of a tally; NaN when nothing was classified."""
    if tally.n == 0:
        return float("nan")
    return (tally.promoters - tally.detractors) / tally.n


def score(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> ScoreResult:
    """Calculate a Net Promoter Score from raw Likelihood to Recommend responses.

    Missing values (``None``, ``NaN``) are dropped without comment. Values that
    are present but fall off the scale described by ``breaks`` are dropped and
    counted in an ``out_of_domain`` diagnostic. The score is unrounded; use
    ``score_percent`` for the familiar -100..100 presentation.
    """
    return score_coerced(coerce_responses(sample, breaks), breaks)


def score_coerced(
    coerced: CoercedSample, breaks: ScalePartition = DEFAULT_PARTITION
) -> ScoreResult:
    """``score`` for a sample already converted by ``coerce_responses``."""
    categories = [classify_value(value, breaks) for value in coerced.values]

    outside = coerced.unconverted + sum(
        1
        for value, category in zip(coerced.values, categories)
        if value is not None and category is None
    )

    diagnostics = list(coerced.diagnostics)
    if outside:
        diagnostics.append(diag.out_of_domain(outside, breaks.lower, breaks.upper))
    diag.emit(diagnostics)

    tally = tally_categories(categories)
    return ScoreResult(value=nps_from_tally(tally), tally=tally, diagnostics=tuple(diagnostics))


def score_percent(result: ScoreResult | float, digits: int = 0) -> float:
    """NPS on the -100..100 scale, rounded to ``digits`` places."""
    return round(float(result) * 100, digits)
