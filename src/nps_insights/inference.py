"""
Significance tests and confidence intervals for Net Promoter Scores.

Only the Wald (Z) test is supported. A one-sample test compares NPS(x) with
zero; a two-sample test compares NPS(x) with NPS(y) assuming independent
samples, so their sampling variances add.

Degenerate samples are not special-cased: an empty sample or a zero standard
error propagates as NaN or infinity through the estimate, interval and
p-value. Check ``NPSTestResult.is_degenerate`` before trusting ``significant``.

Sample sizes are counted on the default 0-10 scale, as in ``standard_error``.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict
from scipy import stats

from .classify import coerce_responses, tally_coerced
from .diagnostics import Diagnostic
from .partition import DEFAULT_PARTITION, ScalePartition
from .score import ScoreResult, score_coerced
from .variance import tally_variance

logger = logging.getLogger(__name__)


class UnsupportedTestError(ValueError):
    """Raised when a test type other than the Wald test is requested."""


class SignificanceTest(str, Enum):
    WALD = "wald"

    @classmethod
    def parse(cls, value: SignificanceTest | str) -> SignificanceTest:
        if isinstance(value, SignificanceTest):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = [member.value for member in cls]
            raise UnsupportedTestError(
                f"Unsupported test type {value!r}. Use one of: {supported}"
            ) from None


class SampleDesign(str, Enum):
    ONE_SAMPLE = "One sample"
    TWO_SAMPLE = "Two sample"


class NPSTestResult(BaseModel):
    """Outcome of a one- or two-sample NPS significance test."""

    model_config = ConfigDict(frozen=True)

    nps_x: float
    nps_y: float | None = None
    delta: float
    interval: tuple[float, float]
    confidence: float
    p_value: float
    significant: bool
    se: float
    test_type: SampleDesign
    n_x: int
    n_y: int | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def is_degenerate(self) -> bool:
        """True for a zero standard error or a non-finite se, p-value or interval."""
        values = (self.se, self.p_value, *self.interval)
        return self.se == 0 or any(not math.isfinite(v) for v in values)


def _validate_confidence(confidence: float) -> float:
    confidence = float(confidence)
    if not 0 < confidence < 1:
        raise ValueError(f"confidence must lie strictly between 0 and 1, got {confidence}")
    return confidence


def _summarise(sample: Any, breaks: ScalePartition) -> tuple[ScoreResult, np.float64, int]:
    """Score, variance and default-scale n of a sample, reading it only once."""
    coerced = coerce_responses(sample, breaks)
    result = score_coerced(coerced, breaks)
    return result, np.float64(tally_variance(result.tally)), tally_coerced(coerced).n


def nps_test(
    x: Any,
    y: Any | None = None,
    test: SignificanceTest | str = SignificanceTest.WALD,
    confidence: float = 0.95,
    breaks: ScalePartition = DEFAULT_PARTITION,
) -> NPSTestResult:
    """Wald test of NPS(x) against zero, or of NPS(x) against NPS(y).

    Args:
        x: Likelihood to Recommend responses.
        y: Responses to compare with ``x``. When omitted a one-sample test is run.
        test: Test type; only ``"wald"`` is recognised.
        confidence: Confidence level of the test and interval.
        breaks: Scale partition used to classify responses.

    Returns:
        NPSTestResult. For a one-sample test the interval is around NPS(x) and is
        reported as (estimate + z*se, estimate - z*se); for a two-sample test it is
        (delta - z*se, delta + z*se) around the absolute difference.

    Raises:
        UnsupportedTestError: if ``test`` is not a recognised test type.
        ValueError: if ``confidence`` is outside (0, 1).
    """
    SignificanceTest.parse(test)
    confidence = _validate_confidence(confidence)

    alpha = 1 - confidence
    z = float(stats.norm.ppf(1 - alpha / 2))

    score_x, var_x, n_x = _summarise(x, breaks)
    diagnostics = list(score_x.diagnostics)

    with np.errstate(divide="ignore", invalid="ignore"):
        if y is None:
            design = SampleDesign.ONE_SAMPLE
            estimate = np.float64(score_x.value)
            se_hat = np.sqrt(var_x / n_x)
            interval = (estimate + z * se_hat, estimate - z * se_hat)
            p_value = 1 - (stats.norm.cdf(abs(estimate - 0) / se_hat) * 2 - 1)
            delta = abs(0 - estimate)
            nps_y = None
            n_y = None
        else:
            design = SampleDesign.TWO_SAMPLE
            score_y, var_y, n_y = _summarise(y, breaks)
            diagnostics.extend(score_y.diagnostics)

            nps_y = score_y.value
            delta = abs(np.float64(score_x.value) - nps_y)
            se_hat = np.sqrt(var_x / n_x + var_y / n_y)
            interval = (delta - z * se_hat, delta + z * se_hat)
            p_value = 1 - (stats.norm.cdf(delta / se_hat) * 2 - 1)

    p_value = float(p_value)
    result = NPSTestResult(
        nps_x=score_x.value,
        nps_y=nps_y,
        delta=float(delta),
        interval=(float(interval[0]), float(interval[1])),
        confidence=confidence,
        p_value=p_value,
        significant=bool(p_value < alpha),
        se=float(se_hat),
        test_type=design,
        n_x=n_x,
        n_y=n_y,
        diagnostics=tuple(diagnostics),
    )

    if result.is_degenerate:
        logger.warning(
            f"{design.value} NPS test is degenerate (se={result.se}, p={result.p_value}); "
            "significance cannot be trusted"
        )
    return result
