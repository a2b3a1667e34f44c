"""
Variance and standard error of the Net Promoter Score.

Treating NPS as the difference of two correlated binomial proportions gives

    Var(NPS) = (p_promoter + p_detractor) - (p_promoter - p_detractor) ** 2

which lies in [0, 1] and depends only on the category proportions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from . import diagnostics as diag
from .categories import CategoryTally
from .classify import coerce_responses, tally, tally_coerced
from .partition import DEFAULT_PARTITION, ScalePartition


def tally_variance(counts: CategoryTally | Sequence[float] | np.ndarray) -> float:
    """Variance of NPS from counts or proportions of Detractors, Passives and Promoters.

    The three values are taken in [Detractor, Passive, Promoter] order and may be
    raw counts or proportions; only their relative sizes matter. An all-zero
    tally has no defined proportions and yields NaN.
    """
    if isinstance(counts, CategoryTally):
        counts = counts.as_list()

    values = np.asarray(counts, dtype=float)
    if values.shape != (3,):
        raise ValueError(
            f"expected three values (Detractor, Passive, Promoter), got shape {values.shape}"
        )
    if np.any(values < 0):
        raise ValueError(f"category counts cannot be negative: {values.tolist()}")

    with np.errstate(divide="ignore", invalid="ignore"):
        props = values / values.sum()
    p_detractor, _, p_promoter = props
    return float((p_promoter + p_detractor) - (p_promoter - p_detractor) ** 2)


def sample_variance(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> float:
    """Variance of NPS for raw Likelihood to Recommend responses."""
    return tally_variance(tally(sample, breaks))


def sample_size(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> int:
    """Number of responses that classify onto the scale."""
    return tally(sample, breaks).n


def standard_error(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> float:
    """Standard error of NPS for raw Likelihood to Recommend responses.

    The variance follows ``breaks`` but the sample size is always counted on the
    default 0-10 scale, whatever ``breaks`` says. ``sample`` is read once, so
    generators and other one-shot iterables are fine.
    """
    coerced = coerce_responses(sample, breaks)
    diag.emit(list(coerced.diagnostics))
    variance = tally_variance(tally_coerced(coerced, breaks))
    n = tally_coerced(coerced).n
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.sqrt(np.float64(variance) / n))
