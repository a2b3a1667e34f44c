"""
Category classification of Likelihood to Recommend responses.

Responses arrive in one of three shapes: numeric values, labelled categorical
data (``pandas.Categorical`` or a category-dtype Series) or text. Non-numeric
input goes through an explicit conversion step, ``coerce_responses``, which
never raises: labels that do not spell a point on the scale become missing
and are reported back as diagnostics.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from . import diagnostics as diag
from .categories import Category, CategoryTally
from .diagnostics import Diagnostic
from .partition import DEFAULT_PARTITION, ScalePartition


class CoercedSample(BaseModel):
    """Numeric view of a sample after the conversion step.

    ``values`` has one entry per input element; ``None`` marks an element that
    was missing to begin with or could not be converted. ``unconverted`` counts
    the latter.
    """

    model_config = ConfigDict(frozen=True)

    values: tuple[float | None, ...]
    unconverted: int = 0
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)


def _is_missing(value: Any) -> bool:
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    return isinstance(value, float | np.floating) and math.isnan(value)


def _is_numeric_dtype(dtype: Any) -> bool:
    return pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_bool_dtype(dtype)


def _parse_label(label: Any, breaks: ScalePartition) -> float | None:
    """Map a text or categorical label onto a point of the scale."""
    try:
        value = float(str(label).strip())
    except ValueError:
        return None
    if math.isfinite(value) and value.is_integer() and int(value) in breaks:
        return value
    return None


def _coerce_labels(
    labels: Iterable[Any], breaks: ScalePartition, type_name: str
) -> CoercedSample:
    values: list[float | None] = []
    converted = 0
    unconverted = 0
    for label in labels:
        if _is_missing(label):
            values.append(None)
            continue
        value = _parse_label(label, breaks)
        if value is None:
            unconverted += 1
        else:
            converted += 1
        values.append(value)

    return CoercedSample(
        values=tuple(values),
        unconverted=unconverted,
        diagnostics=(diag.coercion(type_name, converted + unconverted),),
    )


def coerce_responses(
    sample: Any, breaks: ScalePartition = DEFAULT_PARTITION
) -> CoercedSample:
    """Convert a sample of responses to floats, recording what was coerced."""
    if isinstance(sample, pd.Categorical) or (
        isinstance(sample, pd.Series) and isinstance(sample.dtype, pd.CategoricalDtype)
    ):
        return _coerce_labels(list(sample), breaks, "category")

    if isinstance(sample, str | bytes) or not isinstance(sample, Iterable):
        sample = [sample]

    if isinstance(sample, np.ndarray | pd.Series) and _is_numeric_dtype(sample.dtype):
        numeric = tuple(
            None if _is_missing(v) else float(v) for v in np.asarray(sample).ravel()
        )
        return CoercedSample(values=numeric)

    values: list[float | None] = []
    unconverted = 0
    labelled: dict[str, int] = {}
    for element in sample:
        if _is_missing(element):
            values.append(None)
        elif isinstance(element, numbers.Real) and not isinstance(element, bool | np.bool_):
            values.append(float(element))
        else:
            type_name = type(element).__name__
            labelled[type_name] = labelled.get(type_name, 0) + 1
            value = _parse_label(element, breaks)
            if value is None:
                unconverted += 1
            values.append(value)

    diagnostics = tuple(diag.coercion(name, count) for name, count in labelled.items())
    return CoercedSample(values=tuple(values), unconverted=unconverted, diagnostics=diagnostics)


def classify_value(value: float | None, breaks: ScalePartition = DEFAULT_PARTITION) -> Category | None:
    """Category of a single numeric response, or None when off the scale."""
    if value is None or not math.isfinite(value) or not float(value).is_integer():
        return None
    return breaks.category_of(int(value))


def classify(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> list[Category | None]:
    """Net Promoter category for every element of ``sample``.

    Boundary points belong to the range that lists them, so under the default
    breaks 6 is a Detractor and 7 a Passive. Anything outside the scale,
    non-integral values and labels that cannot be converted map to None.
    """
    coerced = coerce_responses(sample, breaks)
    diag.emit(list(coerced.diagnostics))
    return [classify_value(value, breaks) for value in coerced.values]


def tally_categories(categories: Iterable[Category | None]) -> CategoryTally:
    counts = dict.fromkeys(Category, 0)
    for category in categories:
        if category is not None:
            counts[category] += 1
    return CategoryTally(
        detractors=counts[Category.DETRACTOR],
        passives=counts[Category.PASSIVE],
        promoters=counts[Category.PROMOTER],
    )


def tally_coerced(
    coerced: CoercedSample, breaks: ScalePartition = DEFAULT_PARTITION
) -> CategoryTally:
    """Tally of a sample that has already been through ``coerce_responses``."""
    return tally_categories(classify_value(value, breaks) for value in coerced.values)


def tally(sample: Any, breaks: ScalePartition = DEFAULT_PARTITION) -> CategoryTally:
    """Detractor, Passive and Promoter counts, zero-filled for absent categories."""
    return tally_categories(classify(sample, breaks))
