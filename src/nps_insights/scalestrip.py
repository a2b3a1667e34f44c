"""
Stripping of Likert scale point labels from survey exports.

Survey tools often export scale answers with their labels attached, e.g.
"10 - Extremely likely". These helpers drop the label and return numeric
data, or an ordered categorical when the ordinal form is wanted.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# A hyphen followed by at least three characters starts a label; "-5" survives.
LABEL_PATTERN = r"-...+"


def _strip_text(value: Any) -> str | None:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return re.sub(LABEL_PATTERN, "", str(value)).strip()


def _strip_series(values: pd.Series, as_ordinal: bool) -> pd.Series:
    text = values.map(_strip_text).astype(object)
    if not as_ordinal:
        numeric = pd.to_numeric(text, errors="coerce").astype(float)
        failed = int((numeric.isna() & text.notna() & (text != "")).sum())
        if failed:
            logger.warning(f"{failed} scale labels could not be converted to numbers")
        return numeric

    levels = [v for v in text.dropna().unique() if v != ""]
    numeric_levels = pd.to_numeric(pd.Series(levels, dtype=object), errors="coerce")
    if numeric_levels.notna().all():
        levels = [level for _, level in sorted(zip(numeric_levels, levels))]
    else:
        levels = sorted(levels)
    return pd.Series(
        pd.Categorical(text.where(text != ""), categories=levels, ordered=True),
        index=values.index,
        name=values.name,
    )


def strip_scale_labels(data: Any, as_ordinal: bool = False) -> Any:
    """Remove "N - label" scale labels from a value, sequence or table.

    Args:
        data: A single string, a list/array/Series of strings, or a DataFrame
            (or 2-D array) whose every column holds labelled scale answers.
        as_ordinal: Return an ordered categorical instead of numbers.

    Returns:
        A float (or category label) for a single string, a Series for
        one-dimensional input and a new DataFrame for tabular input. Labels
        that leave no number behind become NaN.
    """
    if isinstance(data, np.ndarray) and data.ndim == 2:
        data = pd.DataFrame(data)

    if isinstance(data, pd.DataFrame):
        return pd.DataFrame(
            {column: _strip_series(data[column], as_ordinal) for column in data.columns},
            index=data.index,
        )

    if isinstance(data, str) or np.isscalar(data) or data is None:
        stripped = _strip_series(pd.Series([data]), as_ordinal)
        return stripped.iloc[0]

    if not isinstance(data, pd.Series):
        data = pd.Series(list(data))
    return _strip_series(data, as_ordinal)
