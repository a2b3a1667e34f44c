"""
NPS Insights

Net Promoter Score categories, scores, variance and Wald significance tests
for Likelihood to Recommend survey responses.
"""

from .categories import Category, CategoryTally
from .classify import classify, coerce_responses, tally
from .config import NPSSettings, load_settings
from .diagnostics import Diagnostic, DiagnosticKind
from .inference import (
    NPSTestResult,
    SampleDesign,
    SignificanceTest,
    UnsupportedTestError,
    nps_test,
)
from .partition import DEFAULT_PARTITION, ScalePartition
from .presentation import format_result, render_result, result_to_dict
from .scalestrip import strip_scale_labels
from .score import ScoreResult, score, score_percent
from .variance import sample_size, sample_variance, standard_error, tally_variance

__all__ = [
    "Category",
    "CategoryTally",
    "DEFAULT_PARTITION",
    "Diagnostic",
    "DiagnosticKind",
    "NPSSettings",
    "NPSTestResult",
    "SampleDesign",
    "ScalePartition",
    "ScoreResult",
    "SignificanceTest",
    "UnsupportedTestError",
    "classify",
    "coerce_responses",
    "format_result",
    "load_settings",
    "nps_test",
    "render_result",
    "result_to_dict",
    "sample_size",
    "sample_variance",
    "score",
    "score_percent",
    "standard_error",
    "strip_scale_labels",
    "tally",
    "tally_variance",
]
