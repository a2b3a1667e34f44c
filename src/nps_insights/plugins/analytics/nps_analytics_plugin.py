"""
NPS Analytics Semantic Kernel Plugin for survey significance testing.

Exposes Net Promoter Score calculation, variance estimation and Wald tests to
an agent. Every function takes JSON text and returns JSON text; invalid input
comes back as an ``error`` payload rather than an exception, so the agent can
correct its call.
"""

import json
import logging
from typing import Annotated, Any

from semantic_kernel.functions import kernel_function

from ...inference import SignificanceTest, UnsupportedTestError, nps_test
from ...partition import ScalePartition
from ...presentation import format_result, result_to_dict
from ...scalestrip import strip_scale_labels as strip_labels
from ...score import score, score_percent
from ...variance import standard_error, tally_variance

logger = logging.getLogger(__name__)

DEFAULT_BREAKS = "0-6,7-8,9-10"


class NPSAnalyticsPlugin:
    """
    NPS Analytics plugin for Likelihood to Recommend survey data.

    Accepts responses as a JSON array, or as a plugin payload whose
    "responses", "scores" or "results" key holds the array (items of "results"
    may be objects carrying a "recommend_score" or "nps" field).
    """

    def __init__(self):
        """Initialize the plugin."""
        logger.info("NPSAnalyticsPlugin initialized successfully")

    @kernel_function(
        description="Calculate a Net Promoter Score with category counts, variance and standard error from Likelihood to Recommend responses"
    )
    def calculate_nps(
        self,
        responses: Annotated[
            str,
            "JSON array of Likelihood to Recommend scores (0-10), or a plugin response containing them",
        ],
        breaks: Annotated[
            str,
            "Detractor, Passive and Promoter ranges, e.g. '0-6,7-8,9-10'",
        ] = DEFAULT_BREAKS,
    ) -> Annotated[
        str,
        "JSON formatted NPS with category counts, variance, standard error and data quality notes",
    ]:
        """
        Calculate the Net Promoter Score and its sampling uncertainty.

        NPS is reported both on the [-1, 1] scale and as a rounded -100..100
        figure. Responses outside the scale are excluded and listed under
        "diagnostics".
        """
        try:
            if not responses.strip():
                return json.dumps(
                    {
                        "error": "Responses cannot be empty",
                        "example": "[9, 10, 7, 3, 8]",
                    }
                )

            try:
                partition = ScalePartition.parse(breaks)
            except ValueError as e:
                return json.dumps(
                    {
                        "error": f"Invalid breaks: {str(e)}",
                        "provided": breaks,
                        "example": DEFAULT_BREAKS,
                    }
                )

            try:
                values = self._extract_responses(json.loads(responses))
            except json.JSONDecodeError as e:
                return json.dumps(
                    {
                        "error": f"Invalid JSON format: {str(e)}",
                        "responses_preview": responses[:200] + "..."
                        if len(responses) > 200
                        else responses,
                    }
                )

            if not values:
                return json.dumps({"error": "No responses found in data"})

            result = score(values, partition)
            variance = tally_variance(result.tally)
            se = standard_error(values, partition)

            return json.dumps(
                {
                    "nps": self._finite(result.value),
                    "nps_percent": self._finite(score_percent(result)),
                    "category_counts": {
                        "detractors": result.tally.detractors,
                        "passives": result.tally.passives,
                        "promoters": result.tally.promoters,
                    },
                    "responses_scored": result.n,
                    "responses_received": len(values),
                    "variance": self._finite(variance),
                    "standard_error": self._finite(se),
                    "breaks": str(partition),
                    "diagnostics": [d.message for d in result.diagnostics],
                },
                indent=2,
            )

        except Exception as e:
            logger.error(f"calculate_nps failed: {str(e)}")
            return json.dumps({"error": f"NPS calculation failed: {str(e)}"})

    @kernel_function(
        description="Test whether a Net Promoter Score differs from zero, or whether two groups' scores differ, using a Wald Z-test"
    )
    def compare_nps(
        self,
        group1_responses: Annotated[
            str, "JSON array of Likelihood to Recommend scores for the first group"
        ],
        group2_responses: Annotated[
            str,
            "JSON array of scores for the second group; leave empty for a one-sample test against zero",
        ] = "",
        test_type: Annotated[
            str, "Statistical test type. Only 'wald' is supported"
        ] = "wald",
        confidence_level: Annotated[
            float, "Confidence level for the test and interval (0.90, 0.95, 0.99)"
        ] = 0.95,
        breaks: Annotated[
            str,
            "Detractor, Passive and Promoter ranges, e.g. '0-6,7-8,9-10'",
        ] = DEFAULT_BREAKS,
    ) -> Annotated[
        str,
        "JSON formatted test result with scores, difference, confidence interval, p-value and a text report",
    ]:
        """
        Run a one- or two-sample Wald test on Net Promoter Scores.

        Statistical Methods Used:
        - NPS variance: (p_promoter + p_detractor) - (p_promoter - p_detractor)^2
        - Standard error: sqrt(variance / n), summed over independent groups
        - Wald Z-test: two-sided p-value from the standard normal distribution

        Degenerate groups (no valid responses or zero variance) are flagged with
        "is_degenerate" instead of failing.
        """
        try:
            if not group1_responses.strip():
                return json.dumps(
                    {
                        "error": "group1_responses is required",
                        "example": "[9, 10, 7, 3, 8]",
                    }
                )

            try:
                SignificanceTest.parse(test_type)
            except UnsupportedTestError as e:
                return json.dumps(
                    {
                        "error": str(e),
                        "provided": test_type,
                    }
                )

            if confidence_level not in [0.90, 0.95, 0.99]:
                return json.dumps(
                    {
                        "error": "Invalid confidence_level. Use 0.90, 0.95, or 0.99",
                        "provided": confidence_level,
                    }
                )

            try:
                partition = ScalePartition.parse(breaks)
            except ValueError as e:
                return json.dumps(
                    {
                        "error": f"Invalid breaks: {str(e)}",
                        "provided": breaks,
                    }
                )

            try:
                x = self._extract_responses(json.loads(group1_responses))
                y = (
                    self._extract_responses(json.loads(group2_responses))
                    if group2_responses.strip()
                    else None
                )
            except json.JSONDecodeError as e:
                return json.dumps({"error": f"Invalid JSON format: {str(e)}"})

            if not x or (y is not None and not y):
                return json.dumps(
                    {
                        "error": "Unable to extract responses from data",
                        "group1_count": len(x),
                        "group2_count": len(y) if y is not None else None,
                    }
                )

            result = nps_test(
                x, y, test=test_type, confidence=confidence_level, breaks=partition
            )

            payload: dict[str, Any] = result_to_dict(result)
            payload["valid_responses"] = {
                "group1": result.n_x,
                "group2": result.n_y,
            }
            payload["report"] = format_result(result)
            return json.dumps(payload, indent=2)

        except Exception as e:
            logger.error(f"compare_nps failed: {str(e)}")
            return json.dumps(
                {
                    "error": f"NPS comparison failed: {str(e)}",
                    "test_type": test_type,
                }
            )

    @kernel_function(
        description="Convert labelled Likert answers such as '10 - Extremely likely' into numeric scores"
    )
    def strip_scale_labels(
        self,
        responses: Annotated[str, "JSON array of labelled scale answers"],
        as_ordinal: Annotated[
            bool, "Return ordered category labels instead of numbers"
        ] = False,
    ) -> Annotated[str, "JSON formatted list of unlabelled scale values"]:
        """Strip "N - label" suffixes from survey export answers."""
        try:
            try:
                data = json.loads(responses)
            except json.JSONDecodeError as e:
                return json.dumps({"error": f"Invalid JSON format: {str(e)}"})

            if not isinstance(data, list):
                return json.dumps(
                    {
                        "error": "Expected a JSON array of labelled answers",
                        "provided_type": type(data).__name__,
                    }
                )

            stripped = strip_labels(data, as_ordinal=as_ordinal)
            if as_ordinal:
                values = [None if v is None or v != v else str(v) for v in stripped.tolist()]
                levels = [str(level) for level in stripped.cat.categories]
                return json.dumps({"values": values, "levels": levels}, indent=2)

            return json.dumps(
                {"values": [self._finite(v) for v in stripped.tolist()]}, indent=2
            )

        except Exception as e:
            logger.error(f"strip_scale_labels failed: {str(e)}")
            return json.dumps({"error": f"Label stripping failed: {str(e)}"})

    # Helper methods for internal processing

    def _extract_responses(self, data: Any) -> list[Any]:
        """Pull a flat list of responses out of the supported payload shapes."""
        if isinstance(data, dict):
            for key in ["responses", "scores", "results"]:
                if key in data:
                    data = data[key]
                    break
            else:
                return []

        if not isinstance(data, list):
            return []

        values = []
        for item in data:
            if isinstance(item, dict):
                for field in ["recommend_score", "nps", "score"]:
                    if field in item:
                        values.append(item[field])
                        break
            else:
                values.append(item)
        return values

    @staticmethod
    def _finite(value: float) -> float | None:
        """JSON has no NaN; report indeterminate numbers as null."""
        return value if value == value and value not in (float("inf"), float("-inf")) else None
