"""Tests for the Wald significance tests."""

import logging
import math

import pytest
from pydantic import ValidationError
from scipy import stats

from nps_insights import (
    SampleDesign,
    ScalePartition,
    SignificanceTest,
    UnsupportedTestError,
    nps_test,
    tally_variance,
)

Z_95 = stats.norm.ppf(0.975)


class TestOneSample:
    def test_reference_example(self, strong_promoters):
        result = nps_test(strong_promoters)
        se = math.sqrt(0.36 / 10)

        assert result.test_type is SampleDesign.ONE_SAMPLE
        assert result.nps_x == pytest.approx(0.8)
        assert result.nps_y is None
        assert result.n_x == 10
        assert result.n_y is None
        assert result.se == pytest.approx(se)
        assert result.delta == pytest.approx(0.8)
        assert result.p_value < 0.05
        assert result.significant
        assert not result.is_degenerate

    def test_p_value(self, strong_promoters):
        result = nps_test(strong_promoters)
        expected = 2 * (1 - stats.norm.cdf(0.8 / math.sqrt(0.036)))
        assert result.p_value == pytest.approx(expected)

    def test_interval_lists_upper_bound_first(self, strong_promoters):
        result = nps_test(strong_promoters)
        margin = Z_95 * result.se
        assert result.interval[0] == pytest.approx(0.8 + margin)
        assert result.interval[1] == pytest.approx(0.8 - margin)
        assert result.interval[0] > result.interval[1]

    def test_negative_score_delta_is_absolute(self):
        result = nps_test([1, 1, 1, 1, 9, 7])
        assert result.nps_x == pytest.approx(-0.5)
        assert result.delta == pytest.approx(0.5)

    def test_not_significant_for_balanced_sample(self):
        result = nps_test([9, 1, 9, 1, 7, 8])
        assert result.nps_x == 0.0
        assert result.p_value == pytest.approx(1.0)
        assert not result.significant

    def test_confidence_changes_interval_width(self, mostly_promoters):
        narrow = nps_test(mostly_promoters, confidence=0.90)
        wide = nps_test(mostly_promoters, confidence=0.99)
        narrow_width = narrow.interval[0] - narrow.interval[1]
        wide_width = wide.interval[0] - wide.interval[1]
        assert wide_width > narrow_width
        assert narrow.confidence == 0.90


class TestTwoSample:
    def test_difference(self, mostly_promoters):
        y = [9, 9, 9, 9, 9, 7, 7, 7, 1, 1]
        result = nps_test(mostly_promoters, y)

        se = math.sqrt(0.84 / 10 + 0.61 / 10)
        assert result.test_type is SampleDesign.TWO_SAMPLE
        assert result.nps_x == pytest.approx(0.4)
        assert result.nps_y == pytest.approx(0.3)
        assert result.delta == pytest.approx(0.1)
        assert result.se == pytest.approx(se)
        assert result.interval == pytest.approx((0.1 - Z_95 * se, 0.1 + Z_95 * se))
        assert result.p_value == pytest.approx(2 * (1 - stats.norm.cdf(0.1 / se)))
        assert not result.significant
        assert result.n_y == 10

    def test_identical_samples(self, mostly_promoters):
        result = nps_test(mostly_promoters, list(reversed(mostly_promoters)))
        assert result.delta == 0.0
        assert result.interval[0] < 0 < result.interval[1]
        assert result.p_value == pytest.approx(1.0)

    def test_large_difference_is_significant(self):
        x = [10] * 80 + [0] * 20
        y = [10] * 20 + [0] * 80
        result = nps_test(x, y)
        assert result.delta == pytest.approx(1.2)
        assert result.significant

    def test_diagnostics_from_both_samples(self):
        result = nps_test([9, 11], [9, 12, 13])
        counts = [d.count for d in result.diagnostics]
        assert counts == [1, 2]


class TestDegenerateSamples:
    def test_zero_variance_gives_nan_p_value(self, all_passives):
        result = nps_test(all_passives)
        assert result.se == 0.0
        assert math.isnan(result.p_value)
        assert not result.significant
        assert result.is_degenerate

    def test_all_promoters_zero_standard_error(self):
        result = nps_test([10, 10, 9])
        assert result.se == 0.0
        assert result.is_degenerate

    def test_empty_sample(self):
        result = nps_test([])
        assert math.isnan(result.nps_x)
        assert math.isnan(result.se)
        assert math.isnan(result.p_value)
        assert result.n_x == 0
        assert result.is_degenerate

    def test_two_sample_with_empty_group(self, mostly_promoters):
        result = nps_test(mostly_promoters, [None, 42])
        assert math.isnan(result.delta)
        assert result.is_degenerate
        assert not result.significant


class TestConfiguration:
    @pytest.mark.parametrize("kind", ["wald", "WALD", " Wald ", SignificanceTest.WALD])
    def test_wald_accepted(self, kind, mostly_promoters):
        assert nps_test(mostly_promoters, test=kind).nps_x == pytest.approx(0.4)

    @pytest.mark.parametrize("kind", ["t", "bootstrap", ""])
    def test_unsupported_test_rejected(self, kind, mostly_promoters):
        with pytest.raises(UnsupportedTestError):
            nps_test(mostly_promoters, test=kind)

    def test_unsupported_test_is_value_error(self, mostly_promoters):
        with pytest.raises(ValueError):
            nps_test(mostly_promoters, test="permutation")

    @pytest.mark.parametrize("confidence", [0.0, 1.0, 1.5, -0.1])
    def test_confidence_out_of_range(self, confidence, mostly_promoters):
        with pytest.raises(ValueError):
            nps_test(mostly_promoters, confidence=confidence)

    def test_custom_breaks(self, five_point_breaks):
        result = nps_test([5, 5, 4, 1, 3], breaks=five_point_breaks)
        assert result.nps_x == pytest.approx(0.4)

    def test_result_is_immutable(self, mostly_promoters):
        result = nps_test(mostly_promoters)
        with pytest.raises(ValidationError):
            result.p_value = 0.5

    def test_sample_size_counts_default_scale(self):
        wide = ScalePartition.from_ranges((0, 10), (11, 12), (13, 14))
        result = nps_test([13, 13, 5], breaks=wide)
        # Score and variance use all three responses, n only the 5.
        assert result.nps_x == pytest.approx(1 / 3)
        assert result.n_x == 1
        assert result.se == pytest.approx(math.sqrt(tally_variance([1, 0, 2]) / 1))


class TestSinglePassInput:
    def test_generator_one_sample(self, strong_promoters):
        result = nps_test(v for v in strong_promoters)
        expected = nps_test(strong_promoters)
        assert result.n_x == 10
        assert result.se == pytest.approx(expected.se)
        assert result.p_value == pytest.approx(expected.p_value)
        assert result.significant

    def test_generator_two_sample(self, mostly_promoters):
        y = [9, 9, 9, 9, 9, 7, 7, 7, 1, 1]
        result = nps_test(iter(mostly_promoters), (v for v in y))
        expected = nps_test(mostly_promoters, y)
        assert (result.n_x, result.n_y) == (10, 10)
        assert result.se == pytest.approx(expected.se)
        assert result.interval == pytest.approx(expected.interval)

    def test_coercion_logged_once_per_sample(self, caplog):
        with caplog.at_level(logging.INFO, logger="nps_insights.diagnostics"):
            nps_test(["9", "9", "1"], ["10", "3"])
        notices = [r for r in caplog.records if "converted to numeric" in r.getMessage()]
        assert len(notices) == 2
