"""Tests for NPS variance and standard error."""

import math

import numpy as np
import pytest

from nps_insights import (
    CategoryTally,
    ScalePartition,
    sample_size,
    sample_variance,
    standard_error,
    tally_variance,
)


class TestTallyVariance:
    def test_formula(self):
        # p_D = 0.2, p_Pr = 0.5
        assert tally_variance([2, 3, 5]) == pytest.approx(0.7 - 0.3 ** 2)

    def test_counts_and_proportions_agree(self):
        assert tally_variance([2, 3, 5]) == pytest.approx(tally_variance([0.2, 0.3, 0.5]))

    def test_accepts_tally_and_array(self):
        tally = CategoryTally(detractors=3, passives=0, promoters=7)
        assert tally_variance(tally) == pytest.approx(tally_variance(np.array([3, 0, 7])))

    def test_all_passives_have_zero_variance(self):
        assert tally_variance([0, 10, 0]) == 0.0

    def test_even_split_has_unit_variance(self):
        assert tally_variance([5, 0, 5]) == pytest.approx(1.0)

    def test_bounded(self):
        rng = np.random.default_rng(5)
        for _ in range(100):
            counts = rng.integers(0, 50, size=3)
            if counts.sum() == 0:
                continue
            assert 0.0 <= tally_variance(counts) <= 1.0 + 1e-12

    def test_all_zero_is_nan(self):
        assert math.isnan(tally_variance([0, 0, 0]))

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            tally_variance([1, 2])

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            tally_variance([1, -2, 3])


class TestSampleVariance:
    def test_all_passives(self, all_passives):
        assert sample_variance(all_passives) == 0.0

    def test_matches_tally(self, strong_promoters):
        assert sample_variance(strong_promoters) == pytest.approx(tally_variance([1, 0, 9]))

    def test_empty_sample_is_nan(self):
        assert math.isnan(sample_variance([]))


class TestStandardError:
    def test_value(self, strong_promoters):
        # variance 0.36 over 10 responses
        assert standard_error(strong_promoters) == pytest.approx(math.sqrt(0.036))

    def test_ignores_missing_and_off_scale_values(self, strong_promoters):
        noisy = strong_promoters + [None, 11, -3]
        assert standard_error(noisy) == pytest.approx(standard_error(strong_promoters))

    def test_zero_for_single_category(self, all_passives):
        assert standard_error(all_passives) == 0.0

    def test_empty_sample_is_nan(self):
        assert math.isnan(standard_error([]))

    def test_sample_size_counts_default_scale(self):
        wide = ScalePartition.from_ranges((0, 10), (11, 12), (13, 14))
        sample = [13, 13, 5]
        # Variance uses the custom scale (2 promoters, 1 detractor) but only
        # the 5 lies on the default 0-10 scale, so n is 1.
        assert sample_size(sample) == 1
        assert sample_size(sample, wide) == 3
        expected = math.sqrt(tally_variance([1, 0, 2]) / 1)
        assert standard_error(sample, wide) == pytest.approx(expected)

    def test_generator_input(self):
        sample = [9, 9, 9, 1]
        assert standard_error(iter(sample)) == pytest.approx(standard_error(sample))
        assert standard_error(v for v in sample) == pytest.approx(math.sqrt(0.75 / 4))
