"""Shared fixtures for NPS tests."""

import pytest

from nps_insights import ScalePartition


@pytest.fixture
def mostly_promoters() -> list[int]:
    """Seven promoters and three detractors: NPS 0.4."""
    return [9, 9, 9, 9, 9, 9, 9, 1, 1, 1]


@pytest.fixture
def strong_promoters() -> list[int]:
    """Nine promoters and one detractor: NPS 0.8."""
    return [9, 9, 9, 9, 9, 9, 9, 9, 9, 1]


@pytest.fixture
def all_passives() -> list[int]:
    return [7] * 10


@pytest.fixture
def five_point_breaks() -> ScalePartition:
    """A 1-5 scale: 1-2 detractors, 3 passive, 4-5 promoters."""
    return ScalePartition.from_ranges((1, 2), (3, 3), (4, 5))
