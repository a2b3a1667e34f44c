"""
Scale partitions ("breaks") for Likelihood to Recommend responses.

A partition splits a contiguous integer scale into the Detractor, Passive and
Promoter ranges. Instances are immutable and validated on construction, so a
single default can be shared safely across every entry point.
"""

from __future__ import annotations

import numbers
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .categories import Category

_RANGE_PATTERN = re.compile(r"^\s*(-?\d+)\s*(?:-\s*(-?\d+))?\s*$")


class ScalePartition(BaseModel):
    """Detractor, Passive and Promoter scale points, in that order."""

    model_config = ConfigDict(frozen=True)

    detractors: tuple[int, ...]
    passives: tuple[int, ...]
    promoters: tuple[int, ...]

    @field_validator("detractors", "passives", "promoters", mode="before")
    @classmethod
    def _as_sorted_tuple(cls, value: Any) -> tuple[int, ...]:
        value = list(value)
        for v in value:
            if isinstance(v, bool) or not isinstance(v, numbers.Real) or not float(v).is_integer():
                raise ValueError(f"scale points must be integers, got {v!r}")
        points = tuple(sorted(int(v) for v in value))
        if not points:
            raise ValueError("each range of a scale partition needs at least one point")
        if len(set(points)) != len(points):
            raise ValueError(f"duplicate scale points in range {points}")
        return points

    @model_validator(mode="after")
    def _check_partition(self) -> ScalePartition:
        if max(self.detractors) >= min(self.passives):
            raise ValueError("detractor range must lie entirely below the passive range")
        if max(self.passives) >= min(self.promoters):
            raise ValueError("passive range must lie entirely below the promoter range")

        points = self.domain
        expected = tuple(range(points[0], points[-1] + 1))
        if points != expected:
            gaps = sorted(set(expected) - set(points))
            raise ValueError(f"scale partition has gaps at {gaps}")
        return self

    @classmethod
    def from_ranges(
        cls,
        detractors: tuple[int, int],
        passives: tuple[int, int],
        promoters: tuple[int, int],
    ) -> ScalePartition:
        """Build a partition from inclusive (low, high) bounds."""
        return cls(
            detractors=range(detractors[0], detractors[1] + 1),
            passives=range(passives[0], passives[1] + 1),
            promoters=range(promoters[0], promoters[1] + 1),
        )

    @classmethod
    def parse(cls, text: str) -> ScalePartition:
        """Parse ``"0-6,7-8,9-10"`` style breaks, single points allowed."""
        parts = text.split(",")
        if len(parts) != 3:
            raise ValueError(
                f"breaks must name exactly three ranges separated by commas, got {text!r}"
            )

        bounds = []
        for part in parts:
            match = _RANGE_PATTERN.match(part)
            if not match:
                raise ValueError(f"invalid range {part.strip()!r} in breaks {text!r}")
            low = int(match.group(1))
            high = int(match.group(2)) if match.group(2) is not None else low
            if high < low:
                raise ValueError(f"range {part.strip()!r} ends before it starts")
            bounds.append((low, high))

        return cls.from_ranges(*bounds)

    @property
    def ranges(self) -> tuple[tuple[int, ...], tuple[int, ...], tuple[int, ...]]:
        return (self.detractors, self.passives, self.promoters)

    @property
    def domain(self) -> tuple[int, ...]:
        return self.detractors + self.passives + self.promoters

    @property
    def lower(self) -> int:
        return self.detractors[0]

    @property
    def upper(self) -> int:
        return self.promoters[-1]

    def category_of(self, point: int) -> Category | None:
        """Category holding ``point``, or None when it is off the scale."""
        for category, points in zip(Category, self.ranges):
            if point in points:
                return category
        return None

    def __contains__(self, point: object) -> bool:
        return point in self.domain

    def __str__(self) -> str:
        return ",".join(f"{r[0]}-{r[-1]}" if len(r) > 1 else f"{r[0]}" for r in self.ranges)


DEFAULT_PARTITION = ScalePartition.from_ranges((0, 6), (7, 8), (9, 10))
