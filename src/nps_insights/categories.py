"""Net Promoter categories and category tallies."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Ordered Net Promoter categories, lowest likelihood to recommend first."""

    DETRACTOR = "Detractor"
    PASSIVE = "Passive"
    PROMOTER = "Promoter"

    @property
    def rank(self) -> int:
        return list(Category).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.rank >= other.rank


class CategoryTally(BaseModel):
    """Counts of Detractors, Passives and Promoters within one sample."""

    model_config = ConfigDict(frozen=True)

    detractors: int = Field(default=0, ge=0)
    passives: int = Field(default=0, ge=0)
    promoters: int = Field(default=0, ge=0)

    @property
    def n(self) -> int:
        return self.detractors + self.passives + self.promoters

    def as_list(self) -> list[int]:
        """Counts in [Detractor, Passive, Promoter] order."""
        return [self.detractors, self.passives, self.promoters]

    def proportions(self) -> list[float]:
        total = self.n
        if total == 0:
            return [float("nan")] * 3
        return [count / total for count in self.as_list()]

    def __getitem__(self, category: Category) -> int:
        return self.as_list()[Category(category).rank]
