"""
Environment-driven defaults for NPS analysis.

Values come from the process environment, optionally seeded from a ``.env``
file. Every call to ``load_settings`` returns a new immutable instance.
"""

from __future__ import annotations

import logging
import os

import dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from .inference import SignificanceTest
from .partition import DEFAULT_PARTITION, ScalePartition

logger = logging.getLogger(__name__)


class NPSSettings(BaseModel):
    """Default test parameters for scripts and plugins."""

    model_config = ConfigDict(frozen=True)

    confidence: float = 0.95
    breaks: ScalePartition = DEFAULT_PARTITION
    test_kind: SignificanceTest = SignificanceTest.WALD

    @field_validator("confidence")
    @classmethod
    def _confidence_in_unit_interval(cls, value: float) -> float:
        if not 0 < value < 1:
            raise ValueError(f"NPS_CONFIDENCE must lie strictly between 0 and 1, got {value}")
        return value

    @field_validator("breaks", mode="before")
    @classmethod
    def _parse_breaks(cls, value: object) -> object:
        if isinstance(value, str):
            return ScalePartition.parse(value)
        return value

    @field_validator("test_kind", mode="before")
    @classmethod
    def _parse_test_kind(cls, value: object) -> object:
        if isinstance(value, str):
            return SignificanceTest.parse(value)
        return value


def load_settings(env_file: str | None = None) -> NPSSettings:
    """Read NPS_CONFIDENCE, NPS_BREAKS and NPS_TEST_KIND from the environment."""
    if dotenv.load_dotenv(env_file, override=False):
        logger.info("Environment variables loaded from .env file")

    return NPSSettings(
        confidence=float(os.getenv("NPS_CONFIDENCE", "0.95")),
        breaks=os.getenv("NPS_BREAKS", str(DEFAULT_PARTITION)),
        test_kind=os.getenv("NPS_TEST_KIND", SignificanceTest.WALD.value),
    )
