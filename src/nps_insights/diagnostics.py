"""Non-fatal notices produced while classifying and scoring responses."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    OUT_OF_DOMAIN = "out_of_domain"
    COERCION = "coercion"


class Diagnostic(BaseModel):
    """A notice returned alongside a numeric result instead of being raised."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    message: str
    count: int = 0
    lower: int | None = None
    upper: int | None = None


def out_of_domain(count: int, lower: int, upper: int) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.OUT_OF_DOMAIN,
        message=(
            f"{count} values outside specified range for Recommend scale "
            f"({lower}:{upper}), and excluded. Use 'breaks' to change this."
        ),
        count=count,
        lower=lower,
        upper=upper,
    )


def coercion(type_name: str, count: int) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.COERCION,
        message=f"Data of class {type_name} supplied; converted to numeric.",
        count=count,
    )


def emit(diagnostics: list[Diagnostic]) -> None:
    """Mirror diagnostics into the log; coercion notices are informational."""
    for diagnostic in diagnostics:
        if diagnostic.kind is DiagnosticKind.OUT_OF_DOMAIN:
            logger.warning(diagnostic.message)
        else:
            logger.info(diagnostic.message)
