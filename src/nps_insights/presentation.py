"""
Display helpers for NPS significance test results.

``format_result`` gives a plain-text report; ``render_result`` prints the same
figures to a Rich console for interactive use.
"""

from __future__ import annotations

import math
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .inference import NPSTestResult, SampleDesign


def _num(value: float | None, digits: int | None = None) -> str:
    if value is None:
        return "NA"
    if digits is not None:
        value = round(value, digits)
    return f"{value:.7g}"


def format_result(result: NPSTestResult) -> str:
    """Plain-text report of a test result."""
    lines = [f"{result.test_type.value} Net Promoter Score Z test", ""]
    lines.append(f"NPS of x: {_num(result.nps_x, 2)} (n = {result.n_x})")

    if result.test_type is SampleDesign.TWO_SAMPLE:
        lines.append(f"NPS of y: {_num(result.nps_y, 2)} (n = {result.n_y})")
        lines.append(f"Difference: {_num(result.delta, 2)}")
    lines.append("")

    se_label = (
        "Standard error of x:"
        if result.test_type is SampleDesign.ONE_SAMPLE
        else "Standard error of difference:"
    )
    lines.append(f"{se_label} {_num(result.se, 3)}")
    lines.append(f"Confidence level: {_num(result.confidence)}")
    lines.append(f"p value: {_num(result.p_value)}")
    lines.append(f"Confidence interval: {' '.join(_num(v) for v in result.interval)}")
    return "\n".join(lines) + "\n"


def result_to_dict(result: NPSTestResult) -> dict[str, Any]:
    """JSON-ready view of a result; non-finite numbers become None."""

    def clean(value: Any) -> Any:
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value

    return {
        "test_type": result.test_type.value,
        "nps_x": clean(result.nps_x),
        "nps_y": clean(result.nps_y),
        "n_x": result.n_x,
        "n_y": result.n_y,
        "delta": clean(result.delta),
        "standard_error": clean(result.se),
        "confidence_level": result.confidence,
        "confidence_interval": [clean(v) for v in result.interval],
        "p_value": clean(result.p_value),
        "is_significant": result.significant,
        "is_degenerate": result.is_degenerate,
        "diagnostics": [d.message for d in result.diagnostics],
    }


def render_result(result: NPSTestResult, console: Console | None = None) -> None:
    """Print a test result as a Rich table with a verdict panel."""
    console = console or Console()

    table = Table(
        title=f"📊 {result.test_type.value} Net Promoter Score Z test",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Metric", style="cyan", width=28)
    table.add_column("Value", justify="right", style="white", width=20)

    table.add_row("NPS of x", f"{_num(result.nps_x, 2)} (n = {result.n_x})")
    if result.test_type is SampleDesign.TWO_SAMPLE:
        table.add_row("NPS of y", f"{_num(result.nps_y, 2)} (n = {result.n_y})")
        table.add_row("Difference", _num(result.delta, 2))
    table.add_row("Standard error", _num(result.se, 3))
    table.add_row("Confidence level", _num(result.confidence))
    table.add_row("p value", _num(result.p_value))
    table.add_row("Confidence interval", " ".join(_num(v, 3) for v in result.interval))

    console.print(table)

    if result.is_degenerate:
        verdict = "[bold yellow]⚠️ Degenerate sample: significance cannot be assessed[/bold yellow]"
    elif result.significant:
        verdict = f"[bold green]✅ Significant at the {result.confidence:.0%} level[/bold green]"
    else:
        verdict = f"[bold red]❌ Not significant at the {result.confidence:.0%} level[/bold red]"

    for diagnostic in result.diagnostics:
        verdict += f"\n[dim]{diagnostic.message}[/dim]"

    console.print(Panel(verdict, title="🎯 Verdict", border_style="blue"))
