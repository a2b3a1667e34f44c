#!/usr/bin/env python3
"""
Net Promoter Score Demo
=======================

Simulates Likelihood to Recommend responses and walks through the NPS
toolkit with Rich console output:

- Proportions of respondents giving each point on the 0-10 scale
- Net Promoter categories for every scale point and their counts
- The Net Promoter Score, its variance and standard error
- A one-sample Wald test against zero, or a two-sample comparison

Test defaults (confidence, breaks, test type) come from NPS_CONFIDENCE,
NPS_BREAKS and NPS_TEST_KIND, optionally set in a .env file.
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np
import pandas as pd
from rich.console import Console
from rich.table import Table

from nps_insights import (
    NPSSettings,
    classify,
    load_settings,
    nps_test,
    render_result,
    score,
    score_percent,
    standard_error,
    tally,
    tally_variance,
)

# Probability of each response 0..10 in the simulated population
RECOMMEND_PROBABILITIES = [
    0.02, 0.01, 0.01, 0.01, 0.01, 0.03, 0.03, 0.09, 0.22, 0.22, 0.35,
]
# Second group skews slightly lower for the two-sample comparison
COMPARISON_PROBABILITIES = [
    0.04, 0.02, 0.02, 0.02, 0.03, 0.05, 0.05, 0.12, 0.22, 0.18, 0.25,
]

console = Console()


def simulate_responses(
    n: int, probabilities: list[float], rng: np.random.Generator
) -> np.ndarray:
    """Draw ``n`` Likelihood to Recommend responses on the 0-10 scale."""
    return rng.choice(np.arange(11), size=n, replace=True, p=probabilities)


def display_distribution(responses: np.ndarray, settings: NPSSettings) -> None:
    """Show the share of respondents at every scale point with its category."""
    counts = pd.Series(responses).value_counts(normalize=True).reindex(range(11), fill_value=0)
    categories = classify(list(range(11)), settings.breaks)

    table = Table(
        title="📊 Likelihood to Recommend Distribution",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Score", justify="right", style="cyan", width=8)
    table.add_column("Proportion", justify="right", style="green", width=12)
    table.add_column("Category", style="white", width=12)

    styles = {"Detractor": "red", "Passive": "yellow", "Promoter": "green"}
    for point, proportion in counts.items():
        category = categories[point]
        label = category.value if category else "-"
        table.add_row(
            str(point),
            f"{proportion:.1%}",
            f"[{styles.get(label, 'white')}]{label}[/{styles.get(label, 'white')}]",
        )

    console.print(table)


def display_summary(responses: np.ndarray, settings: NPSSettings) -> None:
    """Show category counts, NPS, variance and standard error."""
    result = score(responses, settings.breaks)
    counts = tally(responses, settings.breaks)

    table = Table(title="📋 Net Promoter Summary", show_header=True, header_style="bold blue")
    table.add_column("Metric", style="cyan", width=20)
    table.add_column("Value", justify="right", style="white", width=14)

    table.add_row("Detractors", f"{counts.detractors:,}")
    table.add_row("Passives", f"{counts.passives:,}")
    table.add_row("Promoters", f"{counts.promoters:,}")
    table.add_row("NPS", f"{result.value:.3f}")
    table.add_row("NPS (rounded x100)", f"{score_percent(result):.0f}")
    table.add_row("Variance", f"{tally_variance(counts):.4f}")
    table.add_row("Standard error", f"{standard_error(responses, settings.breaks):.4f}")

    console.print("\n")
    console.print(table)


def main() -> None:
    """Main CLI interface for the NPS demo."""
    parser = argparse.ArgumentParser(
        description="Net Promoter Score demo with simulated survey responses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python nps_demo.py                      # 1000 responses, one-sample test
  python nps_demo.py --n 250 --seed 7     # smaller reproducible sample
  python nps_demo.py --two-sample         # compare against a second group
  python nps_demo.py --confidence 0.99    # stricter confidence level
        """,
    )
    parser.add_argument(
        "--n", type=int, default=1000, help="Number of responses to simulate per group"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--confidence",
        type=float,
        default=None,
        help="Confidence level for the test (defaults to NPS_CONFIDENCE or 0.95)",
    )
    parser.add_argument(
        "--two-sample",
        "-2",
        action="store_true",
        help="Compare against a second simulated group",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        settings = load_settings()
        confidence = args.confidence if args.confidence is not None else settings.confidence
        rng = np.random.default_rng(args.seed)

        x = simulate_responses(args.n, RECOMMEND_PROBABILITIES, rng)
        display_distribution(x, settings)
        display_summary(x, settings)

        y = simulate_responses(args.n, COMPARISON_PROBABILITIES, rng) if args.two_sample else None
        result = nps_test(
            x,
            y,
            test=settings.test_kind,
            confidence=confidence,
            breaks=settings.breaks,
        )
        console.print("\n")
        render_result(result, console)

    except KeyboardInterrupt:
        console.print("\n[bold yellow]Operation cancelled by user.[/bold yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"[bold red]Error: {str(e)}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
