"""Comparison reporting for the identifier benchmark.

This module turns two equal-length sequences of trial results into rows with a
relative-speed label and prints them as a fixed-width table.
"""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, TextIO

from .models import ComparisonRow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import TrialResult

UNDEFINED_LABEL = "n/a"


def relative_speed_label(baseline_us: float, candidate_us: float) -> str:
    """Describe how the candidate's mean compares with the baseline's.

    Equal means count as "1.00x slower". Undefined (NaN) or zero means have no
    meaningful ratio and are labelled "n/a".

    Returns:
        "X.XXx faster", "X.XXx slower" or "n/a".
    """
    if math.isnan(baseline_us) or math.isnan(candidate_us):
        return UNDEFINED_LABEL
    if baseline_us > candidate_us:
        if candidate_us <= 0:
            return UNDEFINED_LABEL
        return f"{baseline_us / candidate_us:.2f}x faster"
    if baseline_us <= 0:
        return "1.00x slower" if candidate_us == baseline_us else UNDEFINED_LABEL
    return f"{candidate_us / baseline_us:.2f}x slower"


def format_mean(mean_us: float) -> str:
    """Format a trial mean for the table, or "n/a" when undefined."""
    if math.isnan(mean_us):
        return UNDEFINED_LABEL
    return f"{mean_us:.2f}µs"


def build_comparison_rows(
    baseline: Sequence[TrialResult], candidate: Sequence[TrialResult]
) -> list[ComparisonRow]:
    """Pair baseline and candidate results by trial index.

    Returns:
        One ComparisonRow per trial.

    Raises:
        ValueError: If the sequences differ in length.
    """
    if len(baseline) != len(candidate):
        msg = (
            f"Cannot compare {len(baseline)} baseline trials "
            f"with {len(candidate)} candidate trials"
        )
        raise ValueError(msg)

    return [
        ComparisonRow(
            trial_number=index,
            baseline_us=base.mean_us,
            candidate_us=cand.mean_us,
            label=relative_speed_label(base.mean_us, cand.mean_us),
        )
        for index, (base, cand) in enumerate(zip(baseline, candidate, strict=True), start=1)
    ]


class ComparisonReport:
    """Baseline-versus-candidate comparison table.

    Keeps the source names for the column headers alongside the computed rows.
    """

    def __init__(
        self, baseline: Sequence[TrialResult], candidate: Sequence[TrialResult]
    ) -> None:
        """Build the report rows from two result sequences of equal length."""
        self.baseline_name = baseline[0].source_name if baseline else "Baseline"
        self.candidate_name = candidate[0].source_name if candidate else "Candidate"
        self.rows = build_comparison_rows(baseline, candidate)

    def lines(self) -> list[str]:
        """Render the table as text lines, header first.

        Returns:
            Header, separator and one line per trial.
        """
        widths = (
            len("Trial"),
            max(len(self.baseline_name), 12),
            max(len(self.candidate_name), 12),
            max(len("Difference"), 14),
        )
        header = " | ".join(
            title.ljust(width)
            for title, width in zip(
                ("Trial", self.baseline_name, self.candidate_name, "Difference"),
                widths,
                strict=True,
            )
        )
        separator = "-+-".join("-" * width for width in widths)

        rendered = [header, separator]
        for row in self.rows:
            rendered.append(
                " | ".join((
                    str(row.trial_number).rjust(widths[0]),
                    format_mean(row.baseline_us).rjust(widths[1]),
                    format_mean(row.candidate_us).rjust(widths[2]),
                    row.label.ljust(widths[3]),
                )).rstrip()
            )
        return rendered

    def print_table(self, stream: TextIO | None = None) -> None:
        """Write the table to ``stream`` (stdout by default)."""
        out = stream or sys.stdout
        for line in self.lines():
            out.write(line + "\n")
        out.flush()
