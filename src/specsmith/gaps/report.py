# src/specsmith/gaps/report.py
from __future__ import annotations

from collections.abc import Sequence

NO_GAPS_STATUS = "## Status: No Gaps Found"


def render_gap_report(gaps: Sequence[str], *, generated_at: str | None = None) -> str:
    """Renders the gap report as Markdown.

    An empty gap list renders an explicit "No Gaps Found" status instead of an
    empty list, so downstream checks can branch on run quality. Otherwise the
    messages are listed 1-based in insertion order.

    The report carries no timestamp unless the caller passes one.
    """
    lines = ["# GAP Report", ""]
    if generated_at:
        lines += [f"Generated: {generated_at}", ""]

    if not gaps:
        lines += [
            NO_GAPS_STATUS,
            "",
            "All specification elements appear to be complete and unambiguous.",
        ]
    else:
        lines += [
            f"## Status: {len(gaps)} Gap(s) Identified",
            "",
            "The following items were identified as missing or ambiguous:",
            "",
        ]
        lines += [f"{i}. {gap}" for i, gap in enumerate(gaps, start=1)]

    return "\n".join(lines) + "\n"


def is_complete_report(report: str) -> bool:
    return NO_GAPS_STATUS in report.splitlines()
