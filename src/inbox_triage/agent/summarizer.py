"""Fold a run's ActionResults into a RunSummary."""

from collections import Counter
from collections.abc import Iterable

from inbox_triage.models import ActionResult, RunSummary

TIMED_OUT_SUFFIX = " (run timed out)"


def summarize_results(results: Iterable[ActionResult], timed_out: bool = False) -> RunSummary:
    """
    Build the run report.

    Args:
        results: Every ActionResult produced by the branch stage.
        timed_out: Whether the run deadline cut the run short.

    Returns:
        RunSummary with counts by action and a one-line digest, e.g.
        "Processed 3 emails: 1 archived, 1 meeting_scheduled, 1 reply_sent".
    """
    results = tuple(results)
    counts = Counter(result.action for result in results)

    text = f"Processed {len(results)} emails"
    if counts:
        text += ": " + ", ".join(f"{counts[action]} {action}" for action in sorted(counts))
    if timed_out:
        text += TIMED_OUT_SUFFIX

    return RunSummary(
        total_processed=len(results),
        action_counts=dict(counts),
        summary=text,
        failed=sum(1 for result in results if not result.success),
        timed_out=timed_out,
        results=results,
    )
