"""
SUMMARIZE node - Join point after the four branches.
"""

import logging

from inbox_triage.agent.state import PipelineState
from inbox_triage.agent.summarizer import summarize_results

logger = logging.getLogger(__name__)


def summarize_node(state: PipelineState) -> dict:
    """
    Aggregate the merged branch results.

    Args:
        state: Pipeline state with results from every branch.

    Returns:
        Updated state fields: summary.
    """
    summary = summarize_results(state.get("results", []), timed_out=state.get("timed_out", False))
    logger.info(summary.summary)
    return {"summary": summary}
