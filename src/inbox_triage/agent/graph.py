"""
LangGraph graph for a triage run.

FETCH -> CLASSIFY -> {reply, meeting, archive, human_review} -> SUMMARIZE
"""

import logging

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from inbox_triage.agent.nodes import (
    branch_node_name,
    classify_node,
    fetch_node,
    make_branch_node,
    summarize_node,
)
from inbox_triage.agent.state import PipelineState
from inbox_triage.models import Intent

logger = logging.getLogger(__name__)


def build_graph() -> CompiledStateGraph:
    """
    Build the triage state machine.

    Graph structure:
        FETCH -> CLASSIFY -> REPLY        -> SUMMARIZE -> END
                          -> MEETING      ->
                          -> ARCHIVE      ->
                          -> HUMAN_REVIEW ->

    The four branch nodes are all successors of CLASSIFY, so they run in
    the same step. SUMMARIZE waits for all of them.

    Returns:
        Compiled StateGraph.
    """
    builder = StateGraph(PipelineState)

    builder.add_node("fetch", fetch_node)
    builder.add_node("classify", classify_node)
    builder.add_node("summarize", summarize_node)

    branches = []
    for intent in Intent:
        name = branch_node_name(intent)
        builder.add_node(name, make_branch_node(intent))
        branches.append(name)

    builder.set_entry_point("fetch")
    builder.add_edge("fetch", "classify")

    # Fan out: every branch runs, empty groups finish immediately
    for name in branches:
        builder.add_edge("classify", name)

    # Join
    builder.add_edge(branches, "summarize")
    builder.add_edge("summarize", END)

    return builder.compile()
