"""
Nodes for the LangGraph triage graph.

Each node takes PipelineState (and the run config where it needs
collaborators) and returns the state fields it updates.
"""

from inbox_triage.agent.nodes.branch import branch_node_name, make_branch_node
from inbox_triage.agent.nodes.classify import classify_email, classify_node, partition_by_intent
from inbox_triage.agent.nodes.fetch import fetch_node
from inbox_triage.agent.nodes.summarize import summarize_node

__all__ = [
    "fetch_node",
    "classify_node",
    "classify_email",
    "partition_by_intent",
    "make_branch_node",
    "branch_node_name",
    "summarize_node",
]
