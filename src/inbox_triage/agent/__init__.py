"""
Triage orchestration.

This module contains:
- IntentClassifier: LLM-backed intent classification
- PipelineState/PipelineServices: graph state and injected collaborators
- build_graph: the fetch -> classify -> branches -> summarize graph
- TriagePipeline: builds and runs the graph
- summarize_results: folds ActionResults into a RunSummary
"""

from inbox_triage.agent.classifier import IntentClassifier
from inbox_triage.agent.graph import build_graph
from inbox_triage.agent.pipeline import TriagePipeline
from inbox_triage.agent.state import PipelineServices, PipelineState, create_initial_state
from inbox_triage.agent.summarizer import summarize_results

__all__ = [
    # Classifier
    "IntentClassifier",
    # State
    "PipelineState",
    "PipelineServices",
    "create_initial_state",
    # Graph
    "build_graph",
    "TriagePipeline",
    # Summary
    "summarize_results",
]
