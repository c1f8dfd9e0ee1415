"""
Pipeline state and injected services for the LangGraph triage graph.

PipelineState flows through the nodes. Collaborators are not part of the
state: they travel in the run config as a PipelineServices object.
"""

import operator
import time
from dataclasses import dataclass, field
from typing import Annotated, TypedDict

from langchain_core.runnables import RunnableConfig

from inbox_triage.agent.classifier import IntentClassifier
from inbox_triage.gmail.client import GmailClient
from inbox_triage.handlers import HandlerSet
from inbox_triage.models import (
    ActionResult,
    ClassifiedEmail,
    EmailMessage,
    Intent,
    RunSummary,
)
from inbox_triage.user_config import UserConfig


class PipelineState(TypedDict):
    """
    State that flows through the triage graph.

    `results` and `timed_out` are written by the four branch nodes in the
    same step, so they merge through reducers.
    """

    # ==========================================================================
    # INPUT (set by TriagePipeline.run)
    # ==========================================================================
    max_emails: int
    deadline: float | None  # time.monotonic() value, None = no timeout

    # ==========================================================================
    # FETCH / CLASSIFY
    # ==========================================================================
    emails: list[EmailMessage]
    groups: dict[Intent, list[ClassifiedEmail]]  # One disjoint group per intent

    # ==========================================================================
    # BRANCHES (merged across the four concurrent branch nodes)
    # ==========================================================================
    results: Annotated[list[ActionResult], operator.add]
    timed_out: Annotated[bool, operator.or_]

    # ==========================================================================
    # OUTCOME (set by SUMMARIZE node)
    # ==========================================================================
    summary: RunSummary | None


@dataclass
class PipelineServices:
    """Collaborators the nodes need, injected through the run config."""

    mail: GmailClient
    classifier: IntentClassifier
    handlers: HandlerSet
    user_config: UserConfig = field(default_factory=UserConfig)


def create_initial_state(max_emails: int, timeout_seconds: float | None = None) -> PipelineState:
    """
    Create the initial PipelineState for one run.

    Args:
        max_emails: Upper bound on messages fetched.
        timeout_seconds: Run budget; None disables the deadline.

    Returns:
        Initialized PipelineState.
    """
    deadline = time.monotonic() + timeout_seconds if timeout_seconds is not None else None

    return PipelineState(
        max_emails=max_emails,
        deadline=deadline,
        emails=[],
        groups={intent: [] for intent in Intent},
        results=[],
        timed_out=False,
        summary=None,
    )


def get_services(config: RunnableConfig) -> PipelineServices:
    """Pull the injected services out of a node's run config."""
    return config["configurable"]["services"]


def deadline_passed(deadline: float | None) -> bool:
    """True once the run deadline, if any, has been reached."""
    return deadline is not None and time.monotonic() >= deadline
