"""
TriagePipeline: the entry point for one triage run.

Wires Settings into the collaborator clients, handlers and classifier,
and runs the compiled graph with those services injected.
"""

import logging

from inbox_triage.agent.classifier import IntentClassifier
from inbox_triage.agent.graph import build_graph
from inbox_triage.agent.state import PipelineServices, create_initial_state
from inbox_triage.agent.summarizer import summarize_results
from inbox_triage.calendar.client import CalendarClient
from inbox_triage.config import Settings
from inbox_triage.gmail.auth import build_calendar_service, build_gmail_service, load_credentials
from inbox_triage.gmail.client import GmailClient
from inbox_triage.handlers import (
    ArchiveHandler,
    HandlerSet,
    HumanReviewHandler,
    MeetingHandler,
    ReplyHandler,
)
from inbox_triage.models import RunSummary
from inbox_triage.retry import RetryPolicy
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.user_config import UserConfig, load_user_config

logger = logging.getLogger(__name__)


class TriagePipeline:
    """Runs fetch, classify, branch and summarize over unread email."""

    def __init__(
        self,
        services: PipelineServices,
        max_emails: int = 10,
        run_timeout_seconds: float | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            services: Collaborators injected into every node.
            max_emails: Default batch size for `run`.
            run_timeout_seconds: Default run budget; None disables it.
        """
        self.services = services
        self.max_emails = max_emails
        self.run_timeout_seconds = run_timeout_seconds
        self.graph = build_graph()

    @classmethod
    def from_settings(cls, settings: Settings, user_config: UserConfig | None = None) -> "TriagePipeline":
        """
        Build a pipeline with real Gmail, Calendar and OpenAI clients.

        Raises:
            FileNotFoundError: If the Google token file is missing.
        """
        creds = load_credentials(settings.gmail_token_path)
        retry_policy = RetryPolicy.from_settings(settings)

        mail = GmailClient(build_gmail_service(creds), retry_policy=retry_policy)
        calendar = CalendarClient(
            build_calendar_service(creds),
            calendar_id=settings.calendar_id,
            timezone=settings.timezone,
            retry_policy=retry_policy,
        )
        llm = StructuredLLM.from_settings(settings, retry_policy)

        if user_config is None:
            user_config = load_user_config(settings.user_config_path)

        handlers = HandlerSet(
            reply=ReplyHandler(mail, llm, user_config),
            meeting=MeetingHandler(mail, llm, calendar, settings),
            archive=ArchiveHandler(mail),
            human_review=HumanReviewHandler(mail, llm),
        )
        services = PipelineServices(
            mail=mail,
            classifier=IntentClassifier(llm, min_confidence=settings.min_classification_confidence),
            handlers=handlers,
            user_config=user_config,
        )

        return cls(
            services,
            max_emails=settings.max_emails,
            run_timeout_seconds=settings.run_timeout_seconds,
        )

    def run(self, max_emails: int | None = None, timeout_seconds: float | None = None) -> RunSummary:
        """
        Triage up to `max_emails` unread emails.

        Per-email and per-stage failures are recorded in the summary rather
        than raised.

        Args:
            max_emails: Batch size; defaults to the pipeline's max_emails.
            timeout_seconds: Run budget; defaults to run_timeout_seconds.

        Returns:
            RunSummary for the run.

        Raises:
            ValueError: If max_emails or timeout_seconds is negative.
        """
        if max_emails is None:
            max_emails = self.max_emails
        if max_emails < 0:
            raise ValueError(f"max_emails must be >= 0, got {max_emails}")
        if timeout_seconds is None:
            timeout_seconds = self.run_timeout_seconds
        if timeout_seconds is not None and timeout_seconds < 0:
            raise ValueError(f"timeout_seconds must be >= 0, got {timeout_seconds}")

        logger.info(f"Starting triage run (max_emails={max_emails}, timeout={timeout_seconds})")
        state = create_initial_state(max_emails, timeout_seconds)

        try:
            final_state = self.graph.invoke(
                state,
                config={"configurable": {"services": self.services}},
            )
        except Exception as e:
            logger.exception(f"Triage graph execution failed: {e}")
            return summarize_results([])

        summary = final_state["summary"]
        logger.info(f"Run finished: {summary.summary}")
        return summary
