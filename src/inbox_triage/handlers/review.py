"""
Human-review handler.

Escalated emails are summarized for an operator (when a model is
available), marked read so later runs skip them, and announced on the
`inbox_triage.review` logger, which acts as the notification sink.
This handler never reports failure.
"""

import logging

from inbox_triage.errors import LLMError
from inbox_triage.gmail.client import GmailClient
from inbox_triage.handlers.base import BaseHandler
from inbox_triage.models import ActionResult, ClassifiedEmail, Intent
from inbox_triage.prompts.templates import HUMAN_REVIEW_PROMPT
from inbox_triage.security.sanitization import (
    redact_sensitive_for_logging,
    sanitize_email_content,
    sanitize_sender,
)
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import ReviewSummary

logger = logging.getLogger(__name__)
review_logger = logging.getLogger("inbox_triage.review")

FLAGGED_FOR_REVIEW = "flagged_for_review"


class HumanReviewHandler(BaseHandler):
    """Flags emails classified as HUMAN_REVIEW for an operator."""

    intent = Intent.HUMAN_REVIEW
    failure_action = FLAGGED_FOR_REVIEW

    def __init__(self, mail: GmailClient, llm: StructuredLLM | None = None) -> None:
        super().__init__(mail)
        self._llm = llm

    def handle(self, item: ClassifiedEmail) -> ActionResult:
        email = item.email

        summary = self._summarize(item)
        self.mark_read(email.message_id)
        self._notify(item, summary)

        return ActionResult.ok(email.message_id, FLAGGED_FOR_REVIEW)

    def on_error(self, item: ClassifiedEmail, error: Exception) -> ActionResult:
        # Fall back to a flag-only notification
        self._notify(item, None)
        return ActionResult.ok(item.email.message_id, FLAGGED_FOR_REVIEW)

    def _summarize(self, item: ClassifiedEmail) -> ReviewSummary | None:
        if self._llm is None:
            return None

        email = item.email
        subject, body = sanitize_email_content(email.subject, email.body)
        prompt = HUMAN_REVIEW_PROMPT.format(
            reason=item.classification.reasoning,
            sender=sanitize_sender(email.sender),
            subject=subject or "(no subject)",
            body=body,
        )

        try:
            return self._llm.generate(prompt, ReviewSummary)
        except LLMError as e:
            logger.warning(f"Review summary for {email.message_id} failed: {e}")
            return None

    def _notify(self, item: ClassifiedEmail, summary: ReviewSummary | None) -> None:
        email = item.email
        subject = redact_sensitive_for_logging(email.subject or "(no subject)")

        if summary is None:
            review_logger.warning(
                f"Review needed for {email.message_id} from {email.reply_address}: "
                f"{subject}. Reason: {item.classification.reasoning}"
            )
            return

        review_logger.warning(
            f"Review needed for {email.message_id} from {email.reply_address}: "
            f"{subject}. Urgency: {summary.urgency}. {summary.summary} "
            f"Suggested action: {summary.suggested_action}"
        )
