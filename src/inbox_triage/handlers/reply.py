"""Reply handler: draft a response, send it in-thread, mark the original read."""

import logging

from inbox_triage.errors import CollaboratorError
from inbox_triage.gmail.client import GmailClient
from inbox_triage.handlers.base import BaseHandler
from inbox_triage.models import ActionResult, ClassifiedEmail, Intent
from inbox_triage.prompts.templates import REPLY_GENERATION_PROMPT
from inbox_triage.security.sanitization import sanitize_email_content, sanitize_sender
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import ReplyDraft
from inbox_triage.user_config import UserConfig, append_signature

logger = logging.getLogger(__name__)

REPLY_SENT = "reply_sent"
REPLY_FAILED = "reply_failed"


class ReplyHandler(BaseHandler):
    """Sends an LLM-drafted reply to emails classified as REPLY."""

    intent = Intent.REPLY
    failure_action = REPLY_FAILED

    def __init__(
        self,
        mail: GmailClient,
        llm: StructuredLLM,
        user_config: UserConfig | None = None,
    ) -> None:
        super().__init__(mail)
        self._llm = llm
        self._user_config = user_config or UserConfig()

    def handle(self, item: ClassifiedEmail) -> ActionResult:
        """
        Generate and send a reply.

        Generation or send failures yield `reply_failed`. A mark-read
        failure after a successful send is only logged.

        Args:
            item: Email classified as REPLY.

        Returns:
            `reply_sent` or `reply_failed` result.
        """
        email = item.email

        try:
            draft = self._draft(item)
            body = append_signature(draft.body, self._user_config.signature)
            self.mail.send(
                to=email.reply_address,
                subject=email.subject or draft.subject,
                body=body,
                thread_id=email.thread_id,
                in_reply_to=email.rfc_message_id,
                references=email.references,
            )
        except CollaboratorError as e:
            logger.warning(f"Reply to {email.message_id} failed: {e}")
            return ActionResult.fail(email.message_id, REPLY_FAILED, str(e))

        logger.info(f"Reply sent for {email.message_id} (tone: {draft.tone})")
        self.mark_read(email.message_id)
        return ActionResult.ok(email.message_id, REPLY_SENT)

    def _draft(self, item: ClassifiedEmail) -> ReplyDraft:
        email = item.email
        subject, body = sanitize_email_content(email.subject, email.body)
        prompt = REPLY_GENERATION_PROMPT.format(
            user_email=self._user_config.email or "the recipient",
            tone=self._user_config.preferences.default_tone,
            sender=sanitize_sender(email.sender),
            subject=subject or "(no subject)",
            body=body,
        )
        return self._llm.generate(prompt, ReplyDraft)
