"""Base handler interface for per-intent actions."""

import logging
from abc import ABC, abstractmethod

from inbox_triage.errors import MailError
from inbox_triage.gmail.client import GmailClient
from inbox_triage.models import ActionResult, ClassifiedEmail, Intent

logger = logging.getLogger(__name__)


class BaseHandler(ABC):
    """
    Base class for the four action handlers.

    Subclasses implement `handle`. Calling the handler directly goes through
    `__call__`, which guarantees exactly one ActionResult per email even when
    `handle` raises.
    """

    def __init__(self, mail: GmailClient) -> None:
        self.mail = mail

    @property
    @abstractmethod
    def intent(self) -> Intent:
        """Intent this handler processes."""
        pass

    @property
    @abstractmethod
    def failure_action(self) -> str:
        """Action tag recorded when handling fails."""
        pass

    @abstractmethod
    def handle(self, item: ClassifiedEmail) -> ActionResult:
        """Process one classified email."""
        pass

    def on_error(self, item: ClassifiedEmail, error: Exception) -> ActionResult:
        """Result recorded when `handle` raised."""
        return ActionResult.fail(item.email.message_id, self.failure_action, str(error))

    def mark_read(self, message_id: str) -> bool:
        """Mark a message read; failures are logged, not raised."""
        try:
            return self.mail.mark_read(message_id)
        except MailError as e:
            logger.warning(f"Could not mark {message_id} as read: {e}")
            return False

    def __call__(self, item: ClassifiedEmail) -> ActionResult:
        """Handle an email, converting any exception into a result."""
        try:
            return self.handle(item)
        except Exception as e:
            logger.exception(
                f"{type(self).__name__} failed on {item.email.message_id}: {e}"
            )
            return self.on_error(item, e)
