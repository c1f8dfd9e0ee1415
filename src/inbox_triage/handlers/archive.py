"""Archive handler: remove from inbox and mark read. No model calls."""

import logging

from inbox_triage.errors import MailError
from inbox_triage.handlers.base import BaseHandler
from inbox_triage.models import ActionResult, ClassifiedEmail, Intent

logger = logging.getLogger(__name__)

ARCHIVED = "archived"
ARCHIVE_FAILED = "archive_failed"


class ArchiveHandler(BaseHandler):
    """Archives emails classified as ARCHIVE."""

    intent = Intent.ARCHIVE
    failure_action = ARCHIVE_FAILED

    def handle(self, item: ClassifiedEmail) -> ActionResult:
        message_id = item.email.message_id

        try:
            self.mail.remove_from_inbox(message_id)
            self.mail.mark_read(message_id)
        except MailError as e:
            logger.warning(f"Archiving {message_id} failed: {e}")
            return ActionResult.fail(message_id, ARCHIVE_FAILED, str(e))

        logger.info(f"Archived {message_id}")
        return ActionResult.ok(message_id, ARCHIVED)
