"""
Action handlers, one per intent.

HandlerSet bundles the four handlers; `for_intent` is the single dispatch
point from intent to handler.
"""

from dataclasses import dataclass
from typing import assert_never

from inbox_triage.handlers.archive import ArchiveHandler
from inbox_triage.handlers.base import BaseHandler
from inbox_triage.handlers.meeting import MeetingHandler
from inbox_triage.handlers.reply import ReplyHandler
from inbox_triage.handlers.review import HumanReviewHandler
from inbox_triage.models import Intent


@dataclass
class HandlerSet:
    """The four action handlers used by a pipeline."""

    reply: BaseHandler
    meeting: BaseHandler
    archive: BaseHandler
    human_review: BaseHandler

    def for_intent(self, intent: Intent) -> BaseHandler:
        """Handler responsible for an intent."""
        match intent:
            case Intent.REPLY:
                return self.reply
            case Intent.MEETING:
                return self.meeting
            case Intent.ARCHIVE:
                return self.archive
            case Intent.HUMAN_REVIEW:
                return self.human_review
            case _:
                assert_never(intent)


__all__ = [
    "ArchiveHandler",
    "BaseHandler",
    "HandlerSet",
    "HumanReviewHandler",
    "MeetingHandler",
    "ReplyHandler",
]
