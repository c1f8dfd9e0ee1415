"""
Gmail API client for email operations.

Handles fetching unread messages, sending threaded replies, marking
messages read and archiving them. This is the mail collaborator used by
every stage of the pipeline.
"""

import base64
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.mime.text import MIMEText

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from inbox_triage.errors import MailError
from inbox_triage.models import EmailMessage
from inbox_triage.retry import NO_RETRY, RetryPolicy

logger = logging.getLogger(__name__)

UNREAD_QUERY = "is:unread in:inbox"


@dataclass
class SendResult:
    """Result of sending a message."""

    message_id: str
    success: bool = True


class GmailClient:
    """
    Gmail API client for email operations.

    Provides methods to:
    - List unread inbox messages
    - Fetch a full message
    - Send replies (properly threaded)
    - Mark messages read and remove them from the inbox
    """

    def __init__(
        self,
        gmail_service: Resource,
        retry_policy: RetryPolicy = NO_RETRY,
    ) -> None:
        """
        Initialize the Gmail client.

        Args:
            gmail_service: Authenticated Gmail API service.
            retry_policy: Retry policy applied to every API call.
        """
        self.service = gmail_service
        self._retry = retry_policy

    def _execute(self, request, what: str) -> dict:
        """Execute an API request under the retry policy."""
        try:
            return self._retry.call(request.execute)
        except HttpError as e:
            logger.error(f"Gmail API error while trying to {what}: {e}")
            raise MailError(f"Failed to {what}: {e}") from e

    def list_unread(self, limit: int) -> list[EmailMessage]:
        """
        Fetch up to `limit` unread inbox messages, most recent first.

        Messages that fail to load individually are logged and skipped.

        Args:
            limit: Maximum number of messages to return.

        Returns:
            List of EmailMessage objects.
        """
        if limit <= 0:
            return []

        response = self._execute(
            self.service.users()
            .messages()
            .list(userId="me", q=UNREAD_QUERY, maxResults=limit),
            "list unread messages",
        )

        refs = response.get("messages", [])[:limit]
        emails = []

        for ref in refs:
            try:
                emails.append(self.get_message(ref["id"]))
            except MailError as e:
                logger.warning(f"Skipping message {ref['id']}: {e}")

        logger.info(f"Fetched {len(emails)} unread message(s)")
        return emails

    def get_message(self, message_id: str) -> EmailMessage:
        """
        Fetch a single email message.

        Args:
            message_id: The Gmail message ID.

        Returns:
            Parsed EmailMessage.
        """
        message = self._execute(
            self.service.users()
            .messages()
            .get(userId="me", id=message_id, format="full"),
            f"fetch message {message_id}",
        )
        return self._parse_message(message)

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        thread_id: str | None = None,
        in_reply_to: str | None = None,
        references: str | None = None,
    ) -> SendResult:
        """
        Send an email, threaded when thread_id/in_reply_to are given.

        Args:
            to: Recipient email address.
            subject: Subject (prefixed with "Re:" when replying).
            body: Plain text body.
            thread_id: Gmail thread to send into.
            in_reply_to: Message-ID header of the email being replied to.
            references: References header of the email being replied to.

        Returns:
            SendResult with the sent message ID.
        """
        if (thread_id or in_reply_to) and not subject.lower().startswith("re:"):
            subject = f"Re: {subject}"

        message = MIMEText(body, _subtype="plain", _charset="utf-8")
        message["to"] = to
        message["subject"] = subject

        # Threading headers
        if in_reply_to:
            message["In-Reply-To"] = in_reply_to
            message["References"] = (
                f"{references} {in_reply_to}" if references else in_reply_to
            )

        raw = base64.urlsafe_b64encode(message.as_bytes()).decode("utf-8")
        request_body = {"raw": raw}
        if thread_id:
            request_body["threadId"] = thread_id

        result = self._execute(
            self.service.users().messages().send(userId="me", body=request_body),
            f"send message to {to}",
        )

        sent_id = result.get("id", "")
        logger.info(f"Sent message {sent_id} (thread {thread_id})")
        return SendResult(message_id=sent_id, success=True)

    def mark_read(self, message_id: str) -> bool:
        """
        Mark a message as read. Safe to repeat.

        Args:
            message_id: The Gmail message ID.

        Returns:
            True on success.
        """
        self._modify(message_id, remove_label_ids=["UNREAD"], what="mark read")
        logger.debug(f"Marked message {message_id} as read")
        return True

    def remove_from_inbox(self, message_id: str) -> bool:
        """
        Archive a message by removing the INBOX label. Safe to repeat.

        Args:
            message_id: The Gmail message ID.

        Returns:
            True on success.
        """
        self._modify(message_id, remove_label_ids=["INBOX"], what="archive")
        logger.debug(f"Archived message {message_id}")
        return True

    def _modify(self, message_id: str, remove_label_ids: list[str], what: str) -> None:
        self._execute(
            self.service.users()
            .messages()
            .modify(
                userId="me",
                id=message_id,
                body={"removeLabelIds": remove_label_ids},
            ),
            f"{what} message {message_id}",
        )

    def _parse_message(self, message: dict) -> EmailMessage:
        """
        Parse a Gmail API message into EmailMessage.

        Args:
            message: Raw message from Gmail API.

        Returns:
            Parsed EmailMessage.
        """
        headers = {
            h["name"].lower(): h["value"]
            for h in message.get("payload", {}).get("headers", [])
        }

        from_header = headers.get("from", "")
        from_name, from_email = self._parse_email_address(from_header)

        return EmailMessage(
            message_id=message["id"],
            thread_id=message.get("threadId"),
            subject=headers.get("subject"),
            sender=from_header,
            sender_email=from_email,
            sender_name=from_name,
            body=self._extract_body(message.get("payload", {})),
            received_at=self._parse_internal_date(message.get("internalDate")),
            rfc_message_id=headers.get("message-id"),
            references=headers.get("references"),
        )

    def _parse_internal_date(self, internal_date: str | None) -> datetime | None:
        """Convert Gmail's epoch-millisecond internalDate to a datetime."""
        if not internal_date:
            return None
        try:
            return datetime.fromtimestamp(int(internal_date) / 1000, tz=timezone.utc)
        except (TypeError, ValueError):
            return None

    def _parse_email_address(self, address: str) -> tuple[str, str]:
        """
        Parse an email address header into name and email.

        Examples:
            "John Smith <john@example.com>" -> ("John Smith", "john@example.com")
            "john@example.com" -> ("", "john@example.com")
        """
        match = re.match(r'^"?([^"<]*)"?\s*<([^>]+)>$', address.strip())

        if match:
            return match.group(1).strip(), match.group(2).strip()

        return "", address.strip()

    def _extract_body(self, payload: dict) -> str:
        """
        Extract the plain text body from an email payload.

        Prefers text/plain parts, recursing into nested multiparts, and
        falls back to tag-stripped HTML.
        """
        body_data = payload.get("body", {}).get("data")
        if body_data:
            return _decode(body_data)

        parts = payload.get("parts", [])

        for part in parts:
            if part.get("mimeType") == "text/plain":
                data = part.get("body", {}).get("data")
                if data:
                    return _decode(data)

            if part.get("parts"):
                body = self._extract_body(part)
                if body:
                    return body

        for part in parts:
            if part.get("mimeType") == "text/html":
                data = part.get("body", {}).get("data")
                if data:
                    return re.sub(r"<[^>]+>", "", _decode(data))

        return ""


def _decode(data: str) -> str:
    return base64.urlsafe_b64decode(data).decode("utf-8", errors="replace")
