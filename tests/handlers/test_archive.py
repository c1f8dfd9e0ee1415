"""Tests for the archive handler."""

import pytest

from conftest import classified, make_email
from inbox_triage.errors import MailError
from inbox_triage.handlers.archive import ARCHIVE_FAILED, ARCHIVED, ArchiveHandler
from inbox_triage.models import Intent


@pytest.fixture
def handler(mock_mail) -> ArchiveHandler:
    return ArchiveHandler(mock_mail)


@pytest.fixture
def item():
    return classified(make_email("m1"), Intent.ARCHIVE)


class TestArchiveHandler:
    """Tests for ArchiveHandler."""

    def test_archives_and_marks_read(self, handler, mock_mail, item) -> None:
        result = handler(item)

        assert result.success is True
        assert result.action == ARCHIVED
        mock_mail.remove_from_inbox.assert_called_once_with("m1")
        mock_mail.mark_read.assert_called_once_with("m1")

    def test_archiving_twice_succeeds(self, handler, mock_mail, item) -> None:
        first = handler(item)
        second = handler(item)

        assert first == second
        assert second.success is True
        assert mock_mail.remove_from_inbox.call_count == 2

    def test_archive_failure(self, handler, mock_mail, item) -> None:
        mock_mail.remove_from_inbox.side_effect = MailError("not found")

        result = handler(item)

        assert result.success is False
        assert result.action == ARCHIVE_FAILED
        assert result.error == "not found"

    def test_mark_read_failure_fails_archive(self, handler, mock_mail, item) -> None:
        mock_mail.mark_read.side_effect = MailError("label error")

        result = handler(item)

        assert result.success is False
        assert result.action == ARCHIVE_FAILED
