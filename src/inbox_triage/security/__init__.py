"""Prompt and log sanitization helpers."""

from inbox_triage.security.sanitization import (
    redact_sensitive_for_logging,
    sanitize_email_content,
    sanitize_for_prompt,
    sanitize_sender,
)

__all__ = [
    "redact_sensitive_for_logging",
    "sanitize_email_content",
    "sanitize_for_prompt",
    "sanitize_sender",
]
