"""Inbox Triage - LLM-driven triage of unread Gmail."""

__version__ = "0.1.0"
