"""Prompt templates for LLM calls and outgoing email bodies."""
