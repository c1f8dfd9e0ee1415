"""
FETCH node - Load unread emails.

Any failure degrades to an empty batch so the run still completes.
"""

import logging

from langchain_core.runnables import RunnableConfig

from inbox_triage.agent.state import PipelineState, get_services

logger = logging.getLogger(__name__)


def fetch_node(state: PipelineState, config: RunnableConfig) -> dict:
    """
    Fetch up to max_emails unread messages.

    Args:
        state: Current pipeline state with max_emails.
        config: Run config carrying PipelineServices.

    Returns:
        Updated state fields: emails.
    """
    max_emails = state["max_emails"]
    if max_emails == 0:
        logger.info("max_emails is 0, nothing to fetch")
        return {"emails": []}

    mail = get_services(config).mail

    try:
        emails = mail.list_unread(max_emails)[:max_emails]
    except Exception as e:
        logger.exception(f"Fetching unread emails failed, continuing with none: {e}")
        return {"emails": []}

    logger.info(f"Fetched {len(emails)} unread email(s)")
    return {"emails": emails}
