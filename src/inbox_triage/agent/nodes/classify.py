"""
CLASSIFY node - Intent classification and partitioning.

Each email is classified on its own; a failure only affects that email,
which falls back to HUMAN_REVIEW. The classified emails are then split
into one group per intent for the branch nodes.
"""

import logging
from typing import assert_never

from langchain_core.runnables import RunnableConfig

from inbox_triage.agent.state import (
    PipelineServices,
    PipelineState,
    deadline_passed,
    get_services,
)
from inbox_triage.models import (
    ClassifiedEmail,
    EmailMessage,
    Intent,
    IntentClassification,
)
from inbox_triage.retry import run_deadline
from inbox_triage.security.sanitization import redact_sensitive_for_logging

logger = logging.getLogger(__name__)

ALWAYS_REVIEW_REASON = "sender is on the always-review list"


def classify_email(services: PipelineServices, email: EmailMessage) -> IntentClassification:
    """
    Classify one email, never raising.

    Args:
        services: Injected collaborators.
        email: Email to classify.

    Returns:
        The classifier's answer, or a HUMAN_REVIEW fallback.
    """
    if services.user_config.requires_review(email.reply_address):
        return IntentClassification(intent=Intent.HUMAN_REVIEW, reasoning=ALWAYS_REVIEW_REASON)

    try:
        return services.classifier.classify(
            subject=email.subject,
            sender=email.sender,
            body=email.body,
        )
    except Exception as e:
        logger.warning(f"Classification of {email.message_id} failed: {e}")
        return IntentClassification.fallback(str(e))


def partition_by_intent(items: list[ClassifiedEmail]) -> dict[Intent, list[ClassifiedEmail]]:
    """
    Split classified emails into one group per intent.

    Every intent gets a group (possibly empty) and input order is kept
    within each group.
    """
    groups: dict[Intent, list[ClassifiedEmail]] = {intent: [] for intent in Intent}
    for item in items:
        match item.intent:
            case Intent.REPLY:
                groups[Intent.REPLY].append(item)
            case Intent.MEETING:
                groups[Intent.MEETING].append(item)
            case Intent.ARCHIVE:
                groups[Intent.ARCHIVE].append(item)
            case Intent.HUMAN_REVIEW:
                groups[Intent.HUMAN_REVIEW].append(item)
            case _:
                assert_never(item.intent)
    return groups


def classify_node(state: PipelineState, config: RunnableConfig) -> dict:
    """
    Classify every fetched email and group them by intent.

    Args:
        state: Current pipeline state with emails.
        config: Run config carrying PipelineServices.

    Returns:
        Updated state fields: groups, timed_out.
    """
    services = get_services(config)
    emails = state.get("emails", [])

    deadline = state.get("deadline")
    classified = []
    timed_out = False

    with run_deadline(deadline):
        for email in emails:
            if deadline_passed(deadline):
                logger.warning(
                    f"Run deadline reached after classifying {len(classified)} of {len(emails)} email(s)"
                )
                timed_out = True
                break

            classification = classify_email(services, email)
            logger.info(
                f"Classified {email.message_id} "
                f"({redact_sensitive_for_logging(email.subject or '(no subject)')[:50]}) as "
                f"{classification.intent.value}: {classification.reasoning}"
            )
            classified.append(ClassifiedEmail(email=email, classification=classification))

    groups = partition_by_intent(classified)
    logger.info(
        "Intent groups: "
        + ", ".join(f"{intent.value}={len(items)}" for intent, items in groups.items())
    )

    return {"groups": groups, "timed_out": timed_out}
