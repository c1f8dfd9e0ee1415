"""
Email intent classification.

Asks the language model to place an email into one of four intents:

- REPLY: sender expects a written response
- MEETING: sender wants to schedule time
- ARCHIVE: informational only
- HUMAN_REVIEW: sensitive, complex or unclear

The classifier is biased toward HUMAN_REVIEW: low-confidence answers are
escalated rather than acted on.
"""

import logging

from inbox_triage.errors import ClassificationError, LLMError
from inbox_triage.models import Intent, IntentClassification, Urgency
from inbox_triage.prompts.templates import INTENT_CLASSIFICATION_PROMPT
from inbox_triage.security.sanitization import sanitize_email_content, sanitize_sender
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import IntentDecision

logger = logging.getLogger(__name__)


class IntentClassifier:
    """Maps (subject, sender, body) to an IntentClassification. Stateless."""

    def __init__(self, llm: StructuredLLM, min_confidence: float = 0.5) -> None:
        """
        Initialize the classifier.

        Args:
            llm: Structured language model client.
            min_confidence: Reported confidence below this escalates to human review.
        """
        self._llm = llm
        self._min_confidence = min_confidence

    def classify(self, subject: str | None, sender: str, body: str) -> IntentClassification:
        """
        Classify an email.

        Args:
            subject: Email subject (may be missing).
            sender: Sender address or From header.
            body: Email body text.

        Returns:
            IntentClassification for the email.

        Raises:
            ClassificationError: If the model call fails or its output does not validate.
        """
        safe_subject, safe_body = sanitize_email_content(subject, body)
        prompt = INTENT_CLASSIFICATION_PROMPT.format(
            sender=sanitize_sender(sender),
            subject=safe_subject or "(no subject)",
            body=safe_body or "(empty body)",
        )

        try:
            decision = self._llm.generate(prompt, IntentDecision)
        except LLMError as e:
            raise ClassificationError(str(e)) from e

        return self._to_classification(decision)

    def _to_classification(self, decision: IntentDecision) -> IntentClassification:
        intent = Intent(decision.intent)
        reasoning = decision.reasoning
        urgency = Urgency(decision.urgency) if decision.urgency else None

        if (
            intent is not Intent.HUMAN_REVIEW
            and decision.confidence is not None
            and decision.confidence < self._min_confidence
        ):
            logger.info(
                f"Low confidence {decision.confidence:.2f} for '{intent.value}', "
                f"escalating to human review"
            )
            reasoning = (
                f"low confidence ({decision.confidence:.2f}) for {intent.value}: {reasoning}"
            )
            intent = Intent.HUMAN_REVIEW

        return IntentClassification(
            intent=intent,
            reasoning=reasoning,
            confidence=decision.confidence,
            urgency=urgency,
        )
