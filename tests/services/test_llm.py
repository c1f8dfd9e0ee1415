"""Tests for the structured LLM wrapper."""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest
from langchain_core.messages import HumanMessage

from inbox_triage.errors import LLMError
from inbox_triage.retry import RetryPolicy, run_deadline
from inbox_triage.services.llm import StructuredLLM
from inbox_triage.services.schemas import IntentDecision, ReviewSummary


@pytest.fixture
def chat_model():
    return MagicMock()


@pytest.fixture
def structured(chat_model):
    """The runnable returned by with_structured_output."""
    return chat_model.with_structured_output.return_value


class TestGenerate:
    """Tests for StructuredLLM.generate."""

    def test_returns_schema_instance(self, chat_model, structured):
        decision = IntentDecision(intent="archive", reasoning="newsletter")
        structured.invoke.return_value = decision

        result = StructuredLLM(chat_model).generate("classify this", IntentDecision)

        assert result is decision
        chat_model.with_structured_output.assert_called_once_with(IntentDecision)
        messages = structured.invoke.call_args.args[0]
        assert messages == [HumanMessage(content="classify this")]

    def test_validates_dict_output(self, chat_model, structured):
        structured.invoke.return_value = {"summary": "Legal question", "suggested_action": "Call"}

        result = StructuredLLM(chat_model).generate("summarize", ReviewSummary)

        assert isinstance(result, ReviewSummary)
        assert result.urgency == "medium"

    def test_invalid_dict_output_raises(self, chat_model, structured):
        structured.invoke.return_value = {"intent": "delete", "reasoning": "spam"}

        with pytest.raises(LLMError):
            StructuredLLM(chat_model).generate("classify", IntentDecision)

    def test_missing_output_raises(self, chat_model, structured):
        structured.invoke.return_value = None

        with pytest.raises(LLMError):
            StructuredLLM(chat_model).generate("classify", IntentDecision)

    def test_call_failure_raises(self, chat_model, structured):
        structured.invoke.side_effect = RuntimeError("boom")

        with pytest.raises(LLMError, match="boom"):
            StructuredLLM(chat_model).generate("classify", IntentDecision)

    def test_timeouts_are_retried(self, chat_model, structured):
        decision = IntentDecision(intent="reply", reasoning="question")
        structured.invoke.side_effect = [TimeoutError("slow"), decision]
        llm = StructuredLLM(chat_model, RetryPolicy(max_attempts=2, sleep=MagicMock()))

        assert llm.generate("classify", IntentDecision) is decision
        assert structured.invoke.call_count == 2

    def test_timeout_after_retries_raises(self, chat_model, structured):
        structured.invoke.side_effect = TimeoutError("slow")
        llm = StructuredLLM(chat_model, RetryPolicy(max_attempts=2, sleep=MagicMock()))

        with pytest.raises(LLMError):
            llm.generate("classify", IntentDecision)
        assert structured.invoke.call_count == 2

    def test_request_timeout_is_not_retried_past_run_deadline(self, chat_model, structured):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        structured.invoke.side_effect = openai.APITimeoutError(request=request)
        sleep = MagicMock()
        llm = StructuredLLM(chat_model, RetryPolicy(max_attempts=3, sleep=sleep, clock=lambda: 50.0))

        with run_deadline(40.0):
            with pytest.raises(LLMError):
                llm.generate("classify", IntentDecision)

        structured.invoke.assert_called_once()
        sleep.assert_not_called()


class TestFromSettings:
    """Tests for building the OpenAI-backed client."""

    def test_builds_chat_openai_without_client_retries(self, settings):
        with patch("inbox_triage.services.llm.ChatOpenAI") as mock_chat:
            llm = StructuredLLM.from_settings(settings)

        mock_chat.assert_called_once_with(
            model=settings.openai_model,
            api_key="test-api-key",
            temperature=settings.temperature,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
        assert llm.chat_model is mock_chat.return_value
