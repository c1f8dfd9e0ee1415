"""Language model collaborator: one prompt in, one validated object out."""

import logging
from typing import TypeVar

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from inbox_triage.config import Settings
from inbox_triage.errors import LLMError
from inbox_triage.retry import NO_RETRY, RetryPolicy

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class StructuredLLM:
    """Wraps a chat model so every call returns a schema instance or raises LLMError."""

    def __init__(self, chat_model: BaseChatModel, retry_policy: RetryPolicy = NO_RETRY) -> None:
        self.chat_model = chat_model
        self._retry = retry_policy

    @classmethod
    def from_settings(cls, settings: Settings, retry_policy: RetryPolicy = NO_RETRY) -> "StructuredLLM":
        """Build an OpenAI-backed client; retries are left to the RetryPolicy."""
        chat_model = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=settings.temperature,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )
        return cls(chat_model, retry_policy)

    def generate(self, prompt: str, schema: type[M]) -> M:
        """
        Run a prompt and parse the response into `schema`.

        Args:
            prompt: Fully formatted prompt.
            schema: Pydantic model the response must conform to.

        Returns:
            Validated schema instance.

        Raises:
            LLMError: If the call fails or the output does not validate.
        """
        structured = self.chat_model.with_structured_output(schema)

        try:
            result = self._retry.call(structured.invoke, [HumanMessage(content=prompt)])
        except Exception as e:
            logger.warning(f"{schema.__name__} generation failed: {e}")
            raise LLMError(f"{schema.__name__} generation failed: {e}") from e

        if isinstance(result, dict):
            try:
                result = schema.model_validate(result)
            except ValueError as e:
                raise LLMError(f"Invalid {schema.__name__} output: {e}") from e

        if not isinstance(result, schema):
            raise LLMError(f"Model returned no {schema.__name__}")

        return result
