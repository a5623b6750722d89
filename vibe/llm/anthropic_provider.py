"""Anthropic Claude provider implementation."""

import anthropic
from anthropic import Anthropic

from vibe.config import LLMProvider
from vibe.llm.base import BaseLLMProvider, LLMResult
from vibe.llm.exceptions import LLMError


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"

    def _classify_error(self, error: Exception) -> str:
        # APITimeoutError is a subclass of APIConnectionError
        if isinstance(error, anthropic.APITimeoutError):
            return "timeout"
        if isinstance(error, anthropic.APIConnectionError):
            return "connection"
        if isinstance(error, anthropic.AuthenticationError):
            return "auth"
        if isinstance(error, anthropic.RateLimitError):
            return "rate_limit"
        if isinstance(error, anthropic.BadRequestError) and "too long" in str(error):
            return "context_length"
        if isinstance(error, anthropic.InternalServerError):
            return "unavailable"
        return "other"

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        """Call the messages API.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For API failures or an empty reply.
        """
        client = Anthropic(api_key=self.get_api_key(), timeout=self.settings.request_timeout)

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self.settings.temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.AnthropicError as e:
            raise self.api_error(self._classify_error(e), e)

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise LLMError("No response from Anthropic")

        return LLMResult(
            text=text,
            model=self.model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
