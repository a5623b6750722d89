"""OpenAI GPT provider implementation."""

import openai
from openai import OpenAI

from vibe.config import LLMProvider
from vibe.llm.base import BaseLLMProvider, LLMResult
from vibe.llm.exceptions import LLMError


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"

    def _classify_error(self, error: Exception) -> str:
        # APITimeoutError is a subclass of APIConnectionError
        if isinstance(error, openai.APITimeoutError):
            return "timeout"
        if isinstance(error, openai.APIConnectionError):
            return "connection"
        if isinstance(error, openai.AuthenticationError):
            return "auth"
        if isinstance(error, openai.RateLimitError):
            return "quota" if "insufficient_quota" in str(error) else "rate_limit"
        if isinstance(error, openai.BadRequestError) and "context_length_exceeded" in str(error):
            return "context_length"
        if isinstance(error, openai.InternalServerError):
            return "unavailable"
        return "other"

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> LLMResult:
        """Call the chat completions API.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For API failures or an empty reply.
        """
        client = OpenAI(api_key=self.get_api_key(), timeout=self.settings.request_timeout)

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self.settings.temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.OpenAIError as e:
            raise self.api_error(self._classify_error(e), e)

        if not response.choices or not response.choices[0].message.content:
            raise LLMError("No response from OpenAI")

        usage = response.usage
        return LLMResult(
            text=response.choices[0].message.content,
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
