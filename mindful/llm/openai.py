"""OpenAI chat completions provider."""

import logging
import os

import openai

from ..errors import MissingCredentialError, UpstreamCallError
from .base import BaseLLMProvider, Message, CompletionResult

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseLLMProvider):
    """LLM provider using the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4",
        max_tokens: int | None = None,
        base_url: str | None = None,
        env_key: str = "OPENAI_API_KEY",
        client: openai.AsyncOpenAI | None = None,
    ):
        """Initialize OpenAI provider.

        Args:
            api_key: API key (defaults to env_key env var)
            model: Model to use
            max_tokens: Maximum tokens in response (None leaves it to the API)
            base_url: Optional base URL for OpenAI-compatible APIs (e.g. OpenRouter)
            env_key: Environment variable name for the API key
            client: Preconfigured client, mainly for tests
        """
        super().__init__(model=model, max_tokens=max_tokens)
        self.api_key = api_key or os.environ.get(env_key)
        self.base_url = base_url

        if not self.api_key:
            raise MissingCredentialError(
                f"API key required. Set {env_key} environment variable "
                "or pass api_key parameter."
            )

        self._client = client

    def _get_client(self) -> openai.AsyncOpenAI:
        """Get or create OpenAI client."""
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
            )
        return self._client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Generate a completion using the OpenAI API."""
        client = self._get_client()

        openai_messages = []
        if system:
            openai_messages.append({"role": "system", "content": system})
        for msg in messages:
            openai_messages.append({"role": msg.role, "content": msg.content})

        kwargs = dict(model=self.model, messages=openai_messages)
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens or self.max_tokens:
            kwargs["max_tokens"] = max_tokens or self.max_tokens

        try:
            response = await client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            raise UpstreamCallError(
                f"OpenAI API returned {e.status_code}: {e.message}",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except openai.OpenAIError as e:
            raise UpstreamCallError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise UpstreamCallError("OpenAI API returned no choices")

        choice = response.choices[0]
        text = choice.message.content or ""

        tokens_used = None
        if response.usage:
            tokens_used = response.usage.total_tokens
        logger.debug("OpenAI completion: model=%s tokens=%s", self.model, tokens_used)

        return CompletionResult(
            text=text,
            finish_reason=choice.finish_reason,
            tokens_used=tokens_used,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
