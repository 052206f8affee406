"""Anthropic API provider for Claude."""

import os

import anthropic

from ..errors import MissingCredentialError, UpstreamCallError
from .base import BaseLLMProvider, Message, CompletionResult


class AnthropicProvider(BaseLLMProvider):
    """LLM provider using the Anthropic Messages API.

    The Messages API requires max_tokens, so it falls back to 4096 when
    neither the call nor the configuration sets one.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-5-20250929",
        max_tokens: int | None = None,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            model: Model to use
            max_tokens: Maximum tokens in response
            client: Preconfigured client, mainly for tests
        """
        super().__init__(model=model, max_tokens=max_tokens or 4096)
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")

        if not self.api_key:
            raise MissingCredentialError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter."
            )

        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Get or create Anthropic client."""
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Generate a completion using Anthropic API."""
        client = self._get_client()

        # System is passed separately
        anthropic_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
            if msg.role != "system"
        ]

        kwargs = dict(
            model=self.model,
            max_tokens=max_tokens or self.max_tokens,
            system=system or "",
            messages=anthropic_messages,
        )
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = await client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            raise UpstreamCallError(
                f"Anthropic API returned {e.status_code}: {e.message}",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except anthropic.AnthropicError as e:
            raise UpstreamCallError(f"Anthropic request failed: {e}") from e

        if not response.content:
            raise UpstreamCallError("Anthropic API returned no content")

        text = response.content[0].text

        tokens_used = None
        if response.usage:
            tokens_used = response.usage.input_tokens + response.usage.output_tokens

        return CompletionResult(
            text=text,
            finish_reason=response.stop_reason,
            tokens_used=tokens_used,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
