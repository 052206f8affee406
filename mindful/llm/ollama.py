"""Ollama provider for local LLM inference."""

import httpx

from ..errors import UpstreamCallError
from .base import BaseLLMProvider, Message, CompletionResult


class OllamaProvider(BaseLLMProvider):
    """LLM provider using Ollama for local inference.

    Ollama supports various open models like llama3, mistral, etc.
    No API key is needed, so scripts can be generated fully offline.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3",
        max_tokens: int | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Ollama provider.

        Args:
            base_url: Ollama server URL
            model: Model to use (e.g., "llama3", "mistral", "llama3:8b")
            max_tokens: Maximum tokens in response (Ollama uses num_predict)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        super().__init__(model=model, max_tokens=max_tokens)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> CompletionResult:
        """Generate a completion using Ollama."""
        client = await self._get_client()

        ollama_messages = []
        if system:
            ollama_messages.append({"role": "system", "content": system})
        for msg in messages:
            ollama_messages.append({"role": msg.role, "content": msg.content})

        options = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens or self.max_tokens:
            options["num_predict"] = max_tokens or self.max_tokens

        try:
            response = await client.post(
                f"{self.base_url}/api/chat",
                json={
                    "model": self.model,
                    "messages": ollama_messages,
                    "stream": False,
                    "options": options,
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamCallError(
                f"Ollama returned {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamCallError(f"Ollama request failed: {e}") from e

        try:
            data = response.json()
            text = data["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamCallError(
                f"Ollama returned an unreadable reply: {e!r}",
                status_code=response.status_code,
                body=response.text,
            ) from e
        if not isinstance(text, str):
            raise UpstreamCallError(
                "Ollama reply content is not text",
                status_code=response.status_code,
                body=response.text,
            )

        tokens_used = None
        if "eval_count" in data:
            tokens_used = data.get("prompt_eval_count", 0) + data.get("eval_count", 0)

        return CompletionResult(
            text=text,
            finish_reason=data.get("done_reason"),
            tokens_used=tokens_used,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
