"""LLM provider implementations."""

from .base import BaseLLMProvider, LLMProvider, Message, CompletionResult
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider
from .ollama import OllamaProvider

__all__ = [
    "LLMProvider",
    "BaseLLMProvider",
    "Message",
    "CompletionResult",
    "AnthropicProvider",
    "OpenAIProvider",
    "OllamaProvider",
    "create_llm_provider",
]


def create_llm_provider(
    provider: str,
    model: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
    ollama_url: str | None = None,
    max_tokens: int | None = None,
) -> BaseLLMProvider:
    """Factory function to create LLM provider.

    Args:
        provider: Provider name ("openai", "anthropic", "ollama")
        model: Model name (uses provider default if not specified)
        api_key: API key (for openai/anthropic)
        base_url: Base URL for OpenAI-compatible endpoints
        ollama_url: Ollama server URL (for ollama)
        max_tokens: Maximum response tokens

    Returns:
        LLM provider instance

    Raises:
        MissingCredentialError: If the provider needs a key and none is found
    """
    if provider == "openai":
        return OpenAIProvider(
            api_key=api_key,
            model=model or "gpt-4",
            max_tokens=max_tokens,
            base_url=base_url,
        )
    elif provider == "anthropic":
        return AnthropicProvider(
            api_key=api_key,
            model=model or "claude-sonnet-4-5-20250929",
            max_tokens=max_tokens,
        )
    elif provider == "ollama":
        return OllamaProvider(
            base_url=ollama_url or "http://localhost:11434",
            model=model or "llama3",
            max_tokens=max_tokens,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider}")
