"""Meditation script generation via a chat-completion LLM."""

import json
import logging

from ..config import Config
from ..errors import ScriptParseError, UpstreamCallError
from ..llm import BaseLLMProvider, Message, create_llm_provider
from .prompts import SYSTEM_PROMPT, build_meditation_prompt
from .request import MeditationRequest
from .script import MeditationScript

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7


class ScriptGenerator:
    """Turns a MeditationRequest into a MeditationScript.

    Each call is one prompt, one chat completion and one parse. Nothing
    is retried and nothing is kept between calls.
    """

    def __init__(
        self,
        provider: BaseLLMProvider,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.provider = provider
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: Config) -> "ScriptGenerator":
        """Create a generator using the configured LLM provider.

        Raises:
            MissingCredentialError: If the provider needs an API key and none is set
        """
        provider = create_llm_provider(
            provider=config.llm.provider,
            model=config.llm.model,
            api_key=config.llm.api_key,
            base_url=config.llm.base_url,
            ollama_url=config.llm.ollama_url,
            max_tokens=config.llm.max_tokens,
        )
        return cls(provider, temperature=config.llm.temperature)

    async def generate_script(self, request: MeditationRequest) -> MeditationScript:
        """Generate a meditation script for a request.

        Args:
            request: What kind of meditation to create

        Returns:
            The parsed script

        Raises:
            UnsupportedTechniqueError: If no prompt exists for the technique
            UpstreamCallError: If the completion request fails
            ScriptParseError: If the reply is not a valid script
        """
        prompt = build_meditation_prompt(request)
        logger.info(
            "Generating %d-minute %s script with %s",
            request.session_length,
            request.technique.name.lower(),
            self.provider.model,
        )
        logger.debug("Prompt (%d chars): %s", len(prompt), prompt)

        try:
            result = await self.provider.complete(
                messages=[Message(role="user", content=prompt)],
                system=SYSTEM_PROMPT,
                temperature=self.temperature,
            )
        except UpstreamCallError as e:
            raise UpstreamCallError(
                f"generation failed: {e}",
                status_code=e.status_code,
                body=e.body,
            ) from e

        script = parse_script(result.text)
        logger.info(
            "Generated script: %d chars, %d pauses",
            len(script.content),
            len(script.pauses()),
        )
        return script

    async def close(self) -> None:
        await self.provider.close()


def parse_script(text: str) -> MeditationScript:
    """Parse the model's JSON reply into a MeditationScript.

    Raises:
        ScriptParseError: If the text is not JSON of the expected shape;
            the raw text is kept on the error
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Reply is not valid JSON: %s", e)
        raise ScriptParseError(
            f"failed to parse script: {e}\ncontent: {text}", raw_content=text
        ) from e

    problem = _shape_problem(data)
    if problem:
        logger.error("Reply has the wrong shape: %s", problem)
        raise ScriptParseError(
            f"failed to parse script: {problem}\ncontent: {text}", raw_content=text
        )

    return MeditationScript(
        content=data["content"],
        timing_markers={
            str(name): str(value) for name, value in data["timing_markers"].items()
        },
    )


def _shape_problem(data) -> str | None:
    """Describe what is wrong with a decoded reply, or None if it is usable."""
    if not isinstance(data, dict):
        return "expected a JSON object"
    if not isinstance(data.get("content"), str):
        return 'missing string field "content"'
    markers = data.get("timing_markers")
    if not isinstance(markers, dict):
        return 'missing object field "timing_markers"'
    for name, value in markers.items():
        if isinstance(value, (dict, list)) or value is None:
            return f"timing marker {name!r} is not a scalar"
    return None
