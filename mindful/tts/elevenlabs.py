"""ElevenLabs TTS engine.

Renders meditation scripts to audio files with the ElevenLabs
text-to-speech API.

https://elevenlabs.io/
"""

import logging
import os
from pathlib import Path

import httpx

from ..errors import MissingCredentialError, UpstreamCallError

logger = logging.getLogger(__name__)


DEFAULT_ENDPOINT = "https://api.elevenlabs.io/v1/text-to-speech"

# Recommended voices for guided meditation
RECOMMENDED_VOICES = {
    "rachel": "21m00Tcm4TlvDq8ikWAM",  # Calm, warm female
    "drew": "29vD33N1CtxCmqQRPOHJ",     # Calm male
    "clyde": "2EiwWnXFnvU5JabPnv8n",   # Warm, deep male
    "domi": "AZnzlk1XvdvUeBnXmlld",    # Pleasant female
    "bella": "EXAVITQu4vr4xnSDxMaL",   # Soft female
    "adam": "pNInz6obpgDQGcFmaJgB",    # Natural male
}


class ElevenLabsTTS:
    """Text-to-speech using the ElevenLabs API.

    Endpoint, voice and API key are all supplied by the caller; the
    voice can be given as an id or as a name from RECOMMENDED_VOICES.
    """

    def __init__(
        self,
        api_key: str | None = None,
        voice_id: str | None = None,
        voice_name: str | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
        model_id: str | None = None,
        stability: float = 0.75,  # Higher = more consistent
        similarity_boost: float = 0.75,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize ElevenLabs TTS.

        Args:
            api_key: ElevenLabs API key (defaults to ELEVENLABS_API_KEY env var)
            voice_id: Voice ID to use (takes precedence over voice_name)
            voice_name: Voice name from RECOMMENDED_VOICES
            endpoint: Text-to-speech URL; the voice id is appended to it
            model_id: Model to use (eleven_monolingual_v1, eleven_multilingual_v2, etc.)
            stability: Voice stability (0-1, higher = more consistent)
            similarity_boost: Similarity boost (0-1)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.api_key = api_key or os.environ.get("ELEVENLABS_API_KEY")

        if not self.api_key:
            raise MissingCredentialError(
                "ElevenLabs API key required. Set ELEVENLABS_API_KEY environment "
                "variable or pass api_key parameter."
            )

        # Resolve voice
        if voice_id:
            self.voice_id = voice_id
        elif voice_name and voice_name.lower() in RECOMMENDED_VOICES:
            self.voice_id = RECOMMENDED_VOICES[voice_name.lower()]
        else:
            # Default to Rachel - calm, warm female voice
            self.voice_id = RECOMMENDED_VOICES["rachel"]

        self.endpoint = endpoint.rstrip("/")
        self.model_id = model_id
        self.stability = stability
        self.similarity_boost = similarity_boost
        self.timeout = timeout

        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        """Per-voice synthesis URL."""
        return f"{self.endpoint}/{self.voice_id}"

    @property
    def api_base(self) -> str:
        """API root derived from the endpoint (".../v1")."""
        return self.endpoint.rsplit("/", 1)[0]

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "xi-api-key": self.api_key,
                    "Content-Type": "application/json",
                },
            )
        return self._client

    def build_payload(self, text: str) -> dict:
        """Request body for a synthesis call."""
        payload = {
            "text": text,
            "voice_settings": {
                "stability": self.stability,
                "similarity_boost": self.similarity_boost,
            },
        }
        if self.model_id:
            payload["model_id"] = self.model_id
        return payload

    async def synthesize_to_file(self, text: str, path: str | Path) -> Path:
        """Convert text to speech and stream the audio into a file.

        Args:
            text: Text to synthesize
            path: Where to write the audio

        Returns:
            Path of the written file

        Raises:
            ValueError: If text is empty
            UpstreamCallError: On transport errors or any non-200 response
        """
        if not text.strip():
            raise ValueError("Nothing to synthesize: text is empty")

        path = Path(path)
        partial = path.with_name(f"{path.name}.part")
        client = await self._get_client()

        try:
            async with client.stream("POST", self.url, json=self.build_payload(text)) as response:
                if response.status_code != httpx.codes.OK:
                    body = (await response.aread()).decode(errors="replace")
                    raise UpstreamCallError(
                        f"non-200 response: {response.status_code} - {body}",
                        status_code=response.status_code,
                        body=body,
                    )

                with open(partial, "wb") as out_file:
                    async for chunk in response.aiter_bytes():
                        out_file.write(chunk)
            partial.replace(path)
        except httpx.HTTPError as e:
            raise UpstreamCallError(f"text-to-speech request failed: {e}") from e
        finally:
            # Only a complete stream ever reaches the target path
            partial.unlink(missing_ok=True)

        logger.info("Wrote audio for %d chars to %s", len(text), path)
        return path

    async def list_voices(self) -> list[dict]:
        """List available voices from your ElevenLabs account.

        Returns:
            List of voice information dicts
        """
        client = await self._get_client()

        try:
            response = await client.get(f"{self.api_base}/voices")
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamCallError(
                f"listing voices failed: {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamCallError(f"listing voices failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamCallError(
                f"listing voices failed: invalid JSON reply: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e
        if not isinstance(data, dict):
            return []
        return data.get("voices", [])

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
