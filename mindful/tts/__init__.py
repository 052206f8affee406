"""Text-to-speech engines."""

from ..config import TTSConfig
from .elevenlabs import ElevenLabsTTS, RECOMMENDED_VOICES

__all__ = [
    "ElevenLabsTTS",
    "RECOMMENDED_VOICES",
    "create_tts",
]


def create_tts(config: TTSConfig) -> ElevenLabsTTS:
    """Factory function to create TTS engine.

    Args:
        config: TTS section of the configuration; ``engine`` selects:
            - "elevenlabs": ElevenLabs API (requires API key)

    Returns:
        TTS engine instance
    """
    if config.engine == "elevenlabs":
        return ElevenLabsTTS(
            api_key=config.api_key,
            voice_id=config.voice_id,
            voice_name=config.voice,
            endpoint=config.endpoint,
            model_id=config.model_id,
            stability=config.stability,
            similarity_boost=config.similarity_boost,
        )

    raise ValueError(
        f"Unknown TTS engine: {config.engine}. "
        f"Available: elevenlabs"
    )
