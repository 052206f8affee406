"""Configuration loading and management."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class LLMConfig:
    provider: str = "openai"
    model: str = "gpt-4"
    api_key: str | None = None
    base_url: str | None = None  # OpenAI-compatible endpoints
    ollama_url: str = "http://localhost:11434"
    temperature: float = 0.7
    max_tokens: int | None = None


@dataclass
class TTSConfig:
    engine: str = "elevenlabs"
    api_key: str | None = None
    voice_id: str | None = None
    voice: str | None = None  # name from RECOMMENDED_VOICES
    endpoint: str = "https://api.elevenlabs.io/v1/text-to-speech"
    model_id: str | None = None
    stability: float = 0.75
    similarity_boost: float = 0.75
    output_file: str = "output_audio.mp3"


@dataclass
class ArchiveConfig:
    save_directory: str = "scripts"
    auto_save: bool = False


@dataclass
class Config:
    """Complete application configuration."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    tts: TTSConfig = field(default_factory=TTSConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)


def load_env(start: str | Path | None = None, max_depth: int = 3) -> Path | None:
    """Load the nearest .env file into the environment.

    Looks in ``start`` (the working directory by default) and up to
    ``max_depth`` parent directories. Variables already set are kept.

    Returns:
        Path of the file loaded, or None if there was none
    """
    directory = Path(start) if start is not None else Path.cwd()
    for candidate in [directory, *directory.parents][: max_depth + 1]:
        env_file = candidate / ".env"
        if env_file.is_file():
            load_dotenv(env_file)
            logger.debug("Loaded environment from %s", env_file)
            return env_file

    logger.debug("No .env file found above %s", directory)
    return None


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, the default locations are tried
            and built-in defaults are used when none exists.

    Returns:
        Loaded configuration
    """
    if path is None:
        candidates = [
            Path("config/default.yaml"),
            Path("config.yaml"),
            Path.home() / ".config" / "mindful" / "config.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                path = candidate
                break

    config = Config()

    if path is not None:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        logger.debug("Loaded configuration from %s", path)

        if "llm" in data:
            config.llm = _update_dataclass(LLMConfig(), data["llm"])
        if "tts" in data:
            config.tts = _update_dataclass(TTSConfig(), data["tts"])
        if "archive" in data:
            config.archive = _update_dataclass(ArchiveConfig(), data["archive"])

    # Handle environment variable substitution for API keys
    config.llm.api_key = _expand_env(config.llm.api_key)
    config.tts.api_key = _expand_env(config.tts.api_key)

    return config


def _expand_env(value: str | None) -> str | None:
    """Resolve a "${VAR}" reference against the environment."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1])
    return value


def _update_dataclass(instance: Any, data: dict) -> Any:
    """Update dataclass instance from dictionary."""
    for key, value in data.items():
        if hasattr(instance, key):
            setattr(instance, key, value)
    return instance
