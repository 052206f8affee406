"""Meditation requests, prompts and script generation."""

from .technique import Technique, encode_technique, decode_technique
from .request import MeditationRequest
from .script import MeditationScript
from .prompts import SYSTEM_PROMPT, build_meditation_prompt
from .generator import ScriptGenerator, parse_script

__all__ = [
    "Technique",
    "encode_technique",
    "decode_technique",
    "MeditationRequest",
    "MeditationScript",
    "SYSTEM_PROMPT",
    "build_meditation_prompt",
    "ScriptGenerator",
    "parse_script",
]
