"""Guided meditation scripts from an LLM, with optional text-to-speech."""

__version__ = "0.1.0"
