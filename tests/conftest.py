from __future__ import annotations

import pytest

from mindful.meditation import MeditationRequest, Technique


@pytest.fixture(autouse=True)
def clear_api_keys(monkeypatch: pytest.MonkeyPatch):
    """Keep real credentials in the environment out of the tests."""
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "ELEVENLABS_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_request():
    def _maker(technique: Technique = Technique.FOCUSED_ATTENTION, **kwargs) -> MeditationRequest:
        kwargs.setdefault("session_length", 10)
        return MeditationRequest(technique=technique, **kwargs)

    return _maker
