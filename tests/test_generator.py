from __future__ import annotations

import httpx
import openai
import pytest

from mindful.config import Config, LLMConfig
from mindful.errors import MissingCredentialError, ScriptParseError, UpstreamCallError
from mindful.llm import OllamaProvider, OpenAIProvider
from mindful.meditation import SYSTEM_PROMPT, ScriptGenerator, Technique, build_meditation_prompt
from mindful.meditation import generator as generator_module
from mindful.meditation.generator import parse_script

from tests.stubs import WELL_FORMED_REPLY, StubChatCompletions, StubProvider, stub_openai_client


@pytest.mark.asyncio
async def test_generate_script_parses_well_formed_reply(make_request):
    provider = StubProvider(reply=WELL_FORMED_REPLY)
    generator = ScriptGenerator(provider)

    script = await generator.generate_script(make_request())

    assert script.content == "Breathe in. [PAUSE 5] Breathe out."
    assert script.timing_markers == {"intro": "0s", "body": "10s", "closing": "60s"}


@pytest.mark.asyncio
async def test_generate_script_sends_system_and_user_messages(make_request):
    provider = StubProvider()
    request = make_request(Technique.LOVING_KINDNESS, compassion_targets=["self", "family"])

    await ScriptGenerator(provider).generate_script(request)

    assert len(provider.calls) == 1
    call = provider.calls[0]
    assert call["system"] == SYSTEM_PROMPT
    assert call["temperature"] == 0.7
    assert [m.role for m in call["messages"]] == ["user"]
    assert call["messages"][0].content == build_meditation_prompt(request)


@pytest.mark.asyncio
async def test_malformed_reply_keeps_raw_text(make_request):
    generator = ScriptGenerator(StubProvider(reply="not json"))

    with pytest.raises(ScriptParseError, match="failed to parse script") as exc_info:
        await generator.generate_script(make_request())

    assert exc_info.value.raw_content == "not json"
    assert "not json" in str(exc_info.value)


@pytest.mark.asyncio
async def test_upstream_error_is_not_parsed(make_request, monkeypatch):
    parsed = []
    monkeypatch.setattr(generator_module, "parse_script", lambda text: parsed.append(text))
    error = UpstreamCallError("OpenAI API returned 503: unavailable", status_code=503, body="unavailable")
    generator = ScriptGenerator(StubProvider(error=error))

    with pytest.raises(UpstreamCallError, match="generation failed") as exc_info:
        await generator.generate_script(make_request())

    assert parsed == []
    assert exc_info.value.status_code == 503
    assert exc_info.value.body == "unavailable"
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_openai_transport_error_becomes_upstream_error(make_request):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    completions = StubChatCompletions(error=openai.APIConnectionError(request=request))
    provider = OpenAIProvider(api_key="sk-test", client=stub_openai_client(completions))

    with pytest.raises(UpstreamCallError, match="generation failed"):
        await ScriptGenerator(provider).generate_script(make_request())


@pytest.mark.asyncio
async def test_generate_with_openai_provider(make_request):
    completions = StubChatCompletions(content=WELL_FORMED_REPLY)
    provider = OpenAIProvider(api_key="sk-test", client=stub_openai_client(completions))

    script = await ScriptGenerator(provider).generate_script(make_request())

    assert script.content == "Breathe in. [PAUSE 5] Breathe out."
    assert completions.kwargs["model"] == "gpt-4"
    assert completions.kwargs["temperature"] == 0.7
    assert [m["role"] for m in completions.kwargs["messages"]] == ["system", "user"]


@pytest.mark.asyncio
async def test_unsupported_technique_propagates_unchanged(make_request, monkeypatch):
    from mindful.errors import UnsupportedTechniqueError
    from mindful.meditation import prompts

    monkeypatch.setattr(prompts, "PROMPT_BUILDERS", {})
    provider = StubProvider()

    with pytest.raises(UnsupportedTechniqueError):
        await ScriptGenerator(provider).generate_script(make_request())

    assert provider.calls == []


@pytest.mark.asyncio
async def test_close_releases_provider():
    provider = StubProvider()

    await ScriptGenerator(provider).close()

    assert provider.closed


@pytest.mark.parametrize("reply", [
    "[]",
    '"just a string"',
    '{"content": "Rest."}',
    '{"timing_markers": {}}',
    '{"content": 5, "timing_markers": {}}',
    '{"content": "Rest.", "timing_markers": ["intro"]}',
    '{"content": "Rest.", "timing_markers": {"intro": {"at": 0}}}',
])
def test_parse_script_rejects_wrong_shape(reply):
    with pytest.raises(ScriptParseError) as exc_info:
        parse_script(reply)

    assert exc_info.value.raw_content == reply


def test_parse_script_stringifies_scalar_markers():
    script = parse_script('{"content": "Rest.", "timing_markers": {"intro": 0, "closing": 55.5}}')

    assert script.timing_markers == {"intro": "0", "closing": "55.5"}


def test_from_config_builds_openai_generator():
    config = Config(llm=LLMConfig(api_key="sk-test", temperature=0.3))

    generator = ScriptGenerator.from_config(config)

    assert isinstance(generator.provider, OpenAIProvider)
    assert generator.provider.model == "gpt-4"
    assert generator.temperature == 0.3


def test_from_config_ollama_needs_no_key():
    config = Config(llm=LLMConfig(provider="ollama", model="llama3"))

    generator = ScriptGenerator.from_config(config)

    assert isinstance(generator.provider, OllamaProvider)


def test_from_config_without_key_fails():
    with pytest.raises(MissingCredentialError, match="OPENAI_API_KEY"):
        ScriptGenerator.from_config(Config())
