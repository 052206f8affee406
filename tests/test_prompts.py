from __future__ import annotations

import pytest

from mindful.errors import UnsupportedTechniqueError
from mindful.meditation import Technique, build_meditation_prompt
from mindful.meditation import prompts


def test_every_technique_has_a_builder():
    assert set(prompts.PROMPT_BUILDERS) == set(Technique)


@pytest.mark.parametrize("technique", list(Technique))
def test_prompts_ask_for_json_reply_with_pauses(make_request, technique):
    prompt = build_meditation_prompt(make_request(technique, session_length=12, guidance_level="detailed"))

    assert "12-minute" in prompt
    assert '"content"' in prompt
    assert '"timing_markers"' in prompt
    assert "[PAUSE x]" in prompt


@pytest.mark.parametrize("technique", list(Technique))
def test_optional_fields_are_included_verbatim(make_request, technique):
    request = make_request(
        technique,
        guidance_level="very detailed",
        goal="better sleep <now>",
        voice_preference="whisper",
        ambient_sound="ocean waves",
    )

    prompt = build_meditation_prompt(request)

    assert "very detailed guidance" in prompt
    assert "The goal is better sleep <now>." in prompt
    assert "whisper voice" in prompt
    assert "ocean waves ambient sounds" in prompt


def test_empty_optionals_are_left_out(make_request):
    prompt = build_meditation_prompt(make_request(Technique.BODY_SCAN, guidance_level="brief"))

    assert "The goal is" not in prompt
    assert "voice tone" not in prompt
    assert "ambient sounds" not in prompt


def test_focused_attention_defaults(make_request):
    request = make_request(Technique.FOCUSED_ATTENTION)

    prompt = build_meditation_prompt(request)

    assert "the breath" in prompt
    assert "brief guidance" in prompt
    assert "calm voice" in prompt
    # Defaults never leak back into the request
    assert request.focus_object == ""
    assert request.guidance_level == ""
    assert request.voice_preference == ""


def test_focused_attention_uses_focus_object(make_request):
    prompt = build_meditation_prompt(make_request(Technique.FOCUSED_ATTENTION, focus_object="mantra"))

    assert "mantra" in prompt
    assert "the breath" not in prompt


def test_loving_kindness_joins_targets_in_order(make_request):
    prompt = build_meditation_prompt(
        make_request(Technique.LOVING_KINDNESS, compassion_targets=["self", "family"])
    )

    assert "self, family" in prompt
    assert "self and others" not in prompt


def test_loving_kindness_default_targets(make_request):
    prompt = build_meditation_prompt(make_request(Technique.LOVING_KINDNESS))

    assert "self and others" in prompt


def test_mindfulness_emotion_labels(make_request):
    labelled = build_meditation_prompt(
        make_request(Technique.MINDFULNESS_EMOTION, emotion_labels=["joy", "anger"])
    )
    unlabelled = build_meditation_prompt(make_request(Technique.MINDFULNESS_EMOTION))

    assert "joy, anger" in labelled
    assert "various emotions" in unlabelled


def test_gratitude_scope(make_request):
    scoped = build_meditation_prompt(make_request(Technique.GRATITUDE_PRACTICE, gratitude_scope="my teachers"))
    unscoped = build_meditation_prompt(make_request(Technique.GRATITUDE_PRACTICE))

    assert "gratitude towards my teachers" in scoped
    assert "self, others, and the world" in unscoped


def test_non_focused_techniques_do_not_default_guidance(make_request):
    prompt = build_meditation_prompt(make_request(Technique.BODY_SCAN))

    assert "brief guidance" not in prompt
    assert "the breath" not in prompt


@pytest.mark.parametrize("technique", [t for t in Technique if t is not Technique.FOCUSED_ATTENTION])
def test_empty_guidance_leaves_no_gap(make_request, technique):
    prompt = build_meditation_prompt(make_request(technique))

    assert "guidance" not in prompt
    assert "  " not in prompt


def test_prompts_are_deterministic(make_request):
    request = make_request(Technique.LOVING_KINDNESS, compassion_targets=["a friend"])

    assert build_meditation_prompt(request) == build_meditation_prompt(request)


def test_missing_builder_is_unsupported(make_request, monkeypatch):
    builders = dict(prompts.PROMPT_BUILDERS)
    del builders[Technique.BODY_SCAN]
    monkeypatch.setattr(prompts, "PROMPT_BUILDERS", builders)

    with pytest.raises(UnsupportedTechniqueError):
        build_meditation_prompt(make_request(Technique.BODY_SCAN))
