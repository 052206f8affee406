"""Prompt templates and builders for meditation scripts.

Each technique has its own builder turning a MeditationRequest into the
user message of the chat completion. Caller-supplied values go into the
prompt verbatim.
"""

from types import MappingProxyType
from typing import Callable

from ..errors import UnsupportedTechniqueError
from .request import MeditationRequest
from .technique import Technique


SYSTEM_PROMPT = """You are an experienced meditation guide creating guided meditations.
Format your response as JSON with two fields:
- "content": the meditation script with [PAUSE X] markers for pauses in seconds
- "timing_markers": a map of specific points in the meditation ("intro", "body", "closing")

Write in a warm, unhurried, spoken register. Return only the JSON object."""

ROLE_PREAMBLE = "You are a meditation teacher."

REPLY_FORMAT = (
    'Respond with a JSON object with a "content" field holding the full script '
    'and a "timing_markers" field mapping "intro", "body" and "closing" to where '
    "each section begins. Mark pauses inline as [PAUSE x], where x is the pause "
    "length in seconds."
)

BODY_SCAN_TEMPLATE = (
    "Create a {minutes}-minute body scan meditation script. "
    "{guidance}{extras}"
    "Follow traditional mindfulness practices for body scan meditation."
)

FOCUSED_ATTENTION_TEMPLATE = (
    "Create a {minutes}-minute focused attention meditation script where the focus "
    "is on {focus}. "
    "{guidance}{extras}"
    "Incorporate traditional practices of focused attention meditation."
)

LOVING_KINDNESS_TEMPLATE = (
    "Create a {minutes}-minute loving-kindness (metta) meditation script focusing on "
    "cultivating compassion towards {targets}. "
    "{guidance}{extras}"
    "Follow traditional loving-kindness meditation practices."
)

MINDFULNESS_EMOTION_TEMPLATE = (
    "Create a {minutes}-minute mindfulness of emotions meditation script, guiding the "
    "listener to observe and acknowledge emotions such as {emotions}. "
    "{guidance}{extras}"
    "Incorporate traditional mindfulness practices."
)

GRATITUDE_PRACTICE_TEMPLATE = (
    "Create a {minutes}-minute gratitude meditation script focusing on cultivating "
    "gratitude towards {scope}. "
    "{guidance}{extras}"
    "Incorporate traditional gratitude meditation practices."
)

DEFAULT_FOCUS_OBJECT = "the breath"
DEFAULT_FOCUSED_GUIDANCE = "brief"
DEFAULT_FOCUSED_VOICE = "calm"
DEFAULT_COMPASSION_TARGETS = "self and others"
DEFAULT_EMOTIONS = "various emotions"
DEFAULT_GRATITUDE_SCOPE = "self, others, and the world"


def _guidance(level: str) -> str:
    return f"Provide {level} guidance. " if level.strip() else ""


def _extras(goal: str, voice: str, ambient: str) -> str:
    """Optional goal, voice and ambient sentences, each with a trailing space."""
    parts = []
    if goal:
        parts.append(f"The goal is {goal}. ")
    if voice:
        parts.append(f"Use a {voice} voice tone. ")
    if ambient:
        parts.append(f"Include references to {ambient} ambient sounds. ")
    return "".join(parts)


def _assemble(body: str) -> str:
    return f"{ROLE_PREAMBLE} {body}\n\n{REPLY_FORMAT}"


def build_body_scan_prompt(request: MeditationRequest) -> str:
    return _assemble(BODY_SCAN_TEMPLATE.format(
        minutes=request.session_length,
        guidance=_guidance(request.guidance_level),
        extras=_extras(request.goal, request.voice_preference, request.ambient_sound),
    ))


def build_focused_attention_prompt(request: MeditationRequest) -> str:
    """Focused attention defaults to the breath, brief guidance and a calm voice."""
    focus = request.focus_object or DEFAULT_FOCUS_OBJECT
    guidance = request.guidance_level or DEFAULT_FOCUSED_GUIDANCE
    voice = request.voice_preference or DEFAULT_FOCUSED_VOICE

    return _assemble(FOCUSED_ATTENTION_TEMPLATE.format(
        minutes=request.session_length,
        focus=focus,
        guidance=_guidance(guidance),
        extras=_extras(request.goal, voice, request.ambient_sound),
    ))


def build_loving_kindness_prompt(request: MeditationRequest) -> str:
    targets = DEFAULT_COMPASSION_TARGETS
    if request.compassion_targets:
        targets = ", ".join(request.compassion_targets)

    return _assemble(LOVING_KINDNESS_TEMPLATE.format(
        minutes=request.session_length,
        targets=targets,
        guidance=_guidance(request.guidance_level),
        extras=_extras(request.goal, request.voice_preference, request.ambient_sound),
    ))


def build_mindfulness_emotion_prompt(request: MeditationRequest) -> str:
    emotions = DEFAULT_EMOTIONS
    if request.emotion_labels:
        emotions = ", ".join(request.emotion_labels)

    return _assemble(MINDFULNESS_EMOTION_TEMPLATE.format(
        minutes=request.session_length,
        emotions=emotions,
        guidance=_guidance(request.guidance_level),
        extras=_extras(request.goal, request.voice_preference, request.ambient_sound),
    ))


def build_gratitude_practice_prompt(request: MeditationRequest) -> str:
    return _assemble(GRATITUDE_PRACTICE_TEMPLATE.format(
        minutes=request.session_length,
        scope=request.gratitude_scope or DEFAULT_GRATITUDE_SCOPE,
        guidance=_guidance(request.guidance_level),
        extras=_extras(request.goal, request.voice_preference, request.ambient_sound),
    ))


PROMPT_BUILDERS: MappingProxyType[Technique, Callable[[MeditationRequest], str]] = MappingProxyType({
    Technique.BODY_SCAN: build_body_scan_prompt,
    Technique.FOCUSED_ATTENTION: build_focused_attention_prompt,
    Technique.LOVING_KINDNESS: build_loving_kindness_prompt,
    Technique.MINDFULNESS_EMOTION: build_mindfulness_emotion_prompt,
    Technique.GRATITUDE_PRACTICE: build_gratitude_practice_prompt,
})


def build_meditation_prompt(request: MeditationRequest) -> str:
    """Build the user prompt for a request, dispatching on its technique.

    Raises:
        UnsupportedTechniqueError: If no builder exists for the technique
    """
    builder = PROMPT_BUILDERS.get(request.technique)
    if builder is None:
        raise UnsupportedTechniqueError(f"unsupported technique: {request.technique!r}")
    return builder(request)
