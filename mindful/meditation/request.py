"""Meditation request: what kind of script to generate."""

from dataclasses import dataclass
from typing import Any

from .technique import Technique, decode_technique, encode_technique


_TEXT_FIELDS = (
    "guidance_level",
    "focus_object",
    "gratitude_scope",
    "ambient_sound",
    "voice_preference",
    "goal",
)

_LIST_FIELDS = ("compassion_targets", "emotion_labels")


@dataclass(frozen=True)
class MeditationRequest:
    """Parameters for a single generated meditation."""

    technique: Technique
    session_length: int  # minutes
    guidance_level: str = ""  # e.g. "detailed", "brief"

    # Technique-specific
    focus_object: str = ""  # focused attention, e.g. "breath", "mantra"
    compassion_targets: tuple[str, ...] = ()  # loving kindness
    emotion_labels: tuple[str, ...] = ()  # mindfulness of emotion
    gratitude_scope: str = ""  # gratitude practice, e.g. "others", "world"

    ambient_sound: str = ""  # e.g. "nature", "silence", "white_noise"
    voice_preference: str = ""  # e.g. "calm", "whisper"
    goal: str = ""  # e.g. "relaxation", "focus"

    def __post_init__(self):
        if not isinstance(self.technique, Technique):
            raise TypeError(f"technique must be a Technique, got {self.technique!r}")
        if (
            isinstance(self.session_length, bool)
            or not isinstance(self.session_length, int)
            or self.session_length <= 0
        ):
            raise ValueError(
                f"session_length must be a positive number of minutes, got {self.session_length!r}"
            )
        # Stored as tuples, detached from the caller's lists
        for name in _LIST_FIELDS:
            object.__setattr__(self, name, _as_list(name, getattr(self, name)))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MeditationRequest":
        """Build a request from a JSON/YAML payload.

        Missing or null optional fields are treated as empty.

        Raises:
            UnrecognizedTechniqueError: If the technique name is unknown
            ValueError: If session_length is missing or not positive, or a
                list field is neither a list nor a single string
        """
        if "session_length" not in data:
            raise ValueError("session_length is required")

        kwargs: dict[str, Any] = {
            "technique": decode_technique(data.get("technique")),
            "session_length": data["session_length"],
        }
        for name in _TEXT_FIELDS:
            kwargs[name] = data.get(name) or ""
        for name in _LIST_FIELDS:
            kwargs[name] = _as_list(name, data.get(name))

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a payload, leaving out empty optional fields."""
        data: dict[str, Any] = {
            "technique": encode_technique(self.technique),
            "session_length": self.session_length,
            "guidance_level": self.guidance_level,
        }
        for name in _TEXT_FIELDS[1:] + _LIST_FIELDS:
            value = getattr(self, name)
            if value:
                data[name] = list(value) if name in _LIST_FIELDS else value
        return data


def _as_list(name: str, value: Any) -> tuple[str, ...]:
    """Read a list field; a single string counts as a one-item list."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list of strings, got {value!r}")
    return tuple(value)
