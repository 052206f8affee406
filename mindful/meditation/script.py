"""Generated meditation scripts."""

import re
from dataclasses import dataclass, field


# Inline pause directive, e.g. "[PAUSE 5]" for five seconds of silence
PAUSE_PATTERN = re.compile(r"\[PAUSE\s+(\d+(?:\.\d+)?)\]")


@dataclass(frozen=True)
class MeditationScript:
    """A meditation script returned by the model.

    The content may contain [PAUSE n] directives. Timing markers map
    section names ("intro", "body", "closing") to the text or position
    the model gave for them.
    """

    content: str
    timing_markers: dict[str, str] = field(default_factory=dict)

    def render(self) -> str:
        """Two-line human-readable form."""
        return f"Content: {self.content}\nTimingMarkers: {self.timing_markers}"

    def __str__(self) -> str:
        return self.render()

    def pauses(self) -> list[float]:
        """Durations in seconds of the pause directives, in order."""
        return [float(match) for match in PAUSE_PATTERN.findall(self.content)]

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "timing_markers": dict(self.timing_markers),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MeditationScript":
        return cls(
            content=data["content"],
            timing_markers=dict(data.get("timing_markers") or {}),
        )
