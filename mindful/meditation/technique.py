"""Meditation techniques and their canonical identifiers."""

from enum import Enum, auto
from types import MappingProxyType

from ..errors import UnrecognizedTechniqueError


class Technique(Enum):
    """Meditation techniques a script can be generated for."""

    BODY_SCAN = auto()
    FOCUSED_ATTENTION = auto()
    LOVING_KINDNESS = auto()
    MINDFULNESS_EMOTION = auto()
    GRATITUDE_PRACTICE = auto()


TECHNIQUE_NAMES = MappingProxyType({
    Technique.BODY_SCAN: "body_scan",
    Technique.FOCUSED_ATTENTION: "focused_attention",
    Technique.LOVING_KINDNESS: "loving_kindness",
    Technique.MINDFULNESS_EMOTION: "mindfulness_emotion",
    Technique.GRATITUDE_PRACTICE: "gratitude_practice",
})

TECHNIQUE_VALUES = MappingProxyType({
    name: technique for technique, name in TECHNIQUE_NAMES.items()
})


def encode_technique(technique: Technique) -> str:
    """Return the canonical identifier for a technique.

    Raises:
        UnrecognizedTechniqueError: If the value is not a Technique
    """
    try:
        return TECHNIQUE_NAMES[technique]
    except (KeyError, TypeError):
        raise UnrecognizedTechniqueError(f"invalid technique: {technique!r}") from None


def decode_technique(name: str) -> Technique:
    """Look up a technique by its canonical identifier.

    Matching is exact and case-sensitive.

    Raises:
        UnrecognizedTechniqueError: If the name is not a known identifier
    """
    if not isinstance(name, str) or name not in TECHNIQUE_VALUES:
        raise UnrecognizedTechniqueError(f"unrecognized technique: {name!r}")
    return TECHNIQUE_VALUES[name]
