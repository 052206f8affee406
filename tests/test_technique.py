from __future__ import annotations

import pytest

from mindful.errors import UnrecognizedTechniqueError
from mindful.meditation.technique import (
    TECHNIQUE_NAMES,
    TECHNIQUE_VALUES,
    Technique,
    decode_technique,
    encode_technique,
)


@pytest.mark.parametrize("technique", list(Technique))
def test_decode_inverts_encode(technique):
    assert decode_technique(encode_technique(technique)) is technique


def test_canonical_identifiers():
    assert sorted(TECHNIQUE_VALUES) == [
        "body_scan",
        "focused_attention",
        "gratitude_practice",
        "loving_kindness",
        "mindfulness_emotion",
    ]
    assert encode_technique(Technique.MINDFULNESS_EMOTION) == "mindfulness_emotion"


@pytest.mark.parametrize("name", ["", "Body_Scan", "BODY_SCAN", " body_scan", "walking", None, 3])
def test_decode_rejects_unknown_names(name):
    with pytest.raises(UnrecognizedTechniqueError, match="unrecognized technique"):
        decode_technique(name)


def test_encode_rejects_non_techniques():
    with pytest.raises(UnrecognizedTechniqueError):
        encode_technique("body_scan")


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        TECHNIQUE_NAMES[Technique.BODY_SCAN] = "scan"  # type: ignore[index]
