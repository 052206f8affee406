from __future__ import annotations

from mindful.meditation import MeditationScript


def test_render_shows_content_and_markers():
    script = MeditationScript(content="X", timing_markers={"intro": "a"})

    rendered = script.render()
    content_line, markers_line = rendered.split("\n")

    assert content_line == "Content: X"
    assert markers_line.startswith("TimingMarkers: ")
    assert "intro" in markers_line and "a" in markers_line
    assert str(script) == rendered


def test_pauses_in_order():
    script = MeditationScript(
        content="Settle in. [PAUSE 5] Notice the breath. [PAUSE 10] Rest. [PAUSE 2.5]",
        timing_markers={},
    )

    assert script.pauses() == [5.0, 10.0, 2.5]


def test_pauses_ignores_malformed_directives():
    script = MeditationScript(content="[PAUSE] [pause 3] [PAUSE x]", timing_markers={})

    assert script.pauses() == []


def test_dict_round_trip():
    script = MeditationScript(content="Rest.", timing_markers={"intro": "0s", "closing": "60s"})

    assert MeditationScript.from_dict(script.to_dict()) == script
