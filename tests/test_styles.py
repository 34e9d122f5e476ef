"""Tests for output style policies."""

import pytest

from transcript_dictate.styles import OutputStyle, apply_style


class TestApplyStyle:
    """Test each output style."""

    def test_formal_is_identity(self):
        text = "Hello World.  Keep   spacing."
        assert apply_style(OutputStyle.FORMAL, text) == text

    def test_no_capitals_lowercases(self):
        assert apply_style(OutputStyle.NO_CAPITALS, "Hello World") == "hello world"

    def test_no_capitals_keeps_punctuation(self):
        assert apply_style(OutputStyle.NO_CAPITALS, "Done. Really!") == "done. really!"

    def test_casual_drops_periods_and_capitals(self):
        assert apply_style(OutputStyle.CASUAL, "I am fine. Really.") == "i am fine really"

    def test_casual_keeps_decimal_points(self):
        assert apply_style(OutputStyle.CASUAL, "Version 2.5 is out. Nice.") == "version 2.5 is out nice"

    def test_casual_keeps_other_punctuation(self):
        assert apply_style(OutputStyle.CASUAL, 'He said, "Go home."') == 'he said, "go home"'

    def test_casual_collapses_spaces_and_trims(self):
        assert apply_style(OutputStyle.CASUAL, "  Hello .  World  ") == "hello world"

    @pytest.mark.parametrize("style", [OutputStyle.FORMAL, OutputStyle.NO_CAPITALS, OutputStyle.CASUAL])
    def test_empty_input(self, style):
        assert apply_style(style, "") == ""

    @pytest.mark.parametrize(
        "text",
        ["I am fine. Really.", "Pi is 3.14. Done.", " A . B .. C ", "e.g. this. 1.2.3"],
    )
    @pytest.mark.parametrize("style", [OutputStyle.NO_CAPITALS, OutputStyle.CASUAL])
    def test_styles_are_idempotent(self, style, text):
        once = apply_style(style, text)
        assert apply_style(style, once) == once


class TestOutputStyleParse:
    """Test mapping persisted values to styles."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Formal", OutputStyle.FORMAL),
            ("No Capitals", OutputStyle.NO_CAPITALS),
            ("no capitals", OutputStyle.NO_CAPITALS),
            ("NO_CAPITALS", OutputStyle.NO_CAPITALS),
            ("casual", OutputStyle.CASUAL),
            ("no-capitals", OutputStyle.NO_CAPITALS),
            (OutputStyle.CASUAL, OutputStyle.CASUAL),
            ("shouting", OutputStyle.FORMAL),
            (None, OutputStyle.FORMAL),
        ],
    )
    def test_parse(self, value, expected):
        assert OutputStyle.parse(value) is expected

    def test_lookup_returns_none_for_unknown(self):
        assert OutputStyle.lookup("shouting") is None
        assert OutputStyle.lookup(" Casual ") is OutputStyle.CASUAL

    def test_values_match_persisted_strings(self):
        assert [style.value for style in OutputStyle] == ["Formal", "No Capitals", "Casual"]
