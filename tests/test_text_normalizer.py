"""
Tests for text cleanup before scene detection.

Run with: pytest tests/test_text_normalizer.py -v
"""
import pytest

from scene_matcher import match_scene_header
from text_normalizer import (
    collapse_whitespace,
    is_spaced_out,
    merge_split_headers,
    normalize_text,
    squeeze_spaced_text,
)
from tests.conftest import SCENARIO_A


class TestLetterSpacing:
    """Repair of "I N T ." style extraction output."""

    def test_spaced_heading_is_repaired(self):
        """A fully letter-spaced heading becomes a recognizable heading."""
        result = normalize_text("I N T . K I T C H E N - D A Y")
        assert result == "INT. KITCHEN - DAY"
        match = match_scene_header(result)
        assert match is not None
        assert match.keyword == "INT."
        assert match.remainder == "KITCHEN - DAY"

    def test_wide_word_gaps_survive(self):
        """Double spaces between spaced words remain word boundaries."""
        text = "B O B  e n t e r s  t h e  r o o m ."
        assert normalize_text(text) == "BOB enters the room."

    def test_squeeze_joins_slash_keywords(self):
        assert squeeze_spaced_text("I N T / E X T .") == "INT/EXT."

    def test_normal_text_is_not_squeezed(self):
        """Ordinary prose is below the whitespace ratio and left alone."""
        text = "Bob enters the kitchen and opens the fridge."
        assert normalize_text(text) == text

    def test_spaced_detection(self):
        assert is_spaced_out("P H O N E")
        assert not is_spaced_out("PHONE CALL")
        assert not is_spaced_out("")

    def test_ratio_is_configurable(self):
        """A lower ratio makes ordinary spacing count as letter-spaced."""
        assert not is_spaced_out("AB CD EF", ratio=0.4)
        assert is_spaced_out("AB CD EF", ratio=0.2)


class TestSplitHeaders:
    """Headings broken across two lines by wrapping."""

    def test_keyword_and_time_rejoined(self):
        assert merge_split_headers("INT.\nNIGHT") == "INT. NIGHT"

    def test_multi_word_time_rejoined(self):
        assert merge_split_headers("EXT.\n  MOMENTS LATER") == "EXT. MOMENTS LATER"

    def test_time_token_needs_word_boundary(self):
        """DAYLIGHT is not the DAY token."""
        assert merge_split_headers("EXT.\nDAYLIGHT fades.") == "EXT.\nDAYLIGHT fades."

    def test_non_keyword_line_not_joined(self):
        text = "Bob looks at the clock.\nLATER"
        assert merge_split_headers(text) == text

    def test_action_line_ending_in_keyword_letters_not_joined(self):
        """"flint." ends in "int." but is not an INT. keyword."""
        text = "He strikes the flint.\nLater the fire dies down."
        assert merge_split_headers(text) == text
        assert normalize_text(text) == text


class TestWhitespace:
    """Horizontal whitespace collapse keeps newlines."""

    def test_spaces_collapsed_around_newlines(self):
        text = "INT.   KITCHEN - DAY  \n   Bob   sits at the table.  "
        assert collapse_whitespace(text) == "INT. KITCHEN - DAY\nBob sits at the table."

    def test_blank_lines_preserved(self):
        text = "Line one here.\n\n\nLine two here."
        assert normalize_text(text) == text

    def test_crlf_and_tabs(self):
        text = "INT. ROOM - DAY\r\n\tBob sits.\r\n"
        assert normalize_text(text) == "INT. ROOM - DAY\nBob sits."


class TestIdempotence:
    """Normalizing twice equals normalizing once."""

    @pytest.mark.parametrize("text", [
        SCENARIO_A,
        "I N T . K I T C H E N - D A Y",
        "  TITLE PAGE  \r\n\r\nINT.\nNIGHT\n  Bob   runs.  \n",
        "I N T .  K I T C H E N  -  D A Y\n\nB O B  e n t e r s .",
        "I N T .  A  -  D A Y\n\n\n\n\n\n\nB O B  g o e s\n\n\n\n\n\n\nH i  y o u\n\n\n",
        "A  B  C  D",
    ])
    def test_second_pass_is_noop(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once

    def test_blank_lines_do_not_count_as_spacing(self):
        """Many blank lines around short lines are not letter-spacing."""
        text = "BOB goes\n\n\n\n\n\n\nHi you"
        assert not is_spaced_out(text)
        assert normalize_text(text) == text
