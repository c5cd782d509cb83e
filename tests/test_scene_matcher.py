"""
Tests for scene heading recognition.

Run with: pytest tests/test_scene_matcher.py -v
"""
import pytest

from scene_matcher import (
    HEADER_STRATEGIES,
    UNKNOWN_LOCATION,
    is_scene_header,
    match_scene_header,
    normalize_int_ext,
    parse_header_fields,
)


class TestStrategies:
    """Each heading family is recognized by its own strategy."""

    @pytest.mark.parametrize("line, strategy, keyword, remainder, number", [
        ("INT. KITCHEN - DAY", "period", "INT.", "KITCHEN - DAY", None),
        ("12 EXT. STREET - NIGHT", "period", "EXT.", "STREET - NIGHT", 12),
        ("INT/EXT. CAR - MOVING", "period", "INT/EXT.", "CAR - MOVING", None),
        ("I/E. PORCH - DUSK", "period", "I/E.", "PORCH - DUSK", None),
        ("INT: OFFICE - DAY", "colon", "INT", "OFFICE - DAY", None),
        ("EXT, BEACH - DAWN", "comma", "EXT", "BEACH - DAWN", None),
        ("INT HALLWAY - NIGHT", "bare", "INT", "HALLWAY - NIGHT", None),
        ("3 EXT ROOFTOP", "bare", "EXT", "ROOFTOP", 3),
    ])
    def test_keyword_first_forms(self, line, strategy, keyword, remainder, number):
        match = match_scene_header(line)
        assert match is not None
        assert match.strategy == strategy
        assert match.keyword == keyword
        assert match.remainder == remainder
        assert match.leading_number == number

    def test_location_first_is_reordered(self):
        """Keyword after the location is moved to the front."""
        match = match_scene_header("WAREHOUSE - INT - DAY")
        assert match.strategy == "location_first"
        assert match.keyword == "INT"
        assert match.remainder == "WAREHOUSE - DAY"

    def test_location_first_without_time(self):
        match = match_scene_header("7 PARKING LOT - EXT")
        assert match.keyword == "EXT"
        assert match.remainder == "PARKING LOT"
        assert match.leading_number == 7

    def test_priority_is_list_order(self):
        """A line matching several families goes to the earliest one."""
        match = match_scene_header("INT. HOUSE - EXT")
        assert match.strategy == "period"

    def test_strategy_order(self):
        names = [s.name for s in HEADER_STRATEGIES]
        assert names == ["period", "colon", "comma", "bare", "location_first"]

    def test_case_insensitive(self):
        assert match_scene_header("int. kitchen - day").keyword == "int."


class TestNonHeaders:
    """Ordinary screenplay lines are not headings."""

    @pytest.mark.parametrize("line", [
        "",
        "   ",
        "Bob walks into the room.",
        "INTO THE WOODS",
        "He is tired - extra careful now.",
        "CUT TO:",
        "EXTERIOR designs are his specialty.",
    ])
    def test_not_a_header(self, line):
        assert match_scene_header(line) is None
        assert not is_scene_header(line)


class TestHeaderFields:
    """Splitting headings into INT/EXT, location and time."""

    def test_standard_heading(self):
        assert parse_header_fields("INT.", "KITCHEN - DAY") == ("INT", "KITCHEN", "DAY")

    def test_last_dash_separates_time(self):
        result = parse_header_fields("EXT.", "HOUSE - BACKYARD - NIGHT")
        assert result == ("EXT", "HOUSE - BACKYARD", "NIGHT")

    def test_hyphenated_location_kept(self):
        result = parse_header_fields("INT.", "SEMI-DETACHED HOUSE - DAY")
        assert result == ("INT", "SEMI-DETACHED HOUSE", "DAY")

    def test_trailing_time_without_dash(self):
        assert parse_header_fields("INT", "GARAGE NIGHT") == ("INT", "GARAGE", "NIGHT")

    def test_empty_location(self):
        assert parse_header_fields("INT.", "") == ("INT", UNKNOWN_LOCATION, "")

    def test_location_only(self):
        assert parse_header_fields("EXT", "ROOFTOP") == ("EXT", "ROOFTOP", "")

    @pytest.mark.parametrize("keyword, expected", [
        ("INT.", "INT"),
        ("ext", "EXT"),
        ("I/E.", "INT./EXT."),
        ("INT./EXT.", "INT./EXT."),
        ("EXT/INT.", "INT./EXT."),
        ("", None),
    ])
    def test_normalize_int_ext(self, keyword, expected):
        assert normalize_int_ext(keyword) == expected
