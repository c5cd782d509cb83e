"""
Scene heading recognition.

A heading is recognized by trying an ordered list of strategies against a
trimmed line. The first strategy that matches wins, so the list order is
the priority order: keyword-first forms from most to least specific, then
the location-first transposition.
"""
import re
from dataclasses import dataclass
from typing import Optional

from models import IntExt
from text_normalizer import TIME_OF_DAY_TOKENS

UNKNOWN_LOCATION = "UNKNOWN LOCATION"

_LEADING_NUMBER = r"^\s*(?:(\d+)\s+)?"

# Trailing time of day when the heading has no dash separator: "INT KITCHEN DAY"
_TRAILING_TIME = re.compile(
    r"^(.*?)\s+(" + "|".join(re.escape(t) for t in TIME_OF_DAY_TOKENS) + r")$",
    re.IGNORECASE
)
# A hyphen only separates when spaced ("SEMI-DETACHED" stays whole)
_DASH_SEPARATOR = re.compile(r"\s+[-–—]+\s*|\s*[–—]+\s*")


@dataclass(frozen=True)
class HeaderMatch:
    """Canonical shape of a recognized heading."""
    strategy: str
    leading_number: Optional[int]     # Number printed before the keyword
    keyword: str                      # "INT.", "EXT", "I/E", ...
    remainder: str                    # Everything after the keyword
    line: str


@dataclass(frozen=True)
class HeaderStrategy:
    """One heading pattern. Groups: leading number, keyword, remainder."""
    name: str
    pattern: re.Pattern
    location_first: bool = False

    def match(self, line: str) -> Optional[HeaderMatch]:
        m = self.pattern.match(line)
        if not m:
            return None

        number = int(m.group(1)) if m.group(1) else None
        if self.location_first:
            # "WAREHOUSE - INT - DAY" -> keyword INT, remainder "WAREHOUSE - DAY"
            location, keyword, rest = m.group(2), m.group(3), m.group(4)
            remainder = f"{location.strip()} {rest.strip()}" if rest.strip() else location.strip()
        else:
            keyword, remainder = m.group(2), m.group(3) or ""

        return HeaderMatch(
            strategy=self.name,
            leading_number=number,
            keyword=keyword,
            remainder=remainder.strip(),
            line=line
        )


HEADER_STRATEGIES: tuple[HeaderStrategy, ...] = (
    HeaderStrategy(
        "period",
        re.compile(
            _LEADING_NUMBER + r"(INT\.?/EXT\.|EXT\.?/INT\.|I/E\.|INT\.|EXT\.)(.*)$",
            re.IGNORECASE
        )
    ),
    HeaderStrategy(
        "colon",
        re.compile(_LEADING_NUMBER + r"(INT|EXT|I/E)\s*:\s*(.*)$", re.IGNORECASE)
    ),
    HeaderStrategy(
        "comma",
        re.compile(_LEADING_NUMBER + r"(INT|EXT|I/E)\s*,\s*(.*)$", re.IGNORECASE)
    ),
    HeaderStrategy(
        "bare",
        re.compile(_LEADING_NUMBER + r"(INT|EXT|I/E)\s+(.+)$", re.IGNORECASE)
    ),
    HeaderStrategy(
        "location_first",
        re.compile(
            _LEADING_NUMBER + r"(.+?)\s*[-–—]\s*(INT|EXT|I/E)\b\.?\s*(.*)$",
            re.IGNORECASE
        ),
        location_first=True
    ),
)


def match_scene_header(
    line: str,
    strategies: tuple[HeaderStrategy, ...] = HEADER_STRATEGIES
) -> Optional[HeaderMatch]:
    """
    Try each strategy in order against a line.

    Args:
        line: One line of normalized text
        strategies: Ordered strategies, highest priority first

    Returns:
        HeaderMatch from the first matching strategy, or None
    """
    stripped = line.strip()
    if not stripped:
        return None
    for strategy in strategies:
        match = strategy.match(stripped)
        if match is not None:
            return match
    return None


def is_scene_header(line: str) -> bool:
    return match_scene_header(line) is not None


def normalize_int_ext(keyword: str) -> Optional[IntExt]:
    """Map keyword spellings ("Int.", "I/E", "EXT./INT.") to INT, EXT or INT./EXT."""
    if not keyword:
        return None
    cleaned = re.sub(r"[\s.:,]", "", keyword.upper())
    if "INT" in cleaned and "EXT" in cleaned:
        return "INT./EXT."
    if cleaned in ("I/E", "IE"):
        return "INT./EXT."
    if cleaned.startswith("INT"):
        return "INT"
    if cleaned.startswith("EXT"):
        return "EXT"
    return None


def parse_header_fields(keyword: str, remainder: str) -> tuple[Optional[IntExt], str, str]:
    """
    Split a heading remainder into location and time of day.

    The last dash separates the time of day: "HOUSE - KITCHEN - DAY" gives
    location "HOUSE - KITCHEN" and time "DAY".

    Returns:
        Tuple of (int_ext, location, time_of_day)
    """
    text = remainder.strip().lstrip(".:,").strip()
    location, time_of_day = text, ""

    parts = _DASH_SEPARATOR.split(text)
    if len(parts) > 1 and parts[-1]:
        location = " - ".join(p for p in parts[:-1] if p)
        time_of_day = parts[-1]
    else:
        m = _TRAILING_TIME.match(text)
        if m and m.group(1).strip():
            location, time_of_day = m.group(1), m.group(2)

    location = location.strip(" -–—.,:") or UNKNOWN_LOCATION
    return normalize_int_ext(keyword), location, time_of_day.strip()
