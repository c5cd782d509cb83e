"""
Title page handling for plaintext and PDF input.
"""
import logging
import re

from parse_errors import NoHeadersFoundError
from parser_config import DEFAULT_TITLE, DEFAULT_TITLE_SCAN_LINES
from scene_matcher import is_scene_header

logger = logging.getLogger(__name__)

_TITLE_LINE = re.compile(r"^Title:\s*", re.IGNORECASE)


def find_first_header(lines: list[str]) -> int:
    """
    Find the index of the first scene heading.

    Uses the same predicate as scene detection, so anything before the
    returned index is title page material.

    Raises:
        NoHeadersFoundError: if no line is a scene heading
    """
    for i, line in enumerate(lines):
        if not line.strip():
            continue
        if is_scene_header(line):
            logger.debug("First scene header at line %d: %r", i, line.strip()[:80])
            return i

    raise NoHeadersFoundError(
        "No scene headers detected. Ensure screenplay uses proper scene headers "
        "(INT./EXT. LOCATION - TIME)"
    )


def skip_front_matter(lines: list[str]) -> tuple[list[str], list[str]]:
    """
    Split lines into (front_matter, body).

    The body starts with the first scene heading.
    """
    start = find_first_header(lines)
    if start:
        logger.debug("Skipping %d lines of front matter", start)
    return lines[:start], lines[start:]


def _is_mostly_uppercase(line: str) -> bool:
    letters = [ch for ch in line if ch.isalpha()]
    if not letters:
        return False
    upper = sum(1 for ch in letters if ch.isupper())
    return upper / len(letters) >= 0.8


def extract_title(
    front_matter: list[str],
    max_lines: int = DEFAULT_TITLE_SCAN_LINES,
    default: str = DEFAULT_TITLE
) -> str:
    """
    Best-effort title from title page lines.

    An explicit "Title:" line wins; otherwise the first short, mostly
    uppercase line is taken.
    """
    candidates = [line.strip() for line in front_matter[:max_lines]]

    for line in candidates:
        if _TITLE_LINE.match(line):
            title = _TITLE_LINE.sub("", line).strip()
            if title:
                return title

    for line in candidates:
        if 3 < len(line) < 60 and _is_mostly_uppercase(line):
            return line

    return default
