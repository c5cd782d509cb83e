"""
Scene number resolution and heading cleanup.

PDF exports print the scene number at both margins, so extracted headings
often look like "12 INT. KITCHEN - DAY 12 12". The number printed after
the heading is preferred, then the one before it, then auto-increment.
"""
import logging
import re
from typing import Optional

from scene_matcher import HeaderMatch

logger = logging.getLogger(__name__)

_EMBEDDED_NUMBER = re.compile(r"(\d+)")

# Applied in this order
_DOUBLE_TRAILING_NUMBER = re.compile(r"\s+\d+\s+\d+\s*$")   # "DAY 1 1" -> "DAY"
_TRAILING_DASH_NUMBER = re.compile(r"\s+-\s*\d+\s*$")       # "DAY - 1" -> "DAY"
_TRAILING_NUMBER = re.compile(r"\s+\d+\s*$")                # "DAY 1" -> "DAY"


def strip_number_artifacts(text: str) -> str:
    text = _DOUBLE_TRAILING_NUMBER.sub("", text)
    text = _TRAILING_DASH_NUMBER.sub("", text)
    text = _TRAILING_NUMBER.sub("", text)
    return text.strip()


def clean_header_text(keyword: str, remainder: str) -> str:
    """
    Build the display form of a heading.

    Args:
        keyword: Matched INT/EXT keyword as written
        remainder: Text after the keyword

    Returns:
        "KEYWORD REMAINDER" with trailing scene number artifacts removed
    """
    joined = " ".join(part for part in (keyword.strip(), remainder.strip()) if part)
    return strip_number_artifacts(joined)


def _positive(value: Optional[int]) -> Optional[int]:
    return value if value else None


class SceneNumberResolver:
    """
    Assigns scene numbers for one parse call.

    Collisions are logged and recorded but never rejected: both scenes keep
    the same number.
    """

    def __init__(self):
        self.seen: set[int] = set()
        self.last_number = 0
        self.collisions: list[int] = []

    def resolve(
        self,
        remainder: str,
        leading_number: Optional[int] = None,
        fallback_number: Optional[int] = None
    ) -> int:
        """
        Pick the number for the next scene.

        Priority: first run of digits in `remainder`, then
        `leading_number`, then `fallback_number`, then last number + 1.
        """
        embedded = _EMBEDDED_NUMBER.search(remainder)
        number = (
            _positive(int(embedded.group(1)) if embedded else None)
            or _positive(leading_number)
            or _positive(fallback_number)
            or self.last_number + 1
        )

        if number in self.seen:
            logger.warning("[Scene %d] Duplicate scene number detected", number)
            self.collisions.append(number)
        self.seen.add(number)
        self.last_number = number
        return number

    def resolve_match(self, match: HeaderMatch) -> int:
        return self.resolve(match.remainder, match.leading_number)
