"""
Tunable thresholds for screenplay parsing.
"""
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Whitespace share above which text is treated as letter-spaced ("I N T .").
# Prose sits around 15-20% whitespace; bad PDF extraction pushes it near 50%.
DEFAULT_SPACED_TEXT_RATIO = 0.4

# Vertical gap (PDF layout units) that starts a new line. Fragments on one
# baseline differ by fractions of a unit; a 12pt line advance is ~14 units.
DEFAULT_LINE_BREAK_THRESHOLD = 5.0

# Scenes with less trimmed body text than this carry no analyzable story.
DEFAULT_MIN_SCENE_CONTENT = 10

DEFAULT_MIN_INPUT_LENGTH = 50
DEFAULT_MIN_PDF_TEXT_LENGTH = 100
DEFAULT_LOW_SCENE_COUNT = 3
DEFAULT_TITLE_SCAN_LINES = 20
DEFAULT_TITLE = "Untitled Screenplay"
DEFAULT_SKIP_MARKERS = ("TITLE CARD", "Part one")


@dataclass(frozen=True)
class ParserConfig:
    """Parser thresholds. One instance may be shared across parse calls."""

    spaced_text_ratio: float = DEFAULT_SPACED_TEXT_RATIO
    line_break_threshold: float = DEFAULT_LINE_BREAK_THRESHOLD
    min_scene_content: int = DEFAULT_MIN_SCENE_CONTENT
    min_input_length: int = DEFAULT_MIN_INPUT_LENGTH
    min_pdf_text_length: int = DEFAULT_MIN_PDF_TEXT_LENGTH
    low_scene_count: int = DEFAULT_LOW_SCENE_COUNT
    title_scan_lines: int = DEFAULT_TITLE_SCAN_LINES
    default_title: str = DEFAULT_TITLE
    skip_markers: tuple[str, ...] = DEFAULT_SKIP_MARKERS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParserConfig":
        """Build a config from a plain dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("Ignoring unknown config key: %s", key)
                continue
            if key == "skip_markers":
                value = tuple(value)
            values[key] = value
        return cls(**values)


def load_config(path: str) -> ParserConfig:
    """
    Load a ParserConfig from a JSON file.

    Args:
        path: Path to a JSON object whose keys are ParserConfig fields

    Returns:
        ParserConfig with file values over the defaults
    """
    with open(Path(path), encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return ParserConfig.from_dict(data)
