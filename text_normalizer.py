"""
Text cleanup applied before scene detection.

Repairs letter-spaced extraction output, rejoins scene headings broken
across two lines, and squeezes horizontal whitespace. Newlines survive
every step because each line is a candidate scene heading.
"""
import logging
import re

from parser_config import DEFAULT_SPACED_TEXT_RATIO

logger = logging.getLogger(__name__)

MAX_SQUEEZE_PASSES = 10

# Longer phrases first so "MOMENTS LATER" wins over "LATER".
TIME_OF_DAY_TOKENS = (
    "A MOMENT LATER",
    "MOMENTS LATER",
    "SECONDS LATER",
    "MINUTES LATER",
    "HOURS LATER",
    "SHORTLY AFTER",
    "SAME TIME",
    "CONTINUOUS",
    "AFTERNOON",
    "INTERCUT",
    "MORNING",
    "EVENING",
    "NIGHT",
    "LATER",
    "DAWN",
    "DUSK",
    "SAME",
    "DAY",
)

_TIME_OF_DAY = "|".join(re.escape(t) for t in TIME_OF_DAY_TOKENS)

SPLIT_HEADER_PATTERN = re.compile(
    rf"(?<![A-Za-z])(INT/EXT\.|INT\.|EXT\.)[ \t]*\n[ \t]*({_TIME_OF_DAY})\b",
    re.IGNORECASE
)

_SPACED_WORD_CHARS = re.compile(r"(\w) (?=\w)")
_SPACED_PERIOD = re.compile(r"(\w) \.")
_SPACED_SLASH = re.compile(r"(\w) / (\w)")


def normalize_newlines(text: str) -> str:
    """Convert CR/LF variants and form feeds to \\n, tabs to spaces."""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")
    return text.replace("\t", " ")


def is_spaced_out(text: str, ratio: float = DEFAULT_SPACED_TEXT_RATIO) -> bool:
    """
    True if spaces make up more than `ratio` of the text.

    Newlines are left out of both counts, so blank lines between
    paragraphs do not make ordinary text look letter-spaced.
    """
    chars = [ch for ch in text if ch not in "\n\r\f"]
    if not chars:
        return False
    spaces = sum(1 for ch in chars if ch in " \t")
    return spaces / len(chars) > ratio


def squeeze_spaced_text(text: str) -> str:
    """
    Collapse single spaces inside letter-spaced words.

    "I N T .  K I T C H E N" -> "INT.  KITCHEN". Word gaps in spaced-out
    extraction are wider than one space, so they survive.
    """
    for _ in range(MAX_SQUEEZE_PASSES):
        before = text
        text = _SPACED_WORD_CHARS.sub(r"\1", text)
        text = _SPACED_PERIOD.sub(r"\1.", text)
        text = _SPACED_SLASH.sub(r"\1/\2", text)
        if text == before:
            break
    return text


def merge_split_headers(text: str) -> str:
    """Rejoin "INT.\\nDAY" style headings that a line wrap split in two."""
    return SPLIT_HEADER_PATTERN.sub(r"\1 \2", text)


def collapse_whitespace(text: str) -> str:
    """Squeeze runs of spaces and trim spaces around newlines."""
    text = re.sub(r" +", " ", text)
    text = re.sub(r"\n +", "\n", text)
    text = re.sub(r" +\n", "\n", text)
    return text.strip()


def normalize_text(text: str, spaced_text_ratio: float = DEFAULT_SPACED_TEXT_RATIO) -> str:
    """
    Run the full cleanup pipeline.

    Args:
        text: Raw screenplay text
        spaced_text_ratio: Whitespace share that marks letter-spaced text

    Returns:
        Normalized text. Normalizing it again returns it unchanged.
    """
    # Collapsing wide gaps can leave text that still reads as letter-spaced,
    # so repeat until the output is stable.
    for _ in range(MAX_SQUEEZE_PASSES):
        before = text
        text = normalize_newlines(text)
        if is_spaced_out(text, spaced_text_ratio):
            logger.debug("Detected letter-spaced text, squeezing")
            text = squeeze_spaced_text(text)
        text = merge_split_headers(text)
        text = collapse_whitespace(text)
        if text == before:
            break
    return text
