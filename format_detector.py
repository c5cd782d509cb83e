"""
Input dialect detection.
"""
from pathlib import Path
from typing import Literal

XML_DECLARATION = "<?xml"
FDX_ROOT_MARKER = "<FinalDraft"


def detect_format(text: str) -> Literal["plaintext", "fdx"]:
    """Classify decoded text as a Final Draft export or plaintext."""
    if XML_DECLARATION in text and FDX_ROOT_MARKER in text:
        return "fdx"
    return "plaintext"


def format_for_path(path: str) -> Literal["plaintext", "pdf", "fdx"]:
    """Pick a reader by file extension. Unknown extensions read as plaintext."""
    suffix = Path(path).suffix.lower()
    if suffix == ".pdf":
        return "pdf"
    if suffix == ".fdx":
        return "fdx"
    return "plaintext"
