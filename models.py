"""
Data models for the screenplay scene parser.
"""
from dataclasses import dataclass, field
from typing import Literal, Optional

IntExt = Literal["INT", "EXT", "INT./EXT."]
SourceFormat = Literal["plaintext", "pdf", "fdx"]


@dataclass(frozen=True)
class TextFragment:
    """A positioned glyph run from one PDF page."""
    text: str
    x: float                  # Left edge
    y: float                  # Baseline, measured upward from page bottom


@dataclass(frozen=True)
class ParagraphElement:
    """One <Paragraph> of a Final Draft export."""
    type: str                 # "Scene Heading", "Action", "Character", ...
    text: str
    number: Optional[str] = None  # Paragraph "Number" attribute, if present


@dataclass(frozen=True)
class SceneHeader:
    """Structured fields of a scene heading."""
    raw: str                  # Line as it appeared in the source
    scene_number: int
    int_ext: Optional[IntExt]
    location: str
    time_of_day: str


@dataclass
class Scene:
    """A single scene in source order."""
    number: int
    header: str               # Cleaned display form
    header_parsed: SceneHeader
    content: str
    index: int                # 0-indexed position in source order


@dataclass(frozen=True)
class ParseWarning:
    """Advisory condition found while parsing. Never fatal."""
    code: str
    message: str
    scene_number: Optional[int] = None


@dataclass(frozen=True)
class ParseMetadata:
    total_scenes: int
    format: SourceFormat
    parse_date: str           # ISO-8601, UTC


@dataclass
class ParsedScreenplay:
    """Result of a parse call. Owned by the caller."""
    title: str
    scenes: list[Scene]
    metadata: ParseMetadata
    warnings: list[ParseWarning] = field(default_factory=list)
