"""
Line-by-line scene segmentation for plaintext and PDF-derived text.

The scan is a two-state machine. Before the first heading every line is
ignored; once a heading opens a scene, body lines accumulate until the next
heading (or end of input) finalizes it.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from front_matter import extract_title, skip_front_matter
from models import Scene, SceneHeader
from parser_config import ParserConfig
from scene_matcher import HEADER_STRATEGIES, HeaderMatch, HeaderStrategy, match_scene_header, parse_header_fields
from scene_numbering import SceneNumberResolver, clean_header_text, strip_number_artifacts
from text_normalizer import normalize_text

logger = logging.getLogger(__name__)


class ParseState(Enum):
    BEFORE_FIRST_SCENE = "before_first_scene"
    IN_SCENE = "in_scene"


def build_scene(match: HeaderMatch, number: int, content: str, index: int) -> Scene:
    """Create a Scene from a heading match and its accumulated body."""
    int_ext, location, time_of_day = parse_header_fields(
        match.keyword, strip_number_artifacts(match.remainder)
    )
    return Scene(
        number=number,
        header=clean_header_text(match.keyword, match.remainder),
        header_parsed=SceneHeader(
            raw=match.line,
            scene_number=number,
            int_ext=int_ext,
            location=location,
            time_of_day=time_of_day
        ),
        content=content.strip(),
        index=index
    )


@dataclass
class _OpenScene:
    match: HeaderMatch
    number: int
    lines: list[str] = field(default_factory=list)


class ParserSession:
    """
    Scan state for one document. Create a new session per parse call.
    """

    def __init__(self, strategies: tuple[HeaderStrategy, ...] = HEADER_STRATEGIES):
        self.strategies = strategies
        self.state = ParseState.BEFORE_FIRST_SCENE
        self.resolver = SceneNumberResolver()
        self.header_count = 0
        self._current: Optional[_OpenScene] = None
        self._emitted = 0

    def step(self, line: str) -> Optional[Scene]:
        """
        Feed one line.

        Returns:
            The finalized previous scene if `line` opened a new one, else None
        """
        match = match_scene_header(line, self.strategies)
        if match is not None:
            finished = self._finalize()
            self.header_count += 1
            self._current = _OpenScene(match=match, number=self.resolver.resolve_match(match))
            self.state = ParseState.IN_SCENE
            return finished

        if self.state is ParseState.IN_SCENE:
            stripped = line.strip()
            if stripped:
                self._current.lines.append(stripped)
        return None

    def finish(self) -> Optional[Scene]:
        """Finalize the open scene at end of input."""
        return self._finalize()

    def _finalize(self) -> Optional[Scene]:
        if self._current is None:
            return None
        scene = build_scene(
            self._current.match,
            self._current.number,
            "\n".join(self._current.lines),
            self._emitted
        )
        self._current = None
        self._emitted += 1
        return scene


def segment_lines(lines: list[str]) -> list[Scene]:
    """Run a fresh ParserSession over lines and collect every scene."""
    session = ParserSession()
    scenes: list[Scene] = []
    for line in lines:
        scene = session.step(line)
        if scene is not None:
            scenes.append(scene)
    last = session.finish()
    if last is not None:
        scenes.append(last)

    logger.debug("Detected %d scene headers", session.header_count)
    return scenes


def parse_plaintext(text: str, config: ParserConfig) -> tuple[str, list[Scene]]:
    """
    Segment plaintext into candidate scenes.

    Args:
        text: Raw or already-normalized screenplay text
        config: Parser thresholds

    Returns:
        Tuple of (title, scenes). Scenes are not yet validated.

    Raises:
        NoHeadersFoundError: if no line is a scene heading
    """
    normalized = normalize_text(text, config.spaced_text_ratio)
    front_matter, body = skip_front_matter(normalized.split("\n"))
    title = extract_title(front_matter, config.title_scan_lines, config.default_title)
    return title, segment_lines(body)
