"""
Post-parse checks over the assembled scene list.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field

from models import ParseWarning, Scene
from parse_errors import NoScenesError
from parser_config import DEFAULT_MIN_SCENE_CONTENT, ParserConfig

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    scenes: list[Scene]
    warnings: list[ParseWarning] = field(default_factory=list)


def has_analyzable_content(content: str, min_chars: int = DEFAULT_MIN_SCENE_CONTENT) -> bool:
    return len(content.strip()) >= min_chars


def validate_scenes(scenes: list[Scene], config: ParserConfig) -> ValidationReport:
    """
    Drop contentless scenes and collect advisory warnings.

    Args:
        scenes: Candidate scenes in source order
        config: Parser thresholds

    Returns:
        ValidationReport with retained scenes (re-indexed) and warnings

    Raises:
        NoScenesError: if no scene survives
    """
    warnings: list[ParseWarning] = []
    kept: list[Scene] = []

    for scene in scenes:
        if has_analyzable_content(scene.content, config.min_scene_content):
            kept.append(scene)
            continue
        length = len(scene.content.strip())
        logger.warning(
            "[Scene %d] Empty or insufficient content (%d chars) - skipping",
            scene.number, length
        )
        warnings.append(ParseWarning(
            code="SHORT_SCENE_DROPPED",
            message=f"Scene {scene.number} dropped: only {length} characters of content",
            scene_number=scene.number
        ))

    if not kept:
        raise NoScenesError(
            f"Found {len(scenes)} scene headers but no valid scenes with content. "
            "All scenes may be empty or too short."
        )

    for index, scene in enumerate(kept):
        scene.index = index

    if len(kept) < config.low_scene_count:
        warnings.append(ParseWarning(
            code="LOW_SCENE_COUNT",
            message=f"Only {len(kept)} scene{'' if len(kept) == 1 else 's'} detected. "
                    "Consider checking if this is the complete screenplay."
        ))

    counts = Counter(scene.number for scene in kept)
    for number, count in counts.items():
        if count > 1:
            logger.warning("Scene number %d used by %d scenes", number, count)
            warnings.append(ParseWarning(
                code="DUPLICATE_SCENE_NUMBER",
                message=f"Scene number {number} appears {count} times",
                scene_number=number
            ))

    return ValidationReport(scenes=kept, warnings=warnings)
