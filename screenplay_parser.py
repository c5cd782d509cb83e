"""
Screenplay Parser - turn plaintext, PDF or Final Draft input into scenes.

Every entry point funnels into the same two segmentation paths
(line-based for plaintext/PDF, paragraph-based for FDX) and then into the
validator. Each call owns all of its state, so calls may run concurrently.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from fdx_parser import parse_fdx_text
from format_detector import detect_format, format_for_path
from models import ParsedScreenplay, ParseMetadata, Scene, SourceFormat
from parse_errors import InvalidInputError, TooShortError
from parser_config import ParserConfig
from pdf_extractor import extract_text_from_pdf
from scene_parser import parse_plaintext
from scene_validator import validate_scenes

logger = logging.getLogger(__name__)


def _check_input(text: object, config: ParserConfig, types: tuple = (str,)) -> None:
    if not isinstance(text, types) or not text:
        raise InvalidInputError("Invalid input - screenplay text must be a non-empty string")
    if len(text.strip()) < config.min_input_length:
        raise TooShortError(
            f"Screenplay text too short (minimum {config.min_input_length} characters required)"
        )


def parse_screenplay(
    text: str,
    *,
    config: Optional[ParserConfig] = None,
    source_format: Optional[SourceFormat] = None
) -> ParsedScreenplay:
    """
    Parse decoded screenplay text.

    Args:
        text: Plaintext screenplay or FDX document text
        config: Parser thresholds (defaults if omitted)
        source_format: Format recorded in metadata; detected if omitted.
            "fdx" forces the XML reader.

    Returns:
        ParsedScreenplay with scenes in source order and advisory warnings

    Raises:
        ScreenplayParseError: subclass describing the fatal condition
    """
    config = config or ParserConfig()
    _check_input(text, config)

    dialect = "fdx" if source_format == "fdx" else detect_format(text)
    if dialect == "fdx":
        title, candidates = parse_fdx_text(text, config)
    else:
        title, candidates = parse_plaintext(text, config)

    return _build_result(title, candidates, config, source_format or dialect)


def _build_result(
    title: str,
    candidates: list[Scene],
    config: ParserConfig,
    fmt: SourceFormat
) -> ParsedScreenplay:
    report = validate_scenes(candidates, config)
    for warning in report.warnings:
        logger.debug("%s: %s", warning.code, warning.message)

    logger.info(
        "Parsed %s screenplay: %d candidate scenes, %d kept",
        fmt, len(candidates), len(report.scenes)
    )

    return ParsedScreenplay(
        title=title,
        scenes=report.scenes,
        metadata=ParseMetadata(
            total_scenes=len(report.scenes),
            format=fmt,
            parse_date=datetime.now(timezone.utc).isoformat()
        ),
        warnings=report.warnings
    )


def parse_pdf(
    source: Union[str, bytes],
    *,
    config: Optional[ParserConfig] = None
) -> ParsedScreenplay:
    """Parse a PDF given as a path or its bytes."""
    config = config or ParserConfig()
    text = extract_text_from_pdf(source, config)
    return parse_screenplay(text, config=config, source_format="pdf")


def parse_fdx(
    data: Union[str, bytes],
    *,
    config: Optional[ParserConfig] = None
) -> ParsedScreenplay:
    """Parse a Final Draft export given as bytes or decoded text."""
    if not isinstance(data, (bytes, bytearray)):
        return parse_screenplay(data, config=config, source_format="fdx")

    # Raw bytes go straight to lxml so the declared encoding is honored
    config = config or ParserConfig()
    data = bytes(data)
    _check_input(data, config, types=(bytes,))
    title, candidates = parse_fdx_text(data, config)
    return _build_result(title, candidates, config, "fdx")


def parse_file(path: str, *, config: Optional[ParserConfig] = None) -> ParsedScreenplay:
    """
    Parse a screenplay file, choosing the reader by extension.

    .pdf goes through PDF reconstruction, .fdx through the XML reader, and
    anything else is read as UTF-8 plaintext.
    """
    fmt = format_for_path(path)
    if fmt == "pdf":
        return parse_pdf(path, config=config)

    data = Path(path).read_bytes()
    if fmt == "fdx":
        return parse_fdx(data, config=config)
    text = data.decode("utf-8-sig", errors="replace")
    return parse_screenplay(text, config=config)
