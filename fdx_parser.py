"""
Final Draft (.fdx) scene segmentation.

FDX files are already structured: every <Paragraph> under <Content> has a
Type attribute, and each "Scene Heading" paragraph starts a new scene.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from lxml import etree

from models import ParagraphElement, Scene
from parse_errors import (
    XmlInvalidRootError,
    XmlMissingContentError,
    XmlNoParagraphsError,
    XmlNoSceneHeadingsError,
    XmlNoValidScenesError,
)
from parser_config import ParserConfig
from scene_matcher import HeaderMatch, match_scene_header
from scene_numbering import SceneNumberResolver
from scene_parser import build_scene
from scene_validator import has_analyzable_content

logger = logging.getLogger(__name__)

FDX_ROOT = "FinalDraft"
SCENE_HEADING = "Scene Heading"
CONTENT_TYPES = frozenset({"Action", "Character", "Dialogue", "Parenthetical"})

_LEADING_NUMBER = re.compile(r"^(\d+)[\s.)]+(.*)$")
_ATTRIBUTE_NUMBER = re.compile(r"^\s*(\d+)")


def load_fdx(xml_text: Union[str, bytes]) -> etree._Element:
    """
    Parse FDX text and check the root element.

    Bytes go to lxml untouched so the XML declaration picks the encoding.

    Raises:
        XmlInvalidRootError: if the text is not XML or the root is not FinalDraft
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        if isinstance(xml_text, str):
            xml_text = xml_text.encode("utf-8")
        root = etree.fromstring(xml_text, parser=parser)
    except etree.XMLSyntaxError as e:
        raise XmlInvalidRootError(f"Not a valid Final Draft XML file: {e}") from e

    tag = etree.QName(root).localname
    if tag != FDX_ROOT:
        raise XmlInvalidRootError(
            f"Not a valid Final Draft XML file: expected <{FDX_ROOT}> root, found <{tag}>"
        )
    return root


def _paragraph_text(paragraph: etree._Element) -> str:
    texts = paragraph.findall("Text")
    if texts:
        return "".join("".join(t.itertext()) for t in texts).strip()
    return (paragraph.text or "").strip()


def _to_element(paragraph: etree._Element) -> ParagraphElement:
    return ParagraphElement(
        type=paragraph.get("Type", "Unknown"),
        text=_paragraph_text(paragraph),
        number=paragraph.get("Number")
    )


def read_paragraphs(root: etree._Element) -> list[ParagraphElement]:
    """
    Read body paragraphs in document order.

    Raises:
        XmlMissingContentError: if there is no <Content> element
        XmlNoParagraphsError: if <Content> holds no <Paragraph>
    """
    content = root.find("Content")
    if content is None:
        raise XmlMissingContentError(
            "FDX file has no <Content> element. File may be corrupted or use an unsupported FDX version."
        )

    paragraphs = [_to_element(p) for p in content.iter("Paragraph")]
    if not paragraphs:
        raise XmlNoParagraphsError(
            "No paragraph elements found in FDX file. File may be corrupted or use an unsupported FDX version."
        )
    return paragraphs


def read_title_page(root: etree._Element, default: str) -> str:
    """First non-empty title page paragraph, or `default`."""
    title_content = root.find("TitlePage/Content")
    if title_content is None:
        return default
    for paragraph in title_content.iter("Paragraph"):
        text = _paragraph_text(paragraph)
        if text:
            return text
    return default


def _heading_match(text: str) -> HeaderMatch:
    match = match_scene_header(text)
    if match is not None:
        return match

    # Headings without INT/EXT ("12 KITCHEN") still open a scene in FDX
    m = _LEADING_NUMBER.match(text)
    return HeaderMatch(
        strategy="fdx_heading",
        leading_number=int(m.group(1)) if m else None,
        keyword="",
        remainder=m.group(2) if m else text,
        line=text
    )


def _attribute_number(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    m = _ATTRIBUTE_NUMBER.match(value)
    return int(m.group(1)) if m else None


@dataclass
class _OpenScene:
    match: HeaderMatch
    number: int
    lines: list[str] = field(default_factory=list)


def segment_paragraphs(paragraphs: list[ParagraphElement], config: ParserConfig) -> list[Scene]:
    """
    Group paragraphs into scenes.

    Args:
        paragraphs: Body paragraphs in document order
        config: Parser thresholds

    Returns:
        Candidate scenes in source order, short ones included

    Raises:
        XmlNoSceneHeadingsError: if no paragraph is a scene heading
        XmlNoValidScenesError: if every scene is too short to keep
    """
    resolver = SceneNumberResolver()
    scenes: list[Scene] = []
    current: Optional[_OpenScene] = None
    heading_count = 0

    def close(open_scene: _OpenScene) -> Scene:
        return build_scene(open_scene.match, open_scene.number, "\n".join(open_scene.lines), len(scenes))

    for paragraph in paragraphs:
        text = paragraph.text
        if not text or any(marker in text for marker in config.skip_markers):
            continue

        if paragraph.type == SCENE_HEADING:
            heading_count += 1
            if current is not None:
                scenes.append(close(current))
            match = _heading_match(text)
            number = resolver.resolve(
                match.remainder,
                match.leading_number,
                _attribute_number(paragraph.number)
            )
            current = _OpenScene(match=match, number=number)
        elif current is not None and paragraph.type in CONTENT_TYPES:
            current.lines.append(text)

    if current is not None:
        scenes.append(close(current))

    if heading_count == 0:
        raise XmlNoSceneHeadingsError(
            'No scene headings found in FDX file. Ensure scenes use "Scene Heading" paragraph type.'
        )

    if not any(has_analyzable_content(s.content, config.min_scene_content) for s in scenes):
        raise XmlNoValidScenesError(
            f"Found {heading_count} scene headings but no valid scenes with content. "
            "All scenes may be empty."
        )

    logger.debug("FDX parsing: %d paragraphs, %d headings", len(paragraphs), heading_count)
    return scenes


def parse_fdx_text(xml_text: Union[str, bytes], config: ParserConfig) -> tuple[str, list[Scene]]:
    """
    Segment an FDX document given as text or raw bytes.

    Returns:
        Tuple of (title, scenes). Scenes are not yet validated.
    """
    root = load_fdx(xml_text)
    paragraphs = read_paragraphs(root)
    title = read_title_page(root, config.default_title)
    return title, segment_paragraphs(paragraphs, config)
