"""
PDF text extraction with position-aware line reconstruction.

The byte order of text in a PDF content stream is often shuffled by the
layout engine, so page text is rebuilt from word positions instead of being
taken in stream order.
"""
import logging
from typing import Iterable, Optional, Union

import fitz  # PyMuPDF

from models import TextFragment
from parse_errors import PdfEmptyDocumentError, PdfLoadError, PdfNoExtractableTextError
from parser_config import DEFAULT_LINE_BREAK_THRESHOLD, ParserConfig
from text_normalizer import normalize_text

logger = logging.getLogger(__name__)


def reconstruct_page_text(
    fragments: list[TextFragment],
    line_break_threshold: float = DEFAULT_LINE_BREAK_THRESHOLD
) -> str:
    """
    Rebuild one page's text in reading order.

    Args:
        fragments: Positioned text runs in any order
        line_break_threshold: Vertical gap that starts a new line

    Returns:
        Page text, one visual line per text line
    """
    # Top of page first, then left to right
    ordered = sorted(fragments, key=lambda f: (-f.y, f.x))

    parts: list[str] = []
    last_y: Optional[float] = None
    for fragment in ordered:
        if last_y is not None and abs(fragment.y - last_y) > line_break_threshold:
            parts.append("\n")
        parts.append(fragment.text + " ")
        last_y = fragment.y

    return "".join(parts)


def reconstruct_document_text(
    pages: Iterable[list[TextFragment]],
    config: Optional[ParserConfig] = None
) -> str:
    """
    Rebuild and normalize the text of a whole document.

    Args:
        pages: Fragments for each page, in page order
        config: Parser thresholds

    Returns:
        Normalized document text

    Raises:
        PdfNoExtractableTextError: if no page has text, or too little text
    """
    config = config or ParserConfig()
    page_texts: list[str] = []
    total_fragments = 0

    for page_number, fragments in enumerate(pages, start=1):
        if not fragments:
            logger.warning("Page %d contains no extractable text items", page_number)
            continue
        total_fragments += len(fragments)
        page_texts.append(reconstruct_page_text(fragments, config.line_break_threshold))

    if total_fragments == 0:
        raise PdfNoExtractableTextError(
            "PDF contains no extractable text. This may be a scanned image or encrypted PDF."
        )

    text = normalize_text("\n\n".join(page_texts), config.spaced_text_ratio)

    if len(text) < config.min_pdf_text_length:
        raise PdfNoExtractableTextError(
            f"Extracted text too short ({len(text)} chars). "
            "PDF may be corrupted or contain primarily images."
        )

    logger.debug("PDF reconstruction: %d text items, %d chars", total_fragments, len(text))
    return text


def extract_page_fragments(page: "fitz.Page") -> list[TextFragment]:
    """
    Read word boxes from a PyMuPDF page.

    PyMuPDF measures y downward from the top; it is flipped so that a larger
    y means higher on the page.
    """
    height = page.rect.height
    return [
        TextFragment(text=word[4], x=word[0], y=height - word[3])
        for word in page.get_text("words")
        if word[4].strip()
    ]


def _open_document(source: Union[str, bytes]) -> "fitz.Document":
    try:
        if isinstance(source, (bytes, bytearray)):
            if not source:
                raise PdfLoadError("Empty file buffer provided")
            return fitz.open(stream=bytes(source), filetype="pdf")
        return fitz.open(source)
    except (RuntimeError, ValueError, OSError) as e:
        raise PdfLoadError(f"Failed to load PDF document - {e}") from e


def extract_text_from_pdf(
    source: Union[str, bytes],
    config: Optional[ParserConfig] = None
) -> str:
    """
    Extract normalized screenplay text from a PDF.

    Args:
        source: Path to the PDF file, or its bytes
        config: Parser thresholds

    Returns:
        Normalized document text

    Raises:
        PdfLoadError: if the file cannot be opened or is password-protected
        PdfEmptyDocumentError: if the document has no pages
        PdfNoExtractableTextError: if the pages carry no usable text
    """
    doc = _open_document(source)
    try:
        if doc.needs_pass:
            raise PdfLoadError("This PDF is password-protected and cannot be parsed.")
        if doc.page_count == 0:
            raise PdfEmptyDocumentError("PDF contains no pages")

        pages: list[list[TextFragment]] = []
        for page_num in range(doc.page_count):
            try:
                page = doc.load_page(page_num)
            except (RuntimeError, ValueError) as e:
                logger.warning("Failed to load page %d, skipping: %s", page_num + 1, e)
                continue
            pages.append(extract_page_fragments(page))

        text = reconstruct_document_text(pages, config)
        logger.debug("PDF extraction successful: %d pages", doc.page_count)
        return text
    finally:
        doc.close()
