"""
Fatal screenplay parsing errors.

Every error aborts the parse. The message is meant to be shown to the user
as-is; `code` is stable for callers that branch on the failure kind.
"""


class ScreenplayParseError(Exception):
    """Base class for all fatal parse failures."""

    code = "PARSE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ScreenplayParseError):
    code = "INVALID_INPUT"


class TooShortError(ScreenplayParseError):
    code = "TOO_SHORT"


class NoHeadersFoundError(ScreenplayParseError):
    code = "NO_HEADERS_FOUND"


class NoScenesError(ScreenplayParseError):
    code = "NO_SCENES"


class PdfExtractionError(ScreenplayParseError):
    code = "PDF_ERROR"


class PdfLoadError(PdfExtractionError):
    code = "PDF_LOAD_FAILURE"


class PdfEmptyDocumentError(PdfExtractionError):
    code = "PDF_EMPTY_DOCUMENT"


class PdfNoExtractableTextError(PdfExtractionError):
    code = "PDF_NO_EXTRACTABLE_TEXT"


class FdxParseError(ScreenplayParseError):
    code = "FDX_ERROR"


class XmlInvalidRootError(FdxParseError):
    code = "XML_INVALID_ROOT"


class XmlMissingContentError(FdxParseError):
    code = "XML_MISSING_CONTENT"


class XmlNoParagraphsError(FdxParseError):
    code = "XML_NO_PARAGRAPHS"


class XmlNoSceneHeadingsError(FdxParseError):
    code = "XML_NO_SCENE_HEADINGS"


class XmlNoValidScenesError(FdxParseError):
    code = "XML_NO_VALID_SCENES"
