"""
Shared fixtures for parser tests.
"""
from xml.sax.saxutils import escape

import fitz
import pytest


SCENARIO_A = (
    "INT. KITCHEN - DAY\n\nBOB enters the room quietly.\n\n"
    "EXT. STREET - NIGHT\n\nBOB walks to his car."
)


def build_fdx(paragraphs, title_page=None):
    """
    Build a Final Draft document.

    Args:
        paragraphs: (type, text) or (type, text, number) tuples
        title_page: Optional list of title page lines
    """
    body = []
    for para in paragraphs:
        para_type, text = para[0], para[1]
        number = f' Number="{para[2]}"' if len(para) > 2 else ""
        body.append(f'    <Paragraph{number} Type="{para_type}">\n'
                    f'      <Text>{escape(text)}</Text>\n'
                    f'    </Paragraph>')

    title_xml = ""
    if title_page is not None:
        lines = "".join(
            f'<Paragraph Alignment="Center" Type="Action"><Text>{escape(t)}</Text></Paragraph>'
            for t in title_page
        )
        title_xml = f"  <TitlePage>\n    <Content>{lines}</Content>\n  </TitlePage>\n"

    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="no" ?>\n'
        '<FinalDraft DocumentType="Script" Template="No" Version="5">\n'
        '  <Content>\n' + "\n".join(body) + '\n  </Content>\n'
        + title_xml +
        '</FinalDraft>\n'
    )


def build_pdf(pages):
    """Build PDF bytes with one text line per entry, 16pt apart."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line, fontsize=12)
            y += 16
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def scenario_a():
    return SCENARIO_A


@pytest.fixture
def make_fdx():
    return build_fdx


@pytest.fixture
def make_pdf():
    return build_pdf
