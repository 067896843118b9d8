# backend/app/services/export.py
import io
import unicodedata
from dataclasses import dataclass
from typing import List, Literal
from urllib.parse import quote
from xml.sax.saxutils import escape

from bs4 import BeautifulSoup
from docx import Document as DocxDocument
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer

from ..utils.logging import service_logger

ExportFormat = Literal["pdf", "docx"]

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

BLOCK_TAGS = ["h1", "h2", "h3", "h4", "p", "li"]


@dataclass
class ContentBlock:
    """A single heading, paragraph or list item extracted from document HTML"""
    kind: str  # 'heading', 'paragraph', 'bullet', 'numbered'
    text: str
    level: int = 0


@dataclass
class ExportResult:
    content: bytes
    media_type: str
    filename: str

    @property
    def content_disposition(self) -> str:
        """Attachment header with an ASCII filename plus the RFC 5987 UTF-8 form"""
        return (
            f'attachment; filename="{ascii_filename(self.filename)}"; '
            f"filename*=UTF-8''{quote(self.filename, safe='')}"
        )


def ascii_filename(filename: str) -> str:
    """Latin-1 safe form of a filename.

    Accents are dropped, and other non-ASCII characters and quotes become '_'.
    """
    chars = []
    for char in unicodedata.normalize("NFKD", filename):
        if unicodedata.combining(char):
            continue
        if char.isascii() and char.isprintable() and char not in '"\\':
            chars.append(char)
        else:
            chars.append("_")
    return "".join(chars)


def html_to_blocks(html: str) -> List[ContentBlock]:
    """Flatten document HTML into ordered text blocks"""
    soup = BeautifulSoup(html or "", "html.parser")
    blocks = []

    for element in soup.find_all(BLOCK_TAGS):
        # Nested blocks (a <p> inside an <li>) are covered by their parent
        if element.find_parent(BLOCK_TAGS):
            continue

        text = element.get_text(" ", strip=True)
        if not text:
            continue

        if element.name.startswith("h"):
            blocks.append(ContentBlock("heading", text, level=int(element.name[1])))
        elif element.name == "li":
            kind = "numbered" if element.find_parent("ol") else "bullet"
            blocks.append(ContentBlock(kind, text))
        else:
            blocks.append(ContentBlock("paragraph", text))

    if not blocks:
        # Unstructured content: one paragraph per line of text
        for line in soup.get_text("\n", strip=True).splitlines():
            blocks.append(ContentBlock("paragraph", line))

    return blocks


class ExportService:
    """Renders stored document HTML as PDF or DOCX"""

    def export(self, title: str, html: str, format: ExportFormat) -> ExportResult:
        blocks = html_to_blocks(html)
        service_logger.debug("Extracted content blocks", extra={
            "document_name": title,
            "block_count": len(blocks),
            "format": format
        })

        if format == "pdf":
            content = self.to_pdf(title, blocks)
        elif format == "docx":
            content = self.to_docx(title, blocks)
        else:
            raise ValueError(f"Unsupported export format: {format}")

        return ExportResult(
            content=content,
            media_type=MEDIA_TYPES[format],
            filename=f"{title}.{format}"
        )

    @staticmethod
    def to_pdf(title: str, blocks: List[ContentBlock]) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=letter,
            rightMargin=72,
            leftMargin=72,
            topMargin=72,
            bottomMargin=72
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            'CustomTitle',
            parent=styles['Heading1'],
            fontSize=16,
            spaceAfter=30
        )
        heading_styles = {1: styles['Heading1'], 2: styles['Heading2'], 3: styles['Heading3']}

        content = [Paragraph(escape(title), title_style)]
        number = 0
        for block in blocks:
            text = escape(block.text)
            if block.kind == "heading":
                number = 0
                content.append(Paragraph(text, heading_styles.get(block.level, styles['Heading4'])))
            elif block.kind == "bullet":
                content.append(Paragraph(text, styles['Normal'], bulletText='•'))
            elif block.kind == "numbered":
                number += 1
                content.append(Paragraph(text, styles['Normal'], bulletText=f"{number}."))
            else:
                content.append(Paragraph(text, styles['Normal']))
                content.append(Spacer(1, 12))

        doc.build(content)
        return buffer.getvalue()

    @staticmethod
    def to_docx(title: str, blocks: List[ContentBlock]) -> bytes:
        doc = DocxDocument()
        doc.add_heading(title, 0)

        for block in blocks:
            if block.kind == "heading":
                doc.add_heading(block.text, min(block.level, 9))
            elif block.kind == "bullet":
                doc.add_paragraph(block.text, style="List Bullet")
            elif block.kind == "numbered":
                doc.add_paragraph(block.text, style="List Number")
            else:
                doc.add_paragraph(block.text)

        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()


export_service = ExportService()
