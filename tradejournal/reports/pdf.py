"""PDF output for report documents via fpdf2."""

import logging
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from tradejournal.exceptions import PersistenceError
from tradejournal.models import ReportDocument

logger = logging.getLogger(__name__)

FONT = "Helvetica"


def _latin1(text: str) -> str:
    # Core PDF fonts only cover latin-1.
    return text.encode("latin-1", "replace").decode("latin-1")


class ReportPDF(FPDF):
    """FPDF page with the journal footer on every page."""

    def __init__(self, footer_text: str = ""):
        super().__init__()
        self.footer_text = footer_text

    def footer(self):
        self.set_y(-15)
        self.set_font(FONT, "I", 8)
        self.set_text_color(128, 128, 128)
        text = f"Page {self.page_no()}"
        if self.footer_text:
            text = f"{self.footer_text}  |  {text}"
        self.cell(0, 10, _latin1(text), align="C")


def build_pdf(document: ReportDocument) -> ReportPDF:
    """Lay out a document: title, timestamp, then each section."""
    pdf = ReportPDF(footer_text=document.footer)
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    pdf.set_font(FONT, "B", 18)
    pdf.multi_cell(0, 10, _latin1(document.title), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font(FONT, "", 10)
    pdf.set_text_color(100, 100, 100)
    pdf.cell(0, 8, _latin1(document.generated_line), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(0, 0, 0)
    pdf.ln(4)

    for section in document.sections:
        pdf.set_font(FONT, "B", 13)
        pdf.cell(0, 9, _latin1(section.title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font(FONT, "", 10)
        for entry in section.entries:
            pdf.multi_cell(
                0, 6, _latin1(f"{entry.label}: {entry.value}"),
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
        for line in section.lines:
            pdf.multi_cell(0, 6, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    return pdf


def write_pdf(document: ReportDocument, path: Path) -> Path:
    """Render a document to a PDF file.

    Args:
        document: The report to write.
        path: Output .pdf file, or a directory to place document.filename in.

    Returns:
        The path written.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    path = Path(path)
    if path.is_dir() or path.suffix.lower() != ".pdf":
        path = path / document.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        build_pdf(document).output(str(path))
    except OSError as e:
        raise PersistenceError(f"Failed to write {path}: {e}") from e
    logger.info("Wrote %s report to %s", document.scope, path)
    return path
