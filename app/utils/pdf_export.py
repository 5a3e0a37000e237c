"""
PDF export of calculator results.
Draws the results pane (summary lines, then an optional breakdown table)
onto as many pages as the content needs.
"""
import logging
import re
from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

PAGE_SIZES = {
    'A4': A4,
    'letter': letter,
}

MARGIN = 50
LINE_HEIGHT = 16
MAX_LINE_CHARS = 110


def report_filename(title):
    """'Mortgage Calculator' -> 'mortgage-calculator-results.pdf'"""
    slug = re.sub(r'[^a-z0-9]+', '-', title.lower()).strip('-')
    return f"{slug or 'calculator'}-results.pdf"


def _table_lines(table):
    """Fixed-width text rows for a {'columns', 'rows'} table."""
    columns = table['columns']
    widths = [len(c) for c in columns]
    for row in table['rows']:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    def fmt(cells):
        return '  '.join(str(cell).ljust(widths[i]) for i, cell in enumerate(cells))

    lines = [fmt(columns), '  '.join('-' * w for w in widths)]
    lines.extend(fmt(row) for row in table['rows'])
    return lines


def build_results_pdf(title, result, page_size='A4', generated_at=None):
    """
    Render a calculator result to PDF bytes.

    Args:
        title (str): Calculator name, used as the document heading
        result (dict): Handler result with 'summary' and optional 'table'
        page_size (str): 'A4' or 'letter'
        generated_at (datetime, optional): Timestamp printed under the heading

    Returns:
        bytes: The PDF document
    """
    generated_at = generated_at or datetime.now()
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZES.get(page_size, A4))
    pdf.setTitle(f"{title} Results")
    _, height = PAGE_SIZES.get(page_size, A4)

    y = height - 60
    pdf.setFont("Helvetica-Bold", 16)
    pdf.drawString(MARGIN, y, f"{title} Results")
    y -= 20
    pdf.setFont("Helvetica", 9)
    pdf.drawString(MARGIN, y, f"Generated {generated_at.strftime('%B %d, %Y %H:%M')}")
    y -= 30

    def draw(line, font="Helvetica", size=11):
        nonlocal y
        if y < 60:
            pdf.showPage()
            y = height - 60
        pdf.setFont(font, size)
        pdf.drawString(MARGIN, y, str(line)[:MAX_LINE_CHARS])
        y -= LINE_HEIGHT

    for label, value in result.get('summary') or []:
        draw(f"{label}: {value}")

    table = result.get('table')
    if table and table.get('rows'):
        y -= LINE_HEIGHT / 2
        draw(table.get('title', ''), font="Helvetica-Bold", size=12)
        for line in _table_lines(table):
            draw(line, font="Courier", size=9)

    pdf.showPage()
    pdf.save()
    pdf_bytes = buffer.getvalue()
    logger.debug(f"Built PDF report for {title} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
