"""PDF and CSV export of the derived scenario table.

Both formats build their cells through `format_table` with the same injected
formatter, so a cell reads identically in the PDF table and in the CSV file.
"""

import math
import numbers
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime
from io import BytesIO
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, Image, PageBreak

from .config import REPORT_TITLE, ATTRIBUTION
from .errors import NoDataError
from .table import table_columns

ACCENT_COLOR = colors.HexColor('#1f4e79')
FONT_FAMILY = 'Helvetica'

COLUMN_LABELS = {
    'year': 'Año',
    'generation': 'Generación (kWh)',
    'selfConsumption': 'Autoconsumo',
    'surplus1': 'Excedente 1',
    'surplus2': 'Excedente 2',
    'income': 'Ingresos',
    'opex': 'OPEX',
    'taxBenefit': 'Beneficio tributario',
    'leasePayment': 'Canon leasing',
    'netFlow': 'Flujo neto',
    'cumulativeFlow': 'Flujo acumulado',
}

# index columns, written as plain integers
PLAIN_COLUMNS = {'year'}

Formatter = Callable[[Any], Any]


def format_currency(value: Any) -> Any:
    """Colombian peso style: -$22.000.000. Non-numeric values pass through."""
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return value
    value = float(value)
    if not math.isfinite(value):
        return value
    # half-up: 2.5 -> 3, -2.5 -> -3
    amount = Decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    text = f"{abs(amount):,.0f}".replace(',', '.')
    return f"-${text}" if amount < 0 else f"${text}"


def column_label(column: str) -> str:
    return COLUMN_LABELS.get(column, column)


def format_table(derived_rows: Sequence[Mapping[str, Any]], formatter: Formatter = format_currency) -> Tuple[List[str], List[List[str]]]:
    """Header labels and formatted body cells shared by both exporters."""
    if not derived_rows:
        raise NoDataError('no rows to export')
    columns = table_columns(derived_rows)
    header = [column_label(c) for c in columns]
    body = []
    for row in derived_rows:
        cells = []
        for c in columns:
            v = row.get(c, '')
            cells.append(str(v if c in PLAIN_COLUMNS else formatter(v)))
        body.append(cells)
    return header, body


def export_csv(derived_rows: Sequence[Mapping[str, Any]], formatter: Formatter = format_currency) -> str:
    header, body = format_table(derived_rows, formatter)
    return pd.DataFrame(body, columns=header).to_csv(index=False)


def _draw_footer(canvas, doc):
    canvas.saveState()
    canvas.setFont(FONT_FAMILY, 8)
    canvas.setFillColor(colors.HexColor('#666666'))
    width, _ = doc.pagesize
    canvas.drawString(doc.leftMargin, 0.4 * inch, ATTRIBUTION)
    canvas.drawRightString(width - doc.rightMargin, 0.4 * inch, f"Página {doc.page}")
    canvas.restoreState()


def export_pdf(derived_rows: Sequence[Mapping[str, Any]], chart_snapshot: Optional[bytes],
               formatter: Formatter = format_currency, title: str = REPORT_TITLE,
               scenario_label: Optional[str] = None) -> bytes:
    """Landscape report: title and chart on page 1, the data table from page 2."""
    header, body = format_table(derived_rows, formatter)

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(letter),
                            rightMargin=0.6*inch, leftMargin=0.6*inch,
                            topMargin=0.6*inch, bottomMargin=0.75*inch,
                            title=title)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle('ReportTitle', parent=styles['Heading1'], fontSize=22,
                                 textColor=ACCENT_COLOR, alignment=TA_CENTER, spaceAfter=12)
    subtitle_style = ParagraphStyle('ReportSubtitle', parent=styles['Normal'], fontSize=11,
                                    textColor=colors.HexColor('#666666'), alignment=TA_CENTER)
    heading_style = ParagraphStyle('ReportHeading', parent=styles['Heading2'], fontSize=14,
                                   textColor=ACCENT_COLOR, spaceAfter=10)

    elements = [Paragraph(title, title_style)]
    if scenario_label:
        elements.append(Paragraph(scenario_label, subtitle_style))
    elements.append(Paragraph(datetime.now().strftime('%Y-%m-%d %H:%M'), subtitle_style))
    elements.append(Spacer(1, 0.25*inch))

    if chart_snapshot:
        elements.append(Image(BytesIO(chart_snapshot), width=9*inch, height=4.5*inch))
    else:
        elements.append(Paragraph('<i>Gráfico no disponible</i>', styles['Normal']))
    elements.append(PageBreak())

    elements.append(Paragraph('Flujo de caja por año', heading_style))
    table = Table([header] + body, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), ACCENT_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), f'{FONT_FAMILY}-Bold'),
        ('FONTNAME', (0, 1), (-1, -1), FONT_FAMILY),
        ('FONTSIZE', (0, 0), (-1, -1), 8),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f5f5')]),
        ('ALIGN', (0, 0), (0, -1), 'LEFT'),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
    ]))
    elements.append(table)

    doc.build(elements, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    return buffer.getvalue()
