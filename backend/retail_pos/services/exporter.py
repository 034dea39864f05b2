"""Export of tabular records to CSV, JSON, Excel-flavoured CSV and PDF.

The first record's keys define the column order for every format.
"""

import io
import json
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

ExportFormat = Literal["csv", "json", "excel", "pdf"]

BOM = "\ufeff"
NOTICE_DISMISS_SECONDS = 5
PDF_SAVED_NOTICE = "PDF saved to your device. Check your downloads folder."

_MOBILE_UA = re.compile(r"Android|webOS|iPhone|iPad|iPod|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    media_type: str
    content: bytes
    notice: str | None = None


def export_filename(dataset: str, ext: str, today: date | None = None) -> str:
    """``<dataset>_<YYYY-MM-DD>.<ext>``"""
    today = today or date.today()
    return f"{dataset}_{today.isoformat()}.{ext}"


def is_mobile_user_agent(user_agent: str | None) -> bool:
    return bool(user_agent and _MOBILE_UA.search(user_agent))


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


def _quote(text: str) -> str:
    if "," in text or '"' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _csv_cell(value: Any) -> str:
    return _quote(_cell(value))


def to_csv(records: list[dict[str, Any]]) -> str:
    if not records:
        return ""
    columns = list(records[0].keys())
    lines = [",".join(_quote(str(column)) for column in columns)]
    for record in records:
        lines.append(",".join(_csv_cell(record.get(column)) for column in columns))
    return "\n".join(lines)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(records: list[dict[str, Any]]) -> str:
    return json.dumps(records, indent=2, ensure_ascii=False, default=_json_default)


def to_excel_csv(records: list[dict[str, Any]]) -> str:
    """CSV prefixed with a UTF-8 byte-order mark so spreadsheets detect the charset."""
    return BOM + to_csv(records)


def to_pdf_table(records: list[dict[str, Any]], title: str) -> bytes:
    """Render a titled A4 report with one table row per record."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4,
        leftMargin=10 * mm, rightMargin=10 * mm, topMargin=10 * mm, bottomMargin=10 * mm,
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        name="ReportTitle", parent=styles["Heading1"], fontSize=18, alignment=TA_CENTER,
    )
    cell_style = ParagraphStyle(name="ReportCell", parent=styles["Normal"], fontSize=8, leading=10)

    story = [Paragraph(escape(title), title_style), Spacer(1, 6 * mm)]

    if records:
        columns = list(records[0].keys())
        data = [columns] + [
            [Paragraph(escape(_cell(record.get(column))), cell_style) for column in columns]
            for record in records
        ]
        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            # Header row
            ("BACKGROUND", (0, 0), (-1, 0), colors.Color(240 / 255, 240 / 255, 240 / 255)),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8),

            # Data rows
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.Color(250 / 255, 250 / 255, 250 / 255)]),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("TOPPADDING", (0, 0), (-1, -1), 2),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ]))
        story.append(table)

    doc.build(story)
    return buffer.getvalue()


def build_export(
    records: list[dict[str, Any]],
    dataset: str,
    fmt: ExportFormat,
    user_agent: str | None = None,
    title: str | None = None,
    today: date | None = None,
) -> ExportFile:
    """Serialize ``records`` and name the download after ``dataset``."""
    if fmt == "csv":
        return ExportFile(
            filename=export_filename(dataset, "csv", today),
            media_type="text/csv; charset=utf-8",
            content=to_csv(records).encode("utf-8"),
        )
    if fmt == "json":
        return ExportFile(
            filename=export_filename(dataset, "json", today),
            media_type="application/json; charset=utf-8",
            content=to_json(records).encode("utf-8"),
        )
    if fmt == "excel":
        # CSV text under an .xlsx name
        return ExportFile(
            filename=export_filename(dataset, "xlsx", today),
            media_type="application/vnd.ms-excel; charset=utf-8",
            content=to_excel_csv(records).encode("utf-8"),
        )
    if fmt == "pdf":
        return ExportFile(
            filename=export_filename(dataset, "pdf", today),
            media_type="application/pdf",
            content=to_pdf_table(records, title or f"{dataset} Report"),
            notice=PDF_SAVED_NOTICE if is_mobile_user_agent(user_agent) else None,
        )
    raise ValueError(f"Unsupported export format: {fmt}")
