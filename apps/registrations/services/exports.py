"""Spreadsheet export of registration lists."""

from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from apps.registrations.variants import EntityVariant

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def export_filename(name: str) -> str:
    return name if name.endswith(".xlsx") else f"{name}.xlsx"


def export_columns(variant: EntityVariant) -> list[tuple[str, str]]:
    """(key, header) pairs: the id first, then every exportable field."""
    columns = [("entityId", "ID")]
    columns += [(f.name, f.label) for f in variant.fields if f.exportable and f.widget not in ("state", "district")]
    return columns


def build_workbook(records: Iterable[dict], columns: list[tuple[str, str]], title: str) -> Workbook:
    """One sheet: a bold header row followed by one row per record, in order."""
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")

    for col, (_, header) in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")
        ws.column_dimensions[get_column_letter(col)].width = max(14, len(header) + 4)

    for row, record in enumerate(records, start=2):
        for col, (key, _) in enumerate(columns, start=1):
            ws.cell(row=row, column=col, value=record.get(key, ""))

    return wb


def export_records(records: Iterable[dict], variant: EntityVariant) -> bytes:
    """Render the records of ``variant`` as xlsx bytes."""
    wb = build_workbook(records, export_columns(variant), variant.plural_label)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
