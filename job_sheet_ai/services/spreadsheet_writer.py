"""Serialize report tables into an .xlsx workbook."""

from datetime import date
from io import BytesIO
from typing import Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from job_sheet_ai.schemas.report import ReportTable

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
MAX_COLUMN_WIDTH = 60


def _clean(value):
    # openpyxl rejects control characters that scraped pages sometimes contain
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def report_filename(day: date) -> str:
    return f"job_data_{day.isoformat()}.xlsx"


def write_workbook(tables: Sequence[ReportTable]) -> bytes:
    """One sheet per table, in order, with a bold frozen header row."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for table in tables:
        sheet = workbook.create_sheet(title=table.name)
        sheet.append(table.headers)
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        for row in table.rows:
            sheet.append([_clean(value) for value in row])
        sheet.freeze_panes = "A2"
        for index, header in enumerate(table.headers, start=1):
            longest = max([len(str(header))] + [len(str(row[index - 1])) for row in table.rows])
            sheet.column_dimensions[get_column_letter(index)].width = min(longest + 2, MAX_COLUMN_WIDTH)

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
