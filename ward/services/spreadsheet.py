"""
xlsx helpers built on openpyxl.

``process_date`` normalises the date cells found in imported sheets:
Excel serial numbers, native dates, ``D/M/YYYY`` text and ISO text all
become ``YYYY-MM-DD``; anything else becomes ``None``.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from io import BytesIO
from typing import Any, Iterable, List, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

EXCEL_EPOCH = date(1899, 12, 30)
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

_DMY = re.compile(r'^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$')


def process_date(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        try:
            return (EXCEL_EPOCH + timedelta(days=int(value))).isoformat()
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        m = _DMY.match(text)
        if m:
            day, month, year = (int(g) for g in m.groups())
            try:
                return date(year, month, day).isoformat()
            except ValueError:
                return None
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date().isoformat()
        except ValueError:
            return None
    return None


def cell_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def read_rows(f, *, skip_header: bool = True) -> List[tuple]:
    """Rows of the first worksheet, blank rows dropped."""
    wb = load_workbook(f, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        rows = []
        for idx, row in enumerate(ws.iter_rows(values_only=True)):
            if skip_header and idx == 0:
                continue
            if row is None or all(c is None or (isinstance(c, str) and not c.strip()) for c in row):
                continue
            rows.append(tuple(row))
        return rows
    finally:
        wb.close()


def read_dicts(f) -> List[dict]:
    """Rows of the first worksheet keyed by the header row."""
    wb = load_workbook(f, read_only=True, data_only=True)
    try:
        it = wb.worksheets[0].iter_rows(values_only=True)
        header = next(it, None)
        if not header:
            return []
        keys = [cell_text(h) or '' for h in header]
        out = []
        for row in it:
            if row is None or all(c is None or (isinstance(c, str) and not c.strip()) for c in row):
                continue
            out.append({k: v for k, v in zip(keys, row) if k})
        return out
    finally:
        wb.close()


def build_workbook(headers: Sequence[str], rows: Iterable[Sequence[Any]], sheet_name: str = 'Sheet1') -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal='center', vertical='center')
    for row in rows:
        ws.append(list(row))

    for col in ws.columns:
        max_len = max(len(str(cell.value)) if cell.value is not None else 0 for cell in col)
        ws.column_dimensions[get_column_letter(col[0].column)].width = max(12, min(max_len + 2, 40))

    output = BytesIO()
    wb.save(output)
    return output.getvalue()
