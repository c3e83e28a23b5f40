"""Excel and CSV readers that turn tabular files into header-keyed records."""

from __future__ import annotations

import csv
import zipfile
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from e2eharness.core.logs import get_logger

logger = get_logger(__name__)

SheetRef = str | int


class WorksheetNotFoundError(KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class EmptyWorksheetError(ValueError):
    pass


def read_workbook(path: str | Path) -> Workbook:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Workbook not found: {file_path}")
    try:
        return load_workbook(file_path)
    except (InvalidFileException, zipfile.BadZipFile, OSError) as exc:
        logger.error("sheets.read_failed", path=str(file_path), error=str(exc))
        raise ValueError(f"Unreadable workbook: {file_path}") from exc


def write_workbook(path: str | Path, rows: Iterable[Sequence[Any]], sheet: str = "Sheet1") -> None:
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet
    for row in rows:
        worksheet.append(list(row))
    workbook.save(Path(path))


def modify_workbook(path: str | Path, modify: Callable[[Workbook], None]) -> None:
    workbook = read_workbook(path)
    modify(workbook)
    workbook.save(Path(path))


def get_worksheet(workbook: Workbook, sheet: SheetRef) -> Worksheet:
    """Look a worksheet up by name, or by 1-based position when given an int."""
    if isinstance(sheet, int) and not isinstance(sheet, bool):
        if 1 <= sheet <= len(workbook.worksheets):
            return workbook.worksheets[sheet - 1]
    elif sheet in workbook.sheetnames:
        return workbook[sheet]
    raise WorksheetNotFoundError(f'Worksheet with name or index "{sheet}" not found.')


def _non_empty_rows(worksheet: Worksheet) -> list[tuple[Any, ...]]:
    return [row for row in worksheet.iter_rows(values_only=True) if any(cell is not None for cell in row)]


def _records(rows: Sequence[Sequence[Any]]) -> list[dict[str, Any]]:
    if not rows:
        return []
    header, *body = rows
    keys = [str(cell) if cell is not None else f"column_{index}" for index, cell in enumerate(header, start=1)]
    return [{key: (row[i] if i < len(row) else None) for i, key in enumerate(keys)} for row in body]


def worksheet_rows(workbook: Workbook, sheet: SheetRef) -> list[tuple[Any, ...]]:
    """Rows of a worksheet without its header row."""
    return _non_empty_rows(get_worksheet(workbook, sheet))[1:]


def write_to_worksheet(workbook: Workbook, sheet: str, rows: Iterable[Sequence[Any]]) -> Worksheet:
    # Replace the sheet in place so appends start again at row 1.
    if sheet in workbook.sheetnames:
        index = workbook.sheetnames.index(sheet)
        workbook.remove(workbook[sheet])
        worksheet = workbook.create_sheet(sheet, index)
    else:
        worksheet = workbook.create_sheet(sheet)
    for row in rows:
        worksheet.append(list(row))
    return worksheet


def add_worksheet(workbook: Workbook, sheet: str, rows: Iterable[Sequence[Any]] = ()) -> Worksheet:
    worksheet = workbook.create_sheet(sheet)
    for row in rows:
        worksheet.append(list(row))
    return worksheet


def delete_worksheet(workbook: Workbook, sheet: str) -> None:
    if sheet not in workbook.sheetnames:
        logger.warning("sheets.worksheet_missing", sheet=sheet)
        return
    workbook.remove(workbook[sheet])


def read_excel(path: str | Path, sheet: SheetRef = 1) -> list[dict[str, Any]]:
    """Read a worksheet as records keyed by its first row."""
    rows = _non_empty_rows(get_worksheet(read_workbook(path), sheet))
    if not rows:
        raise EmptyWorksheetError("The worksheet is empty.")
    return _records(rows)


def transform_excel_table(
    path: str | Path,
    sheet: SheetRef = 1,
    first_row: int = 1,
    last_row: int | None = None,
) -> list[dict[str, Any]]:
    """Like `read_excel`, limited to rows `first_row..last_row` (1-based, inclusive).

    The first row of the window is the header.
    """
    rows = _non_empty_rows(get_worksheet(read_workbook(path), sheet))
    return _records(rows[first_row - 1 : last_row])


def read_csv_rows(path: str | Path, delimiter: str = ",") -> list[list[str]]:
    with Path(path).open(newline="", encoding="utf-8") as handle:
        return [row for row in csv.reader(handle, delimiter=delimiter)]


def transform_csv_table(
    path: str | Path,
    first_row: int = 1,
    last_row: int | None = None,
    delimiter: str = ",",
) -> list[dict[str, Any]]:
    rows = read_csv_rows(path, delimiter=delimiter)
    return _records(rows[first_row - 1 : last_row])
