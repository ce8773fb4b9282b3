"""Excel input helpers."""

# Module responsibilities:
# - Open workbooks by content (not extension) and close them on every exit path.
#   OOXML workbooks go through openpyxl; .xls, .xlsb and .ods go through python-calamine.
# - Convert the used area of a sheet into header-keyed text records, in parallel for large sheets.
# - Emit structured logs for traceability.

from __future__ import annotations

import json
import math
import zipfile
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from functools import partial
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet
from python_calamine import CalamineWorkbook

from .errors import EmptyHeaderError, OpenError, SerializationError, SheetNotFoundError
from .utils.log import get_logger

logger = get_logger("excel_reader")

PathLike = Union[str, Path]
Record = Dict[str, str]
Row = Tuple[Any, ...]

ZIP_SIGNATURE = b"PK\x03\x04"
OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
OOXML_WORKBOOK_PART = "xl/workbook.xml"

DEFAULT_MAX_WORKERS = 4
DEFAULT_PARALLEL_THRESHOLD = 256


class _OpenpyxlBook:
    """Read-side view over an OOXML workbook loaded by openpyxl."""

    engine = "openpyxl"

    def __init__(self, workbook: Workbook) -> None:
        self._workbook = workbook

    @property
    def sheet_names(self) -> List[str]:
        return list(self._workbook.sheetnames)

    def rows(self, sheet_name: str) -> Iterable[Sequence[Any]]:
        sheet = self._workbook[sheet_name]
        if not isinstance(sheet, Worksheet):
            raise SheetNotFoundError(f"sheet '{sheet_name}' is not a worksheet")
        return sheet.iter_rows(values_only=True)

    def close(self) -> None:
        self._workbook.close()


class _CalamineBook:
    """Read-side view over a legacy, binary or OpenDocument workbook."""

    engine = "calamine"

    def __init__(self, workbook: CalamineWorkbook) -> None:
        self._workbook = workbook

    @property
    def sheet_names(self) -> List[str]:
        return list(self._workbook.sheet_names)

    def rows(self, sheet_name: str) -> Iterable[Sequence[Any]]:
        try:
            return self._workbook.get_sheet_by_name(sheet_name).to_python(skip_empty_area=False)
        except Exception as exc:
            raise SheetNotFoundError(f"sheet '{sheet_name}': {exc}") from exc

    def close(self) -> None:
        pass


Book = Union[_OpenpyxlBook, _CalamineBook]


def _detect_engine(path: Path) -> str:
    try:
        with path.open("rb") as fh:
            signature = fh.read(8)
    except OSError as exc:
        raise OpenError(str(exc)) from exc
    if signature.startswith(OLE2_SIGNATURE):
        return "calamine"
    if not signature.startswith(ZIP_SIGNATURE):
        raise OpenError(f"unrecognized spreadsheet format: {path}")
    try:
        with zipfile.ZipFile(path) as archive:
            members = set(archive.namelist())
    except (zipfile.BadZipFile, OSError) as exc:
        raise OpenError(str(exc)) from exc
    # .xlsb and .ods are zip containers too, without the OOXML workbook part
    return "openpyxl" if OOXML_WORKBOOK_PART in members else "calamine"


def _load(path: Path, engine: str) -> Book:
    with path.open("rb") as fh:
        if engine == "openpyxl":
            return _OpenpyxlBook(load_workbook(fh, data_only=True))
        return _CalamineBook(CalamineWorkbook.from_filelike(fh))


@contextmanager
def open_workbook(path: PathLike) -> Iterator[Book]:
    """Open a workbook for reading and close it when the block exits.

    The format is detected from the file content, so a workbook saved
    under an unexpected extension still opens. Any failure of the
    underlying reader is reported as ``OpenError``.

    Raises:
        OpenError: When the path is missing, unreadable or not a recognized workbook.
    """

    source = Path(path)
    if not source.exists():
        raise OpenError(f"file not found: {source}")
    engine = _detect_engine(source)

    try:
        book = _load(source, engine)
    except Exception as exc:
        raise OpenError(str(exc) or type(exc).__name__) from exc
    logger.debug("Workbook opened", extra={"path": str(source), "engine": engine})
    try:
        yield book
    finally:
        book.close()


def list_sheet_names(path: PathLike) -> List[str]:
    """Return the sheet names of a workbook in workbook order."""

    with open_workbook(path) as workbook:
        names = workbook.sheet_names
    logger.info("Listed sheets", extra={"path": str(path), "sheets": names})
    return names


def _float_to_text(value: float) -> str:
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    # shortest round-trip digits, written out without an exponent
    return format(Decimal(repr(value)), "f")


def cell_to_text(value: Any) -> str:
    """Coerce a native cell value to its text form; empty cells become ``""``."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_to_text(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _trim_row(row: Sequence[Any]) -> Row:
    end = len(row)
    while end and _is_blank(row[end - 1]):
        end -= 1
    return tuple(row[:end])


def _leading_blanks(row: Row) -> int:
    count = 0
    while count < len(row) and _is_blank(row[count]):
        count += 1
    return count


def used_area(rows: Iterable[Sequence[Any]]) -> List[Row]:
    """Cut a raw grid down to the rectangle spanned by its non-empty cells.

    Leading and trailing fully-empty rows are dropped, as are columns left of
    the first used column. Each row loses its trailing empty cells, so its
    length is the position of its last value. Blank rows between used rows
    are kept as empty tuples.
    """

    grid = [_trim_row(row) for row in rows]
    while grid and not grid[-1]:
        grid.pop()
    top = 0
    while top < len(grid) and not grid[top]:
        top += 1
    grid = grid[top:]
    left = min((_leading_blanks(row) for row in grid if row), default=0)
    return [row[left:] for row in grid]


def build_record(headers: Sequence[str], row: Sequence[Any]) -> Record:
    """Zip one data row against the headers.

    Only the first ``min(len(row), len(headers))`` cells are mapped; a
    duplicate header keeps the value of its last column.
    """

    record: Record = {}
    for header, value in zip(headers, row):
        record[header] = cell_to_text(value)
    return record


def _read_rows(workbook: Book, sheet_name: str) -> List[Row]:
    if sheet_name not in workbook.sheet_names:
        raise SheetNotFoundError(f"sheet '{sheet_name}' not found")
    return used_area(workbook.rows(sheet_name))


def records_from_rows(
    rows: Sequence[Sequence[Any]],
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
) -> List[Record]:
    """Convert a grid (header row first) into records.

    Rows after the header are converted independently; large grids fan out
    to a thread pool whose ``map`` keeps the original row order.

    Raises:
        EmptyHeaderError: When ``rows`` is empty.
    """

    if not rows:
        raise EmptyHeaderError()
    headers = tuple(cell_to_text(value) for value in _trim_row(rows[0]))
    data_rows = rows[1:]
    convert = partial(build_record, headers)

    if max_workers <= 1 or len(data_rows) < parallel_threshold:
        return [convert(row) for row in data_rows]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(convert, data_rows))


def read_sheet_records(
    path: PathLike,
    sheet_name: str,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
) -> List[Record]:
    """Load one sheet as a list of header-keyed text records.

    Args:
        path: Path to the workbook.
        sheet_name: Exact, case-sensitive sheet name.
        max_workers: Thread pool size for row conversion.
        parallel_threshold: Minimum data rows before the pool is used.

    Returns:
        One record per row after the header row, in sheet order.

    Raises:
        OpenError: When the workbook cannot be opened.
        SheetNotFoundError: When the sheet is absent or cannot be read as a grid.
        EmptyHeaderError: When the sheet has no rows.
    """

    logger.info("Reading Excel sheet", extra={"path": str(path), "sheet": sheet_name})
    with open_workbook(path) as workbook:
        rows = _read_rows(workbook, sheet_name)

    records = records_from_rows(
        rows, max_workers=max_workers, parallel_threshold=parallel_threshold
    )
    logger.info(
        "Excel sheet loaded",
        extra={"sheet": sheet_name, "rows": len(records), "headers": len(rows[0])},
    )
    return records


def records_to_json(records: Sequence[Record]) -> str:
    """Serialize records as a compact UTF-8 JSON array."""

    try:
        return json.dumps(list(records), ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc


def read_sheet_json(
    path: PathLike,
    sheet_name: str,
    *,
    max_workers: Optional[int] = None,
    parallel_threshold: Optional[int] = None,
) -> str:
    """Extract a sheet and return its records as a JSON string."""

    records = read_sheet_records(
        path,
        sheet_name,
        max_workers=DEFAULT_MAX_WORKERS if max_workers is None else max_workers,
        parallel_threshold=(
            DEFAULT_PARALLEL_THRESHOLD if parallel_threshold is None else parallel_threshold
        ),
    )
    return records_to_json(records)
