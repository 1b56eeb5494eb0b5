"""Tabular BAF/DR input: file readers and row-to-Observation conversion.

Accepted columns:
- chr (required, e.g. "chr1")
- pos, or start + end (interval rows use the midpoint and get a label)
- BAF, DR (optional; empty or non-numeric cells become None)
"""
from __future__ import annotations

import csv
import logging
import math
from pathlib import Path
from typing import Any, Iterable, Mapping

from cna_viewer.models import Observation
from cna_viewer.parsers.form import parse_float, parse_int

logger = logging.getLogger(__name__)


class RowParseError(ValueError):
    """Raised for a malformed input row; ``row`` is its 0-based index."""

    def __init__(self, message: str, *, row: int) -> None:
        super().__init__(message)
        self.row = row


def _optional_float(value: Any) -> float | None:
    v = parse_float(value)
    return None if math.isnan(v) else v


def parse_row(row: Mapping[str, Any], idx: int) -> Observation:
    chrom = row.get("chr")
    if not isinstance(chrom, str) or len(chrom.strip()) < 4:
        raise RowParseError(f"Wrong chr record at row {idx}", row=idx)
    chrom = chrom.strip()

    pos = None
    label = None
    if "pos" in row:
        pos = parse_int(row["pos"])
    elif "start" in row and "end" in row:
        start = parse_int(row["start"])
        end = parse_int(row["end"])
        if start is not None and end is not None:
            pos = start + (end - start) // 2
            label = f"{chrom}:{start}-{end}"

    if pos is None:
        raise RowParseError(f"Invalid numeric data at row {idx}", row=idx)

    return Observation(
        chrom=chrom,
        pos=pos,
        baf=_optional_float(row.get("BAF")),
        dr=_optional_float(row.get("DR")),
        label=label,
    )


def parse_rows(rows: Iterable[Mapping[str, Any]]) -> list[Observation]:
    observations = [parse_row(row, idx) for idx, row in enumerate(rows)]
    logger.info("Parsed %d observations", len(observations))
    return observations


def read_delimited(file_path: str | Path) -> list[dict[str, str]]:
    """Read CSV/TSV text; tab is used when the header line contains one."""
    with open(file_path, newline="", encoding="utf-8-sig") as fh:
        header = fh.readline()
        fh.seek(0)
        delimiter = "\t" if "\t" in header else ","
        reader = csv.DictReader(fh, delimiter=delimiter)
        if reader.fieldnames:
            reader.fieldnames = [name.strip() for name in reader.fieldnames]
        return list(reader)


def _rows_from_grid(grid: list[list[Any]]) -> list[dict[str, Any]]:
    if not grid:
        return []
    headers = [str(h).strip() if h is not None else "" for h in grid[0]]
    rows = []
    for values in grid[1:]:
        if all(v is None or v == "" for v in values):
            continue
        rows.append({h: v for h, v in zip(headers, values) if h})
    return rows


def read_xlsx(file_path: str | Path) -> list[dict[str, Any]]:
    import openpyxl

    wb = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        grid = [list(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()
    return _rows_from_grid(grid)


def read_xls(file_path: str | Path) -> list[dict[str, Any]]:
    import xlrd

    wb = xlrd.open_workbook(str(file_path))
    sheet = wb.sheet_by_index(0)
    grid = [sheet.row_values(r) for r in range(sheet.nrows)]
    return _rows_from_grid(grid)
