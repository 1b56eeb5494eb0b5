"""Pick a reader by file extension, with clear error messages."""
from __future__ import annotations

import os
from pathlib import Path

from cna_viewer.config import SUPPORTED_EXTENSIONS
from cna_viewer.models import Observation
from cna_viewer.parsers.table import parse_rows, read_delimited, read_xls, read_xlsx

REQUIRED_COLUMNS = {"chr"}
POSITION_COLUMNS = ({"pos"}, {"start", "end"})


def _check_columns(columns: set[str]) -> None:
    missing = REQUIRED_COLUMNS - columns
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}. Found: {sorted(columns)}")
    if not any(cols <= columns for cols in POSITION_COLUMNS):
        raise ValueError(
            "Missing position columns. Provide either 'pos' or both 'start' and 'end'. "
            f"Found: {sorted(columns)}"
        )


def detect_and_parse(file_path: str | Path, original_filename: str = "") -> list[Observation]:
    ext = os.path.splitext(original_filename or str(file_path))[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported file extension: {ext or '(none)'}.\n"
            "Upload .csv, .tsv or .txt (comma or tab separated), "
            ".xlsx or .xls files with columns chr, pos (or start/end), BAF, DR."
        )

    if ext == ".xlsx":
        rows = read_xlsx(file_path)
    elif ext == ".xls":
        rows = read_xls(file_path)
    else:
        rows = read_delimited(file_path)

    if not rows:
        raise ValueError("The file contains no data rows")
    _check_columns(set(rows[0].keys()))
    return parse_rows(rows)
