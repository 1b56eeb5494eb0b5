from __future__ import annotations

import csv
import io
from typing import Iterable

from cna_viewer.models import SegmentRow
from cna_viewer.processing.segments import format_stat

HEADER = [
    "Chr",
    "Start",
    "End",
    "BAF mean",
    "BAF median",
    "BAF std",
    "BAF count",
    "DR mean",
    "DR median",
    "DR std",
    "DR count",
    "Total",
    "Minor",
]


def _cell(value: int | None) -> str | int:
    return "" if value is None else value


def segments_to_csv(rows: Iterable[SegmentRow]) -> str:
    """Render segment rows as CSV text; empty string when there are none."""
    rows = list(rows)
    if not rows:
        return ""

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(HEADER)

    for r in rows:
        writer.writerow([
            r.chrom,
            r.pos_start,
            r.pos_end,
            format_stat(r.baf_mean),
            format_stat(r.baf_median),
            format_stat(r.baf_std),
            r.baf_count,
            format_stat(r.dr_mean),
            format_stat(r.dr_median),
            format_stat(r.dr_std),
            r.dr_count,
            _cell(r.total),
            _cell(r.minor),
        ])

    csv_content = output.getvalue()
    output.close()
    return csv_content
