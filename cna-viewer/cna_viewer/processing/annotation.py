"""Gene-name lookup for observations, chromosome by chromosome."""
from __future__ import annotations

import bisect
import csv
import logging
from pathlib import Path
from typing import Iterable

from cna_viewer.models import AnnotationInterval, Observation

logger = logging.getLogger(__name__)


def load_annotation(path: str | Path) -> list[AnnotationInterval]:
    """Read a headerless TSV of chr, start, end, gene name."""
    intervals: list[AnnotationInterval] = []
    with open(path, newline="", encoding="utf-8") as fh:
        for line_no, fields in enumerate(csv.reader(fh, delimiter="\t"), start=1):
            if not fields or fields[0].startswith("#"):
                continue
            if len(fields) < 4:
                raise ValueError(f"Annotation line {line_no}: expected 4 columns, got {len(fields)}")
            intervals.append(AnnotationInterval(
                chrom=fields[0],
                start=int(fields[1]),
                end=int(fields[2]),
                gene=fields[3],
            ))
    logger.info("Loaded %d annotation intervals from %s", len(intervals), path)
    return intervals


def _group_by_chrom(intervals: Iterable[AnnotationInterval]) -> dict[str, list[AnnotationInterval]]:
    by_chrom: dict[str, list[AnnotationInterval]] = {}
    for iv in intervals:
        by_chrom.setdefault(iv.chrom, []).append(iv)
    for ivs in by_chrom.values():
        ivs.sort(key=lambda iv: iv.start)
    return by_chrom


def annotate(
    observations: Iterable[Observation], annotation: Iterable[AnnotationInterval]
) -> list[Observation]:
    """Set gene_name from the last interval starting at or before each position.

    The name is kept only if the position also lies at or before that
    interval's end; otherwise, and on unannotated chromosomes, it is None.
    """
    by_chrom = _group_by_chrom(annotation)
    starts = {chrom: [iv.start for iv in ivs] for chrom, ivs in by_chrom.items()}

    result = []
    for obs in observations:
        gene = None
        ivs = by_chrom.get(obs.chrom)
        if ivs:
            idx = bisect.bisect_right(starts[obs.chrom], obs.pos) - 1
            if idx >= 0 and obs.pos <= ivs[idx].end:
                gene = ivs[idx].gene
        result.append(obs.model_copy(update={"gene_name": gene}))
    return result
