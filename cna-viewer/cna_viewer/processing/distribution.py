"""Theoretical BAF / depth-ratio distribution for a purity/ploidy model.

Every (total copy number, minor allele count) state reachable for the given
copy numbers becomes one GenotypePoint. The table is a pure function of its
four inputs; degenerate inputs (purity 0 with normal ploidy 0, and so on) are
not validated and yield inf/nan entries.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable

from cna_viewer.config import DEFAULT_NORMAL_PLOIDY
from cna_viewer.models import GenotypePoint

logger = logging.getLogger(__name__)


def _divide(num: float, den: float) -> float:
    """IEEE division: x/0 gives +-inf, 0/0 gives nan."""
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def max_b_num(total: int) -> int:
    """Number of distinct minor allele counts for a total copy number."""
    if total % 2:
        return math.ceil(total / 2)
    return total // 2 + 1


def b_allele_frequency(minor: int, purity: float, total: int, normal_ploidy: int) -> float:
    return _divide(
        minor * purity + (1 - purity),
        total * purity + normal_ploidy * (1 - purity),
    )


def depth_ratio(purity: float, ploidy: float, total: int, normal_ploidy: int) -> float:
    return _divide(
        (1 - purity) + _divide(total, normal_ploidy) * purity,
        _divide(ploidy, normal_ploidy) * purity + (1 - purity),
    )


def build_distribution(
    purity: float,
    ploidy: float,
    copy_numbers: Iterable[float],
    normal_ploidy: int = DEFAULT_NORMAL_PLOIDY,
) -> list[GenotypePoint]:
    """Build the distribution table.

    Rows come in copy-number input order, then minor count ascending. A copy
    number repeated in the input is emitted once, at its first occurrence.
    DR depends on the total only, so all minors of one total share it.
    """
    table: list[GenotypePoint] = []
    seen: set[int] = set()

    for cn in copy_numbers:
        total = int(cn)
        if total in seen:
            continue
        seen.add(total)

        dr = depth_ratio(purity, ploidy, total, normal_ploidy)
        for minor in range(max_b_num(total)):
            table.append(GenotypePoint(
                baf=b_allele_frequency(minor, purity, total, normal_ploidy),
                dr=dr,
                total=total,
                minor=minor,
            ))

    logger.debug(
        "Built distribution: purity=%s ploidy=%s normal_ploidy=%s -> %d points",
        purity, ploidy, normal_ploidy, len(table),
    )
    return table
