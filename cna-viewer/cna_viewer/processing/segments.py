"""Segment aggregation: summary statistics and one genotype per selected span."""
from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

import numpy as np

from cna_viewer.config import STAT_DECIMALS
from cna_viewer.models import ChannelStats, GenotypePoint, Observation, Point, SegmentRow
from cna_viewer.processing.matching import match

logger = logging.getLogger(__name__)

_QUANTUM = Decimal(1).scaleb(-STAT_DECIMALS)


def fix_decimals(value: float) -> float:
    """Round half-up on the exact binary value, like JS ``toFixed``.

    Idempotent: fixing an already fixed value returns it unchanged.
    """
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def format_stat(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.{STAT_DECIMALS}f}"


def channel_stats(values: Sequence[float | None], count: int) -> ChannelStats:
    """Mean, median and population std of one channel.

    Missing values (None/NaN) are left out of mean, median and std; a channel
    with nothing left has null statistics. ``count`` is the span length passed
    in, not the number of values the statistics used, so both channels of one
    segment report the same count. The std is taken around the already
    rounded mean.
    """
    present = [v for v in values if v is not None and not math.isnan(v)]
    if not present:
        return ChannelStats(count=count)

    mean = fix_decimals(sum(present) / len(present))
    arr = np.asarray(present, dtype=float)
    median = float(np.median(arr))
    std = math.sqrt(float(np.sum((arr - mean) ** 2)) / len(present))

    return ChannelStats(
        mean=mean,
        median=fix_decimals(median),
        std=fix_decimals(std),
        count=count,
    )


def aggregate_segment(
    start: int,
    end: int,
    observations: Sequence[Observation],
    table: list[GenotypePoint],
) -> SegmentRow | None:
    """Summarize observations[start:end] into one classified segment row.

    Returns None when the endpoints sit on different chromosomes or the span
    holds no observation.
    """
    first = observations[start]
    last = observations[end]
    if first.chrom != last.chrom:
        logger.info(
            "Selection %d-%d crosses chromosomes (%s, %s); no segment created",
            start, end, first.chrom, last.chrom,
        )
        return None

    # Statistics exclude the observation at `end`; pos_end is still read from it.
    segment = list(observations[start:end])
    if not segment:
        logger.info("Selection %d-%d is empty; no segment created", start, end)
        return None

    n = len(segment)
    baf = channel_stats([o.baf for o in segment], n)
    dr = channel_stats([o.dr for o in segment], n)
    assignment = match(Point(baf=baf.mean, dr=dr.mean), table)

    row = SegmentRow(
        chrom=first.chrom,
        pos_start=first.pos,
        pos_end=last.pos,
        baf_mean=baf.mean,
        baf_median=baf.median,
        baf_std=baf.std,
        baf_count=baf.count,
        dr_mean=dr.mean,
        dr_median=dr.median,
        dr_std=dr.std,
        dr_count=dr.count,
        total=assignment.total,
        minor=assignment.minor,
    )
    logger.debug("Segment %s:%d-%d -> total=%s minor=%s", row.chrom, row.pos_start, row.pos_end, row.total, row.minor)
    return row
