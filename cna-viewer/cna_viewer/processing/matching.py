"""Nearest-match genotype classification against the distribution table."""
from __future__ import annotations

import logging
import math
from typing import Iterable

from cna_viewer.models import Channels, GenotypeAssignment, GenotypePoint, Observation, Point

logger = logging.getLogger(__name__)


def _available(value: float | None) -> bool:
    return value is not None and not math.isnan(value)


def available_channels(baf: float | None, dr: float | None) -> Channels:
    has_baf = _available(baf)
    has_dr = _available(dr)
    if has_baf and has_dr:
        return Channels.BOTH
    if has_baf:
        return Channels.BAF_ONLY
    if has_dr:
        return Channels.DR_ONLY
    return Channels.NONE


def _distance(channels: Channels, baf: float | None, dr: float | None, row: GenotypePoint) -> float:
    if channels == Channels.DR_ONLY:
        return abs(dr - row.dr)
    if channels == Channels.BAF_ONLY:
        return abs(baf - row.baf)
    return math.hypot(baf - row.baf, dr - row.dr)


def match(point: Point | Observation, table: list[GenotypePoint]) -> GenotypeAssignment:
    """Return the genotype of the closest table row.

    Only the available channels enter the distance. ``total`` is reported only
    when DR is available and ``minor`` only when BAF is, even though both come
    from the same winning row. Ties go to the earliest row; NaN distances never
    win. A point with no channel, or an empty table, gets a null assignment.
    """
    baf, dr = point.baf, point.dr
    channels = available_channels(baf, dr)
    if channels == Channels.NONE or not table:
        return GenotypeAssignment()

    best: GenotypePoint | None = None
    min_distance = math.inf
    for row in table:
        distance = _distance(channels, baf, dr, row)
        if distance < min_distance:
            min_distance = distance
            best = row

    if best is None:
        logger.debug("No finite distance for baf=%s dr=%s", baf, dr)
        return GenotypeAssignment()

    return GenotypeAssignment(
        total=best.total if channels in (Channels.BOTH, Channels.DR_ONLY) else None,
        minor=best.minor if channels in (Channels.BOTH, Channels.BAF_ONLY) else None,
    )


def classify_observation(observation: Observation, table: list[GenotypePoint]) -> Observation:
    assignment = match(observation, table)
    return observation.model_copy(update=assignment.model_dump())


def classify_observations(
    observations: Iterable[Observation], table: list[GenotypePoint]
) -> list[Observation]:
    return [classify_observation(o, table) for o in observations]
