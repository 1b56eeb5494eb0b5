"""Region strings ("chr7" or "chr7:1000-2000") and observation filtering."""
from __future__ import annotations

import re
from typing import Iterable

from cna_viewer.models import Observation, Region

_REGION_RE = re.compile(r"^chr([1-9XY]|1[0-9]|2[0-2])(?::(\d+)-(\d+))?$")


def parse_region(text: str) -> Region:
    m = _REGION_RE.match(text.strip())
    if not m:
        raise ValueError("Invalid pattern")

    chrom = f"chr{m.group(1)}"
    if m.group(2) is None:
        return Region(chrom=chrom)

    start, end = int(m.group(2)), int(m.group(3))
    if end < start:
        raise ValueError("The end position must not be smaller than the start position")
    return Region(chrom=chrom, start=start, end=end)


def filter_observations(observations: Iterable[Observation], region: Region) -> list[Observation]:
    if region.start is None or region.end is None:
        return [o for o in observations if o.chrom == region.chrom]
    return [
        o for o in observations
        if o.chrom == region.chrom and region.start <= o.pos <= region.end
    ]
