from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

from cna_viewer import config


class Observation(BaseModel):
    model_config = ConfigDict(frozen=True)

    chrom: str                     # e.g. "chr1"
    pos: int                       # position, or interval midpoint
    baf: float | None = None
    dr: float | None = None
    label: str | None = None       # "chr1:100-200" for interval rows
    gene_name: str | None = None
    total: int | None = None
    minor: int | None = None


class Point(BaseModel):
    baf: float | None = None
    dr: float | None = None


class GenotypePoint(BaseModel):
    baf: float
    dr: float
    total: int
    minor: int


class GenotypeAssignment(BaseModel):
    total: int | None = None
    minor: int | None = None


class Channels(str, Enum):
    BOTH = "both"
    BAF_ONLY = "baf_only"
    DR_ONLY = "dr_only"
    NONE = "none"


class CNAParameters(BaseModel):
    # defaults come from config at construction time
    purity: float = Field(default_factory=lambda: config.DEFAULT_PURITY)
    ploidy: float = Field(default_factory=lambda: config.DEFAULT_PLOIDY)
    copy_numbers: list[int] = Field(default_factory=lambda: list(config.DEFAULT_COPY_NUMBERS))
    normal_ploidy: int = Field(default_factory=lambda: config.DEFAULT_NORMAL_PLOIDY)


class ChannelStats(BaseModel):
    mean: float | None = None
    median: float | None = None
    std: float | None = None
    count: int = 0


class SegmentRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    chrom: str
    pos_start: int
    pos_end: int
    baf_mean: float | None = None
    baf_median: float | None = None
    baf_std: float | None = None
    baf_count: int = 0
    dr_mean: float | None = None
    dr_median: float | None = None
    dr_std: float | None = None
    dr_count: int = 0
    total: int | None = None
    minor: int | None = None


class BrushSelection(BaseModel):
    start: int | None = None       # first selected index
    end: int | None = None         # last selected index

    def clear(self) -> None:
        self.start = None
        self.end = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


class Region(BaseModel):
    chrom: str
    start: int | None = None       # inclusive
    end: int | None = None         # inclusive


class AnnotationInterval(BaseModel):
    chrom: str
    start: int
    end: int
    gene: str
