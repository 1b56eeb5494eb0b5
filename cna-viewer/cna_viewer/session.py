"""Per-session segment state: selection buffer, segment rows, current view.

The brush handlers are plain functions over an explicit BrushSelection so a
host can drive them without a SegmentSession. SegmentSession bundles them
with the distribution table and the observation view for one analysis.
"""
from __future__ import annotations

import logging
import uuid
from typing import Sequence

from cna_viewer.export import segments_to_csv
from cna_viewer.models import (
    BrushSelection,
    CNAParameters,
    GenotypePoint,
    Observation,
    SegmentRow,
)
from cna_viewer.processing.distribution import build_distribution
from cna_viewer.processing.matching import classify_observations
from cna_viewer.processing.region import filter_observations, parse_region
from cna_viewer.processing.segments import aggregate_segment

logger = logging.getLogger(__name__)


def on_brush_selected(selection: BrushSelection, indices: Sequence[int]) -> None:
    """Remember the first and last index of the current brush gesture."""
    if not indices:
        selection.clear()
        return
    selection.start = indices[0]
    selection.end = indices[-1]


def commit_selection(
    selection: BrushSelection,
    observations: Sequence[Observation],
    table: list[GenotypePoint],
    rows: list[SegmentRow],
) -> SegmentRow | None:
    """Aggregate the buffered selection and append the row on success.

    The selection is cleared whatever the outcome, so a stale range is never
    reused by a later gesture.
    """
    if not selection.is_complete:
        return None
    try:
        row = aggregate_segment(selection.start, selection.end, observations, table)
    finally:
        selection.clear()
    if row is not None:
        rows.append(row)
    return row


class SegmentSession:
    def __init__(
        self,
        observations: Sequence[Observation],
        params: CNAParameters | None = None,
    ) -> None:
        self.observations = list(observations)
        self.view: list[Observation] = list(self.observations)
        self.region: str | None = None
        self.rows: list[SegmentRow] = []
        self.selection = BrushSelection()
        self.params = params or CNAParameters()
        self.table: list[GenotypePoint] = []
        self.set_parameters(self.params)

    def set_parameters(self, params: CNAParameters) -> list[GenotypePoint]:
        """Rebuild the distribution table. Existing rows keep their values."""
        self.params = params
        self.table = build_distribution(
            params.purity, params.ploidy, params.copy_numbers, params.normal_ploidy
        )
        self.selection.clear()
        return self.table

    def set_region(self, region: str | None) -> list[Observation]:
        """Restrict the view to a region; None or "" shows everything.

        Brush indices refer to the view, so the selection is reset.
        """
        if region:
            self.view = filter_observations(self.observations, parse_region(region))
        else:
            self.view = list(self.observations)
        self.region = region or None
        self.selection.clear()
        return self.view

    def classified_view(self) -> list[Observation]:
        return classify_observations(self.view, self.table)

    def brush_selected(self, indices: Sequence[int]) -> None:
        on_brush_selected(self.selection, indices)

    def brush_end(self) -> SegmentRow | None:
        return commit_selection(self.selection, self.view, self.table, self.rows)

    def delete_row(self, index: int) -> SegmentRow:
        if not 0 <= index < len(self.rows):
            raise IndexError(f"No segment row at index {index}")
        return self.rows.pop(index)

    def clear_rows(self) -> None:
        self.rows.clear()

    def export_csv(self) -> str:
        return segments_to_csv(self.rows)


# In-memory session store: session_id -> SegmentSession
sessions: dict[str, SegmentSession] = {}


def create_session(
    observations: Sequence[Observation], params: CNAParameters | None = None
) -> str:
    session_id = uuid.uuid4().hex[:12]
    sessions[session_id] = SegmentSession(observations, params)
    logger.info("Created session %s with %d observations", session_id, len(observations))
    return session_id


def get_session(sid: str) -> SegmentSession:
    if sid not in sessions:
        raise KeyError("Session not found")
    return sessions[sid]


def delete_session(sid: str) -> None:
    sessions.pop(sid, None)
