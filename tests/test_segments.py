import pytest

from cna_viewer.models import Observation
from cna_viewer.processing.distribution import build_distribution
from cna_viewer.processing.segments import (
    aggregate_segment,
    channel_stats,
    fix_decimals,
    format_stat,
)

TABLE = build_distribution(1.0, 2.0, [2, 3, 4], 2)


def _obs(chrom: str, pos: int, baf, dr) -> Observation:
    return Observation(chrom=chrom, pos=pos, baf=baf, dr=dr)


@pytest.fixture
def three_points() -> list[Observation]:
    return [
        _obs("chr1", 100, 0.5, 1.0),
        _obs("chr1", 200, 0.48, 1.02),
        _obs("chr1", 300, 0.52, 0.98),
    ]


def test_end_index_anchors_pos_end_but_is_excluded_from_stats(three_points) -> None:
    row = aggregate_segment(0, 2, three_points, TABLE)

    assert row is not None
    assert row.chrom == "chr1"
    assert row.pos_start == 100
    assert row.pos_end == 300
    # only the first two observations enter the statistics
    assert row.baf_count == 2
    assert row.dr_count == 2
    assert row.baf_mean == 0.49
    assert row.baf_median == 0.49
    assert row.baf_std == 0.01
    assert row.dr_mean == 1.01
    assert row.dr_median == 1.01
    assert row.dr_std == 0.01
    assert (row.total, row.minor) == (2, 1)


def test_cross_chromosome_selection_is_refused() -> None:
    observations = [_obs("chr1", 100, 0.5, 1.0), _obs("chr2", 50, 0.5, 1.0)]
    assert aggregate_segment(0, 1, observations, TABLE) is None


def test_empty_selection_is_refused(three_points) -> None:
    assert aggregate_segment(1, 1, three_points, TABLE) is None


def test_single_element_std_is_zero(three_points) -> None:
    row = aggregate_segment(1, 2, three_points, TABLE)
    assert row.baf_std == 0.0
    assert format_stat(row.baf_std) == "0.000"
    assert format_stat(row.dr_std) == "0.000"


def test_median_of_odd_and_even_counts() -> None:
    assert channel_stats([0.3, 0.1, 0.2], 3).median == 0.2
    assert channel_stats([0.4, 0.1, 0.2, 0.3], 4).median == 0.25


def test_std_uses_rounded_mean() -> None:
    # raw mean 0.00049 rounds to 0.000; std around 0.000 is 0.00069 -> 0.001,
    # while the std around the raw mean would be 0.00049 -> 0.000
    stats = channel_stats([0.0, 0.00098], 2)
    assert stats.mean == 0.0
    assert stats.std == 0.001


def test_dr_only_segment_gets_total_only() -> None:
    observations = [
        _obs("chr3", 10, None, 1.48),
        _obs("chr3", 20, None, 1.52),
        _obs("chr3", 30, None, 1.50),
    ]
    row = aggregate_segment(0, 2, observations, TABLE)
    assert row.baf_mean is None
    assert row.baf_count == row.dr_count == 2
    assert row.dr_mean == 1.5
    assert row.total == 3
    assert row.minor is None


def test_row_is_a_snapshot(three_points) -> None:
    row = aggregate_segment(0, 2, three_points, TABLE)
    three_points[0] = _obs("chr1", 100, 0.1, 3.0)
    assert row.baf_mean == 0.49
    assert row.dr_mean == 1.01


def test_fix_decimals_rounds_half_up_and_is_idempotent() -> None:
    assert fix_decimals(0.0625) == 0.063
    for value in (0.1234567, 2.0 / 3.0, 1.01, 0.4995, 12.3456):
        once = fix_decimals(value)
        assert fix_decimals(once) == once
        assert format_stat(float(format_stat(once))) == format_stat(once)


def test_partially_missing_channel_uses_present_values() -> None:
    observations = [
        _obs("chr4", 10, None, 1.0),
        _obs("chr4", 20, 0.5, 1.0),
        _obs("chr4", 30, 0.5, 1.0),
    ]
    row = aggregate_segment(0, 2, observations, TABLE)

    # count is the span length; mean/median/std cover the one present BAF
    assert row.baf_count == row.dr_count == 2
    assert row.baf_mean == 0.5
    assert row.baf_median == 0.5
    assert row.baf_std == 0.0
    assert (row.total, row.minor) == (2, 1)
