from pathlib import Path

import openpyxl
import pytest

from cna_viewer.parsers.detector import detect_and_parse
from cna_viewer.parsers.form import parse_form
from cna_viewer.parsers.table import RowParseError, parse_rows


def test_parse_form_valid() -> None:
    params = parse_form({
        "purity": "0.8",
        "tumorPloidy": "2.5",
        "normalPloidy": "2",
        "copyNumbers": "1, 2, ,3,x,4",
    })
    assert params.purity == 0.8
    assert params.ploidy == 2.5
    assert params.normal_ploidy == 2
    assert params.copy_numbers == [1, 2, 3, 4]


def test_parse_form_errors() -> None:
    with pytest.raises(ValueError, match="Invalid form data"):
        parse_form(None)
    with pytest.raises(ValueError, match="Invalid numeric data"):
        parse_form({"purity": "abc", "tumorPloidy": "2", "normalPloidy": "2", "copyNumbers": "2"})
    with pytest.raises(ValueError, match="No valid copy numbers found"):
        parse_form({"purity": "1", "tumorPloidy": "2", "normalPloidy": "2", "copyNumbers": "a, b"})
    with pytest.raises(ValueError, match="whole numbers"):
        parse_form({"purity": "1", "tumorPloidy": "2", "normalPloidy": "2", "copyNumbers": "2.5"})


def test_parse_rows_positions_and_intervals() -> None:
    observations = parse_rows([
        {"chr": "chr1", "pos": "1000", "BAF": "0.45", "DR": "1.1"},
        {"chr": "chr1", "pos": "2000", "BAF": "", "DR": "0.9"},
    ])
    assert observations[0].pos == 1000
    assert observations[0].baf == 0.45
    assert observations[1].baf is None
    assert observations[1].label is None

    intervals = parse_rows([{"chr": "chr2", "start": "100", "end": "301", "DR": "1.0"}])
    assert intervals[0].pos == 200
    assert intervals[0].label == "chr2:100-301"
    assert intervals[0].baf is None


def test_parse_rows_reports_row_index() -> None:
    with pytest.raises(RowParseError, match="Wrong chr record at row 1") as err:
        parse_rows([{"chr": "chr1", "pos": "1"}, {"chr": "1", "pos": "2"}])
    assert err.value.row == 1

    with pytest.raises(RowParseError, match="Invalid numeric data at row 0"):
        parse_rows([{"chr": "chr1", "pos": "n/a"}])


def test_detect_and_parse_csv_and_tsv(tmp_path: Path) -> None:
    csv_path = tmp_path / "data.csv"
    csv_path.write_text("chr,pos,BAF,DR\nchr1,100,0.5,1.0\nchr1,200,,1.2\n", encoding="utf-8")
    observations = detect_and_parse(csv_path)
    assert [o.pos for o in observations] == [100, 200]
    assert observations[1].baf is None

    tsv_path = tmp_path / "data.tsv"
    tsv_path.write_text("chr\tstart\tend\tBAF\tDR\nchr3\t0\t100\t0.3\t0.8\n", encoding="utf-8")
    observations = detect_and_parse(tsv_path)
    assert observations[0].pos == 50
    assert observations[0].label == "chr3:0-100"


def test_detect_and_parse_xlsx(tmp_path: Path) -> None:
    path = tmp_path / "data.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["chr", "pos", "BAF", "DR"])
    ws.append(["chr5", 500, 0.25, 1.5])
    ws.append(["chr5", 600, None, 1.4])
    wb.save(path)

    observations = detect_and_parse(path)
    assert [(o.chrom, o.pos, o.baf, o.dr) for o in observations] == [
        ("chr5", 500, 0.25, 1.5),
        ("chr5", 600, None, 1.4),
    ]


def test_detect_and_parse_rejects_bad_input(tmp_path: Path) -> None:
    path = tmp_path / "data.bed"
    path.write_text("chr1\t1\t2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported file extension"):
        detect_and_parse(path)

    path = tmp_path / "nopos.csv"
    path.write_text("chr,BAF\nchr1,0.5\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Missing position columns"):
        detect_and_parse(path)
