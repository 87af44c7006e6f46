from __future__ import annotations

import csv
from pathlib import Path

import pytest

import csv_sink
from models import Paper

OLD = Paper(title="Old", year=2001, conference="VIS", authors=("Ada", "Alan"), doi="10.1/old")
NEW = Paper(title="New", year=2020, resources=("code", "data"), paper_id="p-new", link="https://example.com")
UNDATED = Paper(title="Undated")


@pytest.fixture(autouse=True)
def patch_csv_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point CURRENT_SET_CSV_PATH at a temp file for every test."""
    monkeypatch.setattr(csv_sink, "CURRENT_SET_CSV_PATH", str(tmp_path / "current.csv"))


def _read(path: str) -> list[dict]:
    with open(path, newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


def test_write_paper_set_orders_newest_first() -> None:
    count = csv_sink.write_paper_set([OLD, UNDATED, NEW])

    rows = _read(csv_sink.CURRENT_SET_CSV_PATH)
    assert count == 3
    assert [r["title"] for r in rows] == ["New", "Old", "Undated"]
    assert list(rows[0].keys()) == csv_sink.CSV_COLUMNS


def test_write_paper_set_flattens_lists_and_marks_highlight() -> None:
    csv_sink.write_paper_set([OLD, NEW], highlighted=[OLD])

    rows = {r["identity_key"]: r for r in _read(csv_sink.CURRENT_SET_CSV_PATH)}
    assert rows["10.1/old"]["authors"] == "Ada; Alan"
    assert rows["10.1/old"]["highlighted"] == "True"
    assert rows["p-new"]["resources"] == "code; data"
    assert rows["p-new"]["highlighted"] == "False"
    assert rows["p-new"]["conference"] == ""


def test_write_paper_set_overwrites_existing_file() -> None:
    csv_sink.write_paper_set([OLD, NEW])
    csv_sink.write_paper_set([OLD])
    assert len(_read(csv_sink.CURRENT_SET_CSV_PATH)) == 1


def test_explicit_path_wins(tmp_path: Path) -> None:
    target = tmp_path / "other.csv"
    csv_sink.write_paper_set([NEW], csv_path=str(target))
    assert _read(str(target))[0]["year"] == "2020"
    assert not Path(csv_sink.CURRENT_SET_CSV_PATH).exists()
