# tests/test_main.py
from unittest.mock import patch

import pytest

import charter_survey.app as app
from charter_survey.csv_codec import CSV_COLUMNS, EXPECTED_CSV_COLUMNS
from charter_survey.main import main
from charter_survey.record_store import JsonFileBackend, RecordStore

HEADER = ",".join(label for label, _ in CSV_COLUMNS)
GOOD_LINE = (
    "2025-03-01T08:00:00Z,Bulan Campus,20-34,Female,HR,Leave filing,C,"
    "1,1,1,SA,A,A,A,A,A,A,A,D,Needs more chairs,DOC-1"
)
SHORT_LINE = "2025-03-01T09:00:00Z,Bulan Campus,20-34,Male,HR"


@pytest.fixture()
def store_path(tmp_path):
    return tmp_path / "records.json"


@pytest.fixture()
def csv_file(tmp_path):
    path = tmp_path / "upload.csv"
    path.write_text("\n".join([HEADER, GOOD_LINE, SHORT_LINE, GOOD_LINE]), encoding="utf-8")
    return path


def test_get_store_path_reads_environment(monkeypatch):
    monkeypatch.setenv("CHARTER_STORE_PATH", "/data/records.json")
    assert app.get_store_path() == "/data/records.json"
    monkeypatch.delenv("CHARTER_STORE_PATH")
    assert app.get_store_path() == app.DEFAULT_STORE_PATH


def test_columns_command(capsys):
    assert main(["columns"]) == 0
    assert capsys.readouterr().out.strip() == EXPECTED_CSV_COLUMNS


def test_import_replaces_store_and_reports_skips(store_path, csv_file, capsys):
    assert main(["--store", str(store_path), "import", str(csv_file)]) == 0

    out = capsys.readouterr().out
    assert "Imported 2 record(s), skipped 1 line(s)." in out
    assert "Row 3 has 5 of 21 columns, skipping" in out
    records = RecordStore(JsonFileBackend(store_path)).load()
    assert len(records) == 2
    assert records[0].office == "HR"


@patch("charter_survey.main.logger")
def test_import_without_valid_rows_fails(mock_logger, store_path, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text(HEADER + "\n" + SHORT_LINE, encoding="utf-8")

    assert main(["--store", str(store_path), "import", str(bad)]) == 1
    mock_logger.error.assert_called_once()
    assert not store_path.exists()


@patch("charter_survey.main.logger")
def test_missing_csv_file_fails(mock_logger, store_path, tmp_path):
    assert main(["--store", str(store_path), "import", str(tmp_path / "nope.csv")]) == 1
    mock_logger.error.assert_called_once()


def test_export_csv_and_report(store_path, csv_file, tmp_path, capsys):
    main(["--store", str(store_path), "import", str(csv_file)])
    capsys.readouterr()

    out_csv = tmp_path / "out.csv"
    assert main(["--store", str(store_path), "export-csv", str(out_csv)]) == 0
    lines = out_csv.read_text(encoding="utf-8").splitlines()
    assert lines[0] == HEADER
    assert len(lines) == 3

    assert main(["--store", str(store_path), "report", "--office", "HR"]) == 0
    report = capsys.readouterr().out
    assert "Office: HR" in report
    assert "Needs more chairs" in report


def test_report_filter_without_matches(store_path, csv_file, capsys):
    main(["--store", str(store_path), "import", str(csv_file)])
    capsys.readouterr()

    assert main(["--store", str(store_path), "report", "--campus", "Castilla Campus"]) == 0
    assert "No survey responses recorded yet" in capsys.readouterr().out


def test_export_xlsx(store_path, csv_file, tmp_path, capsys):
    main(["--store", str(store_path), "import", str(csv_file)])
    target = tmp_path / "out.xlsx"

    assert main(["--store", str(store_path), "export-xlsx", str(target)]) == 0
    assert target.exists()
    assert "Wrote 2 record(s)" in capsys.readouterr().out


def test_clear(store_path, csv_file):
    main(["--store", str(store_path), "import", str(csv_file)])

    assert main(["--store", str(store_path), "clear"]) == 0
    assert RecordStore(JsonFileBackend(store_path)).count() == 0
