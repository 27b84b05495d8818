"""Tests for the spreadsheet export."""
from __future__ import annotations

import datetime

from openpyxl import load_workbook

from charter_survey.excel_export import (
    EXCEL_COLUMNS,
    SHEET_NAME,
    default_filename,
    display_timestamp,
    export_to_excel,
    records_to_frame,
)
from charter_survey.records import SurveyRecord


def _records() -> list[SurveyRecord]:
    return [
        SurveyRecord(
            id="r1",
            timestamp="2025-03-14T10:15:00.000Z",
            campus="Bulan Campus",
            office="HR",
            client_type=("C", "B"),
            sex="Female",
            age_group="20-34",
            services="Leave filing",
            cc1="1",
            sqd0="SA",
        ),
        SurveyRecord(id="r2", timestamp="3/14/2025, 11:00:00 AM", office="ICT", sqd0="D"),
    ]


def test_display_timestamp():
    assert display_timestamp("2025-03-14T10:15:00.000Z") == "2025-03-14 10:15:00"
    assert display_timestamp("3/14/2025, 11:00:00 AM") == "3/14/2025, 11:00:00 AM"


def test_default_filename():
    assert default_filename(datetime.date(2025, 3, 14)) == "encoded-data-2025-03-14.xlsx"


def test_records_to_frame_columns():
    frame = records_to_frame(_records())

    assert list(frame.columns) == [label for label, _ in EXCEL_COLUMNS]
    assert frame.loc[0, "Client Type"] == "C, B"
    assert frame.loc[1, "Office"] == "ICT"
    assert records_to_frame([]).empty


def test_export_writes_single_sheet(tmp_path):
    target = tmp_path / "survey.xlsx"

    path = export_to_excel(_records(), target)

    assert path == target
    workbook = load_workbook(path)
    assert workbook.sheetnames == [SHEET_NAME]
    rows = list(workbook[SHEET_NAME].iter_rows(values_only=True))
    assert list(rows[0]) == [label for label, _ in EXCEL_COLUMNS]
    assert len(rows) == 3
    first = dict(zip(rows[0], rows[1]))
    assert first["Date/Time"] == "2025-03-14 10:15:00"
    assert first["Campus"] == "Bulan Campus"
    assert first["SQD0"] == "SA"


def test_export_default_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    path = export_to_excel(_records())

    assert path.name == default_filename()
    assert (tmp_path / path).exists()
