"""Unit tests for Markdown report rendering."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from charter_survey.records import SQD_DIMENSIONS, SurveyRecord
from charter_survey.reporting.context import build_report_context
from charter_survey.reporting.render import render_report


def _make_record(idx: int, sqd: str = "A", **fields) -> SurveyRecord:
    answers = {dim.value: sqd for dim in SQD_DIMENSIONS}
    answers.update(fields)
    return SurveyRecord(id=f"r{idx}", timestamp="2025-03-01T08:00:00Z", **answers)


@pytest.fixture()
def records() -> list[SurveyRecord]:
    return [
        _make_record(0, campus="Bulan Campus", office="Registrar's Office", cc1="1", cc2="1", cc3="1",
                     services="Transcript", comments="Quick & friendly"),
        _make_record(1, campus="Bulan Campus", office="ICT", cc1="3", cc2="4", cc3="3", sqd5="SD",
                     comments="Too expensive"),
    ]


def test_render_report_basic(records):
    out = render_report(records, title="Bulan CSM")

    assert out.startswith("# Bulan CSM")
    # no HTML escaping in Markdown output
    assert "Registrar's Office" in out
    assert "Quick & friendly" in out
    assert "## Service Quality Dimensions" in out
    assert "| SQD5 |" in out
    assert "1. Transcript (1)" in out
    assert "Charter is not visible at all" in out
    assert "## Comments (2 of 2)" in out
    assert "⚠️ [SQD5] ICT" in out


def test_render_report_filter_label(records):
    out = render_report(records, filter_label="Campus: Bulan Campus")

    assert "Client Satisfaction Measurement Report" in out
    assert "Campus: Bulan Campus" in out


def test_render_report_without_records():
    out = render_report([])

    assert "No survey responses recorded yet" in out
    assert "## Offices" not in out


def test_render_uses_context_builder(records):
    with patch(
        "charter_survey.reporting.render.build_report_context",
        wraps=build_report_context,
    ) as build_mp:
        render_report(records)

    build_mp.assert_called_once()
    assert build_mp.call_args.kwargs["filter_label"] is None
