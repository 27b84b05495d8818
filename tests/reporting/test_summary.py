"""Unit tests for reporting.summary."""

from __future__ import annotations

import pytest

from charter_survey.analysis.interpretation import NO_DATA
from charter_survey.records import SQD_DIMENSIONS, SurveyRecord
from charter_survey.reporting.summary import (
    NO_DATA_INSIGHT,
    awareness_rate,
    cc1_insight,
    cc2_insight,
    cc3_insight,
    demographic_breakdown,
    helpfulness_rate,
    office_metrics,
    summary_statistics,
    visibility_rate,
)


def _make_record(idx: int, sqd: str = "A", **fields) -> SurveyRecord:  # helper
    answers = {dim.value: sqd for dim in SQD_DIMENSIONS}
    answers.update(fields)
    return SurveyRecord(id=f"r{idx}", timestamp="2025-03-01T08:00:00Z", **answers)


def _scenario() -> list[SurveyRecord]:
    return [
        _make_record(0, sqd="SA", campus="Bulan Campus", office="HR", sex="Female", cc1="1", cc2="1", cc3="1"),
        _make_record(1, campus="Bulan Campus", office="HR", sex="Female", cc1="1", cc2="3", cc3="3", sqd2="D"),
        _make_record(2, campus="Bulan Campus", office="ICT", sex="Female", cc1="4"),
        _make_record(3, campus="", office="", sex="", cc1="2", cc2="1", sqd2="SD"),
    ]


def test_summary_scores_and_interpretations():
    stats = summary_statistics(_scenario())

    assert stats.has_data
    assert stats.total_responses == 4
    assert stats.campus_count == 1
    assert stats.office_count == 2
    assert stats.overall_awareness == pytest.approx(75.0)
    assert stats.awareness_interpretation == "Moderate"
    assert stats.overall_visibility == pytest.approx(200 / 3)
    assert stats.overall_helpfulness == pytest.approx(50.0)
    assert stats.overall_sqd == pytest.approx(850 / 9)
    assert stats.overall_sqd_interpretation == "Very High"
    assert [d.code for d in stats.sqd_by_dimension] == [d.code for d in SQD_DIMENSIONS]


def test_problem_areas_below_threshold_worst_first():
    stats = summary_statistics(_scenario())

    assert [(p.area, p.kind) for p in stats.problem_areas] == [
        ("CC3 - Helpfulness", "CC"),
        ("SQD2 - Reliability", "SQD"),
        ("CC2 - Visibility", "CC"),
    ]


def test_summary_of_nothing_reports_no_data():
    stats = summary_statistics([])

    assert not stats.has_data
    assert stats.overall_sqd == 0.0
    assert stats.awareness_interpretation == NO_DATA
    assert stats.overall_sqd_interpretation == NO_DATA
    assert stats.problem_areas == []


def test_office_metrics_busiest_first():
    rows = office_metrics(_scenario())

    assert [r.office for r in rows] == ["HR", "ICT", "Unknown"]
    hr = rows[0]
    assert hr.total_responses == 2
    assert hr.cc1_score == pytest.approx(100.0)
    assert hr.cc2_score == pytest.approx(50.0)
    assert hr.cc2_interpretation == "Very Low"
    assert hr.sqd_scores["sqd2"] == pytest.approx(50.0)
    assert hr.sqd_interpretations["sqd0"] == "Very High"


def test_demographic_breakdown_shares():
    rows = demographic_breakdown(_scenario(), "sex")

    assert [(r.value, r.count) for r in rows] == [("Female", 3), ("Unknown", 1)]
    assert rows[0].percentage == pytest.approx(75.0)
    assert rows[0].category == "Sex"


def test_rates_ignore_na_bucket():
    cc1 = {"Knew and saw charter": 2, "Knew but didn't see": 1, "Learned from this visit": 1, "N/A": 6}
    assert awareness_rate(cc1) == "75.0"
    assert visibility_rate({"N/A": 3}) == "0"
    assert helpfulness_rate({}) == "0"


@pytest.mark.parametrize(
    "insight, dist, expected",
    [
        (cc1_insight, {"Knew and saw charter": 7, "Learned from this visit": 3}, "Strong charter awareness: 70%"),
        (cc1_insight, {"Knew and saw charter": 4, "Learned from this visit": 6}, "60% of clients learned"),
        (cc1_insight, {"Knew and saw charter": 5, "Knew but didn't see": 5}, "Mixed awareness levels"),
        (cc2_insight, {"Easy to see": 9, "Difficult to see": 1}, "Excellent visibility: 90%"),
        (cc2_insight, {"Easy to see": 6, "Not visible at all": 4}, "Visibility concern: 40%"),
        (cc2_insight, {"Easy to see": 5, "Somewhat easy to see": 3, "Difficult to see": 2}, "Moderate visibility: 50%"),
        (cc3_insight, {"Helped very much": 8, "Somewhat helped": 2}, "High effectiveness: 80%"),
        (cc3_insight, {"Helped very much": 2, "Did not help": 4, "Somewhat helped": 4}, "Limited effectiveness: 40%"),
        (cc3_insight, {"Helped very much": 5, "Somewhat helped": 5}, "Moderate helpfulness: 50%"),
    ],
)
def test_charter_insights(insight, dist, expected):
    assert insight(dist).startswith(expected)


def test_insights_without_answers():
    for insight in (cc1_insight, cc2_insight, cc3_insight):
        assert insight({"N/A": 4}) == NO_DATA_INSIGHT
