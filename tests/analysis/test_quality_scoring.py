"""Unit tests for service quality dimension scoring."""
from __future__ import annotations

import pytest

from charter_survey.analysis.quality import (
    mean_rating,
    overall_sqd_score,
    sqd_favorable_score,
    sqd_rating,
    sqd_scores,
)
from charter_survey.records import SQD_DIMENSIONS, SQDDimension, SurveyRecord


def _rec(idx: int, **sqd: str) -> SurveyRecord:
    return SurveyRecord(id=f"r{idx}", timestamp="2025-03-01T08:00:00Z", **sqd)


def _uniform(idx: int, code: str) -> SurveyRecord:
    return _rec(idx, **{dim.value: code for dim in SQD_DIMENSIONS})


def test_na_is_removed_from_population():
    records = [_rec(i, sqd3=code) for i, code in enumerate(["SA", "A", "ND", "D", "NA"])]

    assert sqd_favorable_score(records, "sqd3") == pytest.approx(50.0)
    assert sqd_favorable_score(records, SQDDimension.SQD3) == pytest.approx(50.0)


def test_invalid_values_are_treated_as_absent():
    records = [_rec(0, sqd1="A"), _rec(1, sqd1="maybe"), _rec(2, sqd1="")]

    assert sqd_favorable_score(records, "sqd1") == pytest.approx(100.0)


def test_empty_population_scores_zero():
    assert sqd_favorable_score([], "sqd0") == 0
    assert sqd_favorable_score([_rec(0, sqd0="NA")], "sqd0") == 0
    assert overall_sqd_score([]) == 0


def test_unknown_dimension_key_scores_zero():
    assert sqd_favorable_score([_rec(0, sqd0="SA")], "sqd9") == 0


def test_sqd_scores_keeps_questionnaire_order():
    assert list(sqd_scores([_uniform(0, "A")])) == list(SQD_DIMENSIONS)


def test_overall_discards_zero_score_dimensions():
    # sqd0 is 0% favorable with real answers and is still left out of the mean.
    records = [_rec(0, sqd0="D", sqd1="SA", sqd2="A"), _rec(1, sqd0="SD", sqd1="D", sqd2="A")]

    assert overall_sqd_score(records) == pytest.approx((50.0 + 100.0) / 2)


def test_overall_of_uniform_agreement_is_100():
    assert overall_sqd_score([_uniform(0, "SA"), _uniform(1, "A")]) == pytest.approx(100.0)


def test_mean_rating_filters_na_instead_of_counting_zero():
    records = [_rec(0, sqd0="SA", sqd1="NA"), _rec(1, sqd0="SD", sqd1="A")]

    assert mean_rating(records) == pytest.approx((5 + 1 + 4) / 3)
    assert mean_rating([]) == 0
    assert sqd_rating(_rec(0, sqd0="NA")) is None
    assert sqd_rating(_rec(0, sqd0="ND", sqd5="A")) == pytest.approx(3.5)
