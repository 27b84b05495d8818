"""Unit tests for ARTA interpretation bands."""
from __future__ import annotations

import pytest

from charter_survey.analysis.interpretation import (
    NO_DATA,
    InterpretationLevel,
    interpretation,
    interpretation_or_no_data,
    interpretation_with_description,
)


@pytest.mark.parametrize(
    "score, expected",
    [
        (100, "Very High"),
        (90, "Very High"),
        (89.999, "High"),
        (80, "High"),
        (79.99, "Moderate"),
        (70, "Moderate"),
        (69.5, "Low"),
        (60, "Low"),
        (59.999, "Very Low"),
        (0, "Very Low"),
    ],
)
def test_band_boundaries(score, expected):
    assert interpretation(score) == expected


def test_levels_never_decrease_with_score():
    ranks = [
        InterpretationLevel.VERY_LOW,
        InterpretationLevel.LOW,
        InterpretationLevel.MODERATE,
        InterpretationLevel.HIGH,
        InterpretationLevel.VERY_HIGH,
    ]
    seen = [ranks.index(interpretation(x / 2)) for x in range(0, 201)]
    assert seen == sorted(seen)


def test_no_data_marker_only_for_empty_population():
    assert interpretation_or_no_data(0, 0) == NO_DATA
    assert interpretation_or_no_data(0, 3) == "Very Low"


def test_description_per_metric():
    result = interpretation_with_description(92.5, "visibility")

    assert result.level is InterpretationLevel.VERY_HIGH
    assert "prominently displayed" in result.description
    assert result.to_dict()["level"] == "Very High"


def test_unknown_metric_raises():
    with pytest.raises(ValueError):
        interpretation_with_description(50, "speed")
