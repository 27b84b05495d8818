"""Service Quality Dimension (SQD0–SQD8) scoring.

"% Favorable" is the Agree + Strongly Agree share of a dimension's valid
answers. ``NA`` answers are not applicable and leave the population; so do
empty or unrecognised values.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Union

from charter_survey.records import SQD_DIMENSIONS, SQDDimension, SurveyRecord

__all__ = [
    "SQD_RATING",
    "FAVORABLE_CODES",
    "rated_code",
    "sqd_favorable_score",
    "sqd_scores",
    "overall_sqd_score",
    "sqd_rating",
    "mean_rating",
]

# Ordinal map used for mean ratings. NA maps to 0 and is filtered, not averaged.
SQD_RATING: Dict[str, int] = {"SD": 1, "D": 2, "ND": 3, "A": 4, "SA": 5, "NA": 0}

FAVORABLE_CODES = frozenset({"A", "SA"})


def rated_code(value: Optional[str]) -> Optional[str]:
    """Return *value* if it is one of SD/D/ND/A/SA, else ``None``."""
    code = (value or "").strip()
    if SQD_RATING.get(code, 0) > 0:
        return code
    return None


def sqd_favorable_score(
    records: Iterable[SurveyRecord], dimension: Union[SQDDimension, str]
) -> float:
    """% favorable for one dimension; ``0`` when no valid answers exist."""
    dim = SQDDimension.coerce(dimension)
    if dim is None:
        return 0.0

    valid = [code for code in (rated_code(r.sqd_value(dim)) for r in records) if code]
    if not valid:
        return 0.0
    favorable = sum(1 for code in valid if code in FAVORABLE_CODES)
    return favorable / len(valid) * 100


def sqd_scores(records: Sequence[SurveyRecord]) -> Dict[SQDDimension, float]:
    """Favorable score of every dimension, in questionnaire order."""
    return {dim: sqd_favorable_score(records, dim) for dim in SQD_DIMENSIONS}


def overall_sqd_score(records: Sequence[SurveyRecord]) -> float:
    """Mean favorable score across dimensions.

    Dimensions scoring exactly ``0`` are treated as "no data" and left out of
    the mean, including a dimension that is genuinely 0% favorable.
    """

    # TODO: separate "no valid answers" from "0% favorable" once reports can show both.
    scores = [s for s in sqd_scores(records).values() if s > 0]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def sqd_rating(record: SurveyRecord, dimensions: Sequence[SQDDimension] = SQD_DIMENSIONS) -> Optional[float]:
    """Mean ordinal rating of *record* over *dimensions* (``None`` if unrated)."""
    values = [
        SQD_RATING[code]
        for code in (rated_code(record.sqd_value(dim)) for dim in dimensions)
        if code
    ]
    if not values:
        return None
    return sum(values) / len(values)


def mean_rating(
    records: Iterable[SurveyRecord],
    dimensions: Sequence[SQDDimension] = SQD_DIMENSIONS,
) -> float:
    """Mean ordinal rating over every valid answer of *records* (``0`` if none)."""
    values: List[int] = []
    for record in records:
        for dim in dimensions:
            code = rated_code(record.sqd_value(dim))
            if code:
                values.append(SQD_RATING[code])
    if not values:
        return 0.0
    return sum(values) / len(values)
