"""Citizen's Charter (CC1–CC3) scoring.

Each percentage uses its own population:

* CC1 awareness   – every record.
* CC2 visibility  – respondents aware of the charter (CC1 = 1, 2 or 3).
* CC3 helpfulness – respondents who saw the charter (CC1 = 1 or 3).

Empty or unrecognised codes never match; an empty population scores ``0``.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from charter_survey.records import SurveyRecord

__all__ = [
    "AWARE_CODES",
    "SAW_CODES",
    "cc1_awareness_score",
    "cc2_visibility_score",
    "cc3_helpfulness_score",
    "cc_rating",
]

AWARE_CODES = frozenset({"1", "2", "3"})
SAW_CODES = frozenset({"1", "3"})
VISIBLE_CODES = frozenset({"1", "2"})
HELPFUL_CODES = frozenset({"1", "2"})

# Numeric codes accepted when averaging charter answers.
_RATED_CODES = frozenset({"1", "2", "3", "4", "5"})


def _code(value: str) -> str:
    return (value or "").strip()


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100


def is_aware(record: SurveyRecord) -> bool:
    return _code(record.cc1) in AWARE_CODES


def saw_charter(record: SurveyRecord) -> bool:
    return _code(record.cc1) in SAW_CODES


def cc1_awareness_score(records: Sequence[SurveyRecord]) -> float:
    """% of all respondents who know of the charter."""
    aware = sum(1 for r in records if is_aware(r))
    return _percent(aware, len(records))


def cc2_visibility_score(records: Iterable[SurveyRecord]) -> float:
    """% of aware respondents who found the charter easy or somewhat easy to see."""
    aware: List[SurveyRecord] = [r for r in records if is_aware(r)]
    visible = sum(1 for r in aware if _code(r.cc2) in VISIBLE_CODES)
    return _percent(visible, len(aware))


def cc3_helpfulness_score(records: Iterable[SurveyRecord]) -> float:
    """% of respondents who saw the charter and were helped by it."""
    saw: List[SurveyRecord] = [r for r in records if saw_charter(r)]
    helpful = sum(1 for r in saw if _code(r.cc3) in HELPFUL_CODES)
    return _percent(helpful, len(saw))


def cc_rating(record: SurveyRecord) -> float | None:
    """Mean numeric charter code of *record* or ``None`` when nothing is rated.

    ``NA`` and unrecognised codes are left out rather than counted as zero.
    """

    values = [int(_code(v)) for v in record.cc_values() if _code(v) in _RATED_CODES]
    if not values:
        return None
    return sum(values) / len(values)
