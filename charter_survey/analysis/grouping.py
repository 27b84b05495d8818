"""Grouping and formatting helpers shared by the analytics modules."""
from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, Iterable, List, Tuple

from charter_survey.records import UNKNOWN, SurveyRecord

KeyFunc = Callable[[SurveyRecord], str]

# Categorical fields records can be grouped by: name -> (display title, key).
CATEGORY_FIELDS: Dict[str, Tuple[str, KeyFunc]] = {
    "campus": ("Campus", lambda r: r.campus),
    "office": ("Office", lambda r: r.office),
    "client_type": ("Client Type", lambda r: r.client_type_label),
    "sex": ("Sex", lambda r: r.sex),
    "age_group": ("Age Group", lambda r: r.age_group),
}

DEMOGRAPHIC_FIELDS: Tuple[str, ...] = ("client_type", "sex", "age_group")


def key_for(field_name: str) -> KeyFunc:
    """Return the key function for a categorical field.

    Raises
    ------
    ValueError
        If *field_name* is not a groupable field.
    """
    try:
        return CATEGORY_FIELDS[field_name][1]
    except KeyError as exc:
        raise ValueError(f"Cannot group records by '{field_name}'") from exc


def title_for(field_name: str) -> str:
    return CATEGORY_FIELDS[field_name][0]


def bucket(value: str | None) -> str:
    """Return the stripped category value, ``"Unknown"`` when blank."""
    text = (value or "").strip()
    return text or UNKNOWN


def group_by(records: Iterable[SurveyRecord], key: KeyFunc) -> Dict[str, List[SurveyRecord]]:
    """Group *records* by ``bucket(key(record))`` in first-seen order.

    Every record lands in exactly one group.
    """
    groups: Dict[str, List[SurveyRecord]] = {}
    for record in records:
        groups.setdefault(bucket(key(record)), []).append(record)
    return groups


def distribution(records: Iterable[SurveyRecord], key: KeyFunc) -> Dict[str, int]:
    """Count records per category value, blank values under ``"Unknown"``."""
    counts: Counter[str] = Counter()
    for record in records:
        counts[bucket(key(record))] += 1
    return dict(counts)


def percent(part: float, whole: float) -> float:
    if not whole:
        return 0.0
    return part / whole * 100


def format_percent(part: float, whole: float, digits: int = 2) -> str:
    """Return ``part/whole`` as a percentage string (``"25.00"``)."""
    return f"{percent(part, whole):.{digits}f}"


def fmt(value: float, digits: int = 2) -> str:
    return f"{value:.{digits}f}"
