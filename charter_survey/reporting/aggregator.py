"""Aggregate survey records into per-group :class:`GroupMetrics`.

Groups are formed by campus, office or a demographic field. The functions are
read-only over the record snapshot they receive and never raise for bad data:
blank categories land in ``"Unknown"``, unrecognised charter codes in ``"N/A"``.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from charter_survey.analysis.charter import cc_rating
from charter_survey.analysis.grouping import (
    DEMOGRAPHIC_FIELDS,
    distribution,
    group_by,
    key_for,
)
from charter_survey.analysis.quality import SQD_RATING, rated_code, sqd_rating
from charter_survey.records import (
    CC1_LABELS,
    CC2_LABELS,
    CC3_LABELS,
    SQD_DIMENSIONS,
    UNKNOWN,
    SurveyRecord,
)
from charter_survey.reporting import config
from charter_survey.reporting.models import (
    DemographicSatisfaction,
    GroupMetrics,
    OfficePerformance,
    ServiceCount,
    TimeSeriesPoint,
)

logger = logging.getLogger(__name__)

NA_BUCKET = "N/A"

_CC_LABELS: Dict[str, Dict[str, str]] = {
    "cc1": CC1_LABELS,
    "cc2": CC2_LABELS,
    "cc3": CC3_LABELS,
}

# Buckets of a per-dimension SQD distribution, in display order.
SQD_BUCKETS = ("SD", "D", "ND", "A", "SA", "NA", UNKNOWN)


def _mean(values: Iterable[Optional[float]]) -> float:
    """Mean of the non-``None`` *values*, rounded to 2 decimals (``0`` if none)."""
    present = [v for v in values if v is not None]
    if not present:
        return 0.0
    return round(sum(present) / len(present), 2)


# ---------------------------------------------------------------------------
# Distributions
# ---------------------------------------------------------------------------


def cc_distributions(records: Iterable[SurveyRecord]) -> Dict[str, Dict[str, int]]:
    """Answer-label counts for CC1–CC3, each with an explicit ``"N/A"`` bucket."""
    dists = {
        name: {**{label: 0 for label in labels.values()}, NA_BUCKET: 0}
        for name, labels in _CC_LABELS.items()
    }
    for record in records:
        for name, labels in _CC_LABELS.items():
            code = (getattr(record, name) or "").strip()
            dists[name][labels.get(code, NA_BUCKET)] += 1
    return dists


def sqd_distribution(records: Iterable[SurveyRecord]) -> Dict[str, Dict[str, int]]:
    """Per-dimension code counts; blank or unrecognised answers count as ``"Unknown"``."""
    dists = {dim.value: {b: 0 for b in SQD_BUCKETS} for dim in SQD_DIMENSIONS}
    for record in records:
        for dim, value in record.sqd_responses():
            code = value.strip()
            dists[dim.value][code if code in SQD_RATING else UNKNOWN] += 1
    return dists


def sqd_averages(records: Sequence[SurveyRecord]) -> Dict[str, float]:
    """Mean ordinal rating per dimension, NA and invalid answers excluded."""
    averages: Dict[str, float] = {}
    for dim in SQD_DIMENSIONS:
        ratings = [
            SQD_RATING[code]
            for code in (rated_code(r.sqd_value(dim)) for r in records)
            if code
        ]
        averages[dim.value] = sum(ratings) / len(ratings) if ratings else 0.0
    return averages


def top_services(
    records: Iterable[SurveyRecord], limit: int = config.TOP_SERVICES
) -> List[ServiceCount]:
    """Most frequent non-blank services (trimmed), first-seen order breaks ties."""
    counts: Counter[str] = Counter()
    for record in records:
        service = (record.services or "").strip()
        if service:
            counts[service] += 1
    # Counter preserves insertion order and sorted() is stable
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return [ServiceCount(service=s, count=c) for s, c in ranked[:limit]]


# ---------------------------------------------------------------------------
# Ratings over groups
# ---------------------------------------------------------------------------


def time_series(records: Iterable[SurveyRecord]) -> List[TimeSeriesPoint]:
    """Per calendar date: response count and mean CC/SQD ratings, date ascending."""
    points = [
        TimeSeriesPoint(
            date=date,
            response_count=len(group),
            mean_cc_rating=_mean(cc_rating(r) for r in group),
            mean_sqd_rating=_mean(sqd_rating(r) for r in group),
        )
        for date, group in group_by(records, lambda r: r.date).items()
    ]
    return sorted(points, key=lambda p: p.date)


def _satisfaction(group: Sequence[SurveyRecord]) -> DemographicSatisfaction:
    return DemographicSatisfaction(
        avg_cc=_mean(cc_rating(r) for r in group),
        avg_sqd=_mean(sqd_rating(r) for r in group),
        count=len(group),
    )


def satisfaction_by_demographic(
    records: Sequence[SurveyRecord],
) -> Dict[str, Dict[str, DemographicSatisfaction]]:
    """``{field: {value: {avg_cc, avg_sqd, count}}}`` for client type, sex, age group."""
    return {
        name: {
            value: _satisfaction(group)
            for value, group in group_by(records, key_for(name)).items()
        }
        for name in DEMOGRAPHIC_FIELDS
    }


def office_performance(records: Sequence[SurveyRecord]) -> List[OfficePerformance]:
    """Responses and mean ratings per office, busiest first."""
    rows = []
    for office, group in group_by(records, key_for("office")).items():
        sat = _satisfaction(group)
        rows.append(
            OfficePerformance(office=office, count=sat.count, avg_cc=sat.avg_cc, avg_sqd=sat.avg_sqd)
        )
    return sorted(rows, key=lambda row: -row.count)


# ---------------------------------------------------------------------------
# Group metrics
# ---------------------------------------------------------------------------


def analyze_group(label: str, records: Sequence[SurveyRecord]) -> GroupMetrics:
    """Build every panel metric for one group of *records*."""
    return GroupMetrics(
        label=label,
        total_responses=len(records),
        client_type_distribution=distribution(records, key_for("client_type")),
        sex_distribution=distribution(records, key_for("sex")),
        age_group_distribution=distribution(records, key_for("age_group")),
        office_distribution=distribution(records, key_for("office")),
        cc_distributions=cc_distributions(records),
        sqd_distribution=sqd_distribution(records),
        sqd_averages=sqd_averages(records),
        top_services=top_services(records),
        time_series=time_series(records),
        satisfaction_by_demographic=satisfaction_by_demographic(records),
        office_performance=office_performance(records),
    )


def analyze_by(records: Sequence[SurveyRecord], field_name: str) -> List[GroupMetrics]:
    """Group *records* by *field_name* and analyze each group (first-seen order).

    Raises
    ------
    ValueError
        If *field_name* is not a groupable field.
    """
    groups = group_by(records, key_for(field_name))
    logger.debug("Analyzing %d records in %d %s groups", len(records), len(groups), field_name)
    return [analyze_group(label, group) for label, group in groups.items()]


def analyze_by_campus(records: Sequence[SurveyRecord]) -> List[GroupMetrics]:
    return analyze_by(records, "campus")


def analyze_by_office(records: Sequence[SurveyRecord]) -> List[GroupMetrics]:
    return analyze_by(records, "office")
