"""Dissatisfaction analysis over SQD and charter answers.

A record is *dissatisfied* when any of its nine SQD answers is Strongly
Disagree or Disagree. The tables built here isolate and rank that signal:
per dimension, per office, per charter issue, per demographic value, per date,
plus the free-text comments sorted dissatisfied-first.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from charter_survey.analysis.charter import (
    cc1_awareness_score,
    cc2_visibility_score,
    cc3_helpfulness_score,
)
from charter_survey.analysis.grouping import (
    DEMOGRAPHIC_FIELDS,
    bucket,
    format_percent,
    group_by,
    key_for,
    title_for,
)
from charter_survey.analysis.interpretation import interpretation
from charter_survey.analysis.quality import (
    SQD_RATING,
    overall_sqd_score,
    rated_code,
    sqd_favorable_score,
)
from charter_survey.records import SQD_DIMENSIONS, SQDDimension, SurveyRecord
from charter_survey.reporting import config

logger = logging.getLogger(__name__)

__all__ = [
    "is_negative",
    "is_neutral",
    "has_dissatisfaction",
    "problematic_dimensions",
    "dissatisfaction_summary",
    "sqd_dissatisfaction_table",
    "office_dissatisfaction_table",
    "charter_issues",
    "comments_list",
    "demographic_dissatisfaction",
    "dissatisfaction_trends",
]

NEGATIVE_CODES = frozenset({"SD", "D"})
NEUTRAL_CODE = "ND"
NOT_AVAILABLE = "N/A"


# ---------------------------------------------------------------------------
# Result rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DissatisfactionSummary:
    total_responses: int
    total_dissatisfied: int
    dissatisfaction_rate: str
    most_problematic_dimension: str
    office_with_most_issues: str
    total_negative_ratings: int
    total_neutral_ratings: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SQDDissatisfactionRow:
    dimension: str
    description: str
    strongly_disagree: int
    disagree: int
    neither: int
    agree: int
    strongly_agree: int
    valid_responses: int
    total_negative: int
    negative_percentage: str
    total_neutral_negative: int
    neutral_negative_percentage: str
    favorable_score: float
    interpretation: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OfficeDissatisfactionRow:
    office: str
    campus: str
    total_responses: int
    dissatisfied_responses: int
    dissatisfaction_rate: str
    overall_sqd_score: float
    interpretation: str
    avg_negative_rating: str
    top_issues: List[str] = field(default_factory=list)
    comments_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CharterIssueRow:
    category: str
    issue: str
    count: int
    percentage: str
    score: float
    affected_offices: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CommentAnalysis:
    timestamp: str
    campus: str
    office: str
    client_type: str
    document_number: str
    comment: str
    has_dissatisfaction: bool
    problematic_dimensions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DemographicDissatisfaction:
    category: str
    value: str
    total_responses: int
    dissatisfied_count: int
    dissatisfaction_rate: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TrendRow:
    date: str
    total_responses: int
    dissatisfied_responses: int
    dissatisfaction_rate: str
    mean_sqd_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Record-level predicates
# ---------------------------------------------------------------------------


def is_negative(value: str | None) -> bool:
    """True for Strongly Disagree / Disagree."""
    return (value or "").strip() in NEGATIVE_CODES


def is_neutral(value: str | None) -> bool:
    return (value or "").strip() == NEUTRAL_CODE


def has_dissatisfaction(record: SurveyRecord) -> bool:
    """True iff any SQD answer of *record* is negative."""
    return any(is_negative(value) for _, value in record.sqd_responses())


def problematic_dimensions(record: SurveyRecord) -> List[str]:
    """Codes (``"SQD3"``) of the dimensions *record* answered negatively."""
    return [dim.code for dim, value in record.sqd_responses() if is_negative(value)]


def _negative_counts(records: Sequence[SurveyRecord]) -> Dict[SQDDimension, int]:
    counts = {dim: 0 for dim in SQD_DIMENSIONS}
    for record in records:
        for dim, value in record.sqd_responses():
            if is_negative(value):
                counts[dim] += 1
    return counts


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def dissatisfaction_summary(records: Sequence[SurveyRecord]) -> DissatisfactionSummary:
    """Headline numbers of the dissatisfaction report."""
    if not records:
        return DissatisfactionSummary(
            total_responses=0,
            total_dissatisfied=0,
            dissatisfaction_rate="0.00",
            most_problematic_dimension=NOT_AVAILABLE,
            office_with_most_issues=NOT_AVAILABLE,
            total_negative_ratings=0,
            total_neutral_ratings=0,
        )

    dissatisfied = [r for r in records if has_dissatisfaction(r)]
    negative_counts = _negative_counts(records)
    total_neutral = sum(
        1 for r in records for _, value in r.sqd_responses() if is_neutral(value)
    )

    # First dimension wins ties; all-zero counts report SQD0 with 0 issues.
    worst_dim, worst_count = SQD_DIMENSIONS[0], 0
    for dim, count in negative_counts.items():
        if count > worst_count:
            worst_dim, worst_count = dim, count

    office_counts: Dict[str, int] = {}
    for record in dissatisfied:
        office = bucket(record.office)
        office_counts[office] = office_counts.get(office, 0) + 1
    worst_office = NOT_AVAILABLE
    if office_counts:
        office, count = max(office_counts.items(), key=lambda kv: kv[1])
        worst_office = f"{office} ({count} cases)"

    return DissatisfactionSummary(
        total_responses=len(records),
        total_dissatisfied=len(dissatisfied),
        dissatisfaction_rate=format_percent(len(dissatisfied), len(records)),
        most_problematic_dimension=f"{worst_dim.code} ({worst_count} issues)",
        office_with_most_issues=worst_office,
        total_negative_ratings=sum(negative_counts.values()),
        total_neutral_ratings=total_neutral,
    )


def sqd_dissatisfaction_table(records: Sequence[SurveyRecord]) -> List[SQDDissatisfactionRow]:
    """One row per dimension, worst favorable score first."""
    rows: List[SQDDissatisfactionRow] = []
    for dim in SQD_DIMENSIONS:
        tally = {code: 0 for code in ("SD", "D", "ND", "A", "SA")}
        for record in records:
            code = rated_code(record.sqd_value(dim))
            if code:
                tally[code] += 1
        valid = sum(tally.values())
        negative = tally["SD"] + tally["D"]
        neutral_negative = negative + tally["ND"]
        score = sqd_favorable_score(records, dim)
        rows.append(
            SQDDissatisfactionRow(
                dimension=dim.code,
                description=dim.question,
                strongly_disagree=tally["SD"],
                disagree=tally["D"],
                neither=tally["ND"],
                agree=tally["A"],
                strongly_agree=tally["SA"],
                valid_responses=valid,
                total_negative=negative,
                negative_percentage=format_percent(negative, valid),
                total_neutral_negative=neutral_negative,
                neutral_negative_percentage=format_percent(neutral_negative, valid),
                favorable_score=score,
                interpretation=interpretation(score).value,
            )
        )
    # sorted() is stable: equal scores keep SQD0..SQD8 order
    return sorted(rows, key=lambda row: row.favorable_score)


def _avg_negative_rating(records: Sequence[SurveyRecord]) -> str:
    ratings = [
        SQD_RATING[value.strip()]
        for record in records
        for _, value in record.sqd_responses()
        if is_negative(value)
    ]
    if not ratings:
        return NOT_AVAILABLE
    return f"{sum(ratings) / len(ratings):.2f}"


def office_dissatisfaction_table(
    records: Sequence[SurveyRecord], *, top_issues: int = config.TOP_ISSUES
) -> List[OfficeDissatisfactionRow]:
    """Per-office dissatisfaction, worst overall SQD score first."""
    rows: List[OfficeDissatisfactionRow] = []
    for office, group in group_by(records, key_for("office")).items():
        dissatisfied = [r for r in group if has_dissatisfaction(r)]
        ranked = sorted(
            ((dim, count) for dim, count in _negative_counts(group).items() if count > 0),
            key=lambda item: -item[1],
        )
        score = overall_sqd_score(group)
        rows.append(
            OfficeDissatisfactionRow(
                office=office,
                campus=(group[0].campus or "").strip(),
                total_responses=len(group),
                dissatisfied_responses=len(dissatisfied),
                dissatisfaction_rate=format_percent(len(dissatisfied), len(group)),
                overall_sqd_score=score,
                interpretation=interpretation(score).value,
                avg_negative_rating=_avg_negative_rating(dissatisfied),
                top_issues=[dim.code for dim, _ in ranked[:top_issues]],
                comments_count=sum(1 for r in group if (r.comments or "").strip()),
            )
        )
    return sorted(rows, key=lambda row: row.overall_sqd_score)


# (category, issue text, field, matching codes, score function)
_CHARTER_ISSUES: Sequence[tuple] = (
    ("CC2 - Visibility", "Charter is difficult to see", "cc2", {"3"}, cc2_visibility_score),
    ("CC2 - Visibility", "Charter is not visible at all", "cc2", {"4"}, cc2_visibility_score),
    ("CC3 - Helpfulness", "Charter did not help the client", "cc3", {"3"}, cc3_helpfulness_score),
    (
        "CC1 - Awareness",
        "Client does not know about Citizen's Charter",
        "cc1",
        {"4", "5"},
        cc1_awareness_score,
    ),
)


def charter_issues(
    records: Sequence[SurveyRecord], *, max_offices: int = config.MAX_AFFECTED_OFFICES
) -> List[CharterIssueRow]:
    """Flag charter answers that signal a problem, worst charter score first."""
    rows: List[CharterIssueRow] = []
    for category, issue, field_name, codes, score_fn in _CHARTER_ISSUES:
        flagged = [r for r in records if (getattr(r, field_name) or "").strip() in codes]
        if not flagged:
            continue
        offices: List[str] = []
        for record in flagged:
            office = bucket(record.office)
            if office not in offices:
                offices.append(office)
        rows.append(
            CharterIssueRow(
                category=category,
                issue=issue,
                count=len(flagged),
                percentage=format_percent(len(flagged), len(records)),
                score=score_fn(records),
                affected_offices=offices[:max_offices],
            )
        )
    return sorted(rows, key=lambda row: row.score)


def comments_list(records: Sequence[SurveyRecord]) -> List[CommentAnalysis]:
    """Records with comments, dissatisfied first, input order kept otherwise."""
    analysed = [
        CommentAnalysis(
            timestamp=r.timestamp,
            campus=r.campus,
            office=r.office,
            client_type=r.client_type_label,
            document_number=r.document_number,
            comment=r.comments.strip(),
            has_dissatisfaction=has_dissatisfaction(r),
            problematic_dimensions=problematic_dimensions(r),
        )
        for r in records
        if (r.comments or "").strip()
    ]
    dissatisfied = [c for c in analysed if c.has_dissatisfaction]
    satisfied = [c for c in analysed if not c.has_dissatisfaction]
    return dissatisfied + satisfied


def _dissatisfaction_by(
    records: Sequence[SurveyRecord], field_name: str
) -> List[DemographicDissatisfaction]:
    rows = []
    for value, group in group_by(records, key_for(field_name)).items():
        dissatisfied = sum(1 for r in group if has_dissatisfaction(r))
        rows.append(
            DemographicDissatisfaction(
                category=title_for(field_name),
                value=value,
                total_responses=len(group),
                dissatisfied_count=dissatisfied,
                dissatisfaction_rate=format_percent(dissatisfied, len(group)),
            )
        )
    return sorted(rows, key=lambda row: -(row.dissatisfied_count / row.total_responses))


def demographic_dissatisfaction(
    records: Sequence[SurveyRecord],
) -> Dict[str, List[DemographicDissatisfaction]]:
    """Dissatisfaction rate per age group, sex and client type (highest first)."""
    return {name: _dissatisfaction_by(records, name) for name in DEMOGRAPHIC_FIELDS}


def dissatisfaction_trends(
    records: Sequence[SurveyRecord], date_of: Callable[[SurveyRecord], str] | None = None
) -> List[TrendRow]:
    """Per calendar date: responses, dissatisfied responses, rate and SQD score."""
    date_key = date_of or (lambda r: r.date)
    rows = []
    for date, group in group_by(records, date_key).items():
        dissatisfied = sum(1 for r in group if has_dissatisfaction(r))
        rows.append(
            TrendRow(
                date=date,
                total_responses=len(group),
                dissatisfied_responses=dissatisfied,
                dissatisfaction_rate=format_percent(dissatisfied, len(group)),
                mean_sqd_score=overall_sqd_score(group),
            )
        )
    logger.debug("Built dissatisfaction trend with %d date buckets", len(rows))
    return sorted(rows, key=lambda row: row.date)
