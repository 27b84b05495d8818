"""Context dataclass for rendering survey reports.

This module defines `ReportContext`, a typed container that holds all
values expected by the master Jinja2 template located in
`charter_survey/reporting/templates/report.md.j2`.

Context building runs every analytics module over one record snapshot;
the template only formats what it receives.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime as _dt
from datetime import timezone as _tz
from typing import Any, Dict, List, Optional, Sequence

from charter_survey.analysis.dissatisfaction import (
    CharterIssueRow,
    CommentAnalysis,
    DissatisfactionSummary,
    OfficeDissatisfactionRow,
    SQDDissatisfactionRow,
    TrendRow,
    charter_issues,
    comments_list,
    dissatisfaction_summary,
    dissatisfaction_trends,
    office_dissatisfaction_table,
    sqd_dissatisfaction_table,
)
from charter_survey.records import SurveyRecord
from charter_survey.reporting import config
from charter_survey.reporting.aggregator import cc_distributions, top_services
from charter_survey.reporting.models import (
    CampusPerformanceRow,
    ConsolidatedSQDRow,
    OfficeMetrics,
    ServiceCount,
    SummaryStatistics,
)
from charter_survey.reporting.summary import (
    awareness_rate,
    cc1_insight,
    cc2_insight,
    cc3_insight,
    helpfulness_rate,
    office_metrics,
    summary_statistics,
    visibility_rate,
)
from charter_survey.reporting.tabular import campus_comparison, consolidated_sqd_table

__all__ = [
    "CharterSection",
    "ReportContext",
    "build_report_context",
]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CharterSection:
    """CC answer distributions with their rates and narrative insights."""

    distributions: Dict[str, Dict[str, int]]
    awareness_rate: str
    visibility_rate: str
    helpfulness_rate: str
    insights: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ReportContext:
    """Container with all fields used by the Markdown report template."""

    # Header & meta
    title: str
    date: str  # ISO-8601 date string (UTC)
    filter_label: Optional[str]

    # Scores
    summary: SummaryStatistics
    charter: CharterSection
    consolidated: List[ConsolidatedSQDRow] = field(default_factory=list)
    offices: List[OfficeMetrics] = field(default_factory=list)
    campuses: List[CampusPerformanceRow] = field(default_factory=list)
    top_services: List[ServiceCount] = field(default_factory=list)

    # Dissatisfaction
    dissatisfaction: Optional[DissatisfactionSummary] = None
    sqd_dissatisfaction: List[SQDDissatisfactionRow] = field(default_factory=list)
    office_dissatisfaction: List[OfficeDissatisfactionRow] = field(default_factory=list)
    charter_issues: List[CharterIssueRow] = field(default_factory=list)
    trends: List[TrendRow] = field(default_factory=list)
    comments: List[CommentAnalysis] = field(default_factory=list)
    comments_total: int = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def has_data(self) -> bool:
        return self.summary.total_responses > 0

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        data = asdict(self)
        data["has_data"] = self.has_data
        return data

    # Alias for convenience (e.g. template kwargs)
    __call__ = to_dict


def build_report_context(
    records: Sequence[SurveyRecord],
    *,
    title: str = "Client Satisfaction Measurement Report",
    filter_label: Optional[str] = None,
    max_comments: int = config.MAX_COMMENTS,
) -> ReportContext:
    """Run every analytics table over *records* and package the results.

    The function is *pure* – it does not mutate *records*.
    """

    dists = cc_distributions(records)
    charter = CharterSection(
        distributions=dists,
        awareness_rate=awareness_rate(dists["cc1"]),
        visibility_rate=visibility_rate(dists["cc2"]),
        helpfulness_rate=helpfulness_rate(dists["cc3"]),
        insights={
            "cc1": cc1_insight(dists["cc1"]),
            "cc2": cc2_insight(dists["cc2"]),
            "cc3": cc3_insight(dists["cc3"]),
        },
    )

    comments = comments_list(records)
    if len(comments) > max_comments:
        logger.debug("Capping comments at %d of %d", max_comments, len(comments))

    return ReportContext(
        title=title,
        date=_dt.now(tz=_tz.utc).strftime("%Y-%m-%d"),
        filter_label=filter_label,
        summary=summary_statistics(records),
        charter=charter,
        consolidated=consolidated_sqd_table(records),
        offices=office_metrics(records),
        campuses=campus_comparison(records),
        top_services=top_services(records),
        dissatisfaction=dissatisfaction_summary(records),
        sqd_dissatisfaction=sqd_dissatisfaction_table(records),
        office_dissatisfaction=office_dissatisfaction_table(records),
        charter_issues=charter_issues(records),
        trends=dissatisfaction_trends(records),
        comments=comments[:max_comments],
        comments_total=len(comments),
    )
