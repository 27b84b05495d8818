"""Tables of the printable tabular report.

Percentages are pre-formatted strings (one decimal, ratings two decimals).
Charter percentages reuse the scoring rules in
:mod:`charter_survey.analysis.charter`; mean ratings use the SQD ordinal map.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from charter_survey.analysis.charter import (
    cc1_awareness_score,
    cc2_visibility_score,
    cc3_helpfulness_score,
)
from charter_survey.analysis.grouping import fmt, format_percent, group_by, key_for
from charter_survey.analysis.quality import mean_rating, rated_code
from charter_survey.records import CLIENT_TYPES, SQD_DIMENSIONS, SurveyRecord
from charter_survey.reporting import config
from charter_survey.reporting.models import (
    CampusPerformanceRow,
    ClientTypeRow,
    ConsolidatedSQDRow,
    DemographicRow,
    ExternalServicesRow,
    ServiceUtilizationRow,
)

# SQD0 is the overall satisfaction question; the client-type average covers SQD1–SQD8.
_SQD1_TO_8 = SQD_DIMENSIONS[1:]

_CONSOLIDATED_DESCRIPTIONS: Dict[str, str] = {
    "sqd0": "Overall Satisfaction",
    "sqd1": "Responsiveness (Reasonable Time)",
    "sqd2": "Reliability (Followed Requirements)",
    "sqd3": "Access & Facilities (Easy Steps)",
    "sqd4": "Communication (Easy Information)",
    "sqd5": "Costs (Reasonable Fees)",
    "sqd6": "Integrity (Fairness/Walang Palakasan)",
    "sqd7": "Assurance (Courtesy/Helpfulness)",
    "sqd8": "Outcome (Got What I Needed)",
}


def consolidated_sqd_table(records: Sequence[SurveyRecord]) -> List[ConsolidatedSQDRow]:
    """CC awareness row followed by SA/A counts and % positive per dimension."""
    aware = sum(1 for r in records if (r.cc1 or "").strip() in {"1", "2", "3"})
    rows = [
        ConsolidatedSQDRow(
            dimension="CC Awareness",
            description="Citizen's Charter Awareness",
            strongly_agree=aware,
            agree=0,
            total_positive=aware,
            positive_percentage=fmt(cc1_awareness_score(records), 1),
        )
    ]
    for dim in SQD_DIMENSIONS:
        codes = [c for c in (rated_code(r.sqd_value(dim)) for r in records) if c]
        sa = codes.count("SA")
        a = codes.count("A")
        rows.append(
            ConsolidatedSQDRow(
                dimension=dim.code,
                description=_CONSOLIDATED_DESCRIPTIONS[dim.value],
                strongly_agree=sa,
                agree=a,
                total_positive=sa + a,
                positive_percentage=format_percent(sa + a, len(codes), 1),
            )
        )
    return rows


def external_services_table(
    records: Sequence[SurveyRecord],
    transactions: Optional[Mapping[str, int]] = None,
) -> List[ExternalServicesRow]:
    """Response rate per office against reported transaction counts.

    Offices missing from *transactions* use their response count.
    """
    rows = []
    for office, group in group_by(records, key_for("office")).items():
        total_transactions = (transactions or {}).get(office, len(group))
        rows.append(
            ExternalServicesRow(
                office=office,
                total_transactions=total_transactions,
                total_responses=len(group),
                response_rate=format_percent(len(group), total_transactions, 1),
                mean_rating=fmt(mean_rating(group)),
            )
        )
    return sorted(rows, key=lambda row: -row.total_responses)


def client_type_breakdown(records: Sequence[SurveyRecord]) -> List[ClientTypeRow]:
    """Clients and mean SQD1–SQD8 rating per client type, with a TOTAL row.

    A record ticking several client types counts toward each of them.
    """
    rows = []
    for tag in ("C", "B", "G"):
        subset = [r for r in records if tag in r.client_type]
        rows.append(
            ClientTypeRow(
                customer_type=CLIENT_TYPES[tag],
                overall_clients=len(subset),
                avg_sqd=fmt(mean_rating(subset, _SQD1_TO_8)),
            )
        )
    rows.append(
        ClientTypeRow(
            customer_type="TOTAL",
            overall_clients=sum(row.overall_clients for row in rows),
            avg_sqd=fmt(mean_rating(records, _SQD1_TO_8)),
        )
    )
    return rows


def _demographic_rows(
    records: Sequence[SurveyRecord], field_name: str, category: str
) -> List[DemographicRow]:
    rows = []
    for value, group in group_by(records, key_for(field_name)).items():
        rows.append(
            DemographicRow(
                category=category,
                value=value,
                count=len(group),
                percentage=format_percent(len(group), len(records), 1),
                avg_satisfaction=fmt(mean_rating(group)),
            )
        )
    return rows


def demographic_distribution(records: Sequence[SurveyRecord]) -> Dict[str, List[DemographicRow]]:
    return {
        "age_group": _demographic_rows(records, "age_group", "Age Group"),
        "sex": _demographic_rows(records, "sex", "Sex"),
    }


def service_utilization(
    records: Sequence[SurveyRecord], limit: int = config.TOP_UTILIZATION
) -> List[ServiceUtilizationRow]:
    """Most availed services with their share and mean satisfaction."""
    rows = [
        ServiceUtilizationRow(
            service=service,
            frequency=len(group),
            percentage=format_percent(len(group), len(records), 1),
            avg_satisfaction=fmt(mean_rating(group)),
        )
        for service, group in group_by(records, lambda r: r.services).items()
    ]
    return sorted(rows, key=lambda row: -row.frequency)[:limit]


def campus_comparison(records: Sequence[SurveyRecord]) -> List[CampusPerformanceRow]:
    rows = [
        CampusPerformanceRow(
            campus=campus,
            total_responses=len(group),
            awareness_rate=fmt(cc1_awareness_score(group), 1),
            visibility_score=fmt(cc2_visibility_score(group), 1),
            helpfulness_rate=fmt(cc3_helpfulness_score(group), 1),
            avg_sqd_rating=fmt(mean_rating(group)),
        )
        for campus, group in group_by(records, key_for("campus")).items()
    ]
    return sorted(rows, key=lambda row: -row.total_responses)
