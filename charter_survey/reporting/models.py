"""Data structures for reporting pipeline.

Every structure is display-ready: chart and table collaborators receive
these (or their ``to_dict`` form), never raw record lists.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


class _AsDict:
    """Mixin giving dataclasses a plain ``dict`` form for templates/JSON."""

    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        return asdict(self)  # type: ignore[call-overload]


# ---------------------------------------------------------------------------
# Aggregation engine
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ServiceCount(_AsDict):
    service: str
    count: int


@dataclass(slots=True)
class TimeSeriesPoint(_AsDict):
    """Responses and mean ratings for one calendar date."""

    date: str
    response_count: int
    mean_cc_rating: float
    mean_sqd_rating: float


@dataclass(slots=True)
class DemographicSatisfaction(_AsDict):
    avg_cc: float
    avg_sqd: float
    count: int


@dataclass(slots=True)
class OfficePerformance(_AsDict):
    office: str
    count: int
    avg_cc: float
    avg_sqd: float


@dataclass(slots=True)
class GroupMetrics(_AsDict):
    """Everything a campus/office/demographic report panel shows for one group."""

    label: str
    total_responses: int
    client_type_distribution: Dict[str, int] = field(default_factory=dict)
    sex_distribution: Dict[str, int] = field(default_factory=dict)
    age_group_distribution: Dict[str, int] = field(default_factory=dict)
    office_distribution: Dict[str, int] = field(default_factory=dict)
    # "cc1"/"cc2"/"cc3" -> answer label -> count, always with an "N/A" bucket
    cc_distributions: Dict[str, Dict[str, int]] = field(default_factory=dict)
    # "sqd0".."sqd8" -> code -> count
    sqd_distribution: Dict[str, Dict[str, int]] = field(default_factory=dict)
    sqd_averages: Dict[str, float] = field(default_factory=dict)
    top_services: List[ServiceCount] = field(default_factory=list)
    time_series: List[TimeSeriesPoint] = field(default_factory=list)
    # "client_type"/"sex"/"age_group" -> value -> satisfaction
    satisfaction_by_demographic: Dict[str, Dict[str, DemographicSatisfaction]] = field(
        default_factory=dict
    )
    office_performance: List[OfficePerformance] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Summary statistics
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class DimensionScore(_AsDict):
    code: str
    dimension: str
    score: float
    interpretation: str


@dataclass(slots=True)
class ProblemArea(_AsDict):
    area: str
    score: float
    kind: str  # "CC" or "SQD"


@dataclass(slots=True)
class SummaryStatistics(_AsDict):
    total_responses: int
    campus_count: int
    office_count: int
    overall_awareness: float
    awareness_interpretation: str
    overall_visibility: float
    visibility_interpretation: str
    overall_helpfulness: float
    helpfulness_interpretation: str
    overall_sqd: float
    overall_sqd_interpretation: str
    sqd_by_dimension: List[DimensionScore] = field(default_factory=list)
    problem_areas: List[ProblemArea] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return self.total_responses > 0


@dataclass(slots=True)
class OfficeMetrics(_AsDict):
    office: str
    total_responses: int
    cc1_score: float
    cc1_interpretation: str
    cc2_score: float
    cc2_interpretation: str
    cc3_score: float
    cc3_interpretation: str
    sqd_scores: Dict[str, float]
    sqd_interpretations: Dict[str, str]
    overall_sqd_score: float
    overall_sqd_interpretation: str


@dataclass(slots=True)
class DemographicBreakdown(_AsDict):
    category: str
    value: str
    count: int
    percentage: float
    overall_sqd_score: float
    interpretation: str


# ---------------------------------------------------------------------------
# Tabular report
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ConsolidatedSQDRow(_AsDict):
    dimension: str
    description: str
    strongly_agree: int
    agree: int
    total_positive: int
    positive_percentage: str


@dataclass(slots=True)
class ExternalServicesRow(_AsDict):
    office: str
    total_transactions: int
    total_responses: int
    response_rate: str
    mean_rating: str


@dataclass(slots=True)
class ClientTypeRow(_AsDict):
    customer_type: str
    overall_clients: int
    avg_sqd: str


@dataclass(slots=True)
class DemographicRow(_AsDict):
    category: str
    value: str
    count: int
    percentage: str
    avg_satisfaction: str


@dataclass(slots=True)
class ServiceUtilizationRow(_AsDict):
    service: str
    frequency: int
    percentage: str
    avg_satisfaction: str


@dataclass(slots=True)
class CampusPerformanceRow(_AsDict):
    campus: str
    total_responses: int
    awareness_rate: str
    visibility_score: str
    helpfulness_rate: str
    avg_sqd_rating: str
