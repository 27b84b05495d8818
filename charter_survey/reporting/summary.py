"""Report-level summary statistics and charter insights."""

from __future__ import annotations

from typing import Dict, List, Sequence

from charter_survey.analysis.charter import (
    cc1_awareness_score,
    cc2_visibility_score,
    cc3_helpfulness_score,
)
from charter_survey.analysis.grouping import group_by, key_for, percent, title_for
from charter_survey.analysis.interpretation import (
    NO_DATA,
    interpretation,
    interpretation_or_no_data,
)
from charter_survey.analysis.quality import overall_sqd_score, sqd_scores
from charter_survey.records import SurveyRecord
from charter_survey.reporting import config
from charter_survey.reporting.aggregator import NA_BUCKET
from charter_survey.reporting.models import (
    DemographicBreakdown,
    DimensionScore,
    OfficeMetrics,
    ProblemArea,
    SummaryStatistics,
)

NO_DATA_INSIGHT = "No data available for analysis."


def summary_statistics(records: Sequence[SurveyRecord]) -> SummaryStatistics:
    """Headline CC/SQD scores and the problem areas below the threshold."""
    if not records:
        return SummaryStatistics(
            total_responses=0,
            campus_count=0,
            office_count=0,
            overall_awareness=0.0,
            awareness_interpretation=NO_DATA,
            overall_visibility=0.0,
            visibility_interpretation=NO_DATA,
            overall_helpfulness=0.0,
            helpfulness_interpretation=NO_DATA,
            overall_sqd=0.0,
            overall_sqd_interpretation=NO_DATA,
        )

    awareness = cc1_awareness_score(records)
    visibility = cc2_visibility_score(records)
    helpfulness = cc3_helpfulness_score(records)
    overall = overall_sqd_score(records)

    by_dimension = [
        DimensionScore(
            code=dim.code,
            dimension=dim.label,
            score=score,
            interpretation=interpretation(score).value,
        )
        for dim, score in sqd_scores(records).items()
    ]

    threshold = config.PROBLEM_THRESHOLD
    problems: List[ProblemArea] = []
    for area, score in (
        ("CC1 - Awareness", awareness),
        ("CC2 - Visibility", visibility),
        ("CC3 - Helpfulness", helpfulness),
    ):
        if score < threshold:
            problems.append(ProblemArea(area=area, score=score, kind="CC"))
    for row in by_dimension:
        if row.score < threshold:
            problems.append(
                ProblemArea(area=f"{row.code} - {row.dimension}", score=row.score, kind="SQD")
            )
    problems.sort(key=lambda p: p.score)

    return SummaryStatistics(
        total_responses=len(records),
        campus_count=len({r.campus.strip() for r in records if (r.campus or "").strip()}),
        office_count=len({r.office.strip() for r in records if (r.office or "").strip()}),
        overall_awareness=awareness,
        awareness_interpretation=interpretation(awareness).value,
        overall_visibility=visibility,
        visibility_interpretation=interpretation(visibility).value,
        overall_helpfulness=helpfulness,
        helpfulness_interpretation=interpretation(helpfulness).value,
        overall_sqd=overall,
        overall_sqd_interpretation=interpretation(overall).value,
        sqd_by_dimension=by_dimension,
        problem_areas=problems,
    )


def office_metrics(records: Sequence[SurveyRecord]) -> List[OfficeMetrics]:
    """ARTA scores per office, most responses first."""
    rows = []
    for office, group in group_by(records, key_for("office")).items():
        cc1 = cc1_awareness_score(group)
        cc2 = cc2_visibility_score(group)
        cc3 = cc3_helpfulness_score(group)
        scores = {dim.value: score for dim, score in sqd_scores(group).items()}
        overall = overall_sqd_score(group)
        rows.append(
            OfficeMetrics(
                office=office,
                total_responses=len(group),
                cc1_score=cc1,
                cc1_interpretation=interpretation(cc1).value,
                cc2_score=cc2,
                cc2_interpretation=interpretation(cc2).value,
                cc3_score=cc3,
                cc3_interpretation=interpretation(cc3).value,
                sqd_scores=scores,
                sqd_interpretations={k: interpretation(v).value for k, v in scores.items()},
                overall_sqd_score=overall,
                overall_sqd_interpretation=interpretation(overall).value,
            )
        )
    return sorted(rows, key=lambda row: -row.total_responses)


def demographic_breakdown(
    records: Sequence[SurveyRecord], field_name: str
) -> List[DemographicBreakdown]:
    """Count, share and overall SQD score per value of a demographic field."""
    total = len(records)
    rows = []
    for value, group in group_by(records, key_for(field_name)).items():
        score = overall_sqd_score(group)
        rows.append(
            DemographicBreakdown(
                category=title_for(field_name),
                value=value,
                count=len(group),
                percentage=percent(len(group), total),
                overall_sqd_score=score,
                interpretation=interpretation_or_no_data(score, len(group)),
            )
        )
    return sorted(rows, key=lambda row: -row.count)


# ---------------------------------------------------------------------------
# Charter distribution rates & insights
# ---------------------------------------------------------------------------


def _answered(dist: Dict[str, int]) -> int:
    return sum(dist.values()) - dist.get(NA_BUCKET, 0)


def distribution_rate(dist: Dict[str, int], positive: Sequence[str]) -> str:
    """Share of *positive* answers among the non-"N/A" answers, one decimal."""
    total = _answered(dist)
    if total == 0:
        return "0"
    return f"{percent(sum(dist.get(label, 0) for label in positive), total):.1f}"


def awareness_rate(cc1: Dict[str, int]) -> str:
    return distribution_rate(cc1, ("Knew and saw charter", "Knew but didn't see"))


def visibility_rate(cc2: Dict[str, int]) -> str:
    return distribution_rate(cc2, ("Easy to see", "Somewhat easy to see"))


def helpfulness_rate(cc3: Dict[str, int]) -> str:
    return distribution_rate(cc3, ("Helped very much", "Somewhat helped"))


def cc1_insight(cc1: Dict[str, int]) -> str:
    total = _answered(cc1)
    if total == 0:
        return NO_DATA_INSIGHT
    knew = cc1.get("Knew and saw charter", 0)
    learned = cc1.get("Learned from this visit", 0)
    knew_pct = f"{percent(knew, total):.0f}"
    learned_pct = f"{percent(learned, total):.0f}"
    if knew > total * 0.6:
        return (
            f"Strong charter awareness: {knew_pct}% of clients were already familiar "
            "with and saw the charter. This indicates effective pre-visit information "
            "dissemination."
        )
    if learned > total * 0.5:
        return (
            f"{learned_pct}% of clients learned about the Citizen's Charter during their "
            "visit, suggesting an opportunity to improve pre-visit awareness through "
            "marketing and orientation."
        )
    return (
        f"Mixed awareness levels detected. {knew_pct}% knew and saw the charter, while "
        f"{learned_pct}% learned about it on-site. Consider enhancing both pre-visit "
        "and on-site communication strategies."
    )


def cc2_insight(cc2: Dict[str, int]) -> str:
    total = _answered(cc2)
    if total == 0:
        return NO_DATA_INSIGHT
    easy = cc2.get("Easy to see", 0)
    visible = easy + cc2.get("Somewhat easy to see", 0)
    hidden = cc2.get("Difficult to see", 0) + cc2.get("Not visible at all", 0)
    easy_pct = f"{percent(easy, total):.0f}"
    if visible > total * 0.8:
        return (
            f"Excellent visibility: {easy_pct}% found the charter easy to see. The "
            "current placement and visibility strategy is working well."
        )
    if hidden > total * 0.3:
        return (
            f"Visibility concern: {percent(hidden, total):.0f}% of clients found the "
            "charter difficult to see or not visible. Immediate action needed to "
            "improve charter placement and signage."
        )
    return (
        f"Moderate visibility: {easy_pct}% found it easy to see. Consider enhancing "
        "charter visibility through better placement, larger displays, or additional "
        "signage."
    )


def cc3_insight(cc3: Dict[str, int]) -> str:
    total = _answered(cc3)
    if total == 0:
        return NO_DATA_INSIGHT
    very = cc3.get("Helped very much", 0)
    not_help = cc3.get("Did not help", 0)
    very_pct = f"{percent(very, total):.0f}"
    if very > total * 0.7:
        return (
            f"High effectiveness: {very_pct}% found the charter very helpful. The "
            "charter is successfully guiding clients through their transactions."
        )
    if not_help > total * 0.3:
        return (
            f"Limited effectiveness: {percent(not_help, total):.0f}% found the charter "
            "unhelpful. Review charter content, clarity, and relevance to ensure it "
            "meets client needs."
        )
    return (
        f"Moderate helpfulness: {very_pct}% found it very helpful. Consider improving "
        "charter content, format, or presentation to increase its practical value to "
        "clients."
    )
