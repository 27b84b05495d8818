"""ARTA interpretation bands for 0–100 scores."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

__all__ = [
    "InterpretationLevel",
    "InterpretationResult",
    "NO_DATA",
    "interpretation",
    "interpretation_or_no_data",
    "interpretation_with_description",
]

# Display marker for empty populations; ``interpretation`` never returns it.
NO_DATA = "N/A"


class InterpretationLevel(str, Enum):
    VERY_HIGH = "Very High"
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"
    VERY_LOW = "Very Low"


# Lower bound (inclusive) of each band, highest first.
_BANDS = (
    (90.0, InterpretationLevel.VERY_HIGH),
    (80.0, InterpretationLevel.HIGH),
    (70.0, InterpretationLevel.MODERATE),
    (60.0, InterpretationLevel.LOW),
)


def interpretation(score: float) -> InterpretationLevel:
    """Map *score* to its band; anything below 60 is Very Low."""
    for lower, level in _BANDS:
        if score >= lower:
            return level
    return InterpretationLevel.VERY_LOW


def interpretation_or_no_data(score: float, population: int) -> str:
    """Return the band label, or ``"N/A"`` when *population* is empty."""
    if population <= 0:
        return NO_DATA
    return interpretation(score).value


_DESCRIPTIONS: Dict[str, Dict[InterpretationLevel, str]] = {
    "awareness": {
        InterpretationLevel.VERY_HIGH: "Excellent dissemination of the Citizen's Charter",
        InterpretationLevel.HIGH: "Good awareness, minor improvements possible",
        InterpretationLevel.MODERATE: "Adequate awareness, consider enhanced outreach",
        InterpretationLevel.LOW: "Low awareness, needs immediate attention",
        InterpretationLevel.VERY_LOW: "Very low awareness, urgent action required",
    },
    "visibility": {
        InterpretationLevel.VERY_HIGH: "Charter is prominently displayed and easy to find",
        InterpretationLevel.HIGH: "Good visibility with some improvements possible",
        InterpretationLevel.MODERATE: "Moderate visibility, consider better placement",
        InterpretationLevel.LOW: "Poor visibility, needs better display solutions",
        InterpretationLevel.VERY_LOW: "Very poor visibility, urgent signage improvements needed",
    },
    "helpfulness": {
        InterpretationLevel.VERY_HIGH: "Charter is extremely helpful to clients",
        InterpretationLevel.HIGH: "Charter is helpful with minor improvements possible",
        InterpretationLevel.MODERATE: "Moderate helpfulness, consider simplification",
        InterpretationLevel.LOW: "Limited helpfulness, needs content review",
        InterpretationLevel.VERY_LOW: "Not helpful, urgent content revision needed",
    },
    "service_quality": {
        InterpretationLevel.VERY_HIGH: "Excellent service quality",
        InterpretationLevel.HIGH: "Good service quality",
        InterpretationLevel.MODERATE: "Adequate service quality",
        InterpretationLevel.LOW: "Below standard service quality",
        InterpretationLevel.VERY_LOW: "Poor service quality, urgent improvement needed",
    },
}


@dataclass(frozen=True)
class InterpretationResult:
    score: float
    level: InterpretationLevel
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "level": self.level.value, "description": self.description}


def interpretation_with_description(score: float, metric: str) -> InterpretationResult:
    """Interpret *score* for *metric* (awareness, visibility, helpfulness, service_quality).

    Raises
    ------
    ValueError
        If *metric* is not one of the known metric types.
    """

    try:
        descriptions = _DESCRIPTIONS[metric]
    except KeyError as exc:
        raise ValueError(f"Unknown metric type: {metric}") from exc
    level = interpretation(score)
    return InterpretationResult(score=score, level=level, description=descriptions[level])
