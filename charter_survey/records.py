"""Canonical survey record shape and its field-level value domains.

A :class:`SurveyRecord` is one encoded ARTA client satisfaction
questionnaire. Records are immutable; edits made through the export preview
go through :func:`with_changes`, which keeps the ``id``.
"""
from __future__ import annotations

import dataclasses
import datetime
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

__all__ = [
    "SQDDimension",
    "SurveyRecord",
    "new_record",
    "with_changes",
    "normalize_client_type",
    "record_date",
]

# ---------------------------------------------------------------------------
# Option sets
# ---------------------------------------------------------------------------

CAMPUSES: Tuple[str, ...] = (
    "Sorsogon City Campus",
    "Bulan Campus",
    "Magallanes Campus",
    "Castilla Campus",
)

DEFAULT_OFFICES: Tuple[str, ...] = ("ICT", "HR", "Finance", "Operations", "Did not answer")

NO_ANSWER = "Did not answer"

CLIENT_TYPES: Dict[str, str] = {
    "C": "Citizen",
    "B": "Business",
    "G": "Government",
    NO_ANSWER: NO_ANSWER,
}

SEXES: Tuple[str, ...] = ("Male", "Female", NO_ANSWER)

AGE_GROUPS: Tuple[str, ...] = ("19-B", "20-34", "35-49", "50-64", "65-UP", NO_ANSWER)

CC_CODES: Tuple[str, ...] = ("1", "2", "3", "4", "5", "NA")

SQD_CODES: Tuple[str, ...] = ("SD", "D", "ND", "A", "SA", "NA")

# Answer labels per charter question. Codes missing here land in "N/A".
CC1_LABELS: Dict[str, str] = {
    "1": "Knew and saw charter",
    "2": "Knew but didn't see",
    "3": "Learned from this visit",
}
CC2_LABELS: Dict[str, str] = {
    "1": "Easy to see",
    "2": "Somewhat easy to see",
    "3": "Difficult to see",
    "4": "Not visible at all",
}
CC3_LABELS: Dict[str, str] = {
    "1": "Helped very much",
    "2": "Somewhat helped",
    "3": "Did not help",
}

UNKNOWN = "Unknown"


class SQDDimension(str, Enum):
    """The nine service quality dimensions, in questionnaire order."""

    SQD0 = "sqd0"
    SQD1 = "sqd1"
    SQD2 = "sqd2"
    SQD3 = "sqd3"
    SQD4 = "sqd4"
    SQD5 = "sqd5"
    SQD6 = "sqd6"
    SQD7 = "sqd7"
    SQD8 = "sqd8"

    @property
    def code(self) -> str:
        return self.value.upper()

    @property
    def label(self) -> str:
        return _SQD_INFO[self][0]

    @property
    def question(self) -> str:
        return _SQD_INFO[self][1]

    @classmethod
    def coerce(cls, key: Union["SQDDimension", str]) -> Optional["SQDDimension"]:
        """Return the dimension for *key* (``"sqd3"``/``"SQD3"``) or ``None``."""
        if isinstance(key, cls):
            return key
        try:
            return cls(str(key).strip().lower())
        except ValueError:
            return None


_SQD_INFO: Dict[SQDDimension, Tuple[str, str]] = {
    SQDDimension.SQD0: (
        "Overall Satisfaction",
        "I am satisfied with the service I availed.",
    ),
    SQDDimension.SQD1: (
        "Responsiveness",
        "I spent a reasonable amount of time for my transaction.",
    ),
    SQDDimension.SQD2: (
        "Reliability",
        "The office followed the transaction's requirements and steps based on "
        "the information provided.",
    ),
    SQDDimension.SQD3: (
        "Access & Facilities",
        "The steps (including payment) I needed to do for my transaction were "
        "easy and simple.",
    ),
    SQDDimension.SQD4: (
        "Communication",
        "I easily found information about my transaction from the office or its "
        "website.",
    ),
    SQDDimension.SQD5: (
        "Costs",
        "I paid a reasonable amount of fees for my transaction.",
    ),
    SQDDimension.SQD6: (
        "Integrity",
        "I feel the office was fair to everyone, or 'walang palakasan', during my "
        "transaction.",
    ),
    SQDDimension.SQD7: (
        "Assurance",
        "I was treated courteously by the staff, and (if asked for help) the staff "
        "was helpful.",
    ),
    SQDDimension.SQD8: (
        "Outcome",
        "I got what I needed from the government office, or if denied, denial was "
        "sufficiently explained to me.",
    ),
}

SQD_DIMENSIONS: Tuple[SQDDimension, ...] = tuple(SQDDimension)


# ---------------------------------------------------------------------------
# Normalisation helpers
# ---------------------------------------------------------------------------


def normalize_client_type(value: Any) -> Tuple[str, ...]:
    """Return *value* as an ordered tuple of distinct client type tags.

    Accepts ``None``, a single tag, a comma-joined string (``"C, B"``) or any
    iterable of tags. Blank tags are dropped.
    """

    if value is None:
        return ()
    if isinstance(value, str):
        parts: Iterable[Any] = value.split(",")
    else:
        try:
            parts = list(value)
        except TypeError:
            parts = [value]

    tags: list[str] = []
    for part in parts:
        tag = str(part).strip() if part is not None else ""
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def record_date(timestamp: str) -> str:
    """Truncate *timestamp* to its calendar date string.

    ISO-8601 input yields ``YYYY-MM-DD``; anything else falls back to the
    leading date token (``"3/14/2025, 10:00"`` -> ``"3/14/2025"``).
    """

    text = (timestamp or "").strip()
    if not text:
        return UNKNOWN
    try:
        return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        pass
    token = text.replace("T", " ").split(" ", 1)[0]
    return token.rstrip(",") or UNKNOWN


def utc_now_iso() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SurveyRecord:
    """One encoded questionnaire response."""

    id: str
    timestamp: str
    campus: str = ""
    office: str = ""
    client_type: Tuple[str, ...] = ()
    sex: str = ""
    age_group: str = ""
    document_number: str = ""
    services: str = ""
    comments: str = ""
    cc1: str = ""
    cc2: str = ""
    cc3: str = ""
    sqd0: str = ""
    sqd1: str = ""
    sqd2: str = ""
    sqd3: str = ""
    sqd4: str = ""
    sqd5: str = ""
    sqd6: str = ""
    sqd7: str = ""
    sqd8: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "client_type", normalize_client_type(self.client_type))

    @property
    def client_type_label(self) -> str:
        """Comma-joined client type tags (``""`` when none were ticked)."""
        return ", ".join(self.client_type)

    @property
    def date(self) -> str:
        return record_date(self.timestamp)

    def sqd_value(self, dimension: Union[SQDDimension, str]) -> str:
        dim = SQDDimension.coerce(dimension)
        if dim is None:
            return ""
        return getattr(self, dim.value) or ""

    def sqd_responses(self) -> Tuple[Tuple[SQDDimension, str], ...]:
        """Return the nine ``(dimension, value)`` pairs in fixed order."""
        return tuple((dim, getattr(self, dim.value) or "") for dim in SQD_DIMENSIONS)

    def cc_values(self) -> Tuple[str, str, str]:
        return (self.cc1 or "", self.cc2 or "", self.cc3 or "")

    # ------------------------------------------------------------------
    # Persistence shape
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON storage shape (camelCase keys)."""
        data: Dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            data[_STORAGE_KEYS.get(f.name, f.name)] = (
                list(value) if f.name == "client_type" else value
            )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SurveyRecord":
        """Build a record from the storage shape, tolerating missing keys."""
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            key = _STORAGE_KEYS.get(f.name, f.name)
            if key in data:
                raw = data[key]
            elif f.name in data:
                raw = data[f.name]
            else:
                continue
            if f.name == "client_type":
                kwargs[f.name] = raw
            else:
                kwargs[f.name] = "" if raw is None else str(raw)
        kwargs.setdefault("id", str(uuid.uuid4()))
        kwargs.setdefault("timestamp", utc_now_iso())
        return cls(**kwargs)


_STORAGE_KEYS: Dict[str, str] = {
    "client_type": "clientType",
    "age_group": "ageGroup",
    "document_number": "documentNumber",
}

_IMMUTABLE_FIELDS = ("id", "timestamp")


def new_record(**fields: Any) -> SurveyRecord:
    """Create a record as the encoding form does on submit."""
    fields.setdefault("id", str(uuid.uuid4()))
    fields.setdefault("timestamp", utc_now_iso())
    return SurveyRecord(**fields)


def with_changes(record: SurveyRecord, **changes: Any) -> SurveyRecord:
    """Return a corrected copy of *record* keeping its ``id``.

    Raises
    ------
    ValueError
        If *changes* touch ``id`` or ``timestamp``.
    """

    forbidden = [name for name in _IMMUTABLE_FIELDS if name in changes]
    if forbidden:
        raise ValueError(f"Cannot edit immutable field(s): {', '.join(forbidden)}")
    return dataclasses.replace(record, **changes)
