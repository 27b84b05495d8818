"""CSV import/export of survey records.

The column order is a user-facing contract shown to the operator before an
import; :data:`CSV_COLUMNS` drives both directions.
"""
from __future__ import annotations

import csv
import io
import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterable, List

from charter_survey.exceptions import CSVImportError
from charter_survey.records import SurveyRecord, utc_now_iso

logger = logging.getLogger(__name__)

__all__ = [
    "CSV_COLUMNS",
    "EXPECTED_CSV_COLUMNS",
    "ImportResult",
    "decode_csv",
    "parse_csv",
    "encode_csv",
]

# (header label, record attribute) in file order
CSV_COLUMNS: tuple[tuple[str, str], ...] = (
    ("Date/Time", "timestamp"),
    ("Campus", "campus"),
    ("Age Group", "age_group"),
    ("Sex", "sex"),
    ("Office", "office"),
    ("Services", "services"),
    ("Client Type", "client_type"),
    ("CC1", "cc1"),
    ("CC2", "cc2"),
    ("CC3", "cc3"),
    ("SQD0", "sqd0"),
    ("SQD1", "sqd1"),
    ("SQD2", "sqd2"),
    ("SQD3", "sqd3"),
    ("SQD4", "sqd4"),
    ("SQD5", "sqd5"),
    ("SQD6", "sqd6"),
    ("SQD7", "sqd7"),
    ("SQD8", "sqd8"),
    ("Comments/Suggestions", "comments"),
    ("Document Number", "document_number"),
)

EXPECTED_CSV_COLUMNS = ", ".join(label for label, _ in CSV_COLUMNS)

# Document Number was added last; older exports stop at Comments/Suggestions.
MIN_FIELDS = len(CSV_COLUMNS) - 1


@dataclass
class ImportResult:
    """Records decoded from a CSV upload plus one message per skipped line."""

    records: List[SurveyRecord] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def imported(self) -> int:
        return len(self.records)


def split_line(line: str) -> List[str]:
    """Split one CSV line on commas outside double quotes.

    Quote characters toggle the quoted state and are dropped; a doubled quote
    inside a quoted field yields one literal quote. Values are stripped.
    """
    values: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    values.append("".join(current).strip())
    return values


def _logical_lines(text: str) -> Iterable[tuple[int, str]]:
    """Yield ``(line_number, line)`` joining physical lines inside open quotes."""
    buffer: List[str] = []
    start = 0
    for number, physical in enumerate(text.splitlines(), start=1):
        if not buffer:
            start = number
        buffer.append(physical)
        joined = "\n".join(buffer)
        if joined.count('"') % 2 == 0:
            yield start, joined
            buffer = []
    if buffer:
        yield start, "\n".join(buffer)


def decode_csv(text: str) -> ImportResult:
    """Decode *text* (one header line, then data lines) into records.

    Lines resolving to fewer than :data:`MIN_FIELDS` values are skipped with a
    warning; the rest are still imported. Every record gets a fresh ``id``.
    """
    result = ImportResult()
    lines = list(_logical_lines(text.lstrip("\ufeff").strip()))
    for number, line in lines[1:]:
        if not line.strip():
            continue
        values = split_line(line)
        if len(values) < MIN_FIELDS:
            message = (
                f"Row {number} has {len(values)} of {len(CSV_COLUMNS)} columns, skipping"
            )
            logger.warning(message)
            result.skipped.append(message)
            continue
        values += [""] * (len(CSV_COLUMNS) - len(values))
        fields = {attr: values[idx] for idx, (_, attr) in enumerate(CSV_COLUMNS)}
        fields["timestamp"] = fields["timestamp"] or utc_now_iso()
        result.records.append(SurveyRecord(id=f"imported-{uuid.uuid4()}", **fields))

    logger.info(
        "csv_decoded",
        extra={"imported": result.imported, "skipped": len(result.skipped)},
    )
    return result


def parse_csv(text: str) -> List[SurveyRecord]:
    """Decode *text* and return its records.

    Raises
    ------
    CSVImportError
        If the file has no data lines or none of them could be imported.
    """
    if len([ln for ln in text.strip().splitlines() if ln.strip()]) < 2:
        raise CSVImportError(
            f"CSV file is empty or invalid. Expected columns: {EXPECTED_CSV_COLUMNS}"
        )
    result = decode_csv(text)
    if not result.records:
        raise CSVImportError(
            "No rows imported. Make sure the CSV follows this column order: "
            f"{EXPECTED_CSV_COLUMNS}"
        )
    return result.records


def _cell(record: SurveyRecord, attr: str) -> str:
    if attr == "client_type":
        return record.client_type_label
    return getattr(record, attr) or ""


def encode_csv(records: Iterable[SurveyRecord]) -> str:
    """Encode *records* with a header row in :data:`CSV_COLUMNS` order."""
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([label for label, _ in CSV_COLUMNS])
    for record in records:
        writer.writerow([_cell(record, attr) for _, attr in CSV_COLUMNS])
    return out.getvalue()
