"""Spreadsheet export of encoded survey records."""
from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from charter_survey.records import SurveyRecord

logger = logging.getLogger(__name__)

SHEET_NAME = "Encoded Data"

# Column label -> record attribute, in sheet order
EXCEL_COLUMNS = (
    ("Date/Time", "timestamp"),
    ("Client Type", "client_type"),
    ("Sex", "sex"),
    ("Age Group", "age_group"),
    ("Campus", "campus"),
    ("Office", "office"),
    ("Document Number", "document_number"),
    ("Services", "services"),
    ("Comments/Suggestions", "comments"),
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
)


def display_timestamp(timestamp: str) -> str:
    """Format an ISO timestamp for the sheet; other strings pass through."""
    try:
        parsed = datetime.datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def default_filename(today: Optional[datetime.date] = None) -> str:
    today = today or datetime.date.today()
    return f"encoded-data-{today.isoformat()}.xlsx"


def records_to_frame(records: Iterable[SurveyRecord]) -> pd.DataFrame:
    """One row per record with human-readable column labels."""
    rows: List[dict] = []
    for record in records:
        row = {}
        for label, attr in EXCEL_COLUMNS:
            if attr == "timestamp":
                row[label] = display_timestamp(record.timestamp)
            elif attr == "client_type":
                row[label] = record.client_type_label
            else:
                row[label] = getattr(record, attr)
        rows.append(row)
    return pd.DataFrame(rows, columns=[label for label, _ in EXCEL_COLUMNS])


def export_to_excel(
    records: Iterable[SurveyRecord], path: Union[str, Path, None] = None
) -> Path:
    """Write *records* to a single-sheet workbook and return its path."""
    target = Path(path) if path else Path(default_filename())
    frame = records_to_frame(records)
    frame.to_excel(target, sheet_name=SHEET_NAME, index=False, engine="openpyxl")
    logger.info("Exported %d records to %s", len(frame), target)
    return target
