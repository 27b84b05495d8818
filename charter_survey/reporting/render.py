"""Render survey reports using Jinja2 templates."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from charter_survey.records import SurveyRecord
from charter_survey.reporting.context import build_report_context

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Markdown output – HTML escaping would mangle apostrophes in office names.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def _pct(value: float, digits: int = 2) -> str:
    return f"{value:.{digits}f}%"


_env.filters["pct"] = _pct


def render_report(
    records: Sequence[SurveyRecord],
    *,
    title: Optional[str] = None,
    filter_label: Optional[str] = None,
) -> str:
    """Render a Markdown report over *records*."""

    kwargs = {"filter_label": filter_label}
    if title:
        kwargs["title"] = title
    context = build_report_context(records, **kwargs)

    template = _env.get_template("report.md.j2")
    text = template.render(**context.to_dict())
    logger.debug("Report rendered for %d records (len=%d)", len(records), len(text))
    return text
