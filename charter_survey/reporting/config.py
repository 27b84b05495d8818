"""Configuration constants for the reporting pipeline."""
from __future__ import annotations

import os

# Number of services listed in a campus/office "top services" panel
TOP_SERVICES: int = int(os.getenv("REPORT_TOP_SERVICES", "10"))

# Number of services listed in the tabular service utilization table
TOP_UTILIZATION: int = int(os.getenv("REPORT_TOP_UTILIZATION", "15"))

# Problem dimensions listed per office in the dissatisfaction table
TOP_ISSUES: int = int(os.getenv("REPORT_TOP_ISSUES", "3"))

# Offices listed per charter issue row
MAX_AFFECTED_OFFICES: int = int(os.getenv("REPORT_MAX_AFFECTED_OFFICES", "5"))

# Scores strictly below this threshold are reported as problem areas
PROBLEM_THRESHOLD: float = float(os.getenv("REPORT_PROBLEM_THRESHOLD", "70"))

# Maximum comments rendered verbatim in the Markdown report
MAX_COMMENTS: int = int(os.getenv("REPORT_MAX_COMMENTS", "50"))
