"""Mini README: Reporting aggregates for exporters and dashboards.

Produces the input structure document exporters render from. Rendering the
documents themselves is left to the exporters.
"""

from .summary import (
    ExpenseCategory,
    ExpenseReport,
    build_report,
    categorise,
    spending_by_participant,
)

__all__ = [
    "ExpenseCategory",
    "ExpenseReport",
    "build_report",
    "categorise",
    "spending_by_participant",
]
