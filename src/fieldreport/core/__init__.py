"""Core domain types shared across all fieldreport modules."""

from fieldreport.core.types import (
    URGENCY_LABELS,
    AdministrativeRow,
    HierarchyOptions,
    MapPoint,
    MappedRows,
    ReportDraft,
    RowWarning,
    Selection,
    SubmissionRow,
    SubmitResult,
    UrgencyLevel,
)

__all__ = [
    "URGENCY_LABELS",
    "AdministrativeRow",
    "HierarchyOptions",
    "MapPoint",
    "MappedRows",
    "ReportDraft",
    "RowWarning",
    "Selection",
    "SubmissionRow",
    "SubmitResult",
    "UrgencyLevel",
]
