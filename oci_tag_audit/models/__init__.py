"""Data models for the OCI tag audit."""

from .enums import RegionTaskState, SinkKind
from .resource import ResourceRecord
from .classification import ClassificationLabels
from .report import REPORT_HEADERS, NOT_AVAILABLE, ReportRow, ReportOptions
from .search import SearchRequest, SearchPage
from .audit import RegionTaskResult, AuditSummary

__all__ = [
    "RegionTaskState",
    "SinkKind",
    "ResourceRecord",
    "ClassificationLabels",
    "REPORT_HEADERS",
    "NOT_AVAILABLE",
    "ReportRow",
    "ReportOptions",
    "SearchRequest",
    "SearchPage",
    "RegionTaskResult",
    "AuditSummary",
]
