"""Service layer for the OCI tag audit."""

from .region_scanner import RegionScanner, RegionScanError
from .report_writer import ReportSink, ReportSinkError, ReportWriter
from .audit_orchestrator import AuditOrchestrator, make_run_timestamp

__all__ = [
    "RegionScanner",
    "RegionScanError",
    "ReportSink",
    "ReportSinkError",
    "ReportWriter",
    "AuditOrchestrator",
    "make_run_timestamp",
]
