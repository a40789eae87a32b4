# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Per-region CSV report writer.

This module provides the ReportWriter class that owns a region's report
files: the main resources report, always written, and the optional
missing-tags and no-owner exception reports. Each labelled row is routed
to the main report and to whichever exception reports it qualifies for.
"""

import csv
import logging
from pathlib import Path
from types import TracebackType
from typing import IO

from ..errors import TagAuditError
from ..models.classification import ClassificationLabels
from ..models.enums import SinkKind
from ..models.report import REPORT_HEADERS, ReportOptions, ReportRow

logger = logging.getLogger(__name__)


class ReportSinkError(TagAuditError):
    """Raised when a report file cannot be created or its header written."""

    def __init__(self, kind: SinkKind, path: Path, message: str):
        """
        Initialize report sink error.

        Args:
            kind: Kind of report that failed
            path: Path of the report file
            message: Error description
        """
        super().__init__(f"Error creating {kind.value} report file {path}: {message}")
        self.kind = kind
        self.path = path


def report_path(output_dir: Path, region: str, kind: SinkKind, run_timestamp: str) -> Path:
    """Build the report file path ``<region>_<kind>_<timestamp>.csv``."""
    return Path(output_dir) / f"{region}_{kind.value}_{run_timestamp}.csv"


class ReportSink:
    """
    A single append-only CSV report file.

    Opening the sink creates an empty file and writes the header row, so
    the header always precedes every data row.
    """

    def __init__(self, kind: SinkKind, path: Path):
        self.kind = kind
        self.path = path
        self.rows_written = 0
        self._file: IO[str] | None = None
        self._csv_writer = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._file is not None and not self._closed

    def open(self) -> None:
        """
        Create the file and write the header row.

        Raises:
            ReportSinkError: If the file cannot be created or the header
                cannot be written
        """
        try:
            self._file = open(self.path, "w", newline="", encoding="utf-8")
            self._csv_writer = csv.writer(self._file)
            self._csv_writer.writerow(REPORT_HEADERS)
        except (OSError, csv.Error) as e:
            self.close()
            raise ReportSinkError(self.kind, self.path, str(e)) from e

    def write(self, row: ReportRow) -> bool:
        """
        Append a row.

        Args:
            row: Report row to append

        Returns:
            True if the row was written, False if the write failed
        """
        try:
            self._csv_writer.writerow(row.as_csv_row())
        except (OSError, csv.Error) as e:
            logger.error(f"Error writing to {self.kind.value} report {self.path}: {e}")
            return False
        self.rows_written += 1
        return True

    def close(self) -> None:
        """Flush and close the file. Calling it again has no effect."""
        if self._closed:
            return
        self._closed = True
        if self._file is None:
            return
        try:
            self._file.flush()
        except OSError as e:
            logger.error(f"Error flushing {self.kind.value} report {self.path}: {e}")
        finally:
            self._file.close()


class ReportWriter:
    """
    Owns the report files of one region and routes rows between them.

    Routing rules:
    - Every row goes to the main report.
    - Rows of resources without defined tags also go to the missing-tags
      report, when enabled.
    - Rows of resources without a CreatedBy tag also go to the no-owner
      report, when enabled.

    A failed row write is logged and skipped for that report only. The
    writer is a context manager: leaving the block closes every open file
    exactly once, whether the scan finished or failed.
    """

    def __init__(
        self,
        region: str,
        output_dir: str | Path,
        run_timestamp: str,
        options: ReportOptions | None = None,
    ):
        """
        Initialize the writer. No file is created until open().

        Args:
            region: Profile/region name, used in file names
            output_dir: Directory receiving the report files
            run_timestamp: Run-wide timestamp token shared by all files of the run
            options: Which exception reports to produce (default: none)
        """
        self.region = region
        self.output_dir = Path(output_dir)
        self.run_timestamp = run_timestamp
        self.options = options or ReportOptions()

        self.total_resources = 0
        self.missing_tags_count = 0
        self.no_owner_count = 0

        self._sinks: dict[SinkKind, ReportSink] = {}
        self._closed = False

    @property
    def enabled_kinds(self) -> list[SinkKind]:
        """Report kinds this writer produces, main report first."""
        kinds = [SinkKind.RESOURCES]
        if self.options.include_missing_tags:
            kinds.append(SinkKind.MISSING_TAGS)
        if self.options.include_no_owner:
            kinds.append(SinkKind.NO_OWNER)
        return kinds

    @property
    def report_paths(self) -> dict[SinkKind, str]:
        return {kind: str(sink.path) for kind, sink in self._sinks.items()}

    def open(self) -> None:
        """
        Create every enabled report file and write its header.

        Raises:
            ReportSinkError: If any report file cannot be created; files
                already opened are closed before raising
        """
        for kind in self.enabled_kinds:
            sink = ReportSink(kind, report_path(self.output_dir, self.region, kind, self.run_timestamp))
            try:
                sink.open()
            except ReportSinkError:
                for opened in self._sinks.values():
                    opened.close()
                self._closed = True
                raise
            self._sinks[kind] = sink
            logger.debug(f"Opened {kind.value} report {sink.path}")

    def write(self, row: ReportRow, labels: ClassificationLabels) -> None:
        """
        Route a labelled row to the main report and the qualifying exception reports.

        Args:
            row: Formatted report row
            labels: Classification labels of the same resource
        """
        self._sinks[SinkKind.RESOURCES].write(row)

        missing_tags_sink = self._sinks.get(SinkKind.MISSING_TAGS)
        if missing_tags_sink is not None and labels.missing_defined_tags:
            if missing_tags_sink.write(row):
                self.missing_tags_count += 1

        no_owner_sink = self._sinks.get(SinkKind.NO_OWNER)
        if no_owner_sink is not None and labels.missing_owner:
            if no_owner_sink.write(row):
                self.no_owner_count += 1

        self.total_resources += 1

    def close(self) -> None:
        """Flush and close every open report file, then log the final counts."""
        if self._closed:
            return
        self._closed = True
        for sink in self._sinks.values():
            sink.close()

        logger.info(f"{self.region}: Processed {self.total_resources} resources")
        if self.options.include_missing_tags:
            logger.info(f"{self.region}: Found {self.missing_tags_count} resources with missing tags")
        if self.options.include_no_owner:
            logger.info(f"{self.region}: Found {self.no_owner_count} resources with no owner")

    def __enter__(self) -> "ReportWriter":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
