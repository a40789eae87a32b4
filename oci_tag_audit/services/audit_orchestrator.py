# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Multi-region audit orchestrator.

This module provides the AuditOrchestrator class that audits every
configured region profile in parallel. Each region runs as its own asyncio
task that owns its client, scanner, report writer and counters; the only
synchronization point is the final join, after which per-region results are
aggregated into an AuditSummary.

Region task lifecycle: pending -> running -> completed | failed
"""

import asyncio
import logging
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path

from ..clients.client_factory import ClientConstructionError, RegionalClientFactory
from ..models.audit import AuditSummary, RegionTaskResult
from ..models.enums import RegionTaskState
from ..models.report import ReportOptions
from ..models.search import DEFAULT_PAGE_LIMIT, DEFAULT_SEARCH_QUERY
from ..utils.record_formatter import format_record
from ..utils.region_context import reset_region, set_region
from ..utils.tag_classifier import classify
from .region_scanner import DEFAULT_PAGE_DELAY_SECONDS, RegionScanError, RegionScanner
from .report_writer import ReportSinkError, ReportWriter

logger = logging.getLogger(__name__)

RUN_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def make_run_timestamp(now: datetime | None = None) -> str:
    """
    Build the run-wide timestamp token used in every report file name.

    Args:
        now: Moment of the run (default: current UTC time)

    Returns:
        Token formatted as YYYYMMDD_HHMMSS in UTC
    """
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RUN_TIMESTAMP_FORMAT)


class AuditOrchestrator:
    """
    Orchestrates the tag audit of every configured region.

    All region tasks start at once with no concurrency limit and run to
    completion independently. A failure in one region (bad credentials,
    unwritable report file, API error mid-scan) marks that region as failed
    and never cancels or blocks the others.
    """

    def __init__(
        self,
        client_factory: RegionalClientFactory,
        output_dir: str | Path,
        run_timestamp: str,
        options: ReportOptions | None = None,
        search_query: str = DEFAULT_SEARCH_QUERY,
        page_limit: int = DEFAULT_PAGE_LIMIT,
        page_delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS,
    ):
        """
        Initialize with dependencies and configuration.

        Args:
            client_factory: Factory building a search client per profile
            output_dir: Directory receiving the report files
            run_timestamp: Run-wide timestamp token shared by all report files
            options: Which exception reports to produce (default: none)
            search_query: Structured search query (default: "query all resources")
            page_limit: Items per page requested (default: 1000)
            page_delay_seconds: Delay between page requests (default: 0.2)
        """
        self.client_factory = client_factory
        self.output_dir = Path(output_dir)
        self.run_timestamp = run_timestamp
        self.options = options or ReportOptions()
        self.search_query = search_query
        self.page_limit = page_limit
        self.page_delay_seconds = page_delay_seconds

        logger.info(
            f"AuditOrchestrator initialized: output_dir={self.output_dir}, "
            f"missing_tags={self.options.include_missing_tags}, "
            f"no_owner={self.options.include_no_owner}"
        )

    async def run(self, regions: list[str]) -> AuditSummary:
        """
        Audit every region in parallel and wait for all of them.

        Args:
            regions: Profile/region names to audit

        Returns:
            AuditSummary with one result per region, in the given order
        """
        logger.info(f"Starting audit of {len(regions)} regions: {regions}")

        # One worker per region so blocking SDK calls never queue behind each other
        executor = ThreadPoolExecutor(
            max_workers=max(1, len(regions)),
            thread_name_prefix="region-scan",
        )
        try:
            tasks = [self._audit_region(region, executor) for region in regions]

            # return_exceptions=True keeps one region's crash from cancelling the rest
            results = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            executor.shutdown(wait=True)

        processed_results: list[RegionTaskResult] = []
        for region, result in zip(regions, results):
            if isinstance(result, BaseException):
                logger.error(f"Region {region} audit failed with exception: {result}")
                processed_results.append(
                    RegionTaskResult(
                        region=region,
                        state=RegionTaskState.FAILED,
                        error_message=str(result),
                    )
                )
            else:
                processed_results.append(result)

        summary = AuditSummary(run_timestamp=self.run_timestamp, results=processed_results)
        self.log_summary(summary)
        return summary

    async def _audit_region(self, region: str, executor: Executor) -> RegionTaskResult:
        """
        Run one region task from pending to completed or failed.

        Args:
            region: Profile/region name
            executor: Thread pool shared by the run, sized to the region count

        Returns:
            RegionTaskResult with the final state and counters
        """
        token = set_region(region)
        start_time = time.time()
        result = RegionTaskResult(region=region)
        try:
            logger.info(f"Processing region: {region}")

            try:
                client = self.client_factory.get_client(region, executor=executor)
            except ClientConstructionError as e:
                logger.error(str(e))
                result.state = RegionTaskState.FAILED
                result.error_message = str(e)
                return result

            result.state = RegionTaskState.RUNNING
            writer = ReportWriter(
                region=region,
                output_dir=self.output_dir,
                run_timestamp=self.run_timestamp,
                options=self.options,
            )
            try:
                with writer:
                    result.report_paths = writer.report_paths
                    scanner = RegionScanner(
                        client,
                        query=self.search_query,
                        page_limit=self.page_limit,
                        page_delay_seconds=self.page_delay_seconds,
                    )
                    async for record in scanner:
                        writer.write(format_record(record), classify(record.defined_tags))
            except ReportSinkError as e:
                logger.error(f"{region}: {e}")
                result.state = RegionTaskState.FAILED
                result.error_message = str(e)
            except RegionScanError as e:
                logger.error(str(e))
                result.state = RegionTaskState.FAILED
                result.error_message = str(e)
            else:
                result.state = RegionTaskState.COMPLETED
            finally:
                result.total_resources = writer.total_resources
                result.missing_tags_count = writer.missing_tags_count
                result.no_owner_count = writer.no_owner_count

            logger.info(f"Region {region} finished: state={result.state.value}")
            return result
        finally:
            result.scan_duration_ms = int((time.time() - start_time) * 1000)
            reset_region(token)

    def log_summary(self, summary: AuditSummary) -> None:
        """Log the aggregate counts of a finished audit."""
        logger.info(
            f"Audit complete: {summary.total_resources} resources, "
            f"completed_regions={len(summary.completed_regions)}, "
            f"failed_regions={len(summary.failed_regions)}"
        )
        if self.options.include_missing_tags:
            logger.info(f"Total resources with missing tags: {summary.missing_tags_count}")
        if self.options.include_no_owner:
            logger.info(f"Total resources with no owner: {summary.no_owner_count}")
        if summary.failed_regions:
            logger.warning(f"Regions that failed: {summary.failed_regions}")
