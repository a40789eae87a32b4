# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Region task and audit summary models.

This module contains Pydantic models describing the outcome of a single
region audit task and the aggregate summary of a full multi-region run.
"""

from pydantic import BaseModel, Field

from .enums import RegionTaskState, SinkKind


class RegionTaskResult(BaseModel):
    """Outcome of auditing a single region profile."""

    region: str = Field(..., description="Profile/region name")
    state: RegionTaskState = Field(
        default=RegionTaskState.PENDING,
        description="Final lifecycle state of the task"
    )
    total_resources: int = Field(
        default=0,
        ge=0,
        description="Resources processed, regardless of per-sink write outcome"
    )
    missing_tags_count: int = Field(
        default=0,
        ge=0,
        description="Rows successfully written to the missing-tags report"
    )
    no_owner_count: int = Field(
        default=0,
        ge=0,
        description="Rows successfully written to the no-owner report"
    )
    error_message: str | None = Field(
        default=None,
        description="Error message if the task failed"
    )
    report_paths: dict[SinkKind, str] = Field(
        default_factory=dict,
        description="Report files written for this region, keyed by kind"
    )
    scan_duration_ms: int = Field(
        default=0,
        ge=0,
        description="Task duration in milliseconds"
    )

    @property
    def succeeded(self) -> bool:
        return self.state == RegionTaskState.COMPLETED


class AuditSummary(BaseModel):
    """Aggregated result of auditing every configured region."""

    run_timestamp: str = Field(..., description="Run-wide timestamp token used in file names")
    results: list[RegionTaskResult] = Field(
        default_factory=list,
        description="Per-region results, in profile order"
    )

    @property
    def completed_regions(self) -> list[str]:
        return [r.region for r in self.results if r.state == RegionTaskState.COMPLETED]

    @property
    def failed_regions(self) -> list[str]:
        return [r.region for r in self.results if r.state == RegionTaskState.FAILED]

    @property
    def total_resources(self) -> int:
        return sum(r.total_resources for r in self.results)

    @property
    def missing_tags_count(self) -> int:
        return sum(r.missing_tags_count for r in self.results)

    @property
    def no_owner_count(self) -> int:
        return sum(r.no_owner_count for r in self.results)
