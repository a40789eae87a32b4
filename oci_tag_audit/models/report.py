# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Report row and report option models.

The column order of ReportRow is the on-disk contract shared by every CSV
file the audit produces, headers included.
"""

from pydantic import BaseModel, ConfigDict, Field

# Header row written once at the top of every report file
REPORT_HEADERS: tuple[str, ...] = (
    "Region",
    "Display Name",
    "Resource Type",
    "Identifier",
    "Compartment ID",
    "Lifecycle State",
    "Time Created (UTC)",
    "Days Since Creation",
    "Availability Domain",
    "Defined Tags",
    "Freeform Tags",
)

# Placeholder for the two time-derived columns when no creation time is known
NOT_AVAILABLE = "N/A"


class ReportRow(BaseModel):
    """One flat report line derived from a ResourceRecord.

    Field declaration order matches REPORT_HEADERS.
    """

    model_config = ConfigDict(frozen=True)

    region: str
    display_name: str
    resource_type: str
    identifier: str
    compartment_id: str
    lifecycle_state: str
    time_created: str
    days_since_creation: str
    availability_domain: str
    defined_tags: str
    freeform_tags: str

    def as_csv_row(self) -> list[str]:
        """Return the field values in header order."""
        return [getattr(self, name) for name in type(self).model_fields]


class ReportOptions(BaseModel):
    """Which exception reports to produce next to the main report.

    Both switches are additive: they only gate the creation of the
    missing-tags and no-owner files and never change the main report.
    """

    model_config = ConfigDict(frozen=True)

    include_missing_tags: bool = Field(
        default=False,
        description="Write a separate report of resources without defined tags"
    )
    include_no_owner: bool = Field(
        default=False,
        description="Write a separate report of resources without a CreatedBy tag"
    )
