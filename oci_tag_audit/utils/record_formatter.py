# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Conversion of resource records into flat report rows."""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Mapping

from ..models.report import NOT_AVAILABLE, ReportRow
from ..models.resource import ResourceRecord

logger = logging.getLogger(__name__)

TIME_CREATED_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTML-sensitive characters and JS line separators are written as \u escapes
_JSON_HTML_ESCAPES = str.maketrans({
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})


def _as_utc(value: datetime) -> datetime:
    # The SDK returns aware datetimes; naive ones are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_time_created(
    time_created: datetime | None,
    now: datetime | None = None,
) -> tuple[str, str]:
    """
    Format a creation time and the number of days elapsed since then.

    Days are the floor of elapsed hours divided by 24. Timestamps in the
    future give a negative count, which is kept as is.

    Args:
        time_created: Creation time, or None when unknown
        now: Reference time (default: current UTC time)

    Returns:
        Tuple of (formatted time, days since creation), both "N/A" when
        the creation time is unknown
    """
    if time_created is None:
        return NOT_AVAILABLE, NOT_AVAILABLE

    created = _as_utc(time_created)
    reference = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    hours = (reference - created).total_seconds() / 3600
    days = math.floor(hours / 24)
    return created.strftime(TIME_CREATED_FORMAT), str(days)


def defined_tags_to_string(defined_tags: Mapping[str, Mapping[str, Any]]) -> str:
    """
    Serialize defined tags to a canonical JSON object.

    Keys are sorted and separators are compact so that equal tag sets
    always give the same text. Non-ASCII text is kept as is, except that
    ``<``, ``>``, ``&``, U+2028 and U+2029 are escaped (``R&D`` becomes
    ``R\\u0026D``). Anything that cannot be serialized yields an empty string.
    """
    try:
        text = json.dumps(
            defined_tags,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as e:
        logger.debug(f"Could not serialize defined tags: {e}")
        return ""
    return text.translate(_JSON_HTML_ESCAPES)


def freeform_tags_to_string(freeform_tags: Mapping[str, str]) -> str:
    """Serialize freeform tags as sorted ``key=value`` pairs joined by ", "."""
    if not freeform_tags:
        return ""
    parts = sorted(f"{key}={value}" for key, value in freeform_tags.items())
    return ", ".join(parts)


def format_record(record: ResourceRecord, now: datetime | None = None) -> ReportRow:
    """
    Build the report row for a resource record.

    The record is never modified.

    Args:
        record: Resource record to format
        now: Reference time for days-since-creation (default: current UTC time)

    Returns:
        ReportRow with all eleven report columns
    """
    time_created, days_since_creation = format_time_created(record.time_created, now)
    return ReportRow(
        region=record.region,
        display_name=record.display_name,
        resource_type=record.resource_type,
        identifier=record.identifier,
        compartment_id=record.compartment_id,
        lifecycle_state=record.lifecycle_state,
        time_created=time_created,
        days_since_creation=days_since_creation,
        availability_domain=record.availability_domain,
        defined_tags=defined_tags_to_string(record.defined_tags),
        freeform_tags=freeform_tags_to_string(record.freeform_tags),
    )
