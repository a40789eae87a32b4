"""Enumerations for region task states and report sink kinds."""

from enum import Enum


class RegionTaskState(str, Enum):
    """Lifecycle states of a single region audit task."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class SinkKind(str, Enum):
    """Kinds of CSV report written per region.

    The value is used verbatim in the report file name.
    """

    RESOURCES = "resources"
    MISSING_TAGS = "missing_tags"
    NO_OWNER = "no_owner"
