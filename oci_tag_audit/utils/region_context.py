# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Region context management for log records.

Each region audit runs in its own asyncio task, and every task gets its
own copy of the context, so a region set here is only visible to log
records emitted by that region's task.
"""

import contextvars
import logging

# Placeholder shown in log lines emitted outside any region task
NO_REGION = "-"

_region_context: contextvars.ContextVar[str] = contextvars.ContextVar(
    "region", default=NO_REGION
)


def set_region(region: str) -> contextvars.Token:
    """
    Set the region in the current context.

    Args:
        region: Profile/region name being audited

    Returns:
        Token that can be passed to reset_region()
    """
    return _region_context.set(region)


def reset_region(token: contextvars.Token) -> None:
    """Restore the region that was current before set_region()."""
    _region_context.reset(token)


def get_region() -> str:
    """
    Get the region from the current context.

    Returns:
        The region name if set, or "-" outside a region task
    """
    return _region_context.get()


class RegionContextFilter(logging.Filter):
    """Logging filter that adds a ``region`` attribute to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "region"):
            record.region = get_region()
        return True
