# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Tag-compliance classification for OCI resources.

A resource is flagged as missing defined tags when it carries no defined
tags at all, and as missing an owner when no tag namespace records who
created it. Only the tag key is matched (case-insensitively); the namespace
name is irrelevant.
"""

from typing import Any, Mapping

from ..models.classification import ClassificationLabels

OWNER_TAG_KEY = "CreatedBy"


def has_owner_tag(defined_tags: Mapping[str, Mapping[str, Any]]) -> bool:
    """
    Check whether any namespace holds a non-empty CreatedBy tag.

    Values other than non-empty strings (numbers, booleans, None, nested
    objects) are not accepted as ownership evidence.

    Args:
        defined_tags: Defined tags keyed by namespace, then by tag key

    Returns:
        True if an owner tag with a non-empty string value is present
    """
    owner_key = OWNER_TAG_KEY.casefold()
    for namespace_tags in defined_tags.values():
        if not isinstance(namespace_tags, Mapping):
            continue
        for key, value in namespace_tags.items():
            if str(key).casefold() == owner_key and isinstance(value, str) and value:
                return True
    return False


def classify(defined_tags: Mapping[str, Mapping[str, Any]]) -> ClassificationLabels:
    """
    Classify a resource from its defined tags.

    Args:
        defined_tags: Defined tags keyed by namespace, then by tag key

    Returns:
        ClassificationLabels for the resource
    """
    missing_defined_tags = len(defined_tags) == 0
    return ClassificationLabels(
        missing_defined_tags=missing_defined_tags,
        missing_owner=missing_defined_tags or not has_owner_tag(defined_tags),
    )
