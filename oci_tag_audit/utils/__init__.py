"""Utility modules for the OCI tag audit."""

from .tag_classifier import classify, has_owner_tag
from .record_formatter import format_record
from .profile_config import ConfigurationError, read_config_path, list_region_profiles
from .region_context import RegionContextFilter, get_region, set_region, reset_region

__all__ = [
    "classify",
    "has_owner_tag",
    "format_record",
    "ConfigurationError",
    "read_config_path",
    "list_region_profiles",
    "RegionContextFilter",
    "get_region",
    "set_region",
    "reset_region",
]
