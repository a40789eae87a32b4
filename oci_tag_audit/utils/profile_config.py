# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Helpers for locating and reading the OCI profile configuration file.

The OCI config file is INI-style: one section per region profile plus a
DEFAULT section. Only section names are read here; credential fields are
left to the OCI SDK.
"""

import configparser
import logging
from pathlib import Path

from ..errors import TagAuditError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "DEFAULT"


class ConfigurationError(TagAuditError):
    """Raised when the profile configuration cannot be located or read."""

    pass


def read_config_path(path_file: str | Path) -> str:
    """
    Read the OCI config file location from a pointer file.

    The pointer file holds the path on its first line.

    Args:
        path_file: Path of the pointer file (e.g., "config_path.txt")

    Returns:
        The config file path, stripped of surrounding whitespace

    Raises:
        ConfigurationError: If the pointer file cannot be read or is empty
    """
    try:
        with open(path_file, encoding="utf-8") as f:
            first_line = f.readline()
    except OSError as e:
        raise ConfigurationError(f"Error opening config path file {path_file}: {e}") from e

    config_path = first_line.strip()
    if not config_path:
        raise ConfigurationError(f"Config path file {path_file} is empty")
    return config_path


def list_region_profiles(config_path: str | Path) -> list[str]:
    """
    List the region profiles defined in an OCI config file.

    Args:
        config_path: Path of the OCI config file

    Returns:
        Non-DEFAULT section names, in file order

    Raises:
        ConfigurationError: If the file is missing or cannot be parsed
    """
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(config_path, encoding="utf-8") as f:
            parser.read_file(f)
    except OSError as e:
        raise ConfigurationError(f"Error loading config file {config_path}: {e}") from e
    except configparser.Error as e:
        raise ConfigurationError(f"Error parsing config file {config_path}: {e}") from e

    # ConfigParser keeps DEFAULT out of sections(); filter anyway for odd casing
    profiles = [name for name in parser.sections() if name != DEFAULT_PROFILE]
    logger.debug(f"Found {len(profiles)} region profiles in {config_path}: {profiles}")
    return profiles
