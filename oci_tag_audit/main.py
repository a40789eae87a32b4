# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Command-line entry point for the OCI tag audit.

Resolves the OCI config file, looks up the tenancy home region, audits
every region profile in parallel and writes CSV reports to the output
directory.

Usage:
    oci-tag-audit [--missing-tags] [--no-owner] [--output-dir DIR] [--log-level LEVEL]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from . import __version__
from .clients.client_factory import RegionalClientFactory
from .clients.identity_client import HomeRegionLookupError, get_home_region_key
from .config import Settings, settings
from .models.audit import AuditSummary
from .models.report import ReportOptions
from .services.audit_orchestrator import AuditOrchestrator, make_run_timestamp
from .utils.profile_config import ConfigurationError, list_region_profiles, read_config_path
from .utils.region_context import RegionContextFilter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(region)s] %(message)s"


class StartupError(Exception):
    """Raised when the audit cannot start at all."""

    pass


def configure_logging(log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RegionContextFilter())

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )

    # The OCI SDK is chatty at DEBUG
    logging.getLogger("oci").setLevel(max(numeric_level, logging.INFO))


def print_startup_banner(config: Settings, options: ReportOptions) -> None:
    """
    Print startup banner with configuration information.

    Args:
        config: Application settings
        options: Report options from the command line
    """
    banner = f"""
╔══════════════════════════════════════════════════════════════════╗
║                  OCI Tag Audit v{__version__:<33}║
╠══════════════════════════════════════════════════════════════════╣
║  Configuration:                                                  ║
║    Output dir:   {config.output_dir:<47} ║
║    Query:        {config.search_query:<47} ║
║    Page limit:   {config.page_limit:<47} ║
║    Log Level:    {config.log_level:<47} ║
║    Missing tags: {str(options.include_missing_tags):<47} ║
║    No owner:     {str(options.include_no_owner):<47} ║
╚══════════════════════════════════════════════════════════════════╝
"""
    print(banner)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Audit OCI resources across every configured region profile",
    )
    parser.add_argument(
        "--missing-tags",
        action="store_true",
        help="Create a separate file for resources with missing defined tags",
    )
    parser.add_argument(
        "--no-owner",
        action="store_true",
        help="Create a separate file for resources with missing CreatedBy tag",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the CSV reports (default: REPORT_OUTPUT_DIR or 'data')",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def resolve_config_path(config: Settings) -> str:
    """
    Find the OCI config file to use.

    OCI_CONFIG_FILE wins when set; otherwise the first line of the pointer
    file is used.

    Raises:
        ConfigurationError: If the pointer file cannot be read
    """
    if config.oci_config_file:
        return config.oci_config_file
    return read_config_path(config.config_path_file)


async def run_audit(config: Settings, options: ReportOptions) -> AuditSummary:
    """
    Run a full audit.

    Args:
        config: Application settings
        options: Which exception reports to produce

    Returns:
        AuditSummary of the run

    Raises:
        StartupError: If the config cannot be read, the home region cannot
            be resolved, or the output directory cannot be created
    """
    try:
        config_path = resolve_config_path(config)
        logger.info(f"Using config file: {config_path}")

        if config.resolve_home_region:
            loop = asyncio.get_running_loop()
            home_region_key = await loop.run_in_executor(None, get_home_region_key, config_path)
            logger.info(f"HomeRegionKey: {home_region_key}")

        regions = list_region_profiles(config_path)
    except (ConfigurationError, HomeRegionLookupError) as e:
        raise StartupError(str(e)) from e

    output_dir = Path(config.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StartupError(f"Error creating output directory {output_dir}: {e}") from e

    orchestrator = AuditOrchestrator(
        client_factory=RegionalClientFactory(config_path),
        output_dir=output_dir,
        run_timestamp=make_run_timestamp(),
        options=options,
        search_query=config.search_query,
        page_limit=config.page_limit,
        page_delay_seconds=config.page_delay_seconds,
    )
    return await orchestrator.run(regions)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the audit.

    Returns:
        Process exit status: 0 once every region has finished (whatever
        its outcome), 1 if the audit could not start
    """
    load_dotenv()
    args = parse_args(argv)

    config = settings()
    overrides = {}
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        config = config.model_copy(update=overrides)

    options = ReportOptions(
        include_missing_tags=args.missing_tags,
        include_no_owner=args.no_owner,
    )

    configure_logging(config.log_level)
    print_startup_banner(config, options)

    try:
        asyncio.run(run_audit(config, options))
    except StartupError as e:
        logger.error(f"Audit failed to start: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Audit interrupted")
        return 130

    logger.info("All regions processed")
    return 0
