# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Factory for creating per-profile OCI Resource Search clients."""

import logging
from concurrent.futures import Executor
from pathlib import Path

import oci

from ..errors import TagAuditError
from .search_client import OCIResourceSearchClient

logger = logging.getLogger(__name__)


class ClientConstructionError(TagAuditError):
    """Raised when a search client cannot be built for a profile."""

    def __init__(self, region: str, message: str):
        """
        Initialize client construction error.

        Args:
            region: Profile/region name that could not be configured
            message: Error description
        """
        super().__init__(f"Error creating client for {region}: {message}")
        self.region = region


class RegionalClientFactory:
    """
    Factory for creating OCI Resource Search clients, one per profile.

    Every profile of the config file describes one account/region pair.
    Clients are built without an SDK retry strategy; the scanner's fixed
    inter-page delay is the only pacing applied.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize with the OCI config file location.

        Args:
            config_path: Path of the OCI config file holding every profile
        """
        self._config_path = str(config_path)
        logger.debug(f"RegionalClientFactory initialized with config_path={self._config_path}")

    @property
    def config_path(self) -> str:
        """Get the OCI config file path."""
        return self._config_path

    def get_client(self, region: str, executor: Executor | None = None) -> OCIResourceSearchClient:
        """
        Create a Resource Search client for a profile.

        Args:
            region: Profile name in the config file
            executor: Thread pool for the client's blocking SDK calls

        Returns:
            OCIResourceSearchClient bound to the profile

        Raises:
            ClientConstructionError: If the profile is missing or invalid,
                or the SDK client cannot be built
        """
        logger.info(f"Creating Resource Search client for profile {region}")
        try:
            config = oci.config.from_file(
                file_location=self._config_path,
                profile_name=region,
            )
            oci.config.validate_config(config)
            sdk_client = oci.resource_search.ResourceSearchClient(
                config,
                retry_strategy=oci.retry.NoneRetryStrategy(),
            )
        except Exception as e:
            raise ClientConstructionError(region, str(e)) from e

        return OCIResourceSearchClient(region=region, sdk_client=sdk_client, executor=executor)
