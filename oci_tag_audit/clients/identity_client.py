"""Home region lookup through the OCI Identity service."""

import logging
from pathlib import Path

import oci

from ..errors import TagAuditError

logger = logging.getLogger(__name__)

HOME_REGION_PROFILE = "DEFAULT"


class HomeRegionLookupError(TagAuditError):
    """Raised when the tenancy home region cannot be determined."""

    pass


def get_home_region_key(config_path: str | Path, profile: str = HOME_REGION_PROFILE) -> str:
    """
    Look up the tenancy home region key using the DEFAULT profile.

    This is a blocking SDK call.

    Args:
        config_path: Path of the OCI config file
        profile: Profile whose tenancy is looked up (default: "DEFAULT")

    Returns:
        Home region key of the tenancy (e.g., "FRA")

    Raises:
        HomeRegionLookupError: If the profile cannot be loaded, the call
            fails, or the response has no home region key
    """
    try:
        config = oci.config.from_file(file_location=str(config_path), profile_name=profile)
    except Exception as e:
        raise HomeRegionLookupError(f"failed to create configuration provider: {e}") from e

    try:
        identity = oci.identity.IdentityClient(config)
    except Exception as e:
        raise HomeRegionLookupError(f"failed to create IdentityClient: {e}") from e

    tenancy_id = config.get("tenancy")
    if not tenancy_id:
        raise HomeRegionLookupError("failed to read tenancy OCID")

    try:
        tenancy = identity.get_tenancy(tenancy_id).data
    except Exception as e:
        raise HomeRegionLookupError(f"GetTenancy call failed: {e}") from e

    home_region_key = getattr(tenancy, "home_region_key", None)
    if not home_region_key:
        raise HomeRegionLookupError("tenancy response missing HomeRegionKey")
    return home_region_key
