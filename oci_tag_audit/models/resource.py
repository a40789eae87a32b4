"""OCI resource data model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResourceRecord(BaseModel):
    """Represents one resource returned by the OCI Resource Search API.

    Records are frozen once built. Optional scalar attributes that the API
    leaves out are normalised to an empty string.
    """

    model_config = ConfigDict(frozen=True)

    region: str = Field(..., description="Profile/region name that produced this record")
    display_name: str = Field(default="", description="Resource display name")
    resource_type: str = Field(default="", description="OCI resource type (e.g., Instance)")
    identifier: str = Field(default="", description="Resource OCID")
    compartment_id: str = Field(default="", description="OCID of the owning compartment")
    lifecycle_state: str = Field(default="", description="Lifecycle state (e.g., RUNNING)")
    availability_domain: str = Field(default="", description="Availability domain, if any")
    time_created: datetime | None = Field(
        default=None,
        description="When the resource was created"
    )
    defined_tags: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Defined tags keyed by namespace, then by tag key"
    )
    freeform_tags: dict[str, str] = Field(
        default_factory=dict,
        description="Freeform tags"
    )

    @field_validator(
        "display_name",
        "resource_type",
        "identifier",
        "compartment_id",
        "lifecycle_state",
        "availability_domain",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("defined_tags", "freeform_tags", mode="before")
    @classmethod
    def _none_to_empty_mapping(cls, value: Any) -> Any:
        return {} if value is None else value
