"""Tag-compliance classification model."""

from pydantic import BaseModel, ConfigDict, Field


class ClassificationLabels(BaseModel):
    """Compliance labels computed once per resource from its defined tags."""

    model_config = ConfigDict(frozen=True)

    missing_defined_tags: bool = Field(
        ...,
        description="True when the resource carries no defined tags at all"
    )
    missing_owner: bool = Field(
        ...,
        description="True when no namespace holds a non-empty CreatedBy tag"
    )
