from pydantic import BaseModel, ConfigDict, Field


class ResourceInfo(BaseModel):
    """Identifying details returned when a webhook is selected."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(
        ..., alias="name", description="The webhook's display name."
    )
    location_id: str = Field(
        ...,
        alias="channel_id",
        description="The ID of the channel the webhook posts into.",
    )
