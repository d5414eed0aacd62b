from pydantic import BaseModel, ConfigDict


class ItemResponse(BaseModel):
    """A student's answer expressed in canonical identity."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    selected_alternative_id: str
