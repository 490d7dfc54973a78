from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing snake_case attributes as camelCase JSON keys.

    Accepts either spelling on input; responses are serialized with the
    camelCase aliases.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True  # Allows conversion from SQLAlchemy models


class CamelUpdateModel(CamelModel):
    """Partial-update body: unknown fields are rejected."""

    class Config:
        extra = "forbid"

    def to_update_data(self) -> dict:
        """Only the fields the client actually sent, keyed by JSON name."""
        return self.model_dump(exclude_unset=True, by_alias=True)
