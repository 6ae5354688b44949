from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys (``projectId``) while keeping snake_case attributes."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
