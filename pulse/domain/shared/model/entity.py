from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for entities owned by an aggregate."""

    model_config = ConfigDict(validate_assignment=True)
