from pydantic import BaseModel, ConfigDict


class Aggregate(BaseModel):
    """Base for aggregate roots. Mutable, validated on assignment."""

    model_config = ConfigDict(validate_assignment=True)
