from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value object compared by its fields."""

    model_config = ConfigDict(frozen=True)


class IntId(RootModel[int]):
    """Database-assigned integer identity."""

    def __int__(self) -> int:
        return self.root

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.root))
