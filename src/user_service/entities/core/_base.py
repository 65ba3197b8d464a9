from pydantic import BaseModel
from pydantic import Field as PydanticField


class Entity(BaseModel):
    """Base entity with a store-assigned integer identifier."""

    id: int = PydanticField(
        description="Identifier assigned by the owning repository",
    )
