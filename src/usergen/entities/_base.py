from pydantic import BaseModel
from pydantic import Field as PydanticField


class Entity(BaseModel):
    """Base entity class; the surrogate key is assigned by the store on insert."""

    id: int | None = PydanticField(
        default=None,
        description="Surrogate key, None until persisted",
    )
