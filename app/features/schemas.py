from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# INTEGER signé 64 bits côté SQL : au-delà, la base lève OverflowError
MAX_ID = 2**63 - 1

EntityId = Annotated[int, Field(ge=1, le=MAX_ID)]


class CamelModel(BaseModel):
    """Base des schémas d'API : clés JSON en camelCase, lecture depuis les attributs ORM."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
