"""
Pydantic schemas for pet endpoints.

WHAT: Response schema for the nested /owners/{owner}/pets resource.

WHY: The owner reference is serialized with the owner schema, which has
no pets field, so a pet never embeds its owner's other pets.

HOW: ORM mode reads directly from the SQLAlchemy Pet with its owner
already loaded by the DAO.
"""

from pydantic import BaseModel, ConfigDict, Field

from petowners.models.pet import PetHealth
from petowners.schemas.owner import OwnerResponse


class PetResponse(BaseModel):
    """Pet representation with its owner."""

    id: int = Field(..., description="Pet ID")
    name: str = Field(..., description="Pet name")
    health: PetHealth = Field(..., description="Vaccination status")
    owner: OwnerResponse = Field(..., description="Owner of the pet")

    model_config = ConfigDict(
        from_attributes=True,  # Enable ORM mode for SQLAlchemy models
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Dino",
                "health": "VACCINATED",
                "owner": {"name": "Fred", "age": 35},
            }
        },
    )
