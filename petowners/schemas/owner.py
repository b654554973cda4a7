"""
Pydantic schemas for owner endpoints.

WHY: Schemas define request/response contracts for the owners resource,
providing validation, documentation, and type safety.
"""

from pydantic import BaseModel, ConfigDict, Field


class OwnerCreate(BaseModel):
    """
    Owner registration request schema.

    WHY: Validates the POST /owners body. A blank name is rejected; age is
    a plain integer with no range check beyond being non-negative.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Owner name",
    )
    age: int = Field(
        default=0,
        ge=0,
        description="Owner age in years",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Wilma",
                "age": 33,
            }
        }
    )


class OwnerResponse(BaseModel):
    """
    Owner representation.

    WHY: Frozen so the configuration-derived owners held by the service
    can be shared between concurrent requests without copying.
    """

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={"example": {"name": "Fred", "age": 35}},
    )

    name: str = Field(..., description="Owner name")
    age: int = Field(0, description="Owner age in years")
