"""
Pet model.

WHAT: SQLAlchemy model for an animal belonging to exactly one owner.

WHY: Pets are the persisted half of the domain. Each row carries:
1. A store-generated id
2. A name (unique only in combination with the owner, by convention)
3. A required many-to-one reference to an owner
4. A vaccination status

HOW: Uses SQLAlchemy 2.0 typed mappings with an Enum column so the
database rejects anything other than the two known health values.
"""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship, Mapped, mapped_column

from petowners.models.base import Base

if TYPE_CHECKING:
    from petowners.models.owner import Owner


class PetHealth(str, Enum):
    """
    Vaccination state of a pet.

    WHY: A pet is either up to date or needs a visit; new pets are
    assumed VACCINATED unless stated otherwise.
    """

    VACCINATED = "VACCINATED"
    REQUIRES_VACCINATION = "REQUIRES_VACCINATION"


class Pet(Base):
    """Pet owned by exactly one Owner."""

    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("owners.id"), nullable=False
    )
    health: Mapped[PetHealth] = mapped_column(
        SQLEnum(PetHealth, name="pethealth"),
        default=PetHealth.VACCINATED,
        nullable=False,
    )

    owner: Mapped["Owner"] = relationship("Owner", back_populates="pets")

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name={self.name}, health={self.health})>"
