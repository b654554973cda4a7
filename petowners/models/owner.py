"""
Owner model.

WHAT: SQLAlchemy model for a pet's caretaker.

WHY: Pets reference their owner through a foreign key so the pet store
can join on the owner's name. The name is the natural key used by every
lookup; the integer id exists only for the relationship.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column

from petowners.models.base import Base

if TYPE_CHECKING:
    from petowners.models.pet import Pet


class Owner(Base):
    """
    Owner of one or more pets.

    Names are not unique: owners registered at runtime may repeat a
    configured name, and lookups by name then match all of them.
    """

    __tablename__ = "owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    pets: Mapped[List["Pet"]] = relationship("Pet", back_populates="owner")

    def __repr__(self) -> str:
        return f"<Owner(id={self.id}, name={self.name}, age={self.age})>"
