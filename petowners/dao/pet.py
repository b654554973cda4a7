"""
Pet Data Access Object.

WHAT: DAO for creating pets and looking them up by owner name.

WHY: The API addresses pets through their owner's name, never by id.
Every finder joins the owner table and loads the owner eagerly so the
response can include the owner representation without another query.

HOW: Uses SQLAlchemy 2.0 async selects joining Pet.owner and populating
the relationship from that same join (contains_eager).
Name comparisons are exact and case-sensitive.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import select, Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from petowners.core.exceptions import PetNotFoundError, ValidationError
from petowners.dao.base import BaseDAO
from petowners.models.owner import Owner
from petowners.models.pet import Pet, PetHealth


logger = logging.getLogger(__name__)


def _coerce_health(health: Any) -> PetHealth:
    try:
        return PetHealth(health)
    except ValueError:
        raise ValidationError(
            message=f"Unknown health status: {health}",
            field="health",
            allowed=[h.value for h in PetHealth],
        )


class PetDAO(BaseDAO[Pet]):
    """
    Data Access Object for Pet operations.

    WHAT: The pet store: create plus the three owner-scoped finders.

    HOW: All methods are async and use the session for transactions;
    committing is left to the caller.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize PetDAO with database session.

        Args:
            session: AsyncSession for database operations
        """
        super().__init__(Pet, session)

    def _owner_query(self, owner_name: str) -> Select:
        return (
            select(Pet)
            .join(Pet.owner)
            .options(contains_eager(Pet.owner))
            .where(Owner.name == owner_name)
        )

    # =========================================================================
    # CRUD Operations
    # =========================================================================

    async def create(
        self,
        name: str,
        owner: Optional[Owner],
        health: Any = PetHealth.VACCINATED,
    ) -> Pet:
        """
        Create a new pet for an owner.

        Args:
            name: Pet name
            owner: Owning Owner instance (required)
            health: PetHealth value or its string form

        Returns:
            Created Pet with id assigned and owner loaded

        Raises:
            ValidationError: If owner is missing or health is unknown
        """
        if owner is None:
            raise ValidationError(
                message="A pet must have an owner",
                field="owner",
                pet_name=name,
            )

        health = _coerce_health(health)

        pet = Pet(name=name, owner=owner, health=health)
        self.session.add(pet)
        await self.session.flush()
        await self.session.refresh(pet, attribute_names=["id", "name", "health"])

        logger.debug(f"Created pet #{pet.id} {name!r} for owner {owner.name!r}")
        return pet

    # =========================================================================
    # Finders
    # =========================================================================

    async def find_by_owner_name(self, owner_name: str) -> List[Pet]:
        """
        Return every pet whose owner has this name.

        Args:
            owner_name: Exact owner name

        Returns:
            Pets ordered by id, empty list if none
        """
        result = await self.session.execute(
            self._owner_query(owner_name).order_by(Pet.id)
        )
        return list(result.scalars().all())

    async def find_by_name_and_owner_name(self, pet_name: str, owner_name: str) -> Pet:
        """
        Return the pet with this name belonging to this owner.

        WHY: Raising instead of returning None keeps "no such pet" distinct
        from a valid Pet all the way up to the 404 response.

        Args:
            pet_name: Exact pet name
            owner_name: Exact owner name

        Returns:
            Matching Pet (lowest id if several share the name)

        Raises:
            PetNotFoundError: If no pet matches
        """
        result = await self.session.execute(
            self._owner_query(owner_name)
            .where(Pet.name == pet_name)
            .order_by(Pet.id)
            .limit(1)
        )
        pet = result.scalars().first()

        if pet is None:
            raise PetNotFoundError(
                message=f"Pet {pet_name!r} not found for owner {owner_name!r}",
                owner=owner_name,
                pet=pet_name,
            )

        return pet

    async def find_by_owner_name_and_health(
        self,
        owner_name: str,
        health: Any,
    ) -> List[Pet]:
        """
        Return the owner's pets with the given health status.

        Args:
            owner_name: Exact owner name
            health: PetHealth value or its string form

        Returns:
            Pets ordered by id, empty list if none

        Raises:
            ValidationError: If health is unknown
        """
        result = await self.session.execute(
            self._owner_query(owner_name)
            .where(Pet.health == _coerce_health(health))
            .order_by(Pet.id)
        )
        return list(result.scalars().all())
