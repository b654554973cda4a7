"""
Owner Data Access Object.

WHY: OwnerDAO provides database operations for the Owner model. Owners
are looked up by name because that is how the API and the configuration
address them.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petowners.dao.base import BaseDAO
from petowners.models.owner import Owner


class OwnerDAO(BaseDAO[Owner]):
    """Data Access Object for Owner model."""

    def __init__(self, session: AsyncSession):
        """Initialize OwnerDAO with session."""
        super().__init__(Owner, session)

    async def get_by_name(self, name: str) -> Optional[Owner]:
        """
        Retrieve the first owner with an exact name match.

        WHY: Names are not unique, so the oldest row wins. That keeps
        seeding stable when an owner with the same name is added later.

        Args:
            name: Owner name (case-sensitive)

        Returns:
            Owner instance if found, None otherwise
        """
        result = await self.session.execute(
            select(Owner).where(Owner.name == name).order_by(Owner.id).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str, age: int = 0) -> Owner:
        """
        Return the owner with this name, creating it if missing.

        WHY: Startup seeding runs on every boot; with a file database the
        configured owners already exist after the first run.
        """
        owner = await self.get_by_name(name)
        if owner is not None:
            return owner
        return await self.create(name=name, age=age)
