"""
Owner service.

WHAT: The process-wide service behind the owners API.

WHY: Owners come from configuration and are read on every GET /owners,
so they are built once and shared. Pets live in the database and are
fetched through the pet store on demand. Keeping both behind one object
gives the routes a single collaborator.

HOW: One OwnerService is constructed by create_app and stored on
app.state. Configured owners are held in an immutable tuple; owners added
at runtime go into a separate list guarded by a lock. Pet lookups open a
session from the injected session factory, run one PetDAO query and
return the loaded Pet objects. Store errors are not caught here.
"""

import logging
import threading
from typing import Iterable, List

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from petowners.core.owner_config import OwnerConfiguration
from petowners.dao.owner import OwnerDAO
from petowners.dao.pet import PetDAO
from petowners.models.pet import Pet, PetHealth
from petowners.schemas.owner import OwnerCreate, OwnerResponse


logger = logging.getLogger(__name__)


class OwnerService:
    """
    Service for owners and their pets.

    Example:
        service = OwnerService(configurations, AsyncSessionLocal)
        service.get_initial_owners()
        await service.get_pets_with_health("Barney", PetHealth.VACCINATED)
    """

    def __init__(
        self,
        owner_configurations: Iterable[OwnerConfiguration],
        session_factory: async_sessionmaker[AsyncSession],
    ):
        """
        Initialize the service.

        Args:
            owner_configurations: Configured owner entries, in the order to serve them
            session_factory: Factory for the sessions used by pet lookups
        """
        self._owner_configurations = tuple(owner_configurations)
        self._initial_owners = tuple(
            configuration.create() for configuration in self._owner_configurations
        )
        self._session_factory = session_factory
        self._registered_owners: List[OwnerResponse] = []
        self._lock = threading.Lock()

    # =========================================================================
    # Owners
    # =========================================================================

    def get_initial_owners(self) -> List[OwnerResponse]:
        """Return the owners built from configuration at startup."""
        return list(self._initial_owners)

    def get_owners(self) -> List[OwnerResponse]:
        """
        Return configured owners followed by owners added at runtime.

        WHY: Copying the runtime list under the lock gives callers a
        consistent snapshot while other requests keep adding owners.
        """
        with self._lock:
            registered = list(self._registered_owners)
        return list(self._initial_owners) + registered

    async def add_owner(self, owner: OwnerCreate) -> OwnerResponse:
        """
        Register a new owner.

        WHAT: Persists an owner row and appends the owner to the runtime list.

        WHY: Persisting makes the new owner available as the owner of pets.
        Names are not checked for uniqueness.

        Args:
            owner: Validated owner payload

        Returns:
            The registered owner
        """
        async with self._session_factory() as session:
            async with session.begin():
                await OwnerDAO(session).create(name=owner.name, age=owner.age)

        registered = OwnerResponse(name=owner.name, age=owner.age)
        with self._lock:
            self._registered_owners.append(registered)

        logger.info(f"Registered owner {owner.name!r}")
        return registered

    # =========================================================================
    # Pets
    # =========================================================================

    async def get_pet(self, owner_name: str, pet_name: str) -> Pet:
        """
        Look up one pet by owner name and pet name.

        Raises:
            PetNotFoundError: If the owner has no pet with that name
        """
        logger.debug(f"Looking up pet {pet_name!r} of {owner_name!r}")
        async with self._session_factory() as session:
            return await PetDAO(session).find_by_name_and_owner_name(pet_name, owner_name)

    async def get_pets(self, owner_name: str) -> List[Pet]:
        """Return all pets of an owner."""
        async with self._session_factory() as session:
            return await PetDAO(session).find_by_owner_name(owner_name)

    async def get_pets_with_health(self, owner_name: str, health: PetHealth) -> List[Pet]:
        """Return an owner's pets with the given health status."""
        async with self._session_factory() as session:
            return await PetDAO(session).find_by_owner_name_and_health(owner_name, health)

    # =========================================================================
    # Startup
    # =========================================================================

    async def seed_pets(self) -> int:
        """
        Store the configured owners and their listed pets.

        WHAT: Ensures an owner row exists per configured owner and creates
        each configured pet the owner doesn't already have.

        WHY: Running against a file database restarts with the previous
        rows in place, so seeding only fills in what's missing.

        Returns:
            Number of pets created
        """
        created = 0
        async with self._session_factory() as session:
            async with session.begin():
                owner_dao = OwnerDAO(session)
                pet_dao = PetDAO(session)

                for configuration in self._owner_configurations:
                    owner = await owner_dao.get_or_create(configuration.name, configuration.age)
                    existing = {
                        pet.name for pet in await pet_dao.find_by_owner_name(configuration.name)
                    }

                    for pet_name in configuration.pets:
                        if pet_name in existing:
                            continue
                        await pet_dao.create(name=pet_name, owner=owner)
                        existing.add(pet_name)
                        created += 1

        logger.info(
            f"Seeded {created} pets for {len(self._owner_configurations)} configured owners"
        )
        return created
