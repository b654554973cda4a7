"""
Owner and pet API endpoints.

WHY: These endpoints expose the owners resource and the pets nested
under each owner:
1. GET /owners - List owners
2. POST /owners - Register an owner
3. GET /owners/{owner}/pets - List an owner's pets, optionally by health
4. GET /owners/{owner}/pets/{pet} - Get one pet by owner and pet name
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from petowners.core.deps import get_owner_service
from petowners.models.pet import PetHealth
from petowners.schemas.owner import OwnerCreate, OwnerResponse
from petowners.schemas.pet import PetResponse
from petowners.services.owner_service import OwnerService


router = APIRouter(prefix="/owners", tags=["owners"])


@router.get(
    "",
    response_model=List[OwnerResponse],
    status_code=status.HTTP_200_OK,
    summary="List owners",
    description="List configured owners followed by owners registered at runtime",
)
async def list_owners(
    service: OwnerService = Depends(get_owner_service),
) -> List[OwnerResponse]:
    """
    List owners.

    Args:
        service: Shared owner service

    Returns:
        Owner representations (name, age)
    """
    return service.get_owners()


@router.post(
    "",
    response_model=OwnerResponse,
    status_code=status.HTTP_200_OK,
    summary="Register owner",
    description="Register a new owner and echo it back",
)
async def add_owner(
    data: OwnerCreate,
    service: OwnerService = Depends(get_owner_service),
) -> OwnerResponse:
    """
    Register an owner.

    WHY: The body is validated by OwnerCreate before this runs; a blank
    name or a non-integer age never reaches the service.

    Args:
        data: Owner payload
        service: Shared owner service

    Returns:
        The registered owner
    """
    return await service.add_owner(data)


@router.get(
    "/{owner}/pets",
    response_model=List[PetResponse],
    status_code=status.HTTP_200_OK,
    summary="List an owner's pets",
    description="List all pets of an owner, or only those with the given health status",
)
async def list_pets(
    owner: str,
    health: Optional[PetHealth] = Query(None, description="Filter by health status"),
    service: OwnerService = Depends(get_owner_service),
) -> List[PetResponse]:
    """
    List pets for an owner.

    Args:
        owner: Owner name
        health: Optional health filter
        service: Shared owner service

    Returns:
        Pets with their owner
    """
    if health is not None:
        pets = await service.get_pets_with_health(owner, health)
    else:
        pets = await service.get_pets(owner)

    return [PetResponse.model_validate(pet) for pet in pets]


@router.get(
    "/{owner}/pets/{pet}",
    response_model=PetResponse,
    status_code=status.HTTP_200_OK,
    summary="Get pet",
    description="Get a single pet by owner name and pet name",
)
async def get_pet(
    owner: str,
    pet: str,
    service: OwnerService = Depends(get_owner_service),
) -> PetResponse:
    """
    Get one pet.

    Raises:
        PetNotFoundError (404): If the owner has no pet with that name
    """
    found = await service.get_pet(owner, pet)
    return PetResponse.model_validate(found)
