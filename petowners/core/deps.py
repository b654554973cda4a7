"""
FastAPI dependencies.

WHY: Routes receive the shared OwnerService through dependency injection
instead of importing a global, so each application (including the ones
built by tests) serves its own instance.
"""

from fastapi import Request

from petowners.services.owner_service import OwnerService


def get_owner_service(request: Request) -> OwnerService:
    """
    Get the application's OwnerService.

    WHY: create_app builds exactly one OwnerService and stores it on
    app.state; every request resolves to that same instance.

    Usage:
        @router.get("/owners")
        async def list_owners(service: OwnerService = Depends(get_owner_service)):
            return service.get_owners()

    Args:
        request: Current request

    Returns:
        The process-wide OwnerService
    """
    return request.app.state.owner_service
