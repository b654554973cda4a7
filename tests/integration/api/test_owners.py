"""
Integration tests for Owners API.

WHAT: Tests for the owners endpoints and the pets nested under them.

WHY: These endpoints are the whole public surface:
1. Owner listing reflects configuration plus runtime registrations
2. Pet lookups are by exact owner and pet name
3. Health filtering and its validation
4. Error responses use the common JSON envelope

HOW: Uses pytest-asyncio with AsyncClient for HTTP testing.
"""

import pytest
from fastapi import Depends
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from petowners.core.deps import get_owner_service
from petowners.models.pet import PetHealth
from petowners.services.owner_service import OwnerService
from tests.factories import OwnerFactory, PetFactory


class TestListOwners:
    """Integration tests for GET /owners."""

    @pytest.mark.asyncio
    async def test_list_configured_owners(self, client: AsyncClient):
        """
        Test listing the configured owners.

        WHY: Owners are built from configuration and served as name/age.
        """
        response = await client.get("/owners")

        assert response.status_code == 200
        assert response.json() == [
            {"name": "Fred", "age": 35},
            {"name": "Barney", "age": 30},
        ]

    @pytest.mark.asyncio
    async def test_list_includes_registered_owners(self, client: AsyncClient):
        """Test that owners added with POST are listed after configured ones."""
        await client.post("/owners", json={"name": "Wilma", "age": 33})

        response = await client.get("/owners")

        assert [owner["name"] for owner in response.json()] == ["Fred", "Barney", "Wilma"]


class TestAddOwner:
    """Integration tests for POST /owners."""

    @pytest.mark.asyncio
    async def test_add_owner_echoes(self, client: AsyncClient):
        """Test that the registered owner is returned."""
        response = await client.post("/owners", json={"name": "Wilma", "age": 33})

        assert response.status_code == 200
        assert response.json() == {"name": "Wilma", "age": 33}

    @pytest.mark.asyncio
    async def test_add_owner_defaults_age(self, client: AsyncClient):
        """Test that age defaults to 0."""
        response = await client.post("/owners", json={"name": "Pebbles"})

        assert response.status_code == 200
        assert response.json()["age"] == 0

    @pytest.mark.asyncio
    async def test_add_owner_keeps_configured_owners(self, client: AsyncClient, app):
        """Test that registration does not change the configured owners."""
        await client.post("/owners", json={"name": "Wilma", "age": 33})

        service = app.state.owner_service
        assert [owner.name for owner in service.get_initial_owners()] == ["Fred", "Barney"]

    @pytest.mark.asyncio
    async def test_registered_owner_can_have_pets(
        self, client: AsyncClient, app, db_session: AsyncSession
    ):
        """Test that a registered owner is stored and can own pets."""
        from petowners.dao.owner import OwnerDAO

        await client.post("/owners", json={"name": "Wilma", "age": 33})
        wilma = await OwnerDAO(db_session).get_by_name("Wilma")
        await PetFactory.create(db_session, name="Dino", owner=wilma)

        response = await client.get("/owners/Wilma/pets")

        assert [pet["name"] for pet in response.json()] == ["Dino"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "", "age": 33},
            {"age": 33},
            {"name": "Wilma", "age": "old"},
            {"name": "Wilma", "age": -1},
        ],
    )
    async def test_add_owner_invalid(self, client: AsyncClient, payload):
        """Test that invalid bodies are rejected with 400."""
        response = await client.post("/owners", json=payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["details"]["errors"]

    @pytest.mark.asyncio
    async def test_invalid_owner_not_registered(self, client: AsyncClient):
        """Test that a rejected body leaves the owner list unchanged."""
        await client.post("/owners", json={"name": ""})

        response = await client.get("/owners")

        assert len(response.json()) == 2


class TestListPets:
    """Integration tests for GET /owners/{owner}/pets."""

    @pytest.mark.asyncio
    async def test_list_pets(self, client: AsyncClient, db_session: AsyncSession):
        """Test listing an owner's pets with owner embedded."""
        await PetFactory.create(db_session, name="Rex", owner_name="Barney")

        response = await client.get("/owners/Barney/pets")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "Rex"
        assert data[0]["health"] == "VACCINATED"
        assert data[0]["owner"] == {"name": "Barney", "age": 30}
        assert isinstance(data[0]["id"], int)

    @pytest.mark.asyncio
    async def test_list_seeded_pets(self, client: AsyncClient, app):
        """Test that configured pets are served after seeding."""
        await app.state.owner_service.seed_pets()

        response = await client.get("/owners/Fred/pets")

        assert [pet["name"] for pet in response.json()] == ["Dino", "Baby Puss"]

    @pytest.mark.asyncio
    async def test_unknown_owner_has_no_pets(self, client: AsyncClient):
        """Test that an unknown owner gives an empty list, not 404."""
        response = await client.get("/owners/NoOne/pets")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "health,expected",
        [("VACCINATED", 1), ("REQUIRES_VACCINATION", 0)],
    )
    async def test_filter_by_health(
        self, client: AsyncClient, db_session: AsyncSession, health, expected
    ):
        """Test the health filter for Barney's vaccinated Rex."""
        await PetFactory.create(
            db_session, name="Rex", owner_name="Barney", health=PetHealth.VACCINATED
        )

        response = await client.get("/owners/Barney/pets", params={"health": health})

        assert response.status_code == 200
        assert len(response.json()) == expected

    @pytest.mark.asyncio
    async def test_filter_returns_matching_pets_only(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Test that only pets with the requested health are returned."""
        barney = await OwnerFactory.create(db_session, name="Barney", age=30)
        await PetFactory.create(db_session, name="Rex", owner=barney)
        await PetFactory.create(
            db_session, name="Hoppy", owner=barney, health=PetHealth.REQUIRES_VACCINATION
        )

        response = await client.get(
            "/owners/Barney/pets", params={"health": "REQUIRES_VACCINATION"}
        )

        assert [pet["name"] for pet in response.json()] == ["Hoppy"]

    @pytest.mark.asyncio
    async def test_invalid_health(self, client: AsyncClient):
        """Test that an unknown health value is rejected with 400."""
        response = await client.get("/owners/Barney/pets", params={"health": "HEALTHY"})

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["details"]["errors"]]
        assert "query.health" in fields


class TestGetPet:
    """Integration tests for GET /owners/{owner}/pets/{pet}."""

    @pytest.mark.asyncio
    async def test_get_pet(self, client: AsyncClient, db_session: AsyncSession):
        """Test fetching Rex owned by Barney."""
        await PetFactory.create(db_session, name="Rex", owner_name="Barney")

        response = await client.get("/owners/Barney/pets/Rex")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Rex"
        assert data["owner"]["name"] == "Barney"

    @pytest.mark.asyncio
    async def test_get_pet_with_space_in_name(self, client: AsyncClient, app):
        """Test that path segments are URL-decoded."""
        await app.state.owner_service.seed_pets()

        response = await client.get("/owners/Fred/pets/Baby%20Puss")

        assert response.status_code == 200
        assert response.json()["name"] == "Baby Puss"

    @pytest.mark.asyncio
    async def test_get_pet_wrong_owner(self, client: AsyncClient, db_session: AsyncSession):
        """
        Test that a pet is not found under another owner.

        WHY: Lookup requires both names to match.
        """
        await PetFactory.create(db_session, name="Rex", owner_name="Barney")

        response = await client.get("/owners/NoOne/pets/Rex")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "PetNotFoundError"
        assert data["details"] == {"owner": "NoOne", "pet": "Rex"}

    @pytest.mark.asyncio
    async def test_get_pet_is_case_sensitive(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        """Test that names must match exactly."""
        await PetFactory.create(db_session, name="Rex", owner_name="Barney")

        response = await client.get("/owners/Barney/pets/rex")

        assert response.status_code == 404


class TestServiceWiring:
    """Tests for the application-level wiring."""

    def test_single_service_per_app(self, app):
        """Test that every request resolves the same service instance."""

        class _Request:
            def __init__(self, app):
                self.app = app

        assert get_owner_service(_Request(app)) is get_owner_service(_Request(app))
        assert get_owner_service(_Request(app)) is app.state.owner_service

    @pytest.mark.asyncio
    async def test_same_service_across_requests(self, client: AsyncClient, app):
        """Test that separate HTTP requests are served by one service instance."""

        @app.get("/_service-id")
        async def service_id(service: OwnerService = Depends(get_owner_service)) -> dict:
            return {"id": id(service)}

        first = await client.get("/_service-id")
        second = await client.get("/_service-id")

        assert first.json()["id"] == second.json()["id"] == id(app.state.owner_service)

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        """Test the liveness endpoint."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        """Test the API information endpoint."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient):
        """Test that responses carry a request ID, echoing the client's."""
        generated = await client.get("/owners")
        echoed = await client.get("/owners", headers={"X-Request-ID": "trace-7"})

        assert generated.headers["X-Request-ID"]
        assert echoed.headers["X-Request-ID"] == "trace-7"

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        """Test that unknown paths use the error envelope."""
        response = await client.get("/cats")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTPException"
