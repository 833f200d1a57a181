"""
Integration tests for the maintenance endpoints.

Requests go through the full middleware chain, routes, services and the
in-memory database.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import pytest
from httpx import AsyncClient

from carmaint.repositories.maintenance_record import MaintenanceRecordRepository


OIL_CHANGE = {"date": "2024-01-15", "description": "Oil change", "cost": 49.99}


@pytest.mark.anyio
class TestMaintenanceAccess:

    async def test_list_requires_authentication(self, client: AsyncClient):
        response = await client.get("/maintenance")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"].startswith("Basic")

    async def test_create_requires_authentication(self, client: AsyncClient, car):
        response = await client.post(f"/maintenance/car/{car.id}", json=OIL_CHANGE)

        assert response.status_code == 401

    async def test_list_with_basic_auth(self, client: AsyncClient, auth_headers):
        response = await client.get("/maintenance", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == []


@pytest.mark.anyio
class TestCreateMaintenanceRecord:

    async def test_end_to_end(self, client: AsyncClient, auth_headers):
        """
        Arrange: Create car 1 through the API
        Act: Add an oil change to it, then list all records
        Assert: Created record embeds the car and shows up in the listing
        """
        # Arrange
        car_response = await client.post(
            "/cars",
            json={"make": "Toyota", "model": "Corolla", "year": 2018},
            headers=auth_headers,
        )
        assert car_response.status_code == 201
        car_id = car_response.json()["id"]
        assert car_id == 1

        # Act
        created = await client.post(
            f"/maintenance/car/{car_id}", json=OIL_CHANGE, headers=auth_headers
        )
        listing = await client.get("/maintenance", headers=auth_headers)

        # Assert
        assert created.status_code == 201
        body = created.json()
        assert body["id"] is not None
        assert body["date"] == "2024-01-15"
        assert body["description"] == "Oil change"
        assert body["cost"] == pytest.approx(49.99)
        assert body["car"] == {"id": 1, "make": "Toyota", "model": "Corolla", "year": 2018}

        assert listing.status_code == 200
        assert body in listing.json()

    async def test_unknown_car_returns_404_and_persists_nothing(
        self, client: AsyncClient, auth_headers, async_session
    ):
        # Arrange
        before = len(await MaintenanceRecordRepository(async_session).find_all())

        # Act
        response = await client.post(
            "/maintenance/car/999", json=OIL_CHANGE, headers=auth_headers
        )

        # Assert
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "RESOURCE_NOT_FOUND"
        assert "999" in error["message"]
        assert len(await MaintenanceRecordRepository(async_session).find_all()) == before

    async def test_car_in_body_is_ignored(self, client: AsyncClient, auth_headers, car):
        # Arrange
        body = {**OIL_CHANGE, "car": {"id": 12345}}

        # Act
        response = await client.post(
            f"/maintenance/car/{car.id}", json=body, headers=auth_headers
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["car"]["id"] == car.id

    @pytest.mark.parametrize(
        "body",
        [
            {"description": "Oil change", "cost": 10},
            {"date": "not-a-date", "description": "Oil change", "cost": 10},
            {"date": "2024-01-15", "description": "", "cost": 10},
            {"date": "2024-01-15", "description": "   ", "cost": 10},
            {"date": "2024-01-15", "description": "x" * 256, "cost": 10},
            {"date": "2024-01-15", "description": "Oil change", "cost": -1},
        ],
    )
    async def test_invalid_body_returns_422(self, client: AsyncClient, auth_headers, car, body):
        response = await client.post(
            f"/maintenance/car/{car.id}", json=body, headers=auth_headers
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("cost", ["Infinity", "-Infinity", "NaN"])
    async def test_non_finite_cost_returns_422(
        self, client: AsyncClient, auth_headers, car, async_session, cost
    ):
        # Arrange
        body = f'{{"date": "2024-01-15", "description": "Oil change", "cost": {cost}}}'
        headers = {**auth_headers, "Content-Type": "application/json"}

        # Act
        response = await client.post(
            f"/maintenance/car/{car.id}", content=body, headers=headers
        )

        # Assert
        assert response.status_code == 422
        assert await MaintenanceRecordRepository(async_session).find_all() == []

    async def test_non_integer_car_id_returns_422(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/maintenance/car/abc", json=OIL_CHANGE, headers=auth_headers
        )

        assert response.status_code == 422

    async def test_list_grows_with_each_create(self, client: AsyncClient, auth_headers, car):
        # Act
        for i in range(3):
            await client.post(
                f"/maintenance/car/{car.id}",
                json={**OIL_CHANGE, "description": f"Service {i}"},
                headers=auth_headers,
            )
        listing = (await client.get("/maintenance", headers=auth_headers)).json()

        # Assert
        assert len(listing) == 3
        assert len({r["id"] for r in listing}) == 3
        assert all(r["car"]["id"] == car.id for r in listing)

    async def test_repeated_reads_return_the_same_records(
        self, client: AsyncClient, auth_headers, car
    ):
        # Arrange
        for description in ("Oil change", "Brake pads"):
            await client.post(
                f"/maintenance/car/{car.id}",
                json={**OIL_CHANGE, "description": description},
                headers=auth_headers,
            )

        # Act
        first = await client.get("/maintenance", headers=auth_headers)
        second = await client.get("/maintenance", headers=auth_headers)

        # Assert
        assert first.status_code == second.status_code == 200
        assert len(first.json()) == 2
        assert first.json() == second.json()
