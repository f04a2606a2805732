"""Tests for guest CRUD endpoints."""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestCreateGuest:
    async def test_create_success(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.post(
            "/api/v1/guests",
            json={
                "first_name": "Giulia",
                "last_name": "Bianchi",
                "email": "giulia.bianchi@example.com",
                "address": "Via Dante 25, Firenze",
            },
            headers=staff_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["first_name"] == "Giulia"
        assert data["email"] == "giulia.bianchi@example.com"
        assert data["phone"] is None

    async def test_duplicate_email_case_insensitive(
        self, client: AsyncClient, staff_headers: dict, test_guest: dict
    ) -> None:
        response = await client.post(
            "/api/v1/guests",
            json={"first_name": "Other", "last_name": "Person", "email": test_guest["email"].upper()},
            headers=staff_headers,
        )
        assert response.status_code == 409

    async def test_invalid_email(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.post(
            "/api/v1/guests",
            json={"first_name": "Paolo", "last_name": "Verdi", "email": "not-an-email"},
            headers=staff_headers,
        )
        assert response.status_code == 422

    async def test_viewer_forbidden(self, client: AsyncClient, viewer_headers: dict) -> None:
        response = await client.post(
            "/api/v1/guests",
            json={"first_name": "Paolo", "last_name": "Verdi", "email": "paolo@example.com"},
            headers=viewer_headers,
        )
        assert response.status_code == 403


class TestReadGuests:
    async def test_search(self, client: AsyncClient, viewer_headers: dict, test_guest: dict) -> None:
        response = await client.get("/api/v1/guests", params={"search": "ross"}, headers=viewer_headers)
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == test_guest["id"]

        response = await client.get("/api/v1/guests", params={"search": "nobody"}, headers=viewer_headers)
        assert response.json()["total"] == 0

    async def test_get_not_found(self, client: AsyncClient, viewer_headers: dict) -> None:
        response = await client.get(f"/api/v1/guests/{uuid.uuid4()}", headers=viewer_headers)
        assert response.status_code == 404


class TestUpdateDeleteGuest:
    async def test_update_phone(self, client: AsyncClient, staff_headers: dict, test_guest: dict) -> None:
        response = await client.put(
            f"/api/v1/guests/{test_guest['id']}",
            json={"phone": "+39 345 7654321"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert response.json()["phone"] == "+39 345 7654321"

    async def test_update_to_taken_email(self, client: AsyncClient, staff_headers: dict, test_guest: dict) -> None:
        other = await client.post(
            "/api/v1/guests",
            json={"first_name": "Paolo", "last_name": "Verdi", "email": "paolo.verdi@example.com"},
            headers=staff_headers,
        )
        response = await client.put(
            f"/api/v1/guests/{other.json()['id']}",
            json={"email": test_guest["email"]},
            headers=staff_headers,
        )
        assert response.status_code == 409

    async def test_delete_removes_bookings(
        self, client: AsyncClient, staff_headers: dict, test_guest: dict, test_unit: dict
    ) -> None:
        booking = await client.post(
            "/api/v1/bookings",
            json={
                "unit_id": test_unit["id"],
                "guest_id": test_guest["id"],
                "start_date": "2024-09-15",
                "end_date": "2024-09-20",
                "price": "325.00",
            },
            headers=staff_headers,
        )
        assert booking.status_code == 201

        response = await client.delete(f"/api/v1/guests/{test_guest['id']}", headers=staff_headers)
        assert response.status_code == 200

        response = await client.get("/api/v1/bookings", params={"unit_id": test_unit["id"]}, headers=staff_headers)
        assert response.json()["total"] == 0
