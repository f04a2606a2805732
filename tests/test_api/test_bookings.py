"""Tests for booking CRUD endpoints and the overlap guard behind them."""

import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _book(
    client: AsyncClient,
    headers: dict,
    unit_id: str,
    guest_id: str,
    start: str,
    end: str,
    price: str = "560.00",
):
    return await client.post(
        "/api/v1/bookings",
        json={
            "unit_id": unit_id,
            "guest_id": guest_id,
            "start_date": start,
            "end_date": end,
            "price": price,
            "source": "Booking.com",
        },
        headers=headers,
    )


@pytest_asyncio.fixture
async def august_booking(client: AsyncClient, staff_headers: dict, test_unit: dict, test_guest: dict) -> dict:
    response = await _book(client, staff_headers, test_unit["id"], test_guest["id"], "2024-08-01", "2024-08-07")
    assert response.status_code == 201, response.text
    return response.json()


@pytest_asyncio.fixture
async def garden_suite(client: AsyncClient, admin_headers: dict, test_property: dict) -> dict:
    response = await client.post(
        "/api/v1/units",
        json={
            "property_id": test_property["id"],
            "name": "Garden Suite",
            "unit_type": "APARTMENT",
            "beds": 4,
            "baths": 2,
            "surface": 60,
            "base_price": "150.00",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


# ---------------------------------------------------------------------------
# POST /api/v1/bookings
# ---------------------------------------------------------------------------


class TestCreateBooking:
    async def test_create_success(
        self, client: AsyncClient, staff_headers: dict, test_unit: dict, test_guest: dict
    ) -> None:
        response = await _book(client, staff_headers, test_unit["id"], test_guest["id"], "2024-08-01", "2024-08-07")
        assert response.status_code == 201
        data = response.json()
        assert data["unit_id"] == test_unit["id"]
        assert data["guest_id"] == test_guest["id"]
        assert data["start_date"] == "2024-08-01"
        assert data["end_date"] == "2024-08-07"
        assert float(data["price"]) == 560.00
        assert data["unit"]["name"] == "Deluxe Room"
        assert data["guest"]["email"] == test_guest["email"]

    async def test_overlap_rejected(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        response = await _book(
            client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-08-05", "2024-08-10"
        )
        assert response.status_code == 409
        assert response.json()["detail"] == "Dates conflict with an existing booking"

    async def test_checkin_on_previous_checkout_day_rejected(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        response = await _book(
            client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-08-07", "2024-08-10"
        )
        assert response.status_code == 409

    async def test_next_day_is_free(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        response = await _book(
            client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-08-08", "2024-08-10"
        )
        assert response.status_code == 201

    async def test_same_dates_on_another_unit_allowed(
        self,
        client: AsyncClient,
        admin_headers: dict,
        staff_headers: dict,
        august_booking: dict,
        test_property: dict,
        test_guest: dict,
    ) -> None:
        other_unit = await client.post(
            "/api/v1/units",
            json={"property_id": test_property["id"], "name": "Premium Suite"},
            headers=admin_headers,
        )
        response = await _book(
            client, staff_headers, other_unit.json()["id"], test_guest["id"], "2024-08-01", "2024-08-07"
        )
        assert response.status_code == 201

    async def test_end_before_start_rejected(
        self, client: AsyncClient, staff_headers: dict, test_unit: dict, test_guest: dict
    ) -> None:
        response = await _book(client, staff_headers, test_unit["id"], test_guest["id"], "2024-08-07", "2024-08-01")
        assert response.status_code == 422

    async def test_unknown_unit(self, client: AsyncClient, staff_headers: dict, test_guest: dict) -> None:
        response = await _book(client, staff_headers, str(uuid.uuid4()), test_guest["id"], "2024-08-01", "2024-08-07")
        assert response.status_code == 404

    async def test_unknown_guest(self, client: AsyncClient, staff_headers: dict, test_unit: dict) -> None:
        response = await _book(client, staff_headers, test_unit["id"], str(uuid.uuid4()), "2024-08-01", "2024-08-07")
        assert response.status_code == 404

    async def test_viewer_forbidden(
        self, client: AsyncClient, viewer_headers: dict, test_unit: dict, test_guest: dict
    ) -> None:
        response = await _book(client, viewer_headers, test_unit["id"], test_guest["id"], "2024-08-01", "2024-08-07")
        assert response.status_code == 403


# ---------------------------------------------------------------------------
# GET /api/v1/bookings
# ---------------------------------------------------------------------------


class TestListBookings:
    async def test_window_filter(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        await _book(client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-09-15", "2024-09-20")

        response = await client.get(
            "/api/v1/bookings",
            params={"start_date": "2024-08-06", "end_date": "2024-08-31"},
            headers=staff_headers,
        )
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == august_booking["id"]

    async def test_property_filter(
        self, client: AsyncClient, viewer_headers: dict, august_booking: dict, test_property: dict
    ) -> None:
        response = await client.get(
            "/api/v1/bookings", params={"property_id": test_property["id"]}, headers=viewer_headers
        )
        assert response.json()["total"] == 1

        response = await client.get(
            "/api/v1/bookings", params={"property_id": str(uuid.uuid4())}, headers=viewer_headers
        )
        assert response.json()["total"] == 0

    async def test_ordered_by_start_date(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        await _book(client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-07-01", "2024-07-03")

        response = await client.get(
            "/api/v1/bookings", params={"unit_id": august_booking["unit_id"]}, headers=staff_headers
        )
        starts = [b["start_date"] for b in response.json()["items"]]
        assert starts == ["2024-07-01", "2024-08-01"]


# ---------------------------------------------------------------------------
# PUT /api/v1/bookings/{id}
# ---------------------------------------------------------------------------


class TestUpdateBooking:
    async def test_extending_own_dates_is_not_a_conflict(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"start_date": "2024-08-02", "end_date": "2024-08-09"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["start_date"] == "2024-08-02"
        assert data["end_date"] == "2024-08-09"

    async def test_moving_onto_another_booking_conflicts(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        later = await _book(
            client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-08-10", "2024-08-12"
        )

        response = await client.put(
            f"/api/v1/bookings/{later.json()['id']}",
            json={"start_date": "2024-08-06"},
            headers=staff_headers,
        )
        assert response.status_code == 409

    async def test_effective_dates_validated(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"end_date": "2024-07-30"},
            headers=staff_headers,
        )
        assert response.status_code == 422

    async def test_price_only_update_skips_guard(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"price": "600.00", "notes": "Late check-out"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        assert float(response.json()["price"]) == 600.00

    async def test_reassign_to_free_unit(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict, garden_suite: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"unit_id": garden_suite["id"]},
            headers=staff_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["unit_id"] == garden_suite["id"]
        assert data["start_date"] == "2024-08-01"

    async def test_reassign_onto_occupied_unit_conflicts(
        self,
        client: AsyncClient,
        staff_headers: dict,
        august_booking: dict,
        garden_suite: dict,
        test_guest: dict,
    ) -> None:
        suite_booking = await _book(
            client, staff_headers, garden_suite["id"], test_guest["id"], "2024-08-05", "2024-08-06"
        )
        assert suite_booking.status_code == 201

        response = await client.put(
            f"/api/v1/bookings/{suite_booking.json()['id']}",
            json={"unit_id": august_booking["unit_id"]},
            headers=staff_headers,
        )
        assert response.status_code == 409

        response = await client.get(f"/api/v1/bookings/{suite_booking.json()['id']}", headers=staff_headers)
        assert response.json()["unit_id"] == garden_suite["id"]

    async def test_reassign_to_unknown_unit(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"unit_id": str(uuid.uuid4())},
            headers=staff_headers,
        )
        assert response.status_code == 404

    async def test_null_unit_and_guest_are_left_unchanged(
        self, client: AsyncClient, staff_headers: dict, august_booking: dict
    ) -> None:
        response = await client.put(
            f"/api/v1/bookings/{august_booking['id']}",
            json={"unit_id": None, "guest_id": None, "price": "1.00"},
            headers=staff_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["unit_id"] == august_booking["unit_id"]
        assert data["guest_id"] == august_booking["guest_id"]
        assert float(data["price"]) == 1.00

    async def test_not_found(self, client: AsyncClient, staff_headers: dict) -> None:
        response = await client.put(f"/api/v1/bookings/{uuid.uuid4()}", json={"price": "1.00"}, headers=staff_headers)
        assert response.status_code == 404


# ---------------------------------------------------------------------------
# DELETE /api/v1/bookings/{id}
# ---------------------------------------------------------------------------


class TestDeleteBooking:
    async def test_staff_cannot_delete(self, client: AsyncClient, staff_headers: dict, august_booking: dict) -> None:
        response = await client.delete(f"/api/v1/bookings/{august_booking['id']}", headers=staff_headers)
        assert response.status_code == 403

    async def test_admin_deletes_and_frees_dates(
        self, client: AsyncClient, admin_headers: dict, staff_headers: dict, august_booking: dict, test_guest: dict
    ) -> None:
        response = await client.delete(f"/api/v1/bookings/{august_booking['id']}", headers=admin_headers)
        assert response.status_code == 200

        response = await _book(
            client, staff_headers, august_booking["unit_id"], test_guest["id"], "2024-08-01", "2024-08-07"
        )
        assert response.status_code == 201
