"""Tests for the auth dependencies, exercised through real routes."""

import uuid
from datetime import timedelta

from httpx import AsyncClient

from rentledger.auth.jwt import create_access_token, create_token_pair
from rentledger.models.user import User


class TestGetCurrentUser:
    async def test_missing_token_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code in (401, 403)

    async def test_expired_token_rejected(self, client: AsyncClient, staff_user: User):
        token = create_access_token({"sub": str(staff_user.id)}, expires_delta=timedelta(seconds=-1))
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_invalid_token_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not.a.valid.jwt"})
        assert response.status_code == 401

    async def test_refresh_token_cannot_call_api(self, client: AsyncClient, staff_user: User):
        tokens = create_token_pair(str(staff_user.id))
        response = await client.get(
            "/api/v1/auth/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
        )
        assert response.status_code == 401

    async def test_unknown_user_rejected(self, client: AsyncClient):
        token = create_access_token({"sub": str(uuid.uuid4())})
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_non_uuid_subject_rejected(self, client: AsyncClient):
        token = create_access_token({"sub": "not-a-uuid"})
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_inactive_user_forbidden(self, client: AsyncClient, inactive_user: User):
        token = create_access_token({"sub": str(inactive_user.id)})
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403


class TestRequirePermission:
    async def test_viewer_can_read(self, client: AsyncClient, viewer_headers: dict):
        response = await client.get("/api/v1/properties", headers=viewer_headers)
        assert response.status_code == 200

    async def test_viewer_cannot_write(self, client: AsyncClient, viewer_headers: dict):
        response = await client.post("/api/v1/properties", json={"name": "Nope"}, headers=viewer_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Not allowed"

    async def test_role_is_read_from_database_not_token(
        self, client: AsyncClient, viewer_user: User
    ):
        """A forged role claim does not grant anything."""
        token = create_access_token({"sub": str(viewer_user.id), "role": "ADMIN"})
        response = await client.post(
            "/api/v1/properties", json={"name": "Nope"}, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 403
