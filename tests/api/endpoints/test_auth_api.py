# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import status


class TestAuthEndpoints:
    def test_login_returns_token(self, test_client, test_user):
        response = test_client.post(
            "/api/auth/login",
            json={"user_name": "testuser", "password": "testpassword123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]

    def test_login_with_wrong_password(self, test_client, test_user):
        response = test_client.post(
            "/api/auth/login",
            json={"user_name": "testuser", "password": "wrong"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_oauth2_form_login(self, test_client, test_user):
        response = test_client.post(
            "/api/auth/oauth2",
            data={"username": "testuser", "password": "testpassword123"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["access_token"]

    def test_protected_route_requires_token(self, test_client):
        response = test_client.get("/api/projects")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_inactive_user_cannot_log_in(self, test_client, test_inactive_user):
        response = test_client.post(
            "/api/auth/login",
            json={"user_name": "inactiveuser", "password": "inactive123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "User not activated"

    def test_health(self, test_client):
        response = test_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
