"""
Tests for User Endpoints

Tests cover:
- Reading a profile (the password hash is never exposed)
- Updating names and password
- Deleting an account with password confirmation
- Listing a user's reading lists
- The optional token requirement on resource routes
"""

from fastapi import status

from reading_list_api.config import get_settings
from reading_list_api.models import ReadingList, User


class TestGetUser:
    """Tests for GET /user/{user_id}."""

    def test_get_user(self, client, sample_user):
        response = client.get(f"/user/{sample_user.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "id": sample_user.id,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
        }

    def test_get_user_never_exposes_password(self, client, sample_user):
        data = client.get(f"/user/{sample_user.id}").json()

        assert "password" not in data
        assert "passwordHash" not in data
        assert "password_hash" not in data

    def test_get_user_not_found(self, client):
        response = client.get("/user/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found"


class TestUpdateUser:
    """Tests for PUT /user/{user_id}."""

    def test_update_name_keeps_password(self, client, db_session, sample_user):
        old_hash = sample_user.password_hash

        response = client.put(f"/user/{sample_user.id}", json={"firstName": "Augusta"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": sample_user.id}

        db_session.refresh(sample_user)
        assert sample_user.first_name == "Augusta"
        assert sample_user.last_name == "Lovelace"
        assert sample_user.password_hash == old_hash

    def test_update_password(self, client, sample_user):
        response = client.put(f"/user/{sample_user.id}", json={"password": "analytical-engine"})

        assert response.status_code == status.HTTP_200_OK

        old_login = client.post(
            "/login",
            json={"email": sample_user.email, "password": "abc123"},
        )
        new_login = client.post(
            "/login",
            json={"email": sample_user.email, "password": "analytical-engine"},
        )
        assert old_login.status_code == status.HTTP_401_UNAUTHORIZED
        assert new_login.status_code == status.HTTP_200_OK

    def test_update_with_empty_body(self, client, sample_user):
        response = client.put(f"/user/{sample_user.id}", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_blank_name(self, client, sample_user):
        response = client.put(f"/user/{sample_user.id}", json={"lastName": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_user_not_found(self, client):
        response = client.put("/user/99999", json={"firstName": "Nobody"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteUser:
    """Tests for DELETE /user/{user_id}."""

    def test_delete_with_wrong_password(self, client, db_session, sample_user):
        response = client.request(
            "DELETE",
            f"/user/{sample_user.id}",
            json={"password": "wrong-password"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid password"
        assert db_session.get(User, sample_user.id) is not None

    def test_delete_with_correct_password(self, client, db_session, sample_reading_list):
        user_id = sample_reading_list.user_id

        response = client.request(
            "DELETE",
            f"/user/{user_id}",
            json={"password": "abc123"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": user_id}
        assert client.get(f"/user/{user_id}").status_code == status.HTTP_404_NOT_FOUND
        assert db_session.query(ReadingList).filter_by(user_id=user_id).count() == 0

    def test_delete_without_password(self, client, sample_user):
        response = client.request("DELETE", f"/user/{sample_user.id}", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_user_not_found(self, client):
        response = client.request("DELETE", "/user/99999", json={"password": "abc123"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUserReadingLists:
    """Tests for GET /user/{user_id}/readingLists."""

    def test_list_reading_lists(self, client, sample_reading_list):
        response = client.get(f"/user/{sample_reading_list.user_id}/readingLists")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["id"] == sample_reading_list.id
        assert data[0]["title"] == "Summer 2024"

    def test_list_reading_lists_empty(self, client, sample_user):
        response = client.get(f"/user/{sample_user.id}/readingLists")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_reading_lists_unknown_user(self, client):
        response = client.get("/user/99999/readingLists")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTokenRequirement:
    """Resource routes demand a token when REQUIRE_TOKEN is set."""

    def test_routes_open_by_default(self, client, sample_book):
        response = client.get("/book")

        assert response.status_code == status.HTTP_200_OK

    def test_token_required_when_enabled(self, client, sample_book, monkeypatch):
        monkeypatch.setattr(get_settings(), "require_token", True)

        assert client.get("/book").status_code == status.HTTP_403_FORBIDDEN
        assert client.get("/readingList/statuses").status_code == status.HTTP_403_FORBIDDEN

    def test_token_accepted_when_enabled(self, client, auth_headers, sample_book, monkeypatch):
        monkeypatch.setattr(get_settings(), "require_token", True)

        response = client.get("/book", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK

    def test_invalid_token_rejected_when_enabled(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "require_token", True)

        response = client.get("/book", headers={"token": "forged"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_stays_open_when_enabled(self, client, sample_user, monkeypatch):
        monkeypatch.setattr(get_settings(), "require_token", True)

        response = client.post(
            "/login",
            json={"email": sample_user.email, "password": "abc123"},
        )

        assert response.status_code == status.HTTP_200_OK
