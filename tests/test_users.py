"""User administration and self-service profile updates."""

import pytest


class TestProfileUpdate:
    async def test_other_user_is_forbidden_regardless_of_payload(self, client, user, make_member):
        other = await make_member(username="bystander")
        for payload in ({"username": "validname1"}, {"username": "BAD NAME"}, {}):
            response = await client.put(f"/api/user/update/{user.id}", json=payload, headers=other.headers)
            assert response.status_code == 403

    async def test_owner_updates_username(self, client, user):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"username": "freshname7"},
            headers=user.headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "freshname7"
        assert body["email"] == "plainuser@example.com"

    async def test_admin_may_update_anyone(self, client, user, admin):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"profile_picture": "https://example.com/p.png"},
            headers=admin.headers,
        )
        assert response.status_code == 200
        assert response.json()["profile_picture"] == "https://example.com/p.png"

    @pytest.mark.parametrize(
        "username",
        ["short", "x" * 21, "has space1", "UpperCase1", "dots.and.1"],
    )
    async def test_username_shape_rules(self, client, user, username):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"username": username},
            headers=user.headers,
        )
        assert response.status_code == 400

    async def test_username_taken_by_another_account(self, client, user, make_member):
        await make_member(username="takenname")
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"username": "takenname"},
            headers=user.headers,
        )
        assert response.status_code == 409

    async def test_email_of_another_account(self, client, user, admin):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"email": "chiefadmin@example.com"},
            headers=user.headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Email is already in use"

    async def test_keeping_own_email_is_fine(self, client, user):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"email": "PlainUser@example.com"},
            headers=user.headers,
        )
        assert response.status_code == 200

    async def test_password_change_allows_new_signin(self, client, user):
        response = await client.put(
            f"/api/user/update/{user.id}",
            json={"password": "brand-new-pass"},
            headers=user.headers,
        )
        assert response.status_code == 200
        response = await client.post(
            "/api/auth/signin",
            json={"email": "plainuser@example.com", "password": "brand-new-pass"},
        )
        assert response.status_code == 200

    async def test_short_password(self, client, user):
        response = await client.put(f"/api/user/update/{user.id}", json={"password": "123"}, headers=user.headers)
        assert response.status_code == 400

    async def test_password_over_bcrypt_limit(self, client, user):
        response = await client.put(
            f"/api/user/update/{user.id}", json={"password": "y" * 73}, headers=user.headers
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_input"

        response = await client.post(
            "/api/auth/signin",
            json={"email": "plainuser@example.com", "password": user.password},
        )
        assert response.status_code == 200

    async def test_malformed_email(self, client, user):
        response = await client.put(
            f"/api/user/update/{user.id}", json={"email": "plain@example..com"}, headers=user.headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Please enter a valid email"

    async def test_empty_payload(self, client, user):
        response = await client.put(f"/api/user/update/{user.id}", json={}, headers=user.headers)
        assert response.status_code == 400


class TestAdministration:
    async def test_list_users_is_admin_only(self, client, user, admin):
        response = await client.get("/api/user/getusers", headers=user.headers)
        assert response.status_code == 403

        response = await client.get("/api/user/getusers", params={"sort": "asc"}, headers=admin.headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total_users"] == 2
        assert body["last_month_users"] == 2
        assert [entry["username"] for entry in body["users"]] == ["plainuser", "chiefadmin"]
        assert all("password_hash" not in entry for entry in body["users"])

    async def test_change_role(self, client, user, admin, container):
        response = await client.put(f"/api/user/update-role/{user.id}", json={"role": "admin"}, headers=admin.headers)
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

        response = await client.put(f"/api/user/update-role/{user.id}", json={"role": "owner"}, headers=admin.headers)
        assert response.status_code == 400

    async def test_change_role_requires_admin(self, client, user):
        response = await client.put(f"/api/user/update-role/{user.id}", json={"role": "admin"}, headers=user.headers)
        assert response.status_code == 403

    async def test_change_role_of_missing_user(self, client, admin):
        response = await client.put("/api/user/update-role/missing", json={"role": "user"}, headers=admin.headers)
        assert response.status_code == 404

    async def test_deactivate_then_signin_is_forbidden(self, client, user, admin):
        response = await client.put(
            f"/api/user/update-status/{user.id}",
            json={"is_active": False},
            headers=admin.headers,
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

        response = await client.post(
            "/api/auth/signin",
            json={"email": "plainuser@example.com", "password": user.password},
        )
        assert response.status_code == 403

    async def test_delete_user(self, client, user, admin):
        response = await client.delete(f"/api/user/delete/{user.id}", headers=user.headers)
        assert response.status_code == 403

        response = await client.delete(f"/api/user/delete/{user.id}", headers=admin.headers)
        assert response.status_code == 200
        response = await client.get(f"/api/user/{user.id}")
        assert response.status_code == 404

    async def test_public_profile(self, client, user):
        response = await client.get(f"/api/user/{user.id}")
        assert response.status_code == 200
        assert response.json()["username"] == "plainuser"
        assert "password_hash" not in response.json()
