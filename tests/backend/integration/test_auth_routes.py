import uuid

import pytest

from store_rating.models import Role, User


pytestmark = pytest.mark.asyncio


def _registration(**overrides):
    tag = uuid.uuid4().hex[:6]
    payload = {
        "name": f"Member {tag}",
        "email": f"member_{tag}@example.com",
        "password": "StrongPass!1",
        "address": "12 Rating Lane",
    }
    payload.update(overrides)
    return payload


async def register_user(client, **overrides):
    payload = _registration(**overrides)
    resp = await client.post("/api/v1/auth/register", json=payload)
    return resp, payload


async def login_user(client, email: str, password: str):
    return await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": password},
    )


async def test_register_and_login_flow(client):
    resp, payload = await register_user(client)
    body = resp.json()
    assert resp.status_code == 201
    assert body["token"]
    assert body["user"]["email"] == payload["email"]
    assert body["user"]["role"] == "USER"
    assert "password_hash" not in body["user"]

    # Duplicate email should fail
    dup_resp, _ = await register_user(client, email=payload["email"])
    assert dup_resp.status_code == 400
    assert dup_resp.json()["detail"]["code"] == "EMAIL_EXISTS"

    # Successful login
    login_resp = await login_user(client, payload["email"], payload["password"])
    assert login_resp.status_code == 200
    assert login_resp.json()["user"]["id"] == body["user"]["id"]
    assert login_resp.json()["token"]


async def test_register_ignores_requested_role(client):
    resp, payload = await register_user(client, role="ADMIN")
    assert resp.status_code == 201
    assert resp.json()["user"]["role"] == "USER"
    stored = await User.get(email=payload["email"])
    assert stored.role == Role.USER


async def test_register_rejects_weak_password(client):
    resp, payload = await register_user(client, password="weakpass")
    body = resp.json()
    assert resp.status_code == 400
    assert body["detail"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["detail"]["errors"]}
    assert fields == {"password"}
    assert not await User.filter(email=payload["email"]).exists()


async def test_register_accepts_minimum_strong_password(client):
    resp, _ = await register_user(client, password="Strong1!")
    assert resp.status_code == 201


async def test_register_reports_every_bad_field(client):
    resp, _ = await register_user(client, name="Al", email="not-an-email", address="")
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["detail"]["errors"]}
    assert {"name", "email", "address"} <= fields


async def test_login_failures_are_indistinguishable(client):
    _, payload = await register_user(client)

    wrong_password = await login_user(client, payload["email"], "WrongPass!9")
    unknown_email = await login_user(client, "nobody@example.com", payload["password"])

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["detail"]["code"] == "AUTH_INVALID_CREDENTIALS"


async def test_update_password_flow(client):
    resp, payload = await register_user(client)
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    wrong_current = await client.put(
        "/api/v1/auth/update-password",
        json={"currentPassword": "NotMine!1", "newPassword": "NewPass#456"},
        headers=headers,
    )
    assert wrong_current.status_code == 400
    assert wrong_current.json()["detail"]["code"] == "AUTH_INVALID_CREDENTIALS"

    weak_new = await client.put(
        "/api/v1/auth/update-password",
        json={"currentPassword": payload["password"], "newPassword": "weakpass"},
        headers=headers,
    )
    assert weak_new.status_code == 400
    assert weak_new.json()["detail"]["code"] == "VALIDATION_ERROR"

    ok = await client.put(
        "/api/v1/auth/update-password",
        json={"currentPassword": payload["password"], "newPassword": "NewPass#456"},
        headers=headers,
    )
    assert ok.status_code == 200
    assert ok.json()["message"] == "Password updated successfully"

    # Old password should fail, new password succeeds
    assert (await login_user(client, payload["email"], payload["password"])).status_code == 401
    assert (await login_user(client, payload["email"], "NewPass#456")).status_code == 200


async def test_profile_verify_and_update(client):
    resp, payload = await register_user(client)
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    profile = await client.get("/api/v1/auth/profile", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["user"]["email"] == payload["email"]

    verify = await client.get("/api/v1/auth/verify", headers=headers)
    assert verify.status_code == 200
    assert verify.json()["message"] == "Token is valid"

    updated = await client.put(
        "/api/v1/auth/profile",
        json={"address": "99 New Address Road"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["user"]["address"] == "99 New Address Road"
    assert updated.json()["user"]["name"] == payload["name"]


async def test_auth_requires_token(client):
    unauth = await client.get("/api/v1/auth/profile")
    assert unauth.status_code == 401
    assert unauth.json()["detail"]["code"] == "AUTH_REQUIRED"

    bad_token = await client.get(
        "/api/v1/auth/profile", headers={"Authorization": "Bearer not.a.token"}
    )
    assert bad_token.status_code == 401
    assert bad_token.json()["detail"]["code"] == "AUTH_INVALID_TOKEN"


async def test_token_for_deleted_user_rejected(client):
    resp, payload = await register_user(client)
    headers = {"Authorization": f"Bearer {resp.json()['token']}"}
    await User.filter(email=payload["email"]).delete()

    after = await client.get("/api/v1/auth/profile", headers=headers)
    assert after.status_code == 401
    assert after.json()["detail"]["code"] == "AUTH_USER_NOT_FOUND"
