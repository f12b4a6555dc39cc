import pytest

from app.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from app.core.security import ACCESS_TOKEN_COOKIE_NAME, verify_password
from app.domains.users import services as user_services
from app.domains.users.models import UserModel
from app.domains.users.schemas import UserAdminUpdate, UserRegister
from tests.factories import TEST_PASSWORD, auth_headers, create_admin, create_user, run


async def test_register_normalizes_email_and_hashes_password(engine):
    user = await user_services.register_user(
        engine, UserRegister(name="  Sami  ", email="Sami@Example.com", password="hunter22")
    )

    assert user.email == "sami@example.com"
    assert user.name == "Sami"
    assert user.role == "user"
    assert user.has_completed_assessment is False
    assert user.password_hash != "hunter22"
    assert verify_password("hunter22", user.password_hash)


async def test_register_rejects_duplicate_email(engine):
    await create_user(engine, email="dup@example.com")

    with pytest.raises(ValidationError):
        await user_services.register_user(engine, UserRegister(name="Dup", email="DUP@example.com", password="secret1"))


async def test_authenticate(engine):
    await create_user(engine, email="login@example.com")

    user = await user_services.authenticate(engine, "LOGIN@example.com", TEST_PASSWORD)
    assert user.email == "login@example.com"
    with pytest.raises(AuthenticationError):
        await user_services.authenticate(engine, "login@example.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        await user_services.authenticate(engine, "nobody@example.com", TEST_PASSWORD)


async def test_specialists_are_admins_sorted_by_name(engine):
    await create_admin(engine, name="Dr. Zahra", email="zahra@example.com")
    await create_admin(engine, name="Dr. Adam", email="adam@example.com")
    await create_user(engine)

    specialists = await user_services.list_specialists(engine)
    assert [s.name for s in specialists] == ["Dr. Adam", "Dr. Zahra"]


async def test_admin_update_and_delete(engine):
    user = await create_user(engine)

    promoted = await user_services.admin_update_user(
        engine, user_id=str(user.id), payload=UserAdminUpdate(role="admin")
    )
    assert promoted.role == "admin"
    assert promoted.name == user.name

    with pytest.raises(ValidationError):
        await user_services.admin_update_user(engine, user_id=str(user.id), payload=UserAdminUpdate())

    await user_services.delete_user(engine, str(user.id))
    with pytest.raises(NotFoundError):
        await user_services.delete_user(engine, str(user.id))


async def test_user_stats(engine):
    await create_admin(engine)
    user = await create_user(engine)
    await user_services.admin_update_user(
        engine, user_id=str(user.id), payload=UserAdminUpdate(has_completed_assessment=True)
    )
    await create_user(engine, name="Pending", email="pending@example.com")

    stats = await user_services.user_stats(engine)
    assert stats == {
        "totalUsers": 3,
        "admins": 1,
        "users": 2,
        "completedAssessment": 1,
        "pendingAssessment": 2,
    }


def test_register_login_me_logout(client):
    registered = client.post(
        "/api/v1/auth/register",
        json={"name": "Leila", "email": "leila@example.com", "password": "secret1"},
    )
    assert registered.status_code == 201
    assert registered.json()["user"]["email"] == "leila@example.com"

    duplicate = client.post(
        "/api/v1/auth/register",
        json={"name": "Leila", "email": "leila@example.com", "password": "secret1"},
    )
    assert duplicate.status_code == 400

    short_password = client.post(
        "/api/v1/auth/register",
        json={"name": "Leila", "email": "other@example.com", "password": "123"},
    )
    assert short_password.status_code == 400

    bad_login = client.post("/api/v1/auth/login", json={"email": "leila@example.com", "password": "wrong-one"})
    assert bad_login.status_code == 401

    login = client.post("/api/v1/auth/login", json={"email": "leila@example.com", "password": "secret1"})
    assert login.status_code == 200
    assert ACCESS_TOKEN_COOKIE_NAME in login.cookies

    me = client.get("/api/v1/auth/me")
    assert me.status_code == 200
    body = me.json()
    assert body["name"] == "Leila"
    assert "passwordHash" not in body
    assert "password_hash" not in body

    client.post("/api/v1/auth/logout")
    client.cookies.clear()
    assert client.get("/api/v1/auth/me").status_code == 401


def test_profile_roundtrip(client, engine):
    user = run(create_user(engine))

    updated = client.put(
        "/api/v1/profile",
        json={"age": 30, "lifestyle": "moderate", "dietaryPreferences": ["vegetarian"], "calorieGoal": 2000},
        headers=auth_headers(user),
    )
    assert updated.status_code == 200
    profile = updated.json()["user"]["profile"]
    assert profile["age"] == 30
    assert profile["dietaryPreferences"] == ["vegetarian"]

    fetched = client.get("/api/v1/profile", headers=auth_headers(user))
    assert fetched.json()["user"]["profile"]["calorieGoal"] == 2000

    invalid = client.put("/api/v1/profile", json={"age": -1}, headers=auth_headers(user))
    assert invalid.status_code == 400


def test_specialists_http(client, engine):
    user = run(create_user(engine))
    admin = run(create_admin(engine))

    response = client.get("/api/v1/specialists", headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json() == {
        "specialists": [{"id": str(admin.id), "name": admin.name, "email": admin.email}]
    }


def test_admin_users_http(client, engine):
    user = run(create_user(engine))
    admin = run(create_admin(engine))

    assert client.get("/api/v1/admin/users", headers=auth_headers(user)).status_code == 403

    listed = client.get("/api/v1/admin/users", headers=auth_headers(admin))
    assert listed.status_code == 200
    assert {u["email"] for u in listed.json()["users"]} == {user.email, admin.email}

    patched = client.patch(
        "/api/v1/admin/users",
        params={"id": str(user.id)},
        json={"hasCompletedAssessment": True},
        headers=auth_headers(admin),
    )
    assert patched.json()["user"]["hasCompletedAssessment"] is True

    stats = client.get("/api/v1/admin/sync", params={"action": "stats"}, headers=auth_headers(admin))
    assert stats.json()["data"]["completedAssessment"] == 1

    fetched = client.get(
        "/api/v1/admin/sync", params={"action": "fetch", "role": "user"}, headers=auth_headers(admin)
    )
    assert fetched.json()["count"] == 1

    synced = client.get("/api/v1/admin/sync", headers=auth_headers(admin))
    assert synced.json()["stats"]["totalUsers"] == 2

    unknown = client.get("/api/v1/admin/sync", params={"action": "purge"}, headers=auth_headers(admin))
    assert unknown.status_code == 400

    deleted = client.delete("/api/v1/admin/users", params={"id": str(user.id)}, headers=auth_headers(admin))
    assert deleted.status_code == 200
    missing = client.delete("/api/v1/admin/users", params={"id": str(user.id)}, headers=auth_headers(admin))
    assert missing.status_code == 404


def test_new_user_document_has_empty_embedded_blocks():
    user = UserModel(name="Jane", email="jane@example.com", password_hash="hash")

    doc = user.model_dump_doc()

    assert doc["profile"]["dietary_preferences"] == []
    assert doc["assessment"]["main_objective"] is None


async def test_registered_user_round_trips_through_storage(engine):
    user = await user_services.register_user(
        engine, UserRegister(name="Nora", email="nora@example.com", password="secret1")
    )

    stored = await user_services.get_user_by_id(engine, str(user.id))
    assert stored.profile.age is None
    assert stored.assessment.full_name is None


def test_registered_user_can_fill_profile_over_http(client):
    registered = client.post(
        "/api/v1/auth/register",
        json={"name": "Nora", "email": "nora@example.com", "password": "secret1"},
    )
    assert registered.status_code == 201

    client.post("/api/v1/auth/login", json={"email": "nora@example.com", "password": "secret1"})
    me = client.get("/api/v1/auth/me")
    assert me.status_code == 200
    assert me.json()["hasCompletedAssessment"] is False
    assert me.json()["profile"]["habits"] == []

    updated = client.put("/api/v1/profile", json={"age": 41})
    assert updated.status_code == 200
    assert updated.json()["user"]["profile"]["age"] == 41
