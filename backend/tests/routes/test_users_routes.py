"""Registration — validation, duplicate e-mail, password handling."""

from sqlalchemy import func, select

from devconnector.core.verify_token import verify_token
from devconnector.config import get_settings
from devconnector.models.user import User
from devconnector.repositories.users import UserRepository


async def test_register_returns_verifiable_token(client):
    res = await client.post("/api/users", json={
        "name": "Ada", "email": "ada@devconnector.io", "password": "secret123",
    })
    assert res.status_code == 200
    identity = verify_token(res.json()["token"], get_settings().jwt_secret)
    assert identity.user_id is not None


async def test_register_empty_body_reports_each_rule(client):
    res = await client.post("/api/users", json={})
    assert res.status_code == 400
    assert [e["param"] for e in res.json()["errors"]] == [
        "name", "email", "password",
    ]


async def test_register_short_password_single_violation(client):
    res = await client.post("/api/users", json={
        "name": "Ada", "email": "ada@devconnector.io", "password": "12345",
    })
    assert res.status_code == 400
    assert res.json() == {"errors": [{
        "msg": "Please enter a valid password with min of 6 chars",
        "param": "password",
    }]}


async def test_register_missing_name_and_bad_email(client):
    res = await client.post("/api/users", json={
        "email": "not-an-email", "password": "secret123",
    })
    assert res.status_code == 400
    assert [e["msg"] for e in res.json()["errors"]] == [
        "Name is required", "Please include a valid email",
    ]


async def test_duplicate_email_rejected_and_single_user_stored(
    client, register, test_db,
):
    await register(email="ada@devconnector.io")
    res = await client.post("/api/users", json={
        "name": "Other", "email": "ADA@devconnector.io", "password": "secret123",
    })
    assert res.status_code == 400
    assert res.json() == {"errors": [{"msg": "User already exists"}]}

    count = await test_db.scalar(select(func.count()).select_from(User))
    assert count == 1


async def test_password_stored_hashed(client, register, test_db):
    await register(password="secret123")
    user = (await test_db.execute(select(User))).scalar_one()
    assert user.password != "secret123"
    assert user.password.startswith("$2")
    assert user.avatar.startswith("https://www.gravatar.com/avatar/")


async def test_duplicate_email_caught_by_unique_index(
    client, register, test_db, monkeypatch,
):
    """Two registrations racing past the lookup still end in a 400."""
    await register(email="ada@devconnector.io")

    async def nobody(self, email):
        return None

    monkeypatch.setattr(UserRepository, "get_by_email", nobody)
    res = await client.post("/api/users", json={
        "name": "Racer", "email": "ada@devconnector.io", "password": "secret123",
    })
    assert res.status_code == 400
    assert res.json() == {"errors": [{"msg": "User already exists"}]}

    count = await test_db.scalar(select(func.count()).select_from(User))
    assert count == 1
