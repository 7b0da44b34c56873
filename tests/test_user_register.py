"""用户注册接口测试"""

import pytest

from tests.conftest import API, add_user, all_users

VALID_USER = {
    "username": "user1",
    "email": "user1@mail.com",
    "password": "P4ssword",
}


async def post_user(client, user=None, language=None):
    headers = {"Accept-Language": language} if language else {}
    return await client.post(
        f"{API}/users", json=VALID_USER if user is None else user, headers=headers
    )


async def test_returns_200_when_signup_request_is_valid(client):
    response = await post_user(client)
    assert response.status_code == 200
    assert response.json() == {"message": "User created"}


async def test_saves_user_inactive_with_hashed_password_and_token(client, db):
    await post_user(client)
    users = await all_users(db)
    assert len(users) == 1
    saved = users[0]
    assert saved.username == "user1"
    assert saved.email == "user1@mail.com"
    assert saved.password_hash != "P4ssword"
    assert saved.inactive is True
    assert saved.activation_token
    assert len(saved.activation_token) == 16


async def test_ignores_client_supplied_inactive_flag(client, db):
    await post_user(client, {**VALID_USER, "inactive": False, "activationToken": "x"})
    saved = (await all_users(db))[0]
    assert saved.inactive is True
    assert saved.activation_token != "x"


async def test_sends_activation_email_with_token(client, db, email_service):
    await post_user(client)
    saved = (await all_users(db))[0]
    assert email_service.sent == [
        {"email": "user1@mail.com", "token": saved.activation_token, "locale": "en"}
    ]


async def test_returns_502_and_persists_nothing_when_email_fails(client, db, email_service):
    email_service.fail = True
    response = await post_user(client)
    assert response.status_code == 502
    body = response.json()
    assert body["message"] == "E-mail Failure"
    assert body["path"] == f"{API}/users"
    assert isinstance(body["timestamp"], int)
    assert "validationErrors" not in body
    assert await all_users(db) == []


@pytest.mark.parametrize(
    ("field", "value", "expected"),
    [
        ("username", None, "Username cannot be null"),
        ("username", "usr", "Must have min 4 and max 32 characters"),
        ("username", "a" * 33, "Must have min 4 and max 32 characters"),
        ("email", None, "E-mail cannot be null"),
        ("email", "mail.com", "E-mail is not valid"),
        ("email", "user.mail.com", "E-mail is not valid"),
        ("email", "user@mail", "E-mail is not valid"),
        ("password", None, "Password cannot be null"),
        ("password", "P4ssw", "Password must have min 8 and max 16 characters"),
        ("password", "P4ssword12345678x", "Password must have min 8 and max 16 characters"),
        ("password", "alllowercase", "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"),
        ("password", "ALLUPPERCASE", "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"),
        ("password", "1234567890", "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"),
        ("password", "lowerand5667", "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"),
        ("password", "UPPER44444", "Password must have at least 1 uppercase, 1 lowercase letter and 1 number"),
    ],
)
async def test_returns_field_error_when_value_is_invalid(client, db, field, value, expected):
    response = await post_user(client, {**VALID_USER, field: value})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation Failure"
    assert body["validationErrors"] == {field: expected}
    assert await all_users(db) == []


async def test_returns_errors_for_all_fields_in_order(client):
    response = await post_user(client, {"username": None, "email": None, "password": None})
    assert list(response.json()["validationErrors"]) == ["username", "email", "password"]


async def test_returns_email_in_use_when_email_already_registered(client, db):
    existing = await add_user(db, username="other", email="user1@mail.com")
    response = await post_user(client)
    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"email": "E-mail in use"}
    users = await all_users(db)
    assert [u.id for u in users] == [existing.id]
    assert users[0].username == "other"


async def test_returns_bulgarian_messages_when_requested(client):
    response = await post_user(client, {**VALID_USER, "username": None}, language="bg")
    body = response.json()
    assert body["message"] == "Грешка при валидация"
    assert body["validationErrors"] == {
        "username": "Потребителското име не може да бъде празно"
    }


async def test_returns_bulgarian_success_message(client, email_service):
    response = await post_user(client, language="bg")
    assert response.json() == {"message": "Потребителят е създаден"}
    assert email_service.sent[0]["locale"] == "bg"


async def test_unknown_language_falls_back_to_english(client):
    response = await post_user(client, {**VALID_USER, "username": None}, language="xx")
    assert response.json()["message"] == "Validation Failure"


async def test_returns_400_for_malformed_body(client):
    response = await client.post(
        f"{API}/users",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"
