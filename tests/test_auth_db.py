"""Tests for users, sessions, profiles and saved trips."""

import pytest

import auth
from tripmind.common.errors import AuthenticationError, ValidationError


def _account(username="maria", email="maria@example.com", password="secret123"):
    return {"username": username, "email": email, "password": password}


def test_register_and_login(temp_db):
    user_id = auth.register_user(_account(username="  maria "))

    user, token = auth.login("maria", "secret123")
    assert user["id"] == user_id
    assert user["username"] == "maria"
    assert "password_hash" not in user
    assert auth.session_user_id(token) == user_id


def test_login_failures(temp_db):
    auth.register_user(_account())
    with pytest.raises(AuthenticationError):
        auth.login("maria", "wrong")
    with pytest.raises(ValidationError):
        auth.login("maria", "")


def test_register_reports_duplicates_per_field(temp_db):
    auth.register_user(_account())
    with pytest.raises(ValidationError) as excinfo:
        auth.register_user(_account())
    assert excinfo.value.message == "Invalid registration"
    assert excinfo.value.details == [
        {"field": "username", "message": "Username already taken"},
        {"field": "email", "message": "Email already registered"},
    ]


def test_register_handler_payloads(temp_db):
    assert auth.register_handler(_account()) == ({"success": True}, 200)

    payload, status = auth.register_handler(_account(username="ab", email="nope"))
    assert status == 400
    assert [d["field"] for d in payload["details"]] == ["username", "email"]


def test_login_handler_payloads(temp_db):
    auth.register_user(_account())

    payload, status = auth.login_handler({"username": "maria", "password": "secret123"})
    assert status == 200
    assert payload["username"] == "maria"
    assert payload["token"] in auth.sessions

    assert auth.login_handler({"username": "maria", "password": "bad"}) == (
        {"error": "Invalid username or password"},
        401,
    )


def test_passwords_are_hashed(temp_db):
    user_id = temp_db.create_user("li", "li@example.com", "pass1234")
    stored = temp_db.get_user_by_username("li")
    assert stored["id"] == user_id
    assert stored["password_hash"] != "pass1234"
    assert temp_db.verify_password("pass1234", stored["password_hash"])


def test_session_store():
    token = auth.sessions.create({"id": 7, "username": "maria"})
    assert auth.sessions.get(token).username == "maria"
    assert auth.session_user_id(token) == 7
    assert auth.sessions.destroy(token) is True
    assert auth.sessions.get(token) is None
    assert auth.sessions.destroy(token) is False
    assert auth.session_user_id(None) is None


def test_expired_session_is_dropped():
    token = auth.sessions.create({"id": 1, "username": "maria"})
    auth.sessions.get(token).created -= auth.SESSION_DURATION + 1
    assert auth.sessions.get(token) is None
    assert token not in auth.sessions


def test_cookies():
    header = auth.session_cookie("abc", secure=True)
    assert header.startswith("tripmind_session=abc;")
    assert "HttpOnly" in header
    assert header.endswith("; Secure")
    assert "Max-Age=0" in auth.logout_cookie()


@pytest.mark.parametrize("headers, token", [
    ({"Cookie": "a=1; tripmind_session=xyz"}, "xyz"),
    ({"Cookie": "a=1", "Authorization": "Bearer tok123"}, "tok123"),
    ({"Authorization": "bearer  tok123 "}, "tok123"),
    ({"Cookie": "tripmind_session=fromcookie", "Authorization": "Bearer other"}, "fromcookie"),
    ({"Authorization": "Basic abc"}, None),
    ({"Authorization": "Bearer"}, None),
    ({"Cookie": "tripmind_session="}, None),
    ({}, None),
])
def test_request_token(headers, token):
    assert auth.get_request_token(headers) == token


def test_auth_can_be_disabled(monkeypatch):
    monkeypatch.setenv("AUTH_DISABLED", "true")
    assert auth.is_auth_enabled() is False
    monkeypatch.setenv("AUTH_DISABLED", "false")
    assert auth.is_auth_enabled() is True


def test_default_user_created_once(temp_db, monkeypatch):
    monkeypatch.delenv("AUTH_USERNAME", raising=False)
    monkeypatch.delenv("AUTH_PASSWORD", raising=False)
    auth.ensure_default_user()
    auth.ensure_default_user()
    user, _token = auth.login("admin", "tripmind")
    assert user["username"] == "admin"


def test_profile_defaults_and_update(temp_db):
    user_id = temp_db.create_user("maria", "maria@example.com", "secret123")

    profile = temp_db.get_profile(user_id)
    assert profile["email"] == "maria@example.com"
    assert profile["full_name"] is None
    assert profile["preferred_currency"] == "USD"
    assert profile["preferred_language"] == "en"

    assert temp_db.update_profile(user_id, {
        "full_name": "Maria Silva",
        "traveler_type": "nomad",
        "preferred_currency": "EUR",
        "password_hash": "ignored",
    })
    profile = temp_db.get_profile(user_id)
    assert profile["full_name"] == "Maria Silva"
    assert profile["traveler_type"] == "nomad"
    assert profile["preferred_currency"] == "EUR"


def test_profile_for_missing_user(temp_db):
    assert temp_db.get_profile(999) is None
    assert temp_db.update_profile(999, {"full_name": "Ghost"}) is False


def test_trips_are_scoped_to_user(temp_db):
    alice = temp_db.create_user("alice", "alice@example.com", "secret123")
    bob = temp_db.create_user("bob", "bob@example.com", "secret123")

    first = temp_db.add_trip(alice, {
        "destination": "Rome", "duration": 3, "budget": "$900",
        "interests": "", "itinerary": "Day 1",
    })
    second = temp_db.add_trip(alice, {
        "destination": "Paris", "duration": 2, "budget": "$700",
        "interests": "art", "itinerary": "Day 1\nDay 2",
    })

    trips = temp_db.get_user_trips(alice)
    assert [t["id"] for t in trips] == [second, first]
    assert "itinerary" not in trips[0]
    assert temp_db.get_user_trips(bob) == []

    assert temp_db.get_trip(alice, second)["itinerary"] == "Day 1\nDay 2"
    assert temp_db.get_trip(bob, second) is None

    assert temp_db.delete_trip(bob, first) is False
    assert temp_db.delete_trip(alice, first) is True
    assert [t["id"] for t in temp_db.get_user_trips(alice)] == [second]
