import pytest
from jose import jwt

from kc_api.tests.conftest import auth_header, forge_token, SECRET_KEY


def test_register_returns_verifiable_token(client):
    response = client.post("/auth/register", json={"email": "alice@example.com", "username": "alice", "password": "pw1"})

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["message"] == "Registration success"
    claims = jwt.decode(data["token"], SECRET_KEY, algorithms=["HS256"])
    assert claims["sub"] == data["userId"]
    assert claims["email"] == "alice@example.com"
    assert claims["role"] == "user"
    assert "iat" in claims
    assert "exp" not in claims


def test_register_stores_password_verbatim(client, db_session):
    from kc_api.models.user_model import User

    client.post("/auth/register", json={"email": "plain@example.com", "username": "plain", "password": "Secret 1"})

    user = db_session.query(User).filter(User.email == "plain@example.com").first()
    assert user.password == "Secret 1"


def test_register_ids_are_sequential(register_user):
    first = register_user("a@example.com", "a")
    second = register_user("b@example.com", "b")

    assert first["userId"] == "1"
    assert second["userId"] == "2"


@pytest.mark.parametrize("payload", [
    {"username": "alice", "password": "pw1"},
    {"email": "alice@example.com", "password": "pw1"},
    {"email": "alice@example.com", "username": "alice"},
    {"email": "", "username": "alice", "password": "pw1"},
])
def test_register_missing_field(client, payload):
    response = client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert "Missing required registration fields" in response.json()["detail"]


def test_login_success(client, register_user):
    registered = register_user("alice@example.com", "alice", "pw1")

    response = client.post("/auth/login", json={"email": "alice@example.com", "password": "pw1"})

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["userId"] == registered["userId"]
    assert data["message"] == "Login success"


def test_login_failures_are_distinguishable(client, register_user):
    register_user("alice@example.com", "alice", "pw1")

    unknown = client.post("/auth/login", json={"email": "nobody@example.com", "password": "pw1"})
    wrong = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})

    assert unknown.status_code == 401
    assert wrong.status_code == 401
    assert "No user" in unknown.json()["detail"]
    assert "Incorrect password" in wrong.json()["detail"]
    assert unknown.json()["detail"] != wrong.json()["detail"]


def test_login_missing_field(client):
    response = client.post("/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400
    assert "Missing required login fields" in response.json()["detail"]


def test_me_without_header(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing Authorization header"
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_with_wrong_scheme(client, register_user):
    token = register_user("alice@example.com", "alice")["token"]

    response = client.get("/auth/me", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Authorization header must use Bearer scheme"


@pytest.mark.parametrize("token", [
    "this-is-not-a-valid-jwt",
    forge_token("1", "alice@example.com", "user", secret="another-secret"),
])
def test_me_with_invalid_token(client, token):
    response = client.get("/auth/me", headers=auth_header(token))

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_me_returns_profile_without_password(client, register_user):
    token = register_user("me@example.com", "me-user", "mypassword")["token"]

    response = client.get("/auth/me", headers=auth_header(token))

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["email"] == "me@example.com"
    assert data["username"] == "me-user"
    assert data["role"] == "user"
    assert "password" not in data


@pytest.mark.parametrize("logout_before", [False, True])
def test_token_still_valid_after_logout(client, register_user, logout_before):
    token = register_user("alice@example.com", "alice")["token"]

    if logout_before:
        response = client.post("/auth/logout", headers=auth_header(token))
        assert response.status_code == 201
        assert "token still valid" in response.json()["message"]

    response = client.get("/auth/me", headers=auth_header(token))
    assert response.status_code == 200


def test_logout_requires_token(client):
    response = client.post("/auth/logout")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing Authorization header"


def test_token_of_deleted_account_still_verifies(client, register_user):
    alice = register_user("alice@example.com", "alice")
    bob = register_user("bob@example.com", "bob")

    client.delete(f"/users/{alice['userId']}", headers=auth_header(bob["token"]))

    # The guard does not look the subject up; only the profile lookup fails.
    assert client.get("/files", headers=auth_header(alice["token"])).status_code == 200
    me = client.get("/auth/me", headers=auth_header(alice["token"]))
    assert me.status_code == 404
    assert me.json() == {"detail": "Not Found"}


def test_ping(client):
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "backend"}
