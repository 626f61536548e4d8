from kc_api.tests.conftest import auth_header


def test_user_can_modify_another_profile(client, register_user):
    alice = register_user("a@example.com", "user-a", "pass-a")
    bob = register_user("b@example.com", "user-b", "pass-b")

    update = client.put(f"/users/{alice['userId']}", json={"username": "hacked-by-b"}, headers=auth_header(bob["token"]))

    assert update.status_code == 200
    assert update.json()["username"] == "hacked-by-b"
    fetched = client.get(f"/users/{alice['userId']}", headers=auth_header(alice["token"]))
    assert fetched.json()["username"] == "hacked-by-b"


def test_password_change_through_profile_update(client, register_user):
    alice = register_user("a@example.com", "user-a", "pass-a")
    bob = register_user("b@example.com", "user-b", "pass-b")

    client.put(f"/users/{alice['userId']}", json={"password": "taken-over"}, headers=auth_header(bob["token"]))

    assert client.post("/auth/login", json={"email": "a@example.com", "password": "taken-over"}).status_code == 201


def test_list_users_requires_admin(client, register_user, admin_token):
    user = register_user("alice@example.com", "alice")

    assert client.get("/users").status_code == 401
    assert client.get("/users", headers=auth_header(user["token"])).status_code == 403
    assert len(client.get("/users", headers=auth_header(admin_token)).json()) == 2


def test_admin_creates_account_without_duplicate_check(client, register_user, admin_token):
    register_user("dup@example.com", "first")

    response = client.post("/users", json={"email": "dup@example.com", "username": "second", "password": "pw",
                                           "role": "moderator"},
                           headers=auth_header(admin_token))

    assert response.status_code == 201, response.text
    assert response.json()["role"] == "moderator"
    listing = client.get("/users", headers=auth_header(admin_token)).json()
    assert [u["email"] for u in listing].count("dup@example.com") == 2


def test_delete_user_without_role(client, register_user):
    alice = register_user("alice@example.com", "alice")
    bob = register_user("bob@example.com", "bob")

    response = client.delete(f"/users/{alice['userId']}", headers=auth_header(bob["token"]))

    assert response.status_code == 200
    assert response.json() == {"deleted": alice["userId"]}
    assert client.get(f"/users/{alice['userId']}", headers=auth_header(bob["token"])).status_code == 404


def test_missing_user(client, register_user):
    token = register_user("alice@example.com", "alice")["token"]

    assert client.get("/users/99", headers=auth_header(token)).status_code == 404
    assert client.put("/users/99", json={"username": "x"}, headers=auth_header(token)).status_code == 404
    assert client.delete("/users/99", headers=auth_header(token)).status_code == 404
