"""System admin user management."""
from conftest import API, PASSWORD, add_member, create_board, create_card, login


def test_admin_lists_users(client, alice, bob):
    response = client.get(f"{API}/admin/users", headers=alice.headers)
    assert response.status_code == 200
    usernames = [u["username"] for u in response.json()]
    assert usernames == ["alice", "bob"]


def test_non_admin_gets_403(client, alice, bob):
    response = client.get(f"{API}/admin/users", headers=bob.headers)
    assert response.status_code == 403
    assert response.json() == {"error": "not authorized to access admin panel", "errorCode": 403}


def test_admin_routes_require_auth(client, alice):
    assert client.get(f"{API}/admin/users").status_code == 401


def test_non_admin_put_is_403_regardless_of_body(client, alice, bob):
    for body in (b"{not json", b'{"username": "x"}', b""):
        response = client.put(
            f"{API}/admin/users/{alice.id}",
            content=body,
            headers={**bob.headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 403


def test_admin_get_user(client, alice, bob):
    response = client.get(f"{API}/admin/users/{bob.id}", headers=alice.headers)
    assert response.status_code == 200
    assert response.json()["id"] == bob.id

    assert client.get(f"{API}/admin/users/unothere", headers=alice.headers).status_code == 404


def test_admin_update_user(client, alice, bob):
    response = client.put(
        f"{API}/admin/users/{bob.id}",
        json={"username": "robert", "email": "", "password": "brand-new-password"},
        headers=alice.headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "robert"
    assert body["email"] == "bob@example.com"

    login(client, "robert", "brand-new-password")


def test_admin_update_rejects_invalid_email(client, alice, bob):
    response = client.put(
        f"{API}/admin/users/{bob.id}", json={"email": "not-an-email"}, headers=alice.headers
    )
    assert response.status_code == 400
    assert response.json()["errorCode"] == 400

    user = client.get(f"{API}/admin/users/{bob.id}", headers=alice.headers).json()
    assert user["email"] == "bob@example.com"


def test_admin_update_malformed_json(client, alice, bob):
    response = client.put(
        f"{API}/admin/users/{bob.id}",
        content=b"{not json",
        headers={**alice.headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["errorCode"] == 400


def test_admin_update_username_clash(client, alice, bob):
    response = client.put(
        f"{API}/admin/users/{bob.id}",
        json={"username": "alice"},
        headers=alice.headers,
    )
    assert response.status_code == 400


def test_admin_cannot_delete_self(client, alice):
    response = client.delete(f"{API}/admin/users/{alice.id}", headers=alice.headers)
    assert response.status_code == 400
    assert response.json() == {"error": "cannot delete yourself", "errorCode": 400}


def test_admin_deletes_user(client, alice, bob):
    response = client.delete(f"{API}/admin/users/{bob.id}", headers=alice.headers)
    assert response.status_code == 200
    assert response.json() == {}

    assert client.get(f"{API}/admin/users/{bob.id}", headers=alice.headers).status_code == 404
    # Sessions cascade with the user
    assert client.get(f"{API}/users/me", headers=bob.headers).status_code == 401
    bad_login = client.post(f"{API}/login", json={"username": "bob", "password": PASSWORD})
    assert bad_login.status_code == 401


def test_admin_delete_unknown_user(client, alice):
    assert client.delete(f"{API}/admin/users/unothere", headers=alice.headers).status_code == 404


def test_deleted_user_is_unassigned_from_cards(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeEditor=True)
    card = create_card(client, alice, board["id"])
    client.post(f"{API}/cards/{card['id']}/assignees", json={"userId": bob.id}, headers=alice.headers)

    assert client.delete(f"{API}/admin/users/{bob.id}", headers=alice.headers).status_code == 200

    card = client.get(f"{API}/cards/{card['id']}", headers=alice.headers).json()
    assert card["assignees"] == []
