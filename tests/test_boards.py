"""Boards, membership, joining and views."""
from conftest import API, add_member, create_board, create_card


def test_create_board_makes_creator_admin(client, alice):
    board = create_board(client, alice, title="Sprint", description="Q3")
    assert board["id"].startswith("b")
    assert board["createdBy"] == alice.id

    members = client.get(f"{API}/boards/{board['id']}/members", headers=alice.headers).json()
    assert len(members) == 1
    assert members[0]["userId"] == alice.id
    assert members[0]["schemeAdmin"] is True


def test_list_boards_only_shows_memberships(client, alice, bob):
    mine = create_board(client, alice, title="Mine")
    create_board(client, bob, title="Bob's")

    boards = client.get(f"{API}/boards", headers=alice.headers).json()
    assert [b["id"] for b in boards] == [mine["id"]]


def test_non_member_is_forbidden(client, alice, bob):
    board = create_board(client, alice)
    response = client.get(f"{API}/boards/{board['id']}", headers=bob.headers)
    assert response.status_code == 403
    assert response.json()["errorCode"] == 403


def test_patch_board_properties_and_type(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeEditor=True)

    response = client.patch(f"{API}/boards/{board['id']}", json={"title": "Renamed"}, headers=bob.headers)
    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["modifiedBy"] == bob.id

    # Changing the type is admin only
    response = client.patch(f"{API}/boards/{board['id']}", json={"type": "O"}, headers=bob.headers)
    assert response.status_code == 403

    response = client.patch(f"{API}/boards/{board['id']}", json={"type": "O"}, headers=alice.headers)
    assert response.json()["type"] == "O"


def test_delete_board_cascades(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeEditor=True)
    card = create_card(client, alice, board["id"])

    assert client.delete(f"{API}/boards/{board['id']}", headers=bob.headers).status_code == 403
    assert client.delete(f"{API}/boards/{board['id']}", headers=alice.headers).json() == {}

    assert client.get(f"{API}/boards", headers=bob.headers).json() == []
    assert client.get(f"{API}/cards/{card['id']}", headers=alice.headers).status_code == 404


def test_add_member_unknown_user(client, alice):
    board = create_board(client, alice)
    response = client.post(
        f"{API}/boards/{board['id']}/members", json={"userId": "unothere"}, headers=alice.headers
    )
    assert response.status_code == 404


def test_viewer_cannot_manage_members(client, alice, bob, carol):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id)
    response = client.post(
        f"{API}/boards/{board['id']}/members", json={"userId": carol.id}, headers=bob.headers
    )
    assert response.status_code == 403


def test_update_member_role(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id)

    response = client.put(
        f"{API}/boards/{board['id']}/members/{bob.id}",
        json={"minimumRole": "editor"},
        headers=alice.headers,
    )
    assert response.status_code == 200
    assert response.json()["minimumRole"] == "editor"
    create_card(client, bob, board["id"])


def test_last_admin_cannot_be_demoted_or_removed(client, alice):
    board = create_board(client, alice)
    response = client.put(
        f"{API}/boards/{board['id']}/members/{alice.id}",
        json={"schemeAdmin": False},
        headers=alice.headers,
    )
    assert response.status_code == 400

    response = client.delete(f"{API}/boards/{board['id']}/members/{alice.id}", headers=alice.headers)
    assert response.status_code == 400


def test_readding_last_admin_keeps_admin_rights(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeEditor=True)

    response = client.post(
        f"{API}/boards/{board['id']}/members", json={"userId": alice.id}, headers=alice.headers
    )
    assert response.status_code == 400

    members = client.get(f"{API}/boards/{board['id']}/members", headers=alice.headers).json()
    assert [m["schemeAdmin"] for m in members if m["userId"] == alice.id] == [True]
    assert client.delete(f"{API}/boards/{board['id']}", headers=alice.headers).status_code == 200


def test_readding_admin_with_another_admin_present(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeAdmin=True)

    member = add_member(client, alice, board["id"], alice.id, schemeEditor=True)
    assert member["schemeAdmin"] is False
    assert member["schemeEditor"] is True


def test_leaving_board_clears_card_assignments(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id, schemeEditor=True)
    card = create_card(client, alice, board["id"])
    client.post(f"{API}/cards/{card['id']}/assignees", json={"userId": bob.id}, headers=alice.headers)

    response = client.delete(f"{API}/boards/{board['id']}/members/{bob.id}", headers=bob.headers)
    assert response.status_code == 200

    card = client.get(f"{API}/cards/{card['id']}", headers=alice.headers).json()
    assert card["assignees"] == []


def test_member_can_leave(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id)
    response = client.delete(f"{API}/boards/{board['id']}/members/{bob.id}", headers=bob.headers)
    assert response.status_code == 200
    assert client.get(f"{API}/boards/{board['id']}", headers=bob.headers).status_code == 403


def test_join_open_board(client, alice, bob):
    board = create_board(client, alice, type="O")
    response = client.post(f"{API}/boards/{board['id']}/join", headers=bob.headers)
    assert response.status_code == 200
    assert response.json()["schemeEditor"] is True
    assert response.json()["schemeAdmin"] is False


def test_join_private_board_is_forbidden(client, alice, bob):
    board = create_board(client, alice, type="P")
    response = client.post(f"{API}/boards/{board['id']}/join", headers=bob.headers)
    assert response.status_code == 403


def test_views(client, alice, bob):
    board = create_board(client, alice)
    add_member(client, alice, board["id"], bob.id)

    response = client.post(
        f"{API}/boards/{board['id']}/views",
        json={"title": "Table", "viewType": "table"},
        headers=alice.headers,
    )
    assert response.status_code == 200
    view = response.json()
    assert view["id"].startswith("v")

    views = client.get(f"{API}/boards/{board['id']}/views", headers=bob.headers).json()
    assert [v["id"] for v in views] == [view["id"]]

    # Viewers cannot delete views
    assert client.delete(f"{API}/boards/{board['id']}/views/{view['id']}", headers=bob.headers).status_code == 403
    assert client.delete(f"{API}/boards/{board['id']}/views/{view['id']}", headers=alice.headers).json() == {}
    assert client.get(f"{API}/boards/{board['id']}/views", headers=alice.headers).json() == []
