"""Cards, property validation and assignees."""
import pytest
from conftest import API, add_member, create_board, create_card

PROPERTIES = [
    {
        "id": "status",
        "name": "Status",
        "type": "select",
        "options": [{"id": "todo", "value": "To do"}, {"id": "done", "value": "Done"}],
    },
    {
        "id": "tags",
        "name": "Tags",
        "type": "multiSelect",
        "options": [{"id": "ui", "value": "UI"}, {"id": "api", "value": "API"}],
    },
    {"id": "estimate", "name": "Estimate", "type": "number"},
    {"id": "urgent", "name": "Urgent", "type": "checkbox"},
    {"id": "notes", "name": "Notes", "type": "text"},
]


@pytest.fixture
def board(client, alice):
    return create_board(client, alice, cardProperties=PROPERTIES)


def test_create_and_list_cards(client, alice, board):
    second = create_card(client, alice, board["id"], title="Second", sortOrder=2)
    first = create_card(
        client, alice, board["id"], title="First", sortOrder=1,
        properties={"status": "todo", "tags": ["ui"], "estimate": "3", "urgent": "true"},
    )
    assert first["id"].startswith("c")
    assert first["properties"]["tags"] == ["ui"]
    assert first["assignees"] == []

    cards = client.get(f"{API}/boards/{board['id']}/cards", headers=alice.headers).json()
    assert [c["id"] for c in cards] == [first["id"], second["id"]]


@pytest.mark.parametrize(
    "properties",
    [
        {"missing": "x"},
        {"status": "blocked"},
        {"tags": "ui"},
        {"tags": ["ui", "backend"]},
        {"estimate": "three"},
        {"urgent": "yes"},
        {"notes": ["a", "b"]},
    ],
)
def test_invalid_property_values_rejected(client, alice, board, properties):
    response = client.post(
        f"{API}/boards/{board['id']}/cards",
        json={"title": "Bad", "properties": properties},
        headers=alice.headers,
    )
    assert response.status_code == 400
    assert response.json()["errorCode"] == 400


def test_patch_card_properties(client, alice, board):
    card = create_card(client, alice, board["id"], properties={"status": "todo", "notes": "hi"})
    response = client.patch(
        f"{API}/cards/{card['id']}",
        json={"title": "Renamed", "updatedProperties": {"status": "done"}, "deletedProperties": ["notes"]},
        headers=alice.headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Renamed"
    assert body["properties"] == {"status": "done"}

    fetched = client.get(f"{API}/cards/{card['id']}", headers=alice.headers).json()
    assert fetched["properties"] == {"status": "done"}


def test_viewer_cannot_edit_cards(client, alice, bob, board):
    add_member(client, alice, board["id"], bob.id)
    card = create_card(client, alice, board["id"])

    assert client.get(f"{API}/cards/{card['id']}", headers=bob.headers).status_code == 200
    response = client.patch(f"{API}/cards/{card['id']}", json={"title": "x"}, headers=bob.headers)
    assert response.status_code == 403
    assert client.delete(f"{API}/cards/{card['id']}", headers=bob.headers).status_code == 403


def test_delete_card(client, alice, board):
    card = create_card(client, alice, board["id"])
    assert client.delete(f"{API}/cards/{card['id']}", headers=alice.headers).json() == {}
    assert client.get(f"{API}/cards/{card['id']}", headers=alice.headers).status_code == 404


def test_assignee_must_be_member(client, alice, bob, board):
    card = create_card(client, alice, board["id"])
    response = client.post(
        f"{API}/cards/{card['id']}/assignees", json={"userId": bob.id}, headers=alice.headers
    )
    assert response.status_code == 400


def test_assign_and_unassign_notify_assignee(client, alice, bob, board):
    add_member(client, alice, board["id"], bob.id)
    card = create_card(client, alice, board["id"], title="Ship it")

    response = client.post(
        f"{API}/cards/{card['id']}/assignees", json={"userId": bob.id}, headers=alice.headers
    )
    assert response.status_code == 200
    assert response.json()["assignees"] == [bob.id]

    response = client.delete(f"{API}/cards/{card['id']}/assignees/{bob.id}", headers=alice.headers)
    assert response.status_code == 200
    assert response.json()["assignees"] == []

    notifications = client.get(f"{API}/notifications", headers=bob.headers).json()
    assert sorted(n["type"] for n in notifications) == ["assigned", "unassigned"]
    assert all(n["actorUserId"] == alice.id for n in notifications)
    assert all(n["cardTitle"] == "Ship it" for n in notifications)


def test_self_assignment_does_not_notify(client, alice, board):
    card = create_card(client, alice, board["id"])
    response = client.post(
        f"{API}/cards/{card['id']}/assignees", json={"userId": alice.id}, headers=alice.headers
    )
    assert response.json()["assignees"] == [alice.id]
    assert client.get(f"{API}/notifications", headers=alice.headers).json() == []


def test_card_updates_are_pushed_to_board_members(client, alice, bob, board):
    add_member(client, alice, board["id"], bob.id)

    with client.websocket_connect(f"/ws?token={bob.token}") as ws:
        ws.send_json({"action": "PING"})
        assert ws.receive_json() == {"action": "PONG"}

        card = create_card(client, alice, board["id"], title="Live")
        message = ws.receive_json()
        assert message["action"] == "UPDATE_CARD"
        assert message["boardId"] == board["id"]
        assert message["card"]["id"] == card["id"]

        client.delete(f"{API}/cards/{card['id']}", headers=alice.headers)
        message = ws.receive_json()
        assert message == {"action": "DELETE_CARD", "boardId": board["id"], "cardId": card["id"]}
