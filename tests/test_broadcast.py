"""ConnectionManager fan-out, independent of the HTTP layer."""
from app.services.broadcast import ConnectionManager


class FakeSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


async def test_send_to_user_reaches_every_socket():
    manager = ConnectionManager()
    first, second = FakeSocket(), FakeSocket()
    manager.register(first, "u1")
    manager.register(second, "u1")

    delivered = await manager.send_to_user("u1", {"action": "X"})

    assert delivered == 2
    assert first.sent == [{"action": "X"}]
    assert second.sent == [{"action": "X"}]


async def test_send_to_user_without_sockets_is_noop():
    manager = ConnectionManager()
    assert await manager.send_to_user("nobody", {"action": "X"}) == 0


async def test_failing_socket_is_dropped_without_raising():
    manager = ConnectionManager()
    dead, alive = FakeSocket(fail=True), FakeSocket()
    manager.register(dead, "u1")
    manager.register(alive, "u1")

    delivered = await manager.send_to_user("u1", {"action": "X"})

    assert delivered == 1
    assert manager.connection_count("u1") == 1
    assert alive.sent == [{"action": "X"}]


async def test_send_to_users_deduplicates():
    manager = ConnectionManager()
    socket = FakeSocket()
    manager.register(socket, "u1")

    delivered = await manager.send_to_users(["u1", "u1", "u2"], {"action": "X"})

    assert delivered == 1
    assert socket.sent == [{"action": "X"}]


def test_disconnect_removes_empty_entries():
    manager = ConnectionManager()
    socket = FakeSocket()
    manager.register(socket, "u1")
    manager.disconnect(socket, "u1")

    assert manager.connection_count("u1") == 0
    assert "u1" not in manager.active_connections
    # Unknown sockets are ignored
    manager.disconnect(socket, "u1")
