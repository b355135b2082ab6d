"""Entity id and timestamp helpers."""

import base64
import enum
import time
import uuid


class IDType(str, enum.Enum):
    NONE = "7"
    USER = "u"
    SESSION = "s"
    BOARD = "b"
    VIEW = "v"
    CARD = "c"


def new_id(id_type: IDType = IDType.NONE) -> str:
    """Return a 27-character id: one type prefix + 26 base32 chars of a random UUID."""
    encoded = base64.b32encode(uuid.uuid4().bytes).decode("ascii").rstrip("=").lower()
    return f"{id_type.value}{encoded}"


def get_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)
