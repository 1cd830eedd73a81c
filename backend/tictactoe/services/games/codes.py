import random
import string
import time
from typing import Optional

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length: int = 6) -> str:
    """Generate a short, shareable room code such as ``K3ZQ8A``.

    Uniqueness is not checked here; the registry re-samples on collision.
    """
    return ''.join(random.choices(ROOM_CODE_ALPHABET, k=length))


def generate_internal_id(code: str, now: Optional[float] = None) -> str:
    """Socket.IO room name for a room code, e.g. ``room-1700000000000-k3zq8a``."""
    millis = int((now if now is not None else time.time()) * 1000)
    return f"room-{millis}-{code.lower()}"
