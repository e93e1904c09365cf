from __future__ import annotations

import secrets
from typing import Callable

RandomBytes = Callable[[int], bytes]


def generate_salt(size: int, random_bytes: RandomBytes | None = None) -> bytes:
    source = random_bytes or secrets.token_bytes
    salt = source(size)
    if len(salt) != size:
        msg = f"random source returned {len(salt)} bytes, expected {size}"
        raise ValueError(msg)
    return salt
