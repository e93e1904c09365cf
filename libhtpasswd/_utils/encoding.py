from __future__ import annotations

import base64
from typing import Union

StrOrBytes = Union[str, bytes]

_STD_B64_CHARS = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
BCRYPT_B64_CHARS = b"./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

_to_bcrypt_b64 = bytes.maketrans(_STD_B64_CHARS, BCRYPT_B64_CHARS)


def as_bytes(value: StrOrBytes) -> bytes:
    return value.encode("utf8") if isinstance(value, str) else value


def as_str(value: StrOrBytes) -> str:
    return value.decode("utf8") if isinstance(value, bytes) else value


def b64_encode(data: bytes) -> str:
    """standard padded base64, as written by ``htpasswd -s``"""
    return base64.b64encode(data).decode("ascii")


def bcrypt_b64_encode(data: bytes) -> str:
    """
    encode using bcrypt's base64 variant: ``./A-Za-z0-9`` alphabet, no padding.

    16 bytes of salt encode to exactly 22 chars, with the unused
    trailing bits zeroed.
    """
    encoded = base64.b64encode(data).rstrip(b"=")
    return encoded.translate(_to_bcrypt_b64).decode("ascii")
