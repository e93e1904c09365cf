from __future__ import annotations

import dataclasses
import re

from libhtpasswd.errors import MalformedHashError

BCRYPT_HASH_REGEX = re.compile(
    r"^\$(?P<prefix>2a|2b|2y)\$(?P<cost>\d{2})\$"
    r"(?P<salt>[./A-Za-z0-9]{22})(?P<hash>[./A-Za-z0-9]{31})$"
)


@dataclasses.dataclass
class BcryptHashInfo:
    prefix: str
    cost: int
    salt: str
    hash: str

    @property
    def bcrypt_salt(self) -> bytes:
        """config string accepted by :func:`bcrypt.hashpw`"""
        return f"${self.prefix}${self.cost:02}${self.salt}".encode()

    def as_str(self) -> str:
        return f"${self.prefix}${self.cost:02}${self.salt}{self.hash}"


def inspect_bcrypt_hash(hash: str) -> BcryptHashInfo | None:
    result = BCRYPT_HASH_REGEX.match(hash)
    if not result:
        return None

    return BcryptHashInfo(
        prefix=result.group("prefix"),
        cost=int(result.group("cost")),
        salt=result.group("salt"),
        hash=result.group("hash"),
    )


def parse_bcrypt_hash(hash: str) -> BcryptHashInfo:
    info = inspect_bcrypt_hash(hash)
    if info is None:
        msg = f"not a bcrypt hash: {hash[:7]!r}..."
        raise MalformedHashError(msg)
    return info
