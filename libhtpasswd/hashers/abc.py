from typing import Protocol

from libhtpasswd._utils.encoding import StrOrBytes

__all__ = ["PasswordHasher"]


class PasswordHasher(Protocol):
    def digest(self, secret: StrOrBytes) -> str: ...

    def compare(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        """Checks secret against hash, returns False for hashes it can't parse."""
        ...

    def identify(self, hash: StrOrBytes) -> bool: ...
