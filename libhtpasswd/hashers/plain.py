from __future__ import annotations

from libhtpasswd._utils.encoding import StrOrBytes, as_str
from libhtpasswd.hashers.abc import PasswordHasher

__all__ = ["PlainHasher"]


class PlainHasher(PasswordHasher):
    """stores the secret as-is, only usable on platforms where apache allows it"""

    def digest(self, secret: StrOrBytes) -> str:
        return as_str(secret)

    def compare(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        try:
            return as_str(secret) == as_str(hash)
        except UnicodeDecodeError:
            return False

    def identify(self, hash: StrOrBytes) -> bool:
        return True
