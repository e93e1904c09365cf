from __future__ import annotations

import base64
import hashlib
import hmac

from libhtpasswd._utils.encoding import StrOrBytes, as_bytes, b64_encode
from libhtpasswd.hashers.abc import PasswordHasher

__all__ = ["FastDigestHasher", "MD5Hasher", "SHA1Hasher"]


class FastDigestHasher(PasswordHasher):
    """
    Unsalted base64 encoded message digest.

    There is no work factor and no salt, so identical passwords produce
    identical hashes. Kept for compatibility with existing files only.
    """

    HASH_NAME: str
    DIGEST_SIZE: int

    def digest(self, secret: StrOrBytes) -> str:
        raw = hashlib.new(self.HASH_NAME, as_bytes(secret)).digest()
        return b64_encode(raw)

    def compare(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        try:
            expected = as_bytes(self.digest(secret))
            actual = as_bytes(hash)
        except UnicodeEncodeError:
            # lone surrogates in a str secret or hash
            return False
        # compare_digest runs in time dependent only on the length of the inputs
        return hmac.compare_digest(expected, actual)

    def identify(self, hash: StrOrBytes) -> bool:
        """true for strict padded base64 of exactly DIGEST_SIZE bytes"""
        try:
            raw = base64.b64decode(as_bytes(hash), validate=True)
        except ValueError:
            return False
        return len(raw) == self.DIGEST_SIZE


class MD5Hasher(FastDigestHasher):
    HASH_NAME = hashlib.md5().name
    DIGEST_SIZE = hashlib.md5().digest_size


class SHA1Hasher(FastDigestHasher):
    HASH_NAME = hashlib.sha1().name
    DIGEST_SIZE = hashlib.sha1().digest_size
