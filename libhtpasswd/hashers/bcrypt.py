from __future__ import annotations

from typing import Literal

import bcrypt

from libhtpasswd._logging import logger
from libhtpasswd._salt import RandomBytes, generate_salt
from libhtpasswd._utils.encoding import (
    StrOrBytes,
    as_bytes,
    as_str,
    bcrypt_b64_encode,
)
from libhtpasswd.errors import MalformedHashError
from libhtpasswd.hashers.abc import PasswordHasher
from libhtpasswd.inspect.bcrypt import (
    BcryptHashInfo,
    inspect_bcrypt_hash,
    parse_bcrypt_hash,
)

BcryptPrefix = Literal["2y", "2b", "2a"]

__all__ = [
    "BcryptHasher",
    "BCRYPT_SALT_SIZE",
    "DEFAULT_COST_FACTOR",
    "MAX_SECRET_SIZE",
]

#: raw salt size, encodes to the 22 salt chars of the hash string
BCRYPT_SALT_SIZE = 16

#: matches ``htpasswd -B`` without ``-C``
DEFAULT_COST_FACTOR = 5

#: bcrypt only looks at the first 72 bytes of the secret
MAX_SECRET_SIZE = 72


class BcryptHasher(PasswordHasher):
    def __init__(
        self,
        cost_factor: int = DEFAULT_COST_FACTOR,
        *,
        salt: bytes | None = None,
        random_bytes: RandomBytes | None = None,
        # NOTE: apache's libapr only recognizes the "2y" ident
        prefix: BcryptPrefix = "2y",
    ) -> None:
        if salt is not None and len(salt) != BCRYPT_SALT_SIZE:
            msg = f"bcrypt salt must be {BCRYPT_SALT_SIZE} bytes, got {len(salt)}"
            raise ValueError(msg)
        self._cost_factor = cost_factor
        self._salt = salt
        self._random_bytes = random_bytes
        self.prefix = prefix

    def digest(self, secret: StrOrBytes) -> str:
        """
        :param secret: Secret to hash, utf-8 encoded if given as str
        :return: Self describing ``$2y$<cost>$<salt><checksum>`` string
        """
        salt = self._salt or generate_salt(BCRYPT_SALT_SIZE, self._random_bytes)
        config = BcryptHashInfo(
            prefix=self.prefix,
            cost=self._cost_factor,
            salt=bcrypt_b64_encode(salt),
            hash="",
        ).bcrypt_salt
        return as_str(bcrypt.hashpw(self._prepare_secret(secret), config))

    def compare(self, secret: StrOrBytes, hash: StrOrBytes) -> bool:
        try:
            info = parse_bcrypt_hash(as_str(hash))
            return bcrypt.checkpw(
                password=self._prepare_secret(secret),
                hashed_password=info.as_str().encode(),
            )
        except MalformedHashError as err:
            logger.debug("bcrypt compare failed: %s", err)
        except ValueError as err:
            # bcrypt library rejects, or a secret that is not utf-8 encodable
            logger.debug("bcrypt rejected input: %s", err)
        return False

    def identify(self, hash: StrOrBytes) -> bool:
        return inspect_bcrypt_hash(as_str(hash)) is not None

    @classmethod
    def _prepare_secret(cls, secret: StrOrBytes) -> bytes:
        return as_bytes(secret)[:MAX_SECRET_SIZE]
