"""Hash Provider: algorithm dispatch for digest & compare"""

from __future__ import annotations

import dataclasses

import typing_extensions

from libhtpasswd._salt import RandomBytes
from libhtpasswd.algorithms import DEFAULT_ALGORITHM, Algorithm, AlgorithmLike
from libhtpasswd.hashers.abc import PasswordHasher
from libhtpasswd.hashers.bcrypt import DEFAULT_COST_FACTOR, BcryptHasher
from libhtpasswd.hashers.digest import MD5Hasher, SHA1Hasher
from libhtpasswd.hashers.plain import PlainHasher

__all__ = ["DigestOptions", "get_hasher", "digest", "compare", "identify"]

#: schemes whose hashes are recognizable by format, checked by identify()
HASHING_ALGORITHMS: tuple[Algorithm, ...] = (
    Algorithm.BCRYPT,
    Algorithm.SHA1,
    Algorithm.MD5,
)


@dataclasses.dataclass(frozen=True)
class DigestOptions:
    """
    :param algorithm: scheme used to hash new passwords, MD5 if not given.
    :param salt: 16 byte bcrypt salt, random if not given. Ignored by other schemes.
    :param cost_factor: bcrypt cost, ``htpasswd`` accepts 4 to 17.
        Not range-checked here, the bcrypt library rejects values it can't use.
        Ignored by other schemes.
    """

    algorithm: Algorithm = DEFAULT_ALGORITHM
    salt: bytes | None = None
    cost_factor: int = DEFAULT_COST_FACTOR

    @classmethod
    def create(
        cls,
        algorithm: AlgorithmLike | None = None,
        salt: bytes | None = None,
        cost_factor: int | None = None,
    ) -> DigestOptions:
        """build options from loosely typed values, e.g. cli flags"""
        return cls(
            algorithm=Algorithm.parse(algorithm) if algorithm else DEFAULT_ALGORITHM,
            salt=salt,
            cost_factor=DEFAULT_COST_FACTOR if cost_factor is None else cost_factor,
        )


def get_hasher(
    algorithm: AlgorithmLike,
    *,
    cost_factor: int = DEFAULT_COST_FACTOR,
    salt: bytes | None = None,
    random_bytes: RandomBytes | None = None,
) -> PasswordHasher:
    algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.PLAIN:
        return PlainHasher()
    if algorithm is Algorithm.MD5:
        return MD5Hasher()
    if algorithm is Algorithm.SHA1:
        return SHA1Hasher()
    if algorithm is Algorithm.BCRYPT:
        return BcryptHasher(cost_factor, salt=salt, random_bytes=random_bytes)

    typing_extensions.assert_never(algorithm)


def digest(
    text: str,
    options: DigestOptions | None = None,
    *,
    random_bytes: RandomBytes | None = None,
) -> str:
    """
    Hash ``text`` with the scheme selected by ``options``.

    :param random_bytes:
        callable returning N random bytes, used for bcrypt salts when
        ``options.salt`` is unset. Defaults to :func:`secrets.token_bytes`.

    :returns: hash string to store after ``username:``
    """
    options = options or DigestOptions()
    hasher = get_hasher(
        options.algorithm,
        cost_factor=options.cost_factor,
        salt=options.salt,
        random_bytes=random_bytes,
    )
    return hasher.digest(text)


def compare(text: str, hash: str, algorithm: AlgorithmLike) -> bool:
    """
    Check ``text`` against ``hash`` assuming it was created by ``algorithm``.

    Hashes the scheme can't parse compare as ``False``.

    :raises UnsupportedAlgorithmError: if ``algorithm`` is not a known name.
    """
    return get_hasher(algorithm).compare(text, hash)


def identify(hash: str) -> Algorithm | None:
    """
    Return the hashing scheme whose format ``hash`` matches,
    or ``None`` if it looks like a plaintext value.
    """
    for algorithm in HASHING_ALGORITHMS:
        if get_hasher(algorithm).identify(hash):
            return algorithm
    return None
