from __future__ import annotations

import bcrypt
import pytest

from libhtpasswd.hashers.bcrypt import (
    BCRYPT_SALT_SIZE,
    DEFAULT_COST_FACTOR,
    BcryptHasher,
)
from libhtpasswd.inspect.bcrypt import inspect_bcrypt_hash

UPASS_TABLE = "táБℓə"


@pytest.fixture
def hasher() -> BcryptHasher:
    return BcryptHasher(cost_factor=4)


@pytest.mark.parametrize("secret", ["a", "a" * 72, UPASS_TABLE, ""])
def test_hash_and_compare(hasher: BcryptHasher, secret: str) -> None:
    hash = hasher.digest(secret)
    assert hasher.identify(hash)
    assert hasher.compare(secret, hash)
    assert not hasher.compare(secret + "x", hash)


def test_random_salts(hasher: BcryptHasher) -> None:
    first = hasher.digest("Secret")
    second = hasher.digest("Secret")
    assert first != second
    assert hasher.compare("Secret", first)
    assert hasher.compare("Secret", second)


def test_fixed_salt_is_deterministic() -> None:
    hasher = BcryptHasher(salt=bytes(BCRYPT_SALT_SIZE))
    hash = hasher.digest("Secret")
    assert hash == hasher.digest("Secret")
    assert hash.startswith(f"$2y${DEFAULT_COST_FACTOR:02}$")
    # zero bytes encode to the first char of bcrypt's alphabet
    assert hash[7:29] == "." * 22


def test_injected_random_source() -> None:
    calls: list[int] = []

    def random_bytes(size: int) -> bytes:
        calls.append(size)
        return b"\x01" * size

    hasher = BcryptHasher(cost_factor=4, random_bytes=random_bytes)
    assert hasher.digest("Secret") == hasher.digest("Secret")
    assert calls == [BCRYPT_SALT_SIZE, BCRYPT_SALT_SIZE]


def test_random_source_wrong_size() -> None:
    hasher = BcryptHasher(cost_factor=4, random_bytes=lambda size: b"short")
    with pytest.raises(ValueError, match="random source returned 5 bytes"):
        hasher.digest("Secret")


@pytest.mark.parametrize("salt", [b"", b"x" * 15, b"x" * 17])
def test_salt_size(salt: bytes) -> None:
    with pytest.raises(ValueError, match="bcrypt salt must be 16 bytes"):
        BcryptHasher(salt=salt)


@pytest.mark.parametrize("cost_factor", [4, 6])
def test_cost_factor(cost_factor: int) -> None:
    hash = BcryptHasher(cost_factor=cost_factor).digest("Secret")
    info = inspect_bcrypt_hash(hash)
    assert info
    assert info.cost == cost_factor
    assert info.prefix == "2y"


def test_cost_factor_rejected_by_library() -> None:
    with pytest.raises(ValueError):
        BcryptHasher(cost_factor=3).digest("Secret")


def test_prefix() -> None:
    hash = BcryptHasher(cost_factor=4, prefix="2b").digest("Secret")
    assert hash.startswith("$2b$04$")


def test_password_truncation(hasher: BcryptHasher) -> None:
    secret = "a" * 72
    hash = hasher.digest(secret)
    assert hasher.compare(secret + "ignored", hash)


@pytest.mark.parametrize(
    ("secret", "hash", "expected"),
    [
        (
            "U*U*U*U*",
            "$2a$05$c92SVSfjeiCD6F2nAD6y0uBpJDjdRkt0EgeC4/31Rf2LUZbDRDE.O",
            True,
        ),
        (
            "U*U*U*U",
            "$2a$05$c92SVSfjeiCD6F2nAD6y0uBpJDjdRkt0EgeC4/31Rf2LUZbDRDE.O",
            False,
        ),
    ],
)
def test_known_hashes(
    hasher: BcryptHasher, secret: str, hash: str, expected: bool
) -> None:
    assert hasher.compare(secret, hash) is expected


def test_matches_library(hasher: BcryptHasher) -> None:
    hash = hasher.digest("Secret")
    assert bcrypt.checkpw(b"Secret", hash.encode())


@pytest.mark.parametrize(
    "hash",
    [
        "",
        "garbage",
        "X03MO1qnZdYdgyfeuILPmQ==",
        "$2y$05$tooshort",
        "$2z$05$c92SVSfjeiCD6F2nAD6y0uBpJDjdRkt0EgeC4/31Rf2LUZbDRDE.O",
    ],
)
def test_compare_malformed(hasher: BcryptHasher, hash: str) -> None:
    assert hasher.compare("Secret", hash) is False
    assert not hasher.identify(hash)


def test_compare_unencodable_secret(hasher: BcryptHasher) -> None:
    assert hasher.compare("\ud800", hasher.digest("password")) is False
