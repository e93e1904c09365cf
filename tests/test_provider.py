from __future__ import annotations

import pytest

from libhtpasswd.algorithms import Algorithm
from libhtpasswd.errors import UnsupportedAlgorithmError
from libhtpasswd.hashers.bcrypt import BcryptHasher
from libhtpasswd.hashers.digest import MD5Hasher, SHA1Hasher
from libhtpasswd.hashers.plain import PlainHasher
from libhtpasswd.provider import DigestOptions, compare, digest, get_hasher, identify

ALL_ALGORITHMS = [Algorithm.PLAIN, Algorithm.MD5, Algorithm.SHA1, Algorithm.BCRYPT]
SECRETS = ["a", "secret", "táБℓə", " spaces  "]


@pytest.mark.parametrize(
    ("algorithm", "cls"),
    [
        (Algorithm.PLAIN, PlainHasher),
        (Algorithm.MD5, MD5Hasher),
        ("SHA-1", SHA1Hasher),
        ("bcrypt", BcryptHasher),
    ],
)
def test_get_hasher(algorithm: str, cls: type) -> None:
    assert isinstance(get_hasher(algorithm), cls)


def test_get_hasher_crypt() -> None:
    with pytest.raises(UnsupportedAlgorithmError):
        get_hasher("CRYPT")


@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
@pytest.mark.parametrize("secret", SECRETS)
def test_compare_own_digest(algorithm: Algorithm, secret: str) -> None:
    options = DigestOptions(algorithm=algorithm, cost_factor=4)
    assert compare(secret, digest(secret, options), algorithm) is True


@pytest.mark.parametrize("secret", ["", *SECRETS])
def test_plain_is_identity(secret: str) -> None:
    assert digest(secret, DigestOptions(algorithm=Algorithm.PLAIN)) == secret


@pytest.mark.parametrize("algorithm", [Algorithm.MD5, Algorithm.SHA1])
def test_fast_digest_ignores_salt(algorithm: Algorithm) -> None:
    salted = DigestOptions(algorithm=algorithm, salt=b"s" * 16, cost_factor=10)
    assert digest("secret", salted) == digest("secret", DigestOptions(algorithm))


def test_default_algorithm_is_md5() -> None:
    assert digest("password") == "X03MO1qnZdYdgyfeuILPmQ=="
    assert digest("password", DigestOptions()) == "X03MO1qnZdYdgyfeuILPmQ=="


def test_bcrypt_random_salts() -> None:
    options = DigestOptions(algorithm=Algorithm.BCRYPT, cost_factor=4)
    first = digest("secret", options)
    second = digest("secret", options)
    assert first != second
    assert compare("secret", first, Algorithm.BCRYPT)
    assert compare("secret", second, Algorithm.BCRYPT)


def test_bcrypt_injected_random_source() -> None:
    options = DigestOptions(algorithm=Algorithm.BCRYPT, cost_factor=4)
    first = digest("secret", options, random_bytes=lambda size: b"r" * size)
    second = digest("secret", options, random_bytes=lambda size: b"r" * size)
    assert first == second


def test_bcrypt_explicit_salt() -> None:
    options = DigestOptions(algorithm=Algorithm.BCRYPT, salt=bytes(16), cost_factor=4)
    assert digest("secret", options) == digest("secret", options)
    assert digest("secret", options).startswith("$2y$04$")


@pytest.mark.parametrize(
    ("algorithm", "hash"),
    [
        (Algorithm.BCRYPT, "garbage"),
        (Algorithm.BCRYPT, ""),
        (Algorithm.BCRYPT, "X03MO1qnZdYdgyfeuILPmQ=="),
        (Algorithm.MD5, "$2y$05$" + "." * 53),
        (Algorithm.SHA1, "X03MO1qnZdYdgyfeuILPmQ=="),
        (Algorithm.PLAIN, "X03MO1qnZdYdgyfeuILPmQ=="),
        (Algorithm.MD5, "\ud800"),
        (Algorithm.SHA1, "\ud800"),
    ],
)
def test_compare_mismatch_never_raises(algorithm: Algorithm, hash: str) -> None:
    assert compare("password", hash, algorithm) is False


def test_compare_unsupported_algorithm() -> None:
    with pytest.raises(UnsupportedAlgorithmError):
        compare("password", "hash", "CRYPT")


def test_options_create() -> None:
    assert DigestOptions.create() == DigestOptions()
    assert DigestOptions.create("sha1", cost_factor=7) == DigestOptions(
        algorithm=Algorithm.SHA1, cost_factor=7
    )
    with pytest.raises(UnsupportedAlgorithmError):
        DigestOptions.create("CRYPT")


@pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
def test_compare_unencodable_secret(algorithm: Algorithm) -> None:
    hash = digest("password", DigestOptions(algorithm=algorithm, cost_factor=4))
    assert compare("\ud800", hash, algorithm) is False


@pytest.mark.parametrize(
    ("hash", "expected"),
    [
        ("X03MO1qnZdYdgyfeuILPmQ==", Algorithm.MD5),
        ("W6ph5Mm5Pz8GgiULbPgzG37mj9g=", Algorithm.SHA1),
        (
            "$2a$05$c92SVSfjeiCD6F2nAD6y0uBpJDjdRkt0EgeC4/31Rf2LUZbDRDE.O",
            Algorithm.BCRYPT,
        ),
        ("secret", None),
        ("", None),
        ("not base64 but 24 chars!", None),
    ],
)
def test_identify(hash: str, expected: Algorithm | None) -> None:
    assert identify(hash) is expected
