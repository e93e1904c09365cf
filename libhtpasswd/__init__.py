"""libhtpasswd - read & write Apache htpasswd files"""

from libhtpasswd.algorithms import Algorithm
from libhtpasswd.errors import (
    HtpasswdError,
    MalformedHashError,
    NotFoundError,
    UnsupportedAlgorithmError,
)
from libhtpasswd.provider import DigestOptions, compare, digest
from libhtpasswd.store import HtpasswdFile, remove, upsert, validate

__version__ = "1.0.0"

__all__ = [
    "Algorithm",
    "DigestOptions",
    "HtpasswdError",
    "HtpasswdFile",
    "MalformedHashError",
    "NotFoundError",
    "UnsupportedAlgorithmError",
    "compare",
    "digest",
    "remove",
    "upsert",
    "validate",
]
