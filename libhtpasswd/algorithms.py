from __future__ import annotations

import enum
from typing import Union

from libhtpasswd.errors import UnsupportedAlgorithmError

__all__ = ["Algorithm", "AlgorithmLike", "DEFAULT_ALGORITHM", "DEFAULT_PROBE_ORDER"]


class Algorithm(str, enum.Enum):
    PLAIN = "PLAIN"
    MD5 = "MD5"
    SHA1 = "SHA-1"
    BCRYPT = "BCRYPT"

    @classmethod
    def parse(cls, value: AlgorithmLike) -> Algorithm:
        """
        Resolve an algorithm from an enum member or a user supplied name.

        Names are matched case-insensitively, with or without the dash
        (``"sha1"``, ``"SHA-1"``). ``"CRYPT"`` is recognized only so it
        can be refused.

        :raises UnsupportedAlgorithmError: for unknown names and for ``CRYPT``.
        """
        if isinstance(value, cls):
            return value
        key = str(value).upper().replace("-", "").replace("_", "")
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnsupportedAlgorithmError(value) from None


AlgorithmLike = Union[Algorithm, str]

_ALIASES = {
    "PLAIN": Algorithm.PLAIN,
    "PLAINTEXT": Algorithm.PLAIN,
    "MD5": Algorithm.MD5,
    "SHA": Algorithm.SHA1,
    "SHA1": Algorithm.SHA1,
    "BCRYPT": Algorithm.BCRYPT,
}

#: used by digest() when no algorithm is requested
DEFAULT_ALGORITHM = Algorithm.MD5

#: order in which validate() tries algorithms when none is given;
#: plaintext comparison comes last, and only for records that
#: provider.identify() does not recognize as a hash.
DEFAULT_PROBE_ORDER: tuple[Algorithm, ...] = (
    Algorithm.MD5,
    Algorithm.SHA1,
    Algorithm.BCRYPT,
    Algorithm.PLAIN,
)
