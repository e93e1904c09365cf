"""Apache htpasswd file support"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from typing import TYPE_CHECKING, Union

from libhtpasswd._logging import logger
from libhtpasswd.algorithms import DEFAULT_PROBE_ORDER, Algorithm, AlgorithmLike
from libhtpasswd.errors import NotFoundError
from libhtpasswd.provider import DigestOptions, compare, digest, identify

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = [
    "HtpasswdFile",
    "upsert",
    "remove",
    "validate",
]

StrPath = Union[str, os.PathLike]

_COLON = ":"

# characters that aren't allowed in usernames.
_INVALID_USER_CHARS = ":\n\r"


def _split_user(line: str) -> str:
    """username field of a line: everything before the first colon"""
    return line.split(_COLON, 1)[0]


def _split_hash(line: str) -> str:
    return line.partition(_COLON)[2]


class HtpasswdFile:
    """
    Ordered list of ``username:hash`` lines, optionally bound to a local file.

    Unlike a mapping, every line of the source is kept in place, including
    lines that aren't records and repeated usernames left by manual edits.
    Lookups and updates act on the first matching line, :meth:`delete`
    removes every matching line.

    :param path:
        file to load from and save to. If unset, the object starts empty
        and :meth:`save` needs an explicit path.

    :param create:
        create an empty file at ``path`` if it doesn't exist, instead of
        raising :exc:`~libhtpasswd.errors.NotFoundError`.

    :raises ValueError:
        mutating methods raise :exc:`ValueError` if the username is empty
        or contains one of ``:\\r\\n``.
    """

    def __init__(self, path: StrPath | None = None, create: bool = False) -> None:
        self._path = path
        self._lines: list[str] = []
        if path:
            self.load(create=create)

    @classmethod
    def from_string(cls, data: str | bytes) -> Self:
        """create new unbound object from file contents"""
        instance = cls()
        instance.load_string(data)
        return instance

    def __repr__(self) -> str:
        tail = f" path={self._path!r}" if self._path else ""
        return f"<{self.__class__.__name__} 0x{id(self):0x}{tail}>"

    @property
    def path(self) -> StrPath | None:
        return self._path

    def load(self, create: bool = False) -> None:
        """(Re)load lines from ``self.path``, replacing current state."""
        if not self._path:
            raise RuntimeError(
                f"{self.__class__.__name__}().path is not set, cannot load"
            )
        mode = "a+" if create else "r"
        try:
            with open(self._path, mode, encoding="utf-8", newline="") as fh:
                fh.seek(0)
                data = fh.read()
        except FileNotFoundError as err:
            raise NotFoundError(self._path) from err
        logger.debug("loaded password file %s", self._path)
        self.load_string(data)

    def load_string(self, data: str | bytes) -> None:
        """Load state from str or utf-8 bytes, replacing current state"""
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        lines = data.split("\n")
        # a trailing newline doesn't start another line
        if lines[-1] == "":
            lines.pop()
        self._load_lines(line.removesuffix("\r") for line in lines)

    def _load_lines(self, lines: Iterable[str]) -> None:
        result = list(lines)
        seen: set[str] = set()
        for line in result:
            if _COLON not in line:
                continue
            # NOTE: repeated users are kept, lookups and updates use the first one
            user = _split_user(line)
            if user in seen:
                logger.warning(
                    "username occurs multiple times in source file: %r", user
                )
            seen.add(user)
        self._lines = result

    def save(self, path: StrPath | None = None) -> None:
        """Write all lines to ``path``, or ``self.path`` if not given."""
        path = path or self._path
        if not path:
            raise RuntimeError(
                f"{self.__class__.__name__}().path is not set, an explicit path is required"
            )
        # NOTE: whole-file rewrite, not a rename; a crash mid-write can truncate the file.
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(self.to_string())
        logger.debug("saved password file %s (%d lines)", path, len(self._lines))

    def to_string(self) -> str:
        """Export lines joined by ``\\n``, with no trailing newline"""
        return "\n".join(self._lines)

    def _iter_matches(self, user: str) -> Iterator[tuple[int, str]]:
        for idx, line in enumerate(self._lines):
            if _split_user(line) == user:
                yield idx, line

    def users(self) -> list[str]:
        """Return usernames of all records, in file order, without repeats"""
        users = (_split_user(line) for line in self._lines if _COLON in line)
        return list(dict.fromkeys(users))

    def get_hash(self, user: str) -> str | None:
        """Return hash of the first record for ``user``, or ``None`` if not found."""
        for _, line in self._iter_matches(user):
            return _split_hash(line)
        return None

    def set_hash(self, user: str, hash: str) -> bool:
        """
        Replace the first record for ``user``, or append one.
        Later records with the same username are left untouched.

        :returns:
            * ``True`` if an existing record was replaced.
            * ``False`` if the record was appended.
        """
        newline = _render_record(user, hash)
        for idx, _ in self._iter_matches(user):
            self._lines[idx] = newline
            return True
        self._lines.append(newline)
        return False

    def delete(self, user: str) -> bool:
        """Delete every record for ``user``.

        :returns:
            * ``True`` if at least one record was deleted.
            * ``False`` if user not found.
        """
        _validate_user(user)
        kept = [line for line in self._lines if _split_user(line) != user]
        found = len(kept) != len(self._lines)
        self._lines = kept
        return found

    def check_password(
        self,
        user: str,
        password: str,
        algorithms: Sequence[AlgorithmLike] = DEFAULT_PROBE_ORDER,
    ) -> bool:
        """
        Verify password against every record for ``user``.

        Each record is tried with each of ``algorithms`` in order; the first
        success wins. A failed record doesn't stop the scan, a later record
        for the same user may still match.

        When more than one algorithm is given, plaintext comparison is skipped
        for records holding a recognizable MD5, SHA-1 or bcrypt hash.
        """
        schemes = [Algorithm.parse(algorithm) for algorithm in algorithms]
        for _, line in self._iter_matches(user):
            hash = _split_hash(line)
            if any(
                compare(password, hash, algorithm)
                for algorithm in _schemes_for(hash, schemes)
            ):
                return True
        return False


def _schemes_for(hash: str, schemes: list[Algorithm]) -> list[Algorithm]:
    if len(schemes) > 1 and Algorithm.PLAIN in schemes and identify(hash) is not None:
        return [algorithm for algorithm in schemes if algorithm is not Algorithm.PLAIN]
    return schemes


def _validate_user(user: str) -> None:
    if not user:
        raise ValueError("user must not be empty")
    if any(c in _INVALID_USER_CHARS for c in user):
        raise ValueError(f"user contains invalid characters: {user!r}")


def _render_record(user: str, hash: str) -> str:
    _validate_user(user)
    return f"{user}{_COLON}{hash}"


def upsert(
    path: StrPath | None,
    username: str,
    password: str,
    *,
    create: bool = False,
    options: DigestOptions | None = None,
) -> str:
    """
    Inserts or updates a user in a password file.

    An empty ``path`` only computes the record, nothing is read or written.

    :raises NotFoundError: if the file is missing and ``create`` is unset.
    :returns: the new ``username:hash`` line.
    """
    hash = digest(password, options)
    newline = _render_record(username, hash)

    if path:
        htpasswd = HtpasswdFile(path, create=create)
        existing = htpasswd.set_hash(username, hash)
        htpasswd.save()
        logger.debug(
            "%s user %r in %s", "updated" if existing else "added", username, path
        )

    return newline


def remove(path: StrPath, username: str) -> bool:
    """
    Removes a user from a password file.

    :raises NotFoundError: if the file is missing.
    :returns: True if the user was found and removed, False otherwise.
    """
    htpasswd = HtpasswdFile(path)
    found = htpasswd.delete(username)
    if found:
        htpasswd.save()
        logger.debug("removed user %r from %s", username, path)
    else:
        logger.debug("user %r not found in %s", username, path)
    return found


def validate(
    path: StrPath,
    username: str,
    password: str,
    *,
    create: bool = False,
    algorithm: AlgorithmLike | None = None,
) -> bool:
    """
    Validates a user's password against a password file.

    Without ``algorithm``, each record is tried with MD5, SHA-1, bcrypt
    and finally plaintext, in that order. Plaintext is only tried for
    records that don't hold a recognizable hash.

    :raises NotFoundError: if the file is missing and ``create`` is unset.
    :returns: whether the password matches.
    """
    htpasswd = HtpasswdFile(path, create=create)
    algorithms = [algorithm] if algorithm else DEFAULT_PROBE_ORDER
    return htpasswd.check_password(username, password, algorithms)
