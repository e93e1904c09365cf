"""libhtpasswd exception and warning classes"""

__all__ = [
    "HtpasswdError",
    "NotFoundError",
    "MalformedHashError",
    "UnsupportedAlgorithmError",
    "InsecureAlgorithmWarning",
]


class HtpasswdError(Exception):
    """base class for all errors raised by libhtpasswd"""


class NotFoundError(HtpasswdError, FileNotFoundError):
    """password file does not exist, and creating it was not requested"""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(f"password file not found: {path!s}")


class MalformedHashError(HtpasswdError, ValueError):
    """hash string could not be parsed by the hasher it was given to"""


class UnsupportedAlgorithmError(HtpasswdError, ValueError):
    """algorithm name is unknown, or refers to a scheme that won't be generated"""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"unsupported algorithm: {name!r}")


class InsecureAlgorithmWarning(UserWarning):
    """issued when a password is stored using a weak or unhashed scheme"""
