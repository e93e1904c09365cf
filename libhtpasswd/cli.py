"""htpasswd compatible command line interface"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
import warnings
from collections.abc import Sequence
from typing import NoReturn, TextIO

from libhtpasswd.algorithms import Algorithm
from libhtpasswd.errors import (
    InsecureAlgorithmWarning,
    NotFoundError,
    UnsupportedAlgorithmError,
)
from libhtpasswd.hashers.bcrypt import DEFAULT_COST_FACTOR
from libhtpasswd.provider import DigestOptions
from libhtpasswd.store import remove, upsert, validate

PROG = "htpasswd"

USAGE = f"""\
{PROG} [-cimBdpsDv] [-C cost] passwordfile username
       {PROG} -b[cmBdpsDv] [-C cost] passwordfile username password

       {PROG} -n[imBdps] [-C cost] username
       {PROG} -nb[mBdps] [-C cost] username password"""

EPILOG = """\
On other systems than Windows and NetWare the '-p' flag will probably not work.
The SHA algorithm does not use a salt and is less secure than the MD5 algorithm."""

EXIT_OK = 0
EXIT_ERROR = 1


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    # htpasswd exits with 1 on bad usage, argparse defaults to 2
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_ERROR, f"{self.prog}: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        usage=USAGE,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    flag = parser.add_argument
    flag("-c", dest="create", action="store_true", help="Create a new file.")
    flag(
        "-n",
        dest="display",
        action="store_true",
        help="Don't update file; display results on stdout.",
    )
    flag(
        "-b",
        dest="batch",
        action="store_true",
        help="Use the password from the command line rather than prompting for it.",
    )
    flag(
        "-i",
        dest="stdin",
        action="store_true",
        help="Read password from stdin without verification (for script usage).",
    )
    # when several algorithm flags are given, the last one wins
    algorithms = (
        ("-m", Algorithm.MD5.value, "Force MD5 hashing of the password (default)."),
        ("-B", Algorithm.BCRYPT.value, "Force bcrypt hashing of the password."),
        ("-d", "CRYPT", "Force CRYPT encryption of the password (not supported)."),
        ("-s", Algorithm.SHA1.value, "Force SHA-1 hashing of the password (insecure)."),
        ("-p", Algorithm.PLAIN.value, "Do not hash the password (plaintext)."),
    )
    for option, name, help in algorithms:
        flag(option, dest="algorithm", action="store_const", const=name, help=help)
    flag(
        "-C",
        dest="cost",
        type=int,
        default=DEFAULT_COST_FACTOR,
        metavar="cost",
        help=(
            "Set the computing time used for the bcrypt algorithm "
            f"(higher is more secure but slower, default: {DEFAULT_COST_FACTOR}, "
            "valid: 4 to 17)."
        ),
    )
    flag("-D", dest="delete", action="store_true", help="Delete the specified user.")
    flag(
        "-v",
        dest="verify",
        action="store_true",
        help="Verify password for the specified user.",
    )
    flag("args", nargs="*", help=argparse.SUPPRESS)
    return parser


def _read_password(
    opts: argparse.Namespace, stdin: TextIO, confirm: bool = True
) -> str:
    if opts.stdin:
        return stdin.readline().rstrip("\r\n")
    if not confirm:
        return getpass.getpass("Enter password: ")
    password = getpass.getpass("New password: ")
    if getpass.getpass("Re-type new password: ") != password:
        raise UsageError("password verification error")
    return password


def _split_args(opts: argparse.Namespace) -> tuple[str, str, str | None]:
    """-> (passwordfile, username, password), passwordfile is empty for -n"""
    args: list[str] = list(opts.args)
    expected = 1 if opts.display else 2
    if opts.batch:
        expected += 1
    if len(args) != expected:
        raise UsageError
    if opts.display:
        args.insert(0, "")
    password = args[2] if opts.batch else None
    return args[0], args[1], password


def _warn_insecure(algorithm: Algorithm) -> None:
    """issue InsecureAlgorithmWarning and print it as ``Warning: ...`` on stderr"""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", InsecureAlgorithmWarning)
        if algorithm is Algorithm.PLAIN:
            warnings.warn(
                "storing passwords as plain text might just not work on this platform.",
                InsecureAlgorithmWarning,
                stacklevel=2,
            )
        elif algorithm is Algorithm.SHA1:
            warnings.warn(
                "the SHA algorithm does not use a salt and is less secure than the MD5 algorithm.",
                InsecureAlgorithmWarning,
                stacklevel=2,
            )
    for warning in caught:
        print(f"Warning: {warning.message}", file=sys.stderr)


def run(opts: argparse.Namespace, stdin: TextIO) -> int:
    if sum(map(bool, (opts.create, opts.display, opts.delete, opts.verify))) > 1:
        raise UsageError("only one of -c -n -v -D may be specified")

    passwordfile, username, password = _split_args(opts)

    if opts.delete:
        if remove(passwordfile, username):
            print(f"Deleting password for user {username}")
        else:
            print(f"User {username} not found")
        return EXIT_OK

    if opts.verify:
        algorithm = Algorithm.parse(opts.algorithm) if opts.algorithm else None
        if password is None:
            password = _read_password(opts, stdin, confirm=False)
        if validate(passwordfile, username, password, algorithm=algorithm):
            print(f"Password for user {username} correct.")
        else:
            print("password verification failed")
        return EXIT_OK

    options = DigestOptions.create(algorithm=opts.algorithm, cost_factor=opts.cost)
    _warn_insecure(options.algorithm)
    if password is None:
        password = _read_password(opts, stdin)

    try:
        entry = upsert(
            passwordfile, username, password, create=opts.create, options=options
        )
    except NotFoundError:
        print(
            f"{PROG}: cannot modify file {passwordfile}; use '-c' to create it",
            file=sys.stderr,
        )
        return EXIT_ERROR

    if opts.display:
        print(entry)
    else:
        print(f"Updating password for user {username}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")
    parser = build_parser()
    opts = parser.parse_args(argv)
    if not opts.args:
        parser.print_help()
        return EXIT_ERROR

    try:
        return run(opts, stdin or sys.stdin)
    except UsageError as err:
        if err.args:
            print(f"{PROG}: {err}", file=sys.stderr)
        else:
            parser.print_usage(sys.stderr)
        return EXIT_ERROR
    except UnsupportedAlgorithmError as err:
        if err.name == "CRYPT":
            print("CRYPT algorithm is too old and not supported.", file=sys.stderr)
        else:
            print(f"{PROG}: {err}", file=sys.stderr)
        return EXIT_ERROR
    except NotFoundError as err:
        print(f"{PROG}: cannot open file {err.path}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as err:
        # bad username, or a cost factor bcrypt won't accept
        print(f"{PROG}: {err}", file=sys.stderr)
        return EXIT_ERROR
