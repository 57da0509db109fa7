"""Command line for sealing and unsealing Fe26 tokens.

Start here with `python -m ironseal.frontend.cli.app`, or run:

    ironseal seal "some payload" --password-id k1 --password-env IRON_PASSWORD
    ironseal unseal TOKEN --password-file passwords.json
"""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from ironseal.core.exceptions import IronError
from ironseal.core.models import (
    AES_128_CBC,
    AES_256_CBC,
    DEFAULT_ENCRYPTION_OPTIONS,
    DEFAULT_INTEGRITY_OPTIONS,
    Options,
    get_algorithm,
)
from ironseal.frontend.cli.clipboard import copy_token
from ironseal.frontend.cli.logging_config import configure_logging
from ironseal.security import PasswordSource, seal, unseal

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _build_arg_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--algorithm",
        choices=[AES_128_CBC.name, AES_256_CBC.name],
        default=DEFAULT_ENCRYPTION_OPTIONS.algorithm.name,
        help="Cipher used for the payload",
    )
    common.add_argument(
        "--salt-bits",
        type=_positive_int,
        default=DEFAULT_ENCRYPTION_OPTIONS.salt_bits,
        help="Size of both salts in bits",
    )
    common.add_argument(
        "--iterations",
        type=_positive_int,
        default=DEFAULT_ENCRYPTION_OPTIONS.iterations,
        help="PBKDF2 iterations for the encryption key",
    )
    common.add_argument(
        "--integrity-iterations",
        type=_positive_int,
        default=DEFAULT_INTEGRITY_OPTIONS.iterations,
        help="PBKDF2 iterations for the integrity key",
    )
    common.add_argument(
        "--password-env",
        metavar="VAR",
        default=None,
        help="Read the password from this environment variable instead of prompting",
    )

    parser = argparse.ArgumentParser(
        prog="ironseal",
        description="Seal and unseal Fe26 (iron) tokens.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seal_parser = sub.add_parser("seal", parents=[common], help="Seal a payload into a token")
    seal_parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Payload to seal (default: read stdin)",
    )
    seal_parser.add_argument(
        "--password-id",
        default="",
        help="Password id stored in the token for rotation",
    )
    seal_parser.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the token to the clipboard",
    )

    unseal_parser = sub.add_parser("unseal", parents=[common], help="Verify and decrypt a token")
    unseal_parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="Token to unseal (default: read stdin)",
    )
    unseal_parser.add_argument(
        "--password-file",
        type=Path,
        default=None,
        help="JSON object mapping password ids to passwords",
    )
    return parser


def _options(args: argparse.Namespace) -> tuple[Options, Options]:
    enc_opts = Options(args.salt_bits, get_algorithm(args.algorithm), args.iterations)
    int_opts = Options(args.salt_bits, DEFAULT_INTEGRITY_OPTIONS.algorithm, args.integrity_iterations)
    return enc_opts, int_opts


def _read_password(parser: argparse.ArgumentParser, args: argparse.Namespace) -> str:
    if args.password_env:
        password = os.environ.get(args.password_env)
        if password is None:
            parser.error(f"environment variable {args.password_env} is not set")
        return password
    return getpass.getpass("Password: ")


def _load_password_table(parser: argparse.ArgumentParser, path: Path) -> PasswordSource:
    try:
        table = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        parser.error(f"cannot read password file {path}: {e}")
    if not isinstance(table, dict) or not all(isinstance(v, str) for v in table.values()):
        parser.error(f"password file {path} must hold a JSON object of id -> password strings")
    return PasswordSource.rotation(table)


def _cmd_seal(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    enc_opts, int_opts = _options(args)
    data = args.text.encode("utf-8") if args.text is not None else sys.stdin.buffer.read()
    password = _read_password(parser, args)

    token = seal(data, args.password_id, password, enc_opts, int_opts)
    print(token)
    if args.copy:
        if copy_token(token):
            logger.info("token copied to clipboard")
        else:
            logger.warning("could not copy token to clipboard")
    return 0


def _cmd_unseal(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    enc_opts, int_opts = _options(args)
    token = args.token if args.token is not None else sys.stdin.read()
    if args.password_file is not None:
        password = _load_password_table(parser, args.password_file)
    else:
        password = PasswordSource.single(_read_password(parser, args))

    payload = unseal(token.strip(), password, enc_opts, int_opts)
    sys.stdout.buffer.write(payload)
    sys.stdout.buffer.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    handler = _cmd_seal if args.command == "seal" else _cmd_unseal
    try:
        return handler(parser, args)
    except (IronError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
