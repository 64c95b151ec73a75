"""Command line entry point starting the log service."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from logly.core import Logly, file, in_memory
from logly.http_api import serve
from logly.log import new_logger
from logly.store import StoreError

DEFAULT_CERT = "./config/localhost.pem"
DEFAULT_KEY = "./config/localhost-key.pem"
HTTP_ADDRESS = ("", 3333)


class ConfigError(Exception):
    """The command line asks for incompatible options."""


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="logly", description="Run the log service.")
    parser.add_argument(
        "-memory", "--memory", action="store_true", help="Choose in-memory storage system"
    )
    parser.add_argument(
        "-file", "--file", action="store_true", help="Choose file storage system (data.db file)"
    )
    parser.add_argument(
        "-idx-memory", "--idx-memory", action="store_true", help="Use an in-memory (hash) index"
    )
    parser.add_argument(
        "-idx-bintree", "--idx-bintree", action="store_true", help="Use a binary-tree based index"
    )
    parser.add_argument(
        "-cert", "--cert", default=DEFAULT_CERT,
        help="Certificate file used for TLS connections",
    )
    parser.add_argument(
        "-key", "--key", default=DEFAULT_KEY,
        help="Certificate key file used for TLS connections",
    )
    return parser.parse_args(argv)


def get_logly(args: argparse.Namespace) -> Logly | None:
    """Build the service the options ask for, or None when no store was chosen."""
    logger = new_logger("main")
    if args.memory and args.file:
        raise ConfigError("cannot choose two store systems at the same time")
    if args.memory:
        logger.info("using in-memory storage")
        return in_memory()
    if args.file:
        logger.info("using file storage (data.db)")
        if args.idx_memory and args.idx_bintree:
            raise ConfigError("cannot choose two indexing systems at the same time")
        return file()
    return None


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logger = new_logger("main")
    try:
        logly = get_logly(args)
    except (ConfigError, StoreError, OSError) as exc:
        logger.critical("%s", exc)
        return 1
    if logly is None:
        logger.critical("no storage system chosen: pass -memory or -file")
        return 1
    try:
        serve(logly, HTTP_ADDRESS, args.cert, args.key)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        logly.logger.critical("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())