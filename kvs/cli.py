import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .errors import KeyNotFound, KvsError
from .store import KvStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvs", description="A key-value store persisted as a command log."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--path",
        dest="path",
        type=Path,
        default=Path(os.environ.get("KVS_PATH", ".")),
        help="Directory holding log.txt, or the log file itself (default: $KVS_PATH or .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    set_parser = subparsers.add_parser("set", help="Set the value of a key")
    set_parser.add_argument("key", metavar="KEY", help="The key")
    set_parser.add_argument("value", metavar="VALUE", help="The value to store")

    get_parser = subparsers.add_parser("get", help="Get the value of a key")
    get_parser.add_argument("key", metavar="KEY", help="The key")

    rm_parser = subparsers.add_parser("rm", help="Remove a key")
    rm_parser.add_argument("key", metavar="KEY", help="The key to remove")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_usage(sys.stderr)
        print("kvs: error: no command given, try --help", file=sys.stderr)
        return 2

    try:
        with KvStore.open(args.path) as store:
            if args.command == "set":
                store.set(args.key, args.value)
            elif args.command == "get":
                value = store.get(args.key)
                print("Key not found" if value is None else value)
            elif args.command == "rm":
                store.remove(args.key)
    except KeyNotFound as e:
        print(e)
        return 1
    except KvsError as e:
        print(f"kvs: error: {e}", file=sys.stderr)
        return 1
    return 0
