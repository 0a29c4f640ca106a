# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Inspect and tweak a DB file from the shell.
#
# COMMANDS:
# ---------
#   python -m picklekv.cli keys
#   python -m picklekv.cli get KEY
#   python -m picklekv.cli set KEY VALUE     (VALUE parsed as JSON, else a string)
#   python -m picklekv.cli lget NAME POS
#   python -m picklekv.cli llen NAME
#   python -m picklekv.cli rem KEY
#   python -m picklekv.cli stats
#
# OPTIONS:
# --------
#   --db PATH      DB file (default: PICKLEKV_DB_PATH from config)
#   --codec NAME   json / bson (default: PICKLEKV_CODEC from config)
#
#   Read commands open the file read-only. Write commands use AUTO
#   dumping; only `set` creates a missing file.
#
# ==============================================

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from picklekv.codec import get_codec
from picklekv.config import get_config
from picklekv.errors import PickleDbError
from picklekv.persistence import DumpPolicy
from picklekv.pickle_db import PickleDb

WRITE_COMMANDS = {"set", "rem"}
CREATE_COMMANDS = {"set"}


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _show(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="picklekv", description="Inspect a picklekv DB file")
    parser.add_argument("--db", help="Path of the DB file")
    parser.add_argument("--codec", help="Codec the file was written with (json or bson)")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("keys", help="List all keys")
    commands.add_parser("stats", help="Show key counts")

    get_cmd = commands.add_parser("get", help="Print a value")
    get_cmd.add_argument("key")

    set_cmd = commands.add_parser("set", help="Set a value")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")

    lget_cmd = commands.add_parser("lget", help="Print one list item")
    lget_cmd.add_argument("name")
    lget_cmd.add_argument("pos", type=int)

    llen_cmd = commands.add_parser("llen", help="Print a list's length")
    llen_cmd.add_argument("name")

    rem_cmd = commands.add_parser("rem", help="Remove a value or list")
    rem_cmd.add_argument("key")

    return parser


def _open(args: argparse.Namespace) -> PickleDb:
    config = get_config()
    path = Path(args.db or config.db_path)
    codec = get_codec(args.codec or config.codec)

    if args.command not in WRITE_COMMANDS:
        return PickleDb.load_read_only(path, codec=codec)
    if path.is_file():
        return PickleDb.load(path, DumpPolicy.auto(), codec=codec)
    if args.command in CREATE_COMMANDS:
        return PickleDb.new(path, DumpPolicy.auto(), codec=codec)
    # nothing to remove from a file that does not exist
    return PickleDb.load_read_only(path, codec=codec)


def run(args: argparse.Namespace) -> int:
    try:
        db = _open(args)
    except PickleDbError as e:
        print(f"✗ {e}")
        return 1

    with db:
        if args.command == "keys":
            for key in sorted(db.get_all()):
                print(key)
            return 0

        if args.command == "stats":
            keys = db.get_all()
            lists = [k for k in keys if db.lexists(k)]
            print(f"📊 {db.location}")
            print(f"   → Total keys: {len(keys)}")
            print(f"   → Values: {len(keys) - len(lists)}")
            print(f"   → Lists: {len(lists)} ({sum(db.llen(k) for k in lists)} items)")
            return 0

        if args.command == "get":
            if db.lexists(args.key):
                print(_show(db.lgetall(args.key)))
                return 0
            if not db.exists(args.key):
                print(f"✗ Key '{args.key}' not found")
                return 1
            print(_show(db.get(args.key)))
            return 0

        if args.command == "lget":
            if not db.lexists(args.name) or not 0 <= args.pos < db.llen(args.name):
                print(f"✗ No item {args.pos} in list '{args.name}'")
                return 1
            print(_show(db.lget(args.name, args.pos)))
            return 0

        if args.command == "llen":
            print(db.llen(args.name))
            return 0

        if args.command == "set":
            db.set(args.key, _parse_value(args.value))
            if db.last_dump_error is not None:
                print(f"✗ {db.last_dump_error}")
                return 1
            print(f"✓ Set '{args.key}'")
            return 0

        if args.command == "rem":
            if db.rem(args.key):
                print(f"✓ Removed '{args.key}'")
                return 0
            print(f"✗ Key '{args.key}' not found")
            return 1

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
