from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from alge.core.catalog import get_schema, list_schemas
from alge.serde.config import SerdeSettings
from alge.serde.engine import deserialize
from alge.serde.errors import DeserializationError, SerdeConfigError
from alge.serde.logging import configure_logging

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    """Turn converted values (tuples included) into something json.dumps accepts."""
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def _read_input(source: str | None) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text()


def _add_logging_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--verbose", action="store_true", help="Emit DEBUG logs to stderr.")
    p.add_argument("--log-json", action="store_true", help="Render logs as JSON lines.")


def _setup_logging(args: argparse.Namespace, settings: SerdeSettings) -> None:
    configure_logging(
        verbose=args.verbose or settings.verbose,
        log_json=args.log_json or settings.log_json,
    )


def _cmd_list(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="alge list", description="List the example schemas.")
    p.parse_args(argv)
    for name, desc in list_schemas():
        print(f"{name.value}\t{desc}")
    return 0


def _cmd_check(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="alge check",
        description="Deserialize a JSON document against an example schema and print the result.",
    )
    p.add_argument("schema", type=str, help="Schema name (see `alge list`).")
    p.add_argument("file", nargs="?", default=None, help="JSON file to read (default: stdin).")
    p.add_argument("--config", type=str, default=None, help="Explicit TOML config path.")
    p.add_argument("--max-depth", type=int, default=None, help="Override the nesting limit.")
    _add_logging_flags(p)
    args = p.parse_args(argv)

    try:
        settings = SerdeSettings.load(args.config)
    except SerdeConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    _setup_logging(args, settings)

    try:
        desc = get_schema(args.schema)
    except KeyError:
        names = ", ".join(name.value for name, _ in list_schemas())
        print(f"Unknown schema: {args.schema} (expected one of: {names})", file=sys.stderr)
        return 2

    try:
        raw = _read_input(args.file)
    except OSError as exc:
        print(f"[ERROR] cannot read {args.file}: {exc}", file=sys.stderr)
        return 2
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        print(f"[ERROR] invalid JSON: {exc}", file=sys.stderr)
        return 1

    overrides = {} if args.max_depth is None else {"max_depth": args.max_depth}
    try:
        options = settings.to_options(**overrides)
    except ValidationError as exc:
        print(f"[ERROR] invalid options: {exc}", file=sys.stderr)
        return 2
    logger.debug("checking input against %s", desc)
    try:
        typed = deserialize(desc, value, options)
    except DeserializationError as exc:
        print(exc.describe(), file=sys.stderr)
        return 1
    print(json.dumps(_jsonable(typed)))
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="alge", description="Algebraic type descriptor utilities.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list")
    sub.add_parser("check")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "list":
        code = _cmd_list(rest)
    elif cmd == "check":
        code = _cmd_check(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
