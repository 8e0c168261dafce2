#!/usr/bin/env python3

from __future__ import annotations

import argparse
import sys

from src.cli.commands import extraction


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dictionary-based term-mention extraction.",
        prog="python -m main",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    extraction.register_commands(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv

    parser = build_parser()
    try:
        args = parser.parse_args(raw_args)
    except argparse.ArgumentError as exc:
        parser.error(str(exc))

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
