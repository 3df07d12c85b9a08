#!/usr/bin/env python3
"""Programmatic decoding example.

This demonstrates using the decoder directly, the way a server loop would:

* read client lines
* hand decoded triggers on
* show malformed lines to the operator and keep going
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from tertestrial import DecodeError, Trigger, decode

SAMPLE_LINES = [
    "{}",
    '{"filename": "src/app.py"}',
    '{"filename": "src/app.py", "line": "12", "client": "vim"}',
    '{"filename}',
    '{"line": 12}',
]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decode sample client lines.")
    parser.add_argument("lines", nargs="*", help="Client lines to decode (defaults to samples)")
    return parser.parse_args(argv)


def _describe(trigger: Trigger) -> str:
    if trigger.filename is None:
        return "run all tests"
    if trigger.line is None:
        return f"run tests in {trigger.filename}"
    return f"run test at {trigger.filename}:{trigger.line}"


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    for line in args.lines or SAMPLE_LINES:
        result = decode(line)
        if isinstance(result, DecodeError):
            print(result.render(), file=sys.stderr)
            continue
        print(_describe(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
