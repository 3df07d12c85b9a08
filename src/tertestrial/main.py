"""CLI entrypoint: decode client trigger lines.

Reads one client message per line, writes each decoded trigger to stdout as a
JSON line and reports malformed lines on stderr without stopping.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from tertestrial import __version__
from tertestrial.config import TertestrialSettings
from tertestrial.errors import DecodeError
from tertestrial.logging import configure_logging
from tertestrial.trigger import decode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_DECODE_ERRORS = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tertestrial-decode",
        description="Decode newline-delimited Tertestrial client commands",
    )
    parser.add_argument("--version", action="version", version=f"tertestrial {__version__}")
    parser.add_argument(
        "--input",
        default=None,
        help="File to read client lines from (defaults to stdin)",
    )
    return parser


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
    return raw


def decode_stream(lines: Iterable[str], out: TextIO, err: TextIO) -> int:
    """Decode every line, returning how many of them failed."""

    failures = 0
    for number, raw in enumerate(lines, start=1):
        line = _strip_terminator(raw)
        if not line:
            continue

        result = decode(line)
        if isinstance(result, DecodeError):
            failures += 1
            logger.warning("Undecodable client line", extra={"line_number": number})
            print(result.render(), file=err)
            continue

        out.write(result.to_json_line())
        out.flush()
    return failures


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TertestrialSettings()
    except ValidationError as e:
        # Logging isn't configured yet.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_CONFIG_ERROR

    configure_logging(settings.log_level, settings.log_format)

    try:
        if args.input is None:
            failures = decode_stream(sys.stdin, sys.stdout, sys.stderr)
        else:
            with Path(args.input).open(encoding="utf-8", newline="") as f:
                failures = decode_stream(f, sys.stdout, sys.stderr)
    except Exception:
        logger.exception("Decoding failed")
        return EXIT_FAILED

    if failures:
        logger.info("Finished with undecodable lines", extra={"failures": failures})
        return EXIT_DECODE_ERRORS
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
