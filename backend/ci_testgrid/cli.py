"""
Parse a Go test build log into structured per-test results.

Usage:
    ci-testgrid-parse build-log.txt
    ci-testgrid-parse build-log.txt --summary
    ci-testgrid-parse build-log.txt --summary --excerpts
    curl -s "$LOG_URL" | ci-testgrid-parse -
"""

from __future__ import annotations

import argparse
import codecs
import json
import logging
import sys
from typing import List, Optional

from pydantic import TypeAdapter

from ci_testgrid.config import settings
from ci_testgrid.entities import TestRecord
from ci_testgrid.exceptions import LogReadError
from ci_testgrid.services.log_processor import parse_log_file, parse_log_stream
from ci_testgrid.services.summary import failure_excerpts, summarize_records

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[TestRecord])


def configure_logging(env: str) -> None:
    # ENV=dev: INFO level with detailed format
    # ENV=prod/staging: WARNING level, minimal logs
    is_dev = env.lower() == "dev"
    logging.basicConfig(
        level=logging.INFO if is_dev else logging.WARNING,
        format=(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
            if is_dev
            else "%(levelname)s | %(message)s"
        ),
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}")
    return value


def _error_policy(value: str) -> str:
    try:
        codecs.lookup_error(value)
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown error policy: {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ci-testgrid-parse",
        description="Parse a Go test build log into per-test results (JSON on stdout)",
    )
    parser.add_argument(
        "log_file",
        help="Path to the build log, or '-' to read standard input",
    )
    parser.add_argument(
        "--summary",
        "-s",
        action="store_true",
        help="Print pass/fail counts instead of the individual test records",
    )
    parser.add_argument(
        "--excerpts",
        "-e",
        action="store_true",
        help=(
            "With --summary, add the last lines of output of each failed test "
            f"(up to {settings.SUMMARY_MAX_LOG_LINES})"
        ),
    )
    parser.add_argument(
        "--encoding",
        type=_encoding,
        default=settings.LOG_FILE_ENCODING,
        help=f"Log encoding (default: {settings.LOG_FILE_ENCODING})",
    )
    parser.add_argument(
        "--errors",
        type=_error_policy,
        default=settings.LOG_FILE_DECODE_ERRORS,
        help=f"Decode error policy (default: {settings.LOG_FILE_DECODE_ERRORS})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(settings.ENV)

    try:
        if args.log_file == "-":
            records = parse_log_stream(
                sys.stdin.buffer, encoding=args.encoding, errors=args.errors, source="<stdin>"
            )
        else:
            records = parse_log_file(args.log_file, encoding=args.encoding, errors=args.errors)
    except LogReadError as e:
        logger.error(f"Parse did not complete: {e}")
        return 1

    if args.summary:
        payload = summarize_records(records).model_dump(mode="json")
        if args.excerpts:
            payload["failure_excerpts"] = failure_excerpts(records)
        print(json.dumps(payload, indent=2))
    else:
        print(_records_adapter.dump_json(records, indent=2).decode())
    return 0


if __name__ == "__main__":
    sys.exit(main())
