"""
Log processing service.

Reads a completed build log from a stream or a file and turns it into
per-test records. Fetching the log is the caller's job; this module only
owns the file handles it opens itself.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Optional, Union

from ci_testgrid.config import settings
from ci_testgrid.entities import TestRecord
from ci_testgrid.exceptions import LogReadError
from ci_testgrid.log_parsers import GoTestParser

logger = logging.getLogger(__name__)

LogLines = Union[IO[str], IO[bytes], Iterable[Union[str, bytes]]]

_parser = GoTestParser()


def _decode_lines(
    lines: Iterable[Union[str, bytes]], encoding: str, errors: str
) -> Iterator[str]:
    for line in lines:
        if isinstance(line, bytes):
            line = line.decode(encoding, errors)
        yield line


def parse_log_stream(
    stream: LogLines,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
    source: str = "<stream>",
) -> List[TestRecord]:
    """
    Parse an open log stream into test records sorted by name.

    The stream is read to the end but not closed.

    Args:
        stream: Text or binary file object, or any iterable of lines
        encoding: Encoding for byte lines (defaults to settings.LOG_FILE_ENCODING)
        errors: Decode error policy (defaults to settings.LOG_FILE_DECODE_ERRORS)
        source: Name used in log messages and errors

    Raises:
        LogReadError: if the stream could not be read to the end
    """
    encoding = encoding or settings.LOG_FILE_ENCODING
    errors = errors or settings.LOG_FILE_DECODE_ERRORS

    try:
        records = _parser.parse_records(_decode_lines(stream, encoding, errors))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read log {source}: {e}")
        raise LogReadError(f"Failed to read log {source}: {e}", source=source) from e

    logger.info(f"Parsed {len(records)} tests from {source}")
    return records


def parse_log_file(
    path: Union[str, Path],
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
) -> List[TestRecord]:
    """
    Parse a log file stored on disk.

    Raises:
        LogReadError: if the file cannot be opened or read
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            return parse_log_stream(f, encoding=encoding, errors=errors, source=str(path))
    except OSError as e:
        logger.error(f"Failed to open log {path}: {e}")
        raise LogReadError(f"Failed to open log {path}: {e}", source=str(path)) from e
