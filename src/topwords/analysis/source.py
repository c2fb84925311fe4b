"""Line-producing text sources.

A source is either a local file path (``str`` or ``os.PathLike``) or a text
stream or any other iterable of strings.

Every failure to open, decode or read a source is reported as
``InputReadError``, with the original exception chained.
"""

import os
from collections.abc import Iterable, Iterator
from typing import Union

from .errors import InputReadError

TextSource = Union[str, os.PathLike, Iterable[str]]

# LookupError: unknown encoding. ValueError: closed or detached stream.
_READ_ERRORS = (OSError, UnicodeError, LookupError, ValueError)


def describe_source(source: TextSource) -> str:
    """Return a short display name for a source."""
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    return f"<{type(source).__name__}>"


def iter_lines(source: TextSource, *, encoding: str = "utf-8") -> Iterator[str]:
    """Yield the lines of a source in order, without line terminators.

    Args:
        source: File path, text stream, or iterable of lines.
        encoding: Encoding used to open file paths.

    Raises:
        InputReadError: If the source cannot be opened or read.
    """
    name = describe_source(source)
    if isinstance(source, (str, os.PathLike)):
        yield from _read_file(source, encoding, name)
    else:
        yield from _read_stream(source, name)


def _read_file(path: "str | os.PathLike[str]", encoding: str, name: str) -> Iterator[str]:
    lines_read = 0
    try:
        with open(path, encoding=encoding) as f:
            for line in f:
                lines_read += 1
                yield line.rstrip("\r\n")
    except _READ_ERRORS as e:
        raise InputReadError(name, str(e), lines_read) from e


def _read_stream(lines: Iterable[str], name: str) -> Iterator[str]:
    lines_read = 0
    try:
        for line in lines:
            lines_read += 1
            yield line.rstrip("\r\n")
    except _READ_ERRORS as e:
        raise InputReadError(name, str(e), lines_read) from e
