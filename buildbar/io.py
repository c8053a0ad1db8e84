"""Log mirror file handling."""

import contextlib
import logging
import os
import pathlib
from collections.abc import Generator
from typing import TextIO

__all__ = [
    "DEFAULT_LOG_FILE",
    "open_mirror",
    "sync_mirror",
    "write_mirror",
]

DEFAULT_LOG_FILE = "cmake.log"


def write_mirror(f: TextIO, line: str):
    """Append one raw line to the mirror file."""
    try:
        f.write(line)
    except OSError as e:
        raise ValueError(f"Can't write to log file: {e}") from e


def sync_mirror(f: TextIO):
    """Flush the mirror file and push it to disk."""
    try:
        f.flush()
    except OSError as e:
        raise ValueError(f"Can't write to log file: {e}") from e
    # Not all files support fsync (e.g. /dev/null)
    with contextlib.suppress(OSError):
        os.fsync(f.fileno())


@contextlib.contextmanager
def open_mirror(path: str | pathlib.Path | None) -> Generator[TextIO | None]:
    """Context manager for the log mirror file.

    Args:
        path: File to create (truncating any existing one), or None to disable
            mirroring

    Yields:
        Writable text file, or None
    """
    if not path:
        yield None
        return
    try:
        # surrogateescape keeps undecodable input bytes intact in the copy
        f = open(pathlib.Path(path), "w", encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise ValueError(f"Could not create file: {path}") from e
    logging.debug("Mirroring log to %s", path)
    try:
        yield f
    finally:
        with contextlib.suppress(OSError):
            f.close()
