"""Terminal geometry queries for the standard descriptors."""

import logging
import os
import struct
import sys

__all__ = [
    "DEFAULT_WIDTH",
    "descriptor_in_use",
    "terminal_size",
    "terminal_width",
]

# Used only when none of stdout, stdin or stderr is a terminal
DEFAULT_WIDTH = 20


def terminal_size(fd: int) -> tuple[int, int]:
    """Return (rows, columns) of the terminal attached to fd.

    Raises OSError if fd is not a terminal.
    """
    try:
        import fcntl
        import termios
    except ImportError:
        # No ioctl (Windows): let the runtime query the console
        try:
            size = os.get_terminal_size(fd)
        except ValueError as e:
            raise OSError(f"Not a terminal: fd {fd}") from e
        return size.lines, size.columns

    if sys.platform == "darwin":
        # macOS: TIOCGWINSZ = 0x40087468
        TIOCGWINSZ = 0x40087468
    else:
        TIOCGWINSZ = termios.TIOCGWINSZ
    # struct winsize: rows, cols, xpixel, ypixel
    buf = fcntl.ioctl(fd, TIOCGWINSZ, b"\x00" * 8)
    rows, cols, _, _ = struct.unpack("HHHH", buf)
    return rows, cols


def terminal_width(default: int = DEFAULT_WIDTH) -> int:
    """Width of the controlling terminal, probing stdout, stdin and stderr in turn."""
    for fd in (1, 0, 2):
        try:
            return terminal_size(fd)[1]
        except OSError:
            continue
    logging.debug("No terminal on stdout, stdin or stderr, using width %d", default)
    return default


def descriptor_in_use(fd: int) -> bool:
    """True when fd is attached to a pipe or file rather than an interactive terminal."""
    try:
        terminal_size(fd)
    except OSError:
        return True
    return False
