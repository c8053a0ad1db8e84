"""Recognition of progress and failure markers in build log lines."""

import enum
import re
from dataclasses import dataclass

__all__ = [
    "FAILURE_RE",
    "MAX_PERCENT",
    "PROGRESS_RE",
    "Line",
    "LineKind",
    "classify",
]

# "[ 42%] Building CXX object ..." as printed by make/cmake
PROGRESS_RE = re.compile(r"^\[\s*(\d+)%\]", re.ASCII)
FAILURE_RE = re.compile(r"^Failed Modules")

# Largest percentage accepted, the range of a signed 64-bit integer
MAX_PERCENT = 2**63 - 1


class LineKind(enum.Enum):
    PROGRESS = "progress"
    FAILURE = "failure"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class Line:
    """One input line with its classification.

    The text keeps its trailing newline so that it can be echoed or mirrored
    verbatim. Percent is only set for progress lines.
    """

    kind: LineKind
    text: str
    percent: int | None = None


def classify(line: str) -> Line:
    """Classify a log line as progress, failure marker or plain text."""
    m = PROGRESS_RE.match(line)
    if m:
        digits = m.group(1).lstrip("0") or "0"
        # Length check first so that very long digit runs are never converted
        if len(digits) <= len(str(MAX_PERCENT)):
            percent = int(digits)
            if percent <= MAX_PERCENT:
                return Line(LineKind.PROGRESS, line, percent)
        # Out of range, ordinary text
        return Line(LineKind.PASSTHROUGH, line)
    if FAILURE_RE.match(line):
        return Line(LineKind.FAILURE, line)
    return Line(LineKind.PASSTHROUGH, line)
