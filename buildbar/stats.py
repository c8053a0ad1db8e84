"""Duration formatting and the end of run summary."""

from dataclasses import dataclass
from typing import TextIO

__all__ = [
    "RunSummary",
    "format_time",
]


def format_time(seconds: float) -> str:
    """Format seconds as e.g. "1h 02m 03s 004ms", "05s 120ms" or "042ms"."""
    if seconds < 0:
        return "--"
    total_ms = int(seconds * 1000)
    ms = total_ms % 1000
    s = total_ms // 1000 % 60
    m = total_ms // 60_000 % 60
    h = total_ms // 3_600_000
    if seconds >= 3600:
        return f"{h}h {m:02d}m {s:02d}s {ms:03d}ms"
    if seconds >= 60:
        return f"{m:02d}m {s:02d}s {ms:03d}ms"
    if seconds >= 1:
        return f"{s:02d}s {ms:03d}ms"
    return f"{ms:03d}ms"


@dataclass
class RunSummary:
    """Result of driving one log stream to its end."""

    elapsed: float
    lines: int = 0
    samples: int = 0
    # Failure marker seen, the rest of the log was echoed
    terminated: bool = False
    last_percent: int | None = None

    def print_summary(self, stream: TextIO):
        """Step off the progress line and report the total wall-clock time."""
        stream.write("\n")
        stream.write(f"Elapsed time: {format_time(self.elapsed)}\n\n")
        stream.flush()
