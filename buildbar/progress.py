"""Single line progress bar that overwrites itself in place."""

from typing import TextIO

from buildbar.estimate import ProgressEstimator
from buildbar.stats import format_time

__all__ = [
    "ProgressDisplay",
    "bold",
    "highlight_done",
    "highlight_todo",
    "render_bar",
]

BAR_START = " ["
BAR_END = "] "


def bold(s: str) -> str:
    return f"\x1b[1m{s}\x1b[0m"


def highlight_done(s: str) -> str:
    return f"\x1b[46;1m{s}\x1b[0m"


def highlight_todo(s: str) -> str:
    return f"\x1b[47;1m{s}\x1b[0m"


def render_bar(current: int, total: int = 100, columns: int = 80, suffix: str = "") -> str:
    """Render " NN% [████    ] suffix" to exactly columns visible characters.

    If the terminal is too narrow for the bar, only the plain percentage is
    returned, or an empty string if even that does not fit.
    """
    if total <= 0:
        raise ValueError(f"Total must be positive, got {total}")
    percent = 100 * current // total
    prefix = f" {percent}%"
    bar_size = columns - len(prefix + BAR_START + BAR_END + suffix)
    amount = current * bar_size // total
    remain = bar_size - amount

    if bar_size < 0 or remain < 0:
        return prefix if columns > len(prefix) else ""
    bar = highlight_done(" " * amount) + highlight_todo(" " * remain)
    return bold(prefix) + BAR_START + bar + BAR_END + suffix


class ProgressDisplay:
    """Progress bar on a text stream, one frame per progress sample.

    Each frame ends in a carriage return so the next one is drawn over it; the
    caller writes the final newline when the stream is done. The suffix shows
    the elapsed time, or the estimated time remaining with show_estimate.
    """

    def __init__(
        self,
        stream: TextIO,
        columns: int,
        estimator: ProgressEstimator | None = None,
        show_estimate: bool = False,
    ):
        self.stream = stream
        self.columns = columns
        self.estimator = estimator or ProgressEstimator()
        self.show_estimate = show_estimate

    def _build_suffix(self, percent: int, elapsed: float) -> str:
        # Always estimate so the estimator sees every sample
        _, remaining = self.estimator.estimate(percent, elapsed)
        if not self.show_estimate or percent <= 0:
            return format_time(elapsed)
        return format_time(remaining) if remaining is not None else ""

    def render_frame(self, current: int, elapsed: float, total: int = 100) -> str:
        if total <= 0:
            raise ValueError(f"Total must be positive, got {total}")
        percent = 100 * current // total
        return render_bar(current, total, self.columns, self._build_suffix(percent, elapsed))

    def update(self, current: int, elapsed: float, total: int = 100) -> str:
        """Render and draw a frame, returning it without the carriage return."""
        frame = self.render_frame(current, elapsed, total)
        self.stream.write(frame + "\r")
        self.stream.flush()
        return frame
