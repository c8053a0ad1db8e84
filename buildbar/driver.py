"""Main loop: read a build log line by line and keep the progress bar current."""

import enum
import logging
import time
from collections.abc import Callable, Iterable
from typing import TextIO

from buildbar.classify import LineKind, classify
from buildbar.estimate import ProgressEstimator, RateEstimationStrategy
from buildbar.io import sync_mirror, write_mirror
from buildbar.progress import ProgressDisplay
from buildbar.stats import RunSummary
from buildbar.terminal import terminal_width

__all__ = [
    "REPLAY_DELAY",
    "DriverState",
    "StreamDriver",
]

# Pause per progress sample when replaying a captured log
REPLAY_DELAY = 0.03


class DriverState(enum.Enum):
    RENDERING = "rendering"
    # A failure marker was seen; everything from here on is echoed verbatim
    TERMINATED = "terminated"


class StreamDriver:
    """Feeds log lines to the progress bar, one frame per progress line.

    Lines are handled strictly in input order on the calling thread. Once a
    "Failed Modules" line arrives the bar is abandoned and the rest of the log,
    starting with that line, is copied to the output so that the diagnostics
    are visible. With a mirror file every raw line is also appended to it.
    """

    def __init__(
        self,
        source: Iterable[str],
        output: TextIO,
        mirror: TextIO | None = None,
        *,
        columns: int | None = None,
        show_estimate: bool = False,
        strategy: RateEstimationStrategy | str | None = None,
        replay: bool = False,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.source = source
        self.output = output
        self.mirror = mirror
        self.replay = replay
        self.clock = clock
        self.sleep = sleep
        self.state = DriverState.RENDERING
        self.estimator = ProgressEstimator(strategy)
        self.display = ProgressDisplay(
            output,
            columns if columns is not None else terminal_width(),
            self.estimator,
            show_estimate=show_estimate,
        )
        logging.debug(
            "Rendering %d columns, %s rate estimate",
            self.display.columns,
            self.estimator.strategy.name,
        )

    def _handle(self, text: str, summary: RunSummary, start_time: float):
        line = classify(text)
        if self.state is DriverState.RENDERING:
            if line.kind is LineKind.PROGRESS:
                if self.replay:
                    self.sleep(REPLAY_DELAY)
                self.display.update(line.percent, self.clock() - start_time)
                summary.samples += 1
                summary.last_percent = line.percent
            elif line.kind is LineKind.FAILURE:
                self.output.write("\n\n")
                self.state = DriverState.TERMINATED
                summary.terminated = True
                logging.debug("Failure marker after %d lines", summary.lines)
        if self.state is DriverState.TERMINATED:
            self.output.write(text)
        if self.mirror is not None:
            write_mirror(self.mirror, text)

    def run(self) -> RunSummary:
        """Process the input until it ends, then print the elapsed time footer."""
        self.output.write("\n")
        start_time = self.clock()
        summary = RunSummary(elapsed=0.0)
        for text in self.source:
            summary.lines += 1
            self._handle(text, summary, start_time)
        summary.elapsed = self.clock() - start_time
        summary.print_summary(self.output)
        if self.mirror is not None:
            sync_mirror(self.mirror)
        return summary
