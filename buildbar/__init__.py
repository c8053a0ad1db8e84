"""Buildbar - terminal progress bar for cmake/make build logs.

This package reads build output on stdin, draws a single self-overwriting
progress bar from the "[ NN%]" markers and optionally mirrors the raw log
to a file.
"""

from buildbar.classify import Line, LineKind, classify
from buildbar.driver import StreamDriver
from buildbar.estimate import ProgressEstimator
from buildbar.progress import ProgressDisplay, render_bar
from buildbar.stats import format_time
from buildbar.terminal import terminal_width

__version__ = "0.1.0"

__all__ = [
    "Line",
    "LineKind",
    "ProgressDisplay",
    "ProgressEstimator",
    "StreamDriver",
    "__version__",
    "classify",
    "format_time",
    "render_bar",
    "terminal_width",
]
