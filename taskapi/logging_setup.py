"""Logging configuration for the task API process."""

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> None:
    """Send all log records at ``level`` or above to stderr.

    Call this once, before the server starts. Existing root handlers are removed
    so repeated calls do not duplicate output.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    logging.captureWarnings(True)
