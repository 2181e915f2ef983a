"""Logging utilities.

We use Python's standard `logging` module with a single line format.

- Logs go to stderr, so stdout stays clean for printed annotations.
- With a log directory, logs also go to `<log_dir>/<run_id>.log`.

Calling setup_logging again replaces the handlers it installed earlier.
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Optional, Union

_HANDLER_FLAG = "_annopipe_handler"

def setup_logging(
    run_id: str = "annopipe",
    log_dir: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
) -> Optional[str]:
    """
    Setup logging configuration.

    Args:
        run_id: Run identifier, used as log file name
        log_dir: Directory for the log file (None: console only)
        level: Root log level

    Returns:
        Path of the log file, if one was configured.
    """
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())
    for h in list(root.handlers):
        if getattr(h, _HANDLER_FLAG, False):
            root.removeHandler(h)
            h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    # Console
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    setattr(ch, _HANDLER_FLAG, True)
    root.addHandler(ch)

    if log_dir is None:
        return None

    # File
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"{run_id}.log")
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(fmt)
    setattr(fh, _HANDLER_FLAG, True)
    root.addHandler(fh)
    return log_path
