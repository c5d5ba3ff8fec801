# src/config/logging_config.py

"""Per-run timestamped logging configuration for the reconciler.

Each batch run creates a dedicated log file inside ``logs/``, named with
the launch timestamp (e.g. ``logs/reconcile_20260214_153045.log``).
All ``reconcile.*`` loggers route through this file handler, so the
per-product match decisions logged at DEBUG level end up next to the
batch summary of the same run.  The stderr console shows WARNING and
above unless ``RECONCILE_LOG_LEVEL`` or ``--verbose`` lowers it.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | int) -> int:
    """Turn a level name such as ``"info"`` into its numeric value.

    Raises:
        ValueError: if *level* is not a known logging level name.
    """
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level {level!r}"
        raise ValueError(msg)
    return numeric


def setup_logging(
    logs_dir: Path | None = None,
    console_level: str | int | None = None,
) -> Path:
    """Initialise the root ``reconcile`` logger for the current run.

    Args:
        logs_dir: Directory for the run log. Defaults to
            ``Settings.LOGS_DIR``.
        console_level: Minimum level echoed to stderr. Defaults to
            ``Settings.CONSOLE_LOG_LEVEL``.

    Returns:
        The :class:`~pathlib.Path` to the log file created for this run.
    """
    target_dir = logs_dir if logs_dir is not None else Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"reconcile_{timestamp}.log"

    root_logger = logging.getLogger("reconcile")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, re-runs in one process) keep the first handlers
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        resolve_level(
            console_level
            if console_level is not None
            else Settings.CONSOLE_LOG_LEVEL
        )
    )
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Logging initialised, log file: %s", log_file)

    return log_file
