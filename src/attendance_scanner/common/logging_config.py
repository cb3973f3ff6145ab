from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger.

    Safe to call more than once (e.g. one Flask app per test).
    """
    pkg_logger = logging.getLogger("attendance_scanner")
    pkg_logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    if not any(getattr(h, "_attendance_scanner", False) for h in pkg_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._attendance_scanner = True  # type: ignore[attr-defined]
        pkg_logger.addHandler(handler)
