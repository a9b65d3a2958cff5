from __future__ import annotations

import logging

# Package root logger, whatever import path the package was loaded under.
PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Attach one stream handler to the package logger.

    Safe to call more than once (app factory may run per test).
    """
    root = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    if not any(getattr(h, "_payroll_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._payroll_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
