"""
Logging setup for the automation suite.

The suite logs through the standard ``logging`` module.  ``configure_logging``
is called once per test session; every component then receives a
``StepLogger`` at construction time, which adds the ``STEP`` and
``ASSERTION`` markers used to follow a scenario in the console output.
"""

from __future__ import annotations

import logging
from typing import Any

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging for the test session.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


class StepLogger(logging.LoggerAdapter):
    """Logger adapter that knows how to mark test steps and assertions."""

    def __init__(self, logger: logging.Logger, extra: dict[str, Any] | None = None) -> None:
        super().__init__(logger, extra or {})

    def step(self, name: str, details: str | None = None) -> None:
        message = f"STEP: {name} - {details}" if details else f"STEP: {name}"
        self.info(message)

    def assertion(self, description: str, passed: bool) -> None:
        status = "PASSED" if passed else "FAILED"
        self.info("ASSERTION: %s - %s", description, status)


def get_logger(name: str) -> StepLogger:
    """Return a ``StepLogger`` wrapping the named standard logger."""
    return StepLogger(logging.getLogger(name))
