"""Collaborators the store talks to besides the gateway."""

from __future__ import annotations

import logging
from typing import Protocol

from goaltracker.goals.models import Goal

logger = logging.getLogger(__name__)


class GoalCollector(Protocol):
    """Dialog substitute: returns the confirmed goal, or None when cancelled."""

    async def collect(self, initial: Goal) -> Goal | None: ...


class ErrorSink(Protocol):
    def report(self, message: str, error: BaseException) -> None: ...


class LoggingErrorSink:
    """Reports failures to the log. Fire-and-forget."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def report(self, message: str, error: BaseException) -> None:
        self._log.error("%s The error was %r", message, error)

