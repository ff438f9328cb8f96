"""Exception hierarchy shared by the store, gateways and router."""

from __future__ import annotations


class GoalTrackerError(Exception):
    """Base class for goal tracker failures."""


class GatewayError(GoalTrackerError):
    """The remote goal source failed (transport error or non-success response)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidGoalError(GoalTrackerError):
    """A goal handed to add/edit violates the caller contract."""


class MissingIdentityError(GoalTrackerError):
    """No active user id is configured."""
