"""Goal store — the user's goal list and the refresh-after-mutation protocol.

The local ``goals`` list only ever changes through a successful ``refresh()``,
which replaces it wholesale. Add and edit call the gateway and, on success,
refresh; they never insert or patch locally. The displayed list therefore
always reflects what the gateway last confirmed.

Everything runs on one event loop. The gateway calls are the only suspension
points. Overlapping refreshes are not sequenced: whichever completes last
wins, even if it was started first. Nothing here is cancellable once started.
"""

from __future__ import annotations

import logging

from goaltracker.errors import InvalidGoalError, MissingIdentityError
from goaltracker.goals.filters import apply_criteria
from goaltracker.goals.gateway import GoalGateway
from goaltracker.goals.interaction import ErrorSink, GoalCollector
from goaltracker.goals.models import (
    EditAck,
    FilterCriteria,
    Goal,
    OperationResult,
    blank_goal,
)

logger = logging.getLogger(__name__)


class GoalStore:
    def __init__(
        self,
        gateway: GoalGateway,
        error_sink: ErrorSink,
        user_id: str | None,
        collector: GoalCollector | None = None,
    ):
        self.gateway = gateway
        self.error_sink = error_sink
        self.user_id = user_id
        self.collector = collector

        self.goals: list[Goal] = []
        self.filtered_goals: list[Goal] = []
        self.criteria = FilterCriteria()
        self.highlighted_id = EditAck()

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def apply_filter(self, criteria: FilterCriteria) -> list[Goal]:
        self.criteria = criteria
        self.filtered_goals = apply_criteria(self.goals, criteria)
        return self.filtered_goals

    def _fail(self, message: str, error: BaseException) -> OperationResult:
        self.error_sink.report(message, error)
        return OperationResult.failure(error)

    # ------------------------------------------------------------------
    # Gateway operations
    # ------------------------------------------------------------------

    async def load(self) -> OperationResult[list[Goal]]:
        return await self.refresh()

    async def refresh(self) -> OperationResult[list[Goal]]:
        if not self.user_id:
            return self._fail("Cannot load goals without a user.", MissingIdentityError("no active user id"))

        try:
            goals = await self.gateway.get_goals(self.user_id)
        except Exception as exc:
            return self._fail("There was an error loading the goals.", exc)

        self.goals = list(goals)
        self.filtered_goals = apply_criteria(self.goals, self.criteria)
        logger.debug("Refreshed %d goals for user %s", len(self.goals), self.user_id)
        return OperationResult.success(self.goals)

    async def add_goal(self, candidate: Goal) -> OperationResult[Goal]:
        if not self.user_id:
            return self._fail("There was an error adding the goal.", MissingIdentityError("no active user id"))
        if candidate.is_persisted:
            return self._fail(
                "There was an error adding the goal.",
                InvalidGoalError(f"goal already has id {candidate.id!r}"),
            )
        if candidate.user_id != self.user_id:
            return self._fail(
                "There was an error adding the goal.",
                InvalidGoalError(f"goal belongs to {candidate.user_id!r}, not the active user"),
            )

        try:
            added = await self.gateway.add_goal(candidate)
        except Exception as exc:
            return self._fail("There was an error adding the goal.", exc)

        logger.info("Added goal %s", added.id)
        await self.refresh()
        return OperationResult.success(added)

    async def edit_goal(self, updated: Goal) -> OperationResult[EditAck]:
        """Send ``updated`` to the gateway under the active user; the owner never changes."""
        if not self.user_id:
            return self._fail("There was an error editing the goal.", MissingIdentityError("no active user id"))
        if not updated.is_persisted:
            return self._fail(
                "There was an error editing the goal.",
                InvalidGoalError("cannot edit a goal without an id"),
            )

        updated = updated.model_copy(update={"user_id": self.user_id})

        try:
            ack = await self.gateway.edit_goal(updated)
        except Exception as exc:
            return self._fail("There was an error editing the goal.", exc)

        self.highlighted_id = ack
        logger.info("Edited goal %s", ack.oid)
        await self.refresh()
        return OperationResult.success(ack)

    # ------------------------------------------------------------------
    # Interactive create / edit
    # ------------------------------------------------------------------

    def _require_collector(self, collector: GoalCollector | None) -> GoalCollector:
        chosen = collector or self.collector
        if chosen is None:
            raise ValueError("GoalStore has no collector configured")
        return chosen

    async def open_create(self, collector: GoalCollector | None = None) -> OperationResult[Goal]:
        """Collect a new goal from the user and add it. Cancelling is a no-op."""
        result = await self._require_collector(collector).collect(blank_goal(self.user_id or ""))
        if result is None:
            logger.debug("Goal creation cancelled")
            return OperationResult.cancel()
        return await self.add_goal(result)

    async def open_edit(self, goal: Goal, collector: GoalCollector | None = None) -> OperationResult[EditAck]:
        initial = goal.model_copy(update={"user_id": self.user_id or ""})
        result = await self._require_collector(collector).collect(initial)
        if result is None:
            logger.debug("Editing goal %s cancelled", goal.id)
            return OperationResult.cancel()
        return await self.edit_goal(result)
