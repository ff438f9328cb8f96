"""Database-backed goal gateway — async access to the goals table.

Table columns: id, user_id, name, owner, body, category, start_date, end_date,
frequency, status. Dates are stored as the same strings the client sends.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from goaltracker.errors import GatewayError
from goaltracker.goals.gateway import GoalGateway
from goaltracker.goals.models import EditAck, Goal

logger = logging.getLogger(__name__)

_COLUMNS = "id, user_id, name, owner, body, category, start_date, end_date, frequency, status"


def _row_params(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "user_id": goal.user_id,
        "name": goal.name,
        "owner": goal.owner,
        "body": goal.body,
        "category": goal.category,
        "start_date": goal.start_date,
        "end_date": goal.end_date,
        "frequency": goal.frequency,
        "status": goal.status,
    }


class SqlGoalGateway(GoalGateway):
    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    async def get_goals(self, user_id: str) -> list[Goal]:
        query = f"SELECT {_COLUMNS} FROM goals WHERE user_id = :user_id ORDER BY id"
        try:
            async with self._session_factory() as session:
                result = await session.execute(text(query), {"user_id": user_id})
                columns = list(result.keys())
                rows = [dict(zip(columns, r)) for r in result.fetchall()]
        except SQLAlchemyError as exc:
            raise GatewayError(f"Loading goals failed: {exc}") from exc
        try:
            return [Goal.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise GatewayError(f"Malformed goal row: {exc}") from exc

    async def add_goal(self, goal: Goal) -> Goal:
        persisted = goal.model_copy(update={"id": uuid.uuid4().hex})
        query = (
            f"INSERT INTO goals ({_COLUMNS}) VALUES "
            "(:id, :user_id, :name, :owner, :body, :category, "
            ":start_date, :end_date, :frequency, :status)"
        )
        try:
            async with self._session_factory() as session:
                await session.execute(text(query), _row_params(persisted))
                await session.commit()
        except SQLAlchemyError as exc:
            raise GatewayError(f"Adding goal failed: {exc}") from exc
        logger.debug("Inserted goal %s", persisted.id)
        return persisted

    async def edit_goal(self, goal: Goal) -> EditAck:
        query = (
            "UPDATE goals SET name = :name, owner = :owner, body = :body, "
            "category = :category, start_date = :start_date, end_date = :end_date, "
            "frequency = :frequency, status = :status "
            "WHERE id = :id AND user_id = :user_id"
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(text(query), _row_params(goal))
                await session.commit()
        except SQLAlchemyError as exc:
            raise GatewayError(f"Editing goal failed: {exc}") from exc

        if result.rowcount == 0:
            raise GatewayError(f"No goal {goal.id} for user {goal.user_id}", status_code=404)
        return EditAck(oid=goal.id)
