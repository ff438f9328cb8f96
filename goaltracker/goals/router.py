"""Goals HTTP router — filtered views and create/edit over the store."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from goaltracker.auth import verify_api_key
from goaltracker.config import settings
from goaltracker.errors import InvalidGoalError, MissingIdentityError
from goaltracker.goals.filters import format_goal_date, status_label
from goaltracker.goals.gateway import GoalGateway, HttpGoalGateway
from goaltracker.goals.interaction import LoggingErrorSink
from goaltracker.goals.models import FilterCriteria, Goal, GoalView, OperationResult
from goaltracker.goals.store import GoalStore

router = APIRouter(prefix="/goals", tags=["goals"])

_store: GoalStore | None = None


def build_gateway() -> GoalGateway:
    if settings.gateway_backend == "sql":
        from goaltracker.db import async_session
        from goaltracker.goals.sql_gateway import SqlGoalGateway

        return SqlGoalGateway(async_session)
    if settings.gateway_backend == "http":
        return HttpGoalGateway.from_url(settings.goals_api_url, settings.goals_api_timeout)
    raise ValueError(f"Unknown gateway backend: {settings.gateway_backend}")


def get_store() -> GoalStore:
    global _store
    if _store is None:
        _store = GoalStore(build_gateway(), LoggingErrorSink(), settings.user_id)
    return _store


def to_view(goal: Goal, highlighted_id: str = "") -> GoalView:
    return GoalView(
        **goal.model_dump(),
        status_label=status_label(goal.status),
        start_date_display=format_goal_date(goal, "start"),
        end_date_display=format_goal_date(goal, "end"),
        highlighted=bool(highlighted_id) and goal.id == highlighted_id,
    )


def _views(store: GoalStore, goals: list[Goal]) -> list[dict]:
    return [to_view(g, store.highlighted_id.oid).model_dump(by_alias=True) for g in goals]


def _raise_for(result: OperationResult) -> None:
    if result.ok:
        return
    if isinstance(result.error, (InvalidGoalError, MissingIdentityError)):
        raise HTTPException(status_code=422, detail=str(result.error))
    raise HTTPException(status_code=502, detail=f"Goal service error: {result.error}")


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


@router.get("")
async def list_goals(
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    name: str | None = Query(default=None, description="Name substring"),
    status: str | None = Query(default=None, description="Status substring (true/false)"),
) -> list[dict]:
    goals = store.apply_filter(FilterCriteria(name=name, status=status))
    return _views(store, goals)


@router.get("/search")
async def search_goals(
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
    q: str | None = Query(default=None, description="Matches name, category or frequency"),
    status: str | None = Query(default=None, description="Status substring (true/false)"),
) -> list[dict]:
    goals = store.apply_filter(FilterCriteria(text=q, status=status))
    return _views(store, goals)


@router.get("/highlighted")
async def highlighted_goal(
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> dict:
    return store.highlighted_id.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post("/refresh")
async def refresh_goals(
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> list[dict]:
    result = await store.refresh()
    _raise_for(result)
    return _views(store, store.filtered_goals)


@router.post("", status_code=201)
async def add_goal(
    goal: Goal = Body(...),
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> dict:
    result = await store.add_goal(goal)
    _raise_for(result)
    return result.value.to_wire()


@router.put("/{goal_id}")
async def edit_goal(
    goal_id: str,
    goal: Goal = Body(...),
    store: GoalStore = Depends(get_store),
    _: str = Depends(verify_api_key),
) -> dict:
    if goal.id and goal.id != goal_id:
        raise HTTPException(status_code=422, detail=f"Body id {goal.id} does not match path id {goal_id}")

    result = await store.edit_goal(goal.model_copy(update={"id": goal_id}))
    _raise_for(result)
    return result.value.model_dump(by_alias=True)
