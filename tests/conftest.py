"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any
import pytest
from httpx import ASGITransport, AsyncClient

from goaltracker.errors import GatewayError
from goaltracker.goals.gateway import GoalGateway
from goaltracker.goals.models import EditAck, Goal
from goaltracker.goals.router import get_store
from goaltracker.goals.store import GoalStore
from goaltracker.main import app

USER_ID = "user-1"


# ---------------------------------------------------------------------------
# Fake gateway (no goals API needed)
# ---------------------------------------------------------------------------

class FakeGateway(GoalGateway):
    """In-memory gateway. Set ``fail_on`` to make an operation raise GatewayError."""

    def __init__(self, goals: list[Goal] | None = None):
        self.server_goals: list[Goal] = list(goals or [])
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self._next_id = 1
        self.closed = False

    async def get_goals(self, user_id: str) -> list[Goal]:
        self.calls.append("get_goals")
        if "get_goals" in self.fail_on:
            raise GatewayError("server unavailable", status_code=503)
        return [g for g in self.server_goals if g.user_id == user_id]

    async def add_goal(self, goal: Goal) -> Goal:
        self.calls.append("add_goal")
        if "add_goal" in self.fail_on:
            raise GatewayError("insert failed", status_code=500)
        persisted = goal.model_copy(update={"id": f"goal-{self._next_id}"})
        self._next_id += 1
        self.server_goals.append(persisted)
        return persisted

    async def edit_goal(self, goal: Goal) -> EditAck:
        self.calls.append("edit_goal")
        if "edit_goal" in self.fail_on:
            raise GatewayError("update failed", status_code=500)
        self.server_goals = [goal if g.id == goal.id else g for g in self.server_goals]
        return EditAck(oid=goal.id)

    async def aclose(self) -> None:
        self.closed = True


class RecordingSink:
    def __init__(self):
        self.reports: list[tuple[str, BaseException]] = []

    def report(self, message: str, error: BaseException) -> None:
        self.reports.append((message, error))


class ScriptedCollector:
    """Collector that answers with a fixed goal (or None to cancel)."""

    def __init__(self, answer: Goal | None):
        self.answer = answer
        self.seen: list[Goal] = []

    async def collect(self, initial: Goal) -> Goal | None:
        self.seen.append(initial)
        return self.answer


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used in SQL gateway tests."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, rowcount: int = 1):
        self._rows = rows or []
        self.rowcount = rowcount
        self.statements: list[tuple[str, dict[str, Any] | None]] = []
        self.committed = False

    async def execute(self, stmt, params=None):
        self.statements.append((str(stmt), params))
        return FakeResult(self._rows, self.rowcount)

    async def commit(self):
        self.committed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]], rowcount: int = 0):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []
        self.rowcount = rowcount

    def keys(self):
        return self._keys

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def store(gateway, sink):
    return GoalStore(gateway, sink, USER_ID)


@pytest.fixture()
def override_store(store):
    """Override the FastAPI dependency so no goals API is needed."""
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_store):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_goal(
    name: str,
    start_date: str = "2023-01-01",
    status: bool = False,
    goal_id: str = "",
    **overrides: Any,
) -> Goal:
    """Helper to build a goal owned by the test user."""
    fields: dict[str, Any] = {
        "id": goal_id,
        "user_id": USER_ID,
        "name": name,
        "start_date": start_date,
        "status": status,
    }
    fields.update(overrides)
    return Goal(**fields)
