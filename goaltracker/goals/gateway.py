"""Remote goal sources — the abstract gateway and its HTTP implementation.

The HTTP gateway talks JSON to the goals API:

    GET  /api/goals?userID=<id>   -> [goal, ...]
    POST /api/goals/new           -> persisted goal, or {"$oid": "..."}
    POST /api/goals/edit          -> {"$oid": "..."}

Any transport failure, non-2xx response or malformed payload surfaces as
GatewayError.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from goaltracker.errors import GatewayError
from goaltracker.goals.models import EditAck, Goal

logger = logging.getLogger(__name__)


class GoalGateway(ABC):
    @abstractmethod
    async def get_goals(self, user_id: str) -> list[Goal]:
        raise NotImplementedError

    @abstractmethod
    async def add_goal(self, goal: Goal) -> Goal:
        """Persist ``goal`` and return it with its assigned identifier."""
        raise NotImplementedError

    @abstractmethod
    async def edit_goal(self, goal: Goal) -> EditAck:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release connections held by the gateway. Nothing to do by default."""


class HttpGoalGateway(GoalGateway):
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_url(cls, base_url: str, timeout: float = 10.0) -> HttpGoalGateway:
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout))

    async def aclose(self) -> None:
        await self._client.aclose()
        logger.debug("Closed goals API client")

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise GatewayError(f"{method} {url} failed: {exc}") from exc

        if resp.is_error:
            raise GatewayError(
                f"{method} {url} returned {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise GatewayError(f"{method} {url} returned invalid JSON") from exc

    async def get_goals(self, user_id: str) -> list[Goal]:
        data = await self._request("GET", "/api/goals", params={"userID": user_id})
        if not isinstance(data, list):
            raise GatewayError("GET /api/goals did not return a list")
        logger.debug("Fetched %d goals for user %s", len(data), user_id)
        try:
            return [Goal.model_validate(item) for item in data]
        except ValidationError as exc:
            raise GatewayError(f"GET /api/goals returned a malformed goal: {exc}") from exc

    async def add_goal(self, goal: Goal) -> Goal:
        payload = goal.to_wire()
        payload.pop("_id", None)
        data = await self._request("POST", "/api/goals/new", json=payload)

        # Some deployments answer with just the new id
        if isinstance(data, dict) and set(data) == {"$oid"}:
            return goal.model_copy(update={"id": data["$oid"]})
        if isinstance(data, str):
            return goal.model_copy(update={"id": data})
        try:
            return Goal.model_validate(data)
        except ValidationError as exc:
            raise GatewayError(f"POST /api/goals/new returned a malformed goal: {exc}") from exc

    async def edit_goal(self, goal: Goal) -> EditAck:
        data = await self._request("POST", "/api/goals/edit", json=goal.to_wire())
        if isinstance(data, str):
            return EditAck(oid=data)
        try:
            return EditAck.model_validate(data)
        except ValidationError as exc:
            raise GatewayError(f"POST /api/goals/edit returned a malformed acknowledgment: {exc}") from exc
