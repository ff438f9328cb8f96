"""Goal records and the small value types passed around the store — Pydantic v2 models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")

DEFAULT_CATEGORY = "Other"


class Goal(BaseModel):
    """One user goal. An empty ``id`` means the goal has not been persisted yet."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default="", alias="_id")
    user_id: str = Field(default="", alias="userID")
    name: str = ""
    owner: str = ""  # human-readable attribution, not the user id
    body: str = ""
    category: str = DEFAULT_CATEGORY
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")
    frequency: str = ""
    status: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _unwrap_oid(cls, value: Any) -> Any:
        # Mongo-backed APIs send {"$oid": "..."}
        if isinstance(value, dict):
            return value.get("$oid", "")
        return value

    @property
    def is_persisted(self) -> bool:
        return self.id != ""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def blank_goal(user_id: str) -> Goal:
    """Fresh, unpersisted goal for the create interaction."""
    return Goal(id="", user_id=user_id, category=DEFAULT_CATEGORY, status=False)


class EditAck(BaseModel):
    """Identifier-bearing acknowledgment returned by an edit."""

    model_config = ConfigDict(populate_by_name=True)

    oid: str = Field(default="", alias="$oid")


class FilterCriteria(BaseModel):
    """Caller-owned search inputs. ``None`` skips the corresponding filter."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    status: str | None = None
    text: str | None = None  # free text over name, category and frequency


class GoalView(BaseModel):
    """Goal as shown to the presentation layer."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user_id: str = Field(alias="userID")
    name: str
    owner: str
    body: str
    category: str
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    frequency: str
    status: bool
    status_label: str = Field(alias="statusLabel")
    start_date_display: str = Field(alias="startDateDisplay")
    end_date_display: str = Field(alias="endDateDisplay")
    highlighted: bool = False


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    """Outcome of an asynchronous store operation.

    Exactly one of: a success ``value``, a failure ``error``, or ``cancelled``
    when the user backed out of the interaction.
    """

    value: T | None = None
    error: BaseException | None = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.cancelled

    @classmethod
    def success(cls, value: T) -> OperationResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> OperationResult[T]:
        return cls(error=error)

    @classmethod
    def cancel(cls) -> OperationResult[T]:
        return cls(cancelled=True)
