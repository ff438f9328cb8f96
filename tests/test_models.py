"""Tests for the goal model and result types."""

from goaltracker.errors import GatewayError
from goaltracker.goals.models import (
    EditAck,
    FilterCriteria,
    Goal,
    OperationResult,
    blank_goal,
)


class TestGoalDefaults:
    def test_unpersisted_by_default(self):
        goal = Goal()
        assert goal.id == ""
        assert not goal.is_persisted

    def test_category_defaults_to_other(self):
        assert Goal().category == "Other"
        assert Goal().status is False

    def test_blank_goal(self):
        goal = blank_goal("u1")
        assert goal.user_id == "u1"
        assert goal.name == "" and goal.start_date == "" and goal.frequency == ""
        assert not goal.is_persisted


class TestGoalWireFormat:
    def test_accepts_aliases(self):
        goal = Goal.model_validate({"_id": "g1", "userID": "u1", "startDate": "2023-01-10"})
        assert goal.id == "g1"
        assert goal.user_id == "u1"
        assert goal.start_date == "2023-01-10"
        assert goal.is_persisted

    def test_accepts_field_names(self):
        goal = Goal(id="g1", user_id="u1", end_date="2023-02-01")
        assert goal.end_date == "2023-02-01"

    def test_unwraps_oid(self):
        goal = Goal.model_validate({"_id": {"$oid": "5ab1"}})
        assert goal.id == "5ab1"

    def test_to_wire_uses_aliases(self):
        data = Goal(id="g1", user_id="u1").to_wire()
        assert data["_id"] == "g1"
        assert data["userID"] == "u1"
        assert "startDate" in data and "endDate" in data


class TestSmallTypes:
    def test_edit_ack_alias(self):
        ack = EditAck.model_validate({"$oid": "g1"})
        assert ack.oid == "g1"
        assert ack.model_dump(by_alias=True) == {"$oid": "g1"}

    def test_edit_ack_default_is_empty(self):
        assert EditAck().oid == ""

    def test_criteria_defaults_skip_everything(self):
        criteria = FilterCriteria()
        assert criteria.name is None and criteria.status is None and criteria.text is None


class TestOperationResult:
    def test_success(self):
        result = OperationResult.success([1, 2])
        assert result.ok
        assert result.value == [1, 2]

    def test_failure(self):
        err = GatewayError("down", status_code=503)
        result = OperationResult.failure(err)
        assert not result.ok
        assert result.error is err
        assert result.error.status_code == 503

    def test_cancelled_is_not_ok(self):
        result = OperationResult.cancel()
        assert result.cancelled
        assert not result.ok
        assert result.error is None
