"""Pure goal filtering and ordering — never mutates its input, never raises on bad dates.

Ordering is newest start date first. Goals whose start date is empty or not
ISO-8601 sort after every dated goal; equal keys keep their input order
(``sorted`` is stable, including with ``reverse=True``).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from goaltracker.goals.models import FilterCriteria, Goal

INVALID_DATE = "Invalid Date"


def parse_goal_date(value: str | None) -> datetime | None:
    """Parse an ISO date/datetime string. Naive values are taken as UTC.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _start_date_key(goal: Goal) -> tuple[int, float]:
    parsed = parse_goal_date(goal.start_date)
    if parsed is None:
        return (0, 0.0)
    return (1, parsed.timestamp())


def sort_by_start_date(goals: Iterable[Goal]) -> list[Goal]:
    return sorted(goals, key=_start_date_key, reverse=True)


def _status_text(goal: Goal) -> str:
    return "true" if goal.status else "false"


def _matches_status(goals: list[Goal], status_query: str | None) -> list[Goal]:
    if status_query is None:
        return goals
    needle = status_query.lower()
    if not needle:
        return goals
    return [g for g in goals if needle in _status_text(g)]


def filter_goals(
    goals: Sequence[Goal],
    name_query: str | None = None,
    status_query: str | None = None,
) -> list[Goal]:
    """Keep goals whose name contains ``name_query`` and whose status contains ``status_query``.

    Both comparisons are case-insensitive substring tests. ``None`` or an
    empty string disables a filter.
    """
    result = list(goals)

    if name_query is not None:
        needle = name_query.lower()
        if needle:
            result = [g for g in result if needle in g.name.lower()]

    result = _matches_status(result, status_query)
    return sort_by_start_date(result)


def super_filter_goals(
    goals: Sequence[Goal],
    text_query: str | None = None,
    status_query: str | None = None,
) -> list[Goal]:
    """Status filter, then a free-text match on name OR frequency OR category."""
    result = _matches_status(list(goals), status_query)

    if text_query is not None:
        needle = text_query.lower()
        if needle:
            result = [
                g
                for g in result
                if needle in g.name.lower()
                or needle in str(g.frequency).lower()
                or needle in str(g.category).lower()
            ]

    return sort_by_start_date(result)


def apply_criteria(goals: Sequence[Goal], criteria: FilterCriteria) -> list[Goal]:
    if criteria.text is not None:
        return super_filter_goals(goals, criteria.text, criteria.status)
    return filter_goals(goals, criteria.name, criteria.status)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def status_label(status: bool) -> str:
    return "Complete" if status else "Incomplete"


def format_goal_date(goal: Goal, which: str = "start") -> str:
    """Render the start (or end) date like ``Tue Jan 10 2023``."""
    raw = goal.start_date if which == "start" else goal.end_date
    parsed = parse_goal_date(raw)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%a %b %d %Y")
