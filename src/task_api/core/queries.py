"""Query plans for listing and counting an owner's tasks.

Plans are declarative: a WHERE clause with its parameters, an ORDER BY clause
and an offset/limit window. The task store executes them against the
``tasks`` table; nothing here touches the database.
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from ..models import RecurrenceType
from .recurrence import weekday_name

LIST_ORDER = "scheduled_date DESC, title ASC"
TODAY_ORDER = "scheduled_date IS NULL, scheduled_date ASC, created_at ASC, rowid ASC"


@dataclass(frozen=True)
class TaskQuery:
    where: str
    params: tuple = ()
    order_by: str = "created_at DESC"
    offset: int = 0
    limit: int | None = None


def to_storage_datetime(value: datetime) -> str:
    """Format a datetime the way scheduled dates are stored.

    Aware values are converted to server local time so they compare with the
    local day bounds used by the today queries.
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.isoformat(timespec="seconds")


def day_bounds(reference_date: date) -> tuple[str, str]:
    """Inclusive start and end of a calendar day in storage format."""
    start = datetime.combine(reference_date, time.min)
    end = datetime.combine(reference_date, time.max)
    return start.isoformat(timespec="seconds"), end.isoformat(timespec="microseconds")


def plan_list(
    owner_id: str, page: int, limit: int, search: str | None = None
) -> TaskQuery:
    """Plan a page of the owner's tasks, optionally filtered by title."""
    clauses = ["owner_id = ?"]
    params: list = [owner_id]

    term = search.strip() if search else ""
    if term:
        clauses.append("instr(casefold(title), casefold(?)) > 0")
        params.append(term)

    return TaskQuery(
        where=" AND ".join(clauses),
        params=tuple(params),
        order_by=LIST_ORDER,
        offset=(page - 1) * limit,
        limit=limit,
    )


def plan_today_count(owner_id: str, reference_date: date) -> TaskQuery:
    """Plan a count of the owner's tasks scheduled on the reference date.

    Recurring tasks are only counted through their scheduled date.
    """
    start, end = day_bounds(reference_date)
    return TaskQuery(
        where="owner_id = ? AND scheduled_date >= ? AND scheduled_date <= ?",
        params=(owner_id, start, end),
    )


def plan_today_list(owner_id: str, reference_date: date) -> TaskQuery:
    """Plan the owner's tasks for the reference date as one composite query.

    Matches one-off tasks scheduled within the day, and recurring tasks whose
    rule is due on that day (see ``recurrence.is_due``).
    """
    start, end = day_bounds(reference_date)
    where = """
        owner_id = ? AND (
            (is_recurring = 0 AND scheduled_date >= ? AND scheduled_date <= ?)
            OR (is_recurring = 1 AND (
                recurrence_type = ?
                OR (recurrence_type = ? AND EXISTS (
                    SELECT 1 FROM json_each(tasks.recurrence_days)
                    WHERE json_each.value = ?
                ))
                OR (recurrence_type = ?
                    AND CAST(strftime('%d', scheduled_date) AS INTEGER) = ?)
            ))
        )
    """
    params = (
        owner_id,
        start,
        end,
        RecurrenceType.DAILY.value,
        RecurrenceType.WEEKLY.value,
        weekday_name(reference_date).value,
        RecurrenceType.MONTHLY.value,
        reference_date.day,
    )
    return TaskQuery(where=where.strip(), params=params, order_by=TODAY_ORDER)
