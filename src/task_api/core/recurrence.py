"""Recurrence evaluation for recurring tasks."""

from datetime import date, datetime

from ..models import RecurrenceType, Task, Weekday

# Python's date.weekday() counts from Monday; Weekday is ordered from Sunday.
_WEEKDAYS = list(Weekday)


def weekday_name(day: date) -> Weekday:
    """Return the weekday of a date, independent of locale."""
    return _WEEKDAYS[(day.weekday() + 1) % 7]


def is_due(task: Task, reference_date: date) -> bool:
    """Decide whether a recurring task is due on the given date.

    Daily tasks are always due. Weekly tasks are due when the weekday of
    ``reference_date`` is one of ``recurrence_days``. Monthly tasks are due
    when the day of month matches that of ``scheduled_date``; a task anchored
    on the 31st is therefore not due in a 30-day month.

    Raises ValueError for tasks that cannot be evaluated.
    """
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    if not task.is_recurring:
        raise ValueError(f"Task {task.id} is not recurring")

    rule = task.recurrence_type
    if rule == RecurrenceType.DAILY:
        return True
    if rule == RecurrenceType.WEEKLY:
        if not task.recurrence_days:
            raise ValueError(f"Weekly task {task.id} has no recurrence days")
        return weekday_name(reference_date) in task.recurrence_days
    if rule == RecurrenceType.MONTHLY:
        if task.scheduled_date is None:
            raise ValueError(f"Monthly task {task.id} has no anchor date")
        return task.scheduled_date.day == reference_date.day
    raise ValueError(f"Unknown recurrence type: {rule!r}")
