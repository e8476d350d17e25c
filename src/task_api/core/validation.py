"""Construction-time checks for new tasks."""

from ..errors import FieldError
from ..models import RecurrenceType, TaskCreate

RECURRENCE_TYPES = {rule.value for rule in RecurrenceType}


def validate_recurrence(payload: TaskCreate) -> list[FieldError]:
    """Return the problems with a task's recurrence rule, empty when valid.

    Non-recurring payloads always pass; their recurrence fields are discarded.
    """
    if not payload.is_recurring:
        return []

    if payload.recurrence_type not in RECURRENCE_TYPES:
        return [FieldError("recurrence_type", "Invalid or missing recurrence type")]

    errors = []
    if payload.recurrence_type == RecurrenceType.WEEKLY and not payload.recurrence_days:
        errors.append(
            FieldError("recurrence_days", "Weekly tasks need at least one recurrence day")
        )
    if payload.recurrence_type == RecurrenceType.MONTHLY and payload.scheduled_date is None:
        errors.append(
            FieldError("scheduled_date", "Monthly tasks need a scheduled date as anchor")
        )
    return errors


def clean_tags(tags: list[str]) -> list[str]:
    """Trim tags and drop empty ones, keeping order and duplicates."""
    return [tag.strip() for tag in tags if tag.strip()]
