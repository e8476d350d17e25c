# tests/test_task_queries.py

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from task_api.core.queries import (
    day_bounds,
    plan_list,
    plan_today_count,
    plan_today_list,
    to_storage_datetime,
)
from task_api.services.tasks import list_today_tasks

from .factories import add_task, titles

TUESDAY = date(2026, 10, 20)


def test_day_bounds_cover_whole_day():
    start, end = day_bounds(TUESDAY)
    assert start == "2026-10-20T00:00:00"
    assert start <= "2026-10-20T23:59:59" <= end
    assert "2026-10-21T00:00:00" > end


def test_plan_list_scopes_owner_and_window():
    query = plan_list("u1", page=3, limit=10)
    assert query.where == "owner_id = ?"
    assert query.params == ("u1",)
    assert query.offset == 20
    assert query.limit == 10
    assert query.order_by == "scheduled_date DESC, title ASC"


def test_plan_list_ignores_blank_search():
    assert plan_list("u1", 1, 20, "   ").params == ("u1",)
    assert plan_list("u1", 1, 20, " gym ").params == ("u1", "gym")


def test_plan_today_count_is_scoped_to_the_day():
    query = plan_today_count("u1", TUESDAY)
    assert query.params == ("u1",) + day_bounds(TUESDAY)


def test_list_is_sorted_by_date_desc_then_title(task_store):
    add_task(task_store, "b-undated")
    add_task(task_store, "a-undated")
    add_task(task_store, "old", scheduled_date="2026-01-01T08:00:00")
    add_task(task_store, "new", scheduled_date="2026-12-01T08:00:00")

    rows = task_store.find_tasks(plan_list("u1", 1, 20))
    assert titles(rows) == ["new", "old", "a-undated", "b-undated"]


def test_list_search_is_case_insensitive_substring(task_store):
    add_task(task_store, "Gym session")
    add_task(task_store, "gym bag")
    add_task(task_store, "Groceries")
    add_task(task_store, "Gym", owner_id="u2")

    query = plan_list("u1", 1, 20, "GYM")
    assert task_store.count_tasks(query) == 2
    assert titles(task_store.find_tasks(query)) == ["Gym session", "gym bag"]


def test_list_window_applies_offset_and_limit(task_store):
    for i in range(5):
        add_task(task_store, f"task {i}")

    rows = task_store.find_tasks(plan_list("u1", page=2, limit=2))
    assert titles(rows) == ["task 2", "task 3"]
    assert task_store.find_tasks(plan_list("u1", page=4, limit=2)) == []


@pytest.fixture()
def today_fixture(task_store):
    add_task(task_store, "Dentist", scheduled_date="2026-10-20T09:00:00")
    add_task(task_store, "Late call", scheduled_date="2026-10-20T23:59:59")
    add_task(task_store, "Tomorrow", scheduled_date="2026-10-21T00:00:00")
    add_task(task_store, "Stretch", is_recurring=True, recurrence_type="daily")
    add_task(
        task_store,
        "Gym",
        is_recurring=True,
        recurrence_type="weekly",
        recurrence_days=["Monday", "Wednesday"],
    )
    add_task(
        task_store,
        "Team sync",
        is_recurring=True,
        recurrence_type="weekly",
        recurrence_days=["Tuesday"],
    )
    add_task(
        task_store,
        "Rent",
        is_recurring=True,
        recurrence_type="monthly",
        scheduled_date="2026-09-20T07:00:00",
    )
    add_task(
        task_store,
        "Invoice",
        is_recurring=True,
        recurrence_type="monthly",
        scheduled_date="2026-09-21T07:00:00",
    )
    add_task(task_store, "Not mine", owner_id="u2", is_recurring=True, recurrence_type="daily")
    return task_store


def test_today_list_unions_one_off_and_due_recurring(today_fixture):
    rows = today_fixture.find_tasks(plan_today_list("u1", TUESDAY))
    assert titles(rows) == ["Rent", "Dentist", "Late call", "Stretch", "Team sync"]


def test_today_list_agrees_with_recurrence_evaluator(today_fixture):
    for offset in range(1, 8):
        day = date(2026, 10, 18 + offset)
        rows = today_fixture.find_tasks(plan_today_list("u1", day))
        tasks = list_today_tasks(today_fixture, "u1", day)
        assert titles(rows) == titles(tasks)


def test_today_count_only_counts_scheduled_dates(today_fixture):
    assert today_fixture.count_tasks(plan_today_count("u1", TUESDAY)) == 2
    assert today_fixture.count_tasks(plan_today_count("u2", TUESDAY)) == 0


def test_to_storage_datetime_converts_aware_values_to_local():
    aware = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)
    expected = aware.astimezone().replace(tzinfo=None).isoformat(timespec="seconds")
    assert to_storage_datetime(aware) == expected
    assert to_storage_datetime(datetime(2026, 10, 20, 9, 30, 15, 123)) == "2026-10-20T09:30:15"


def test_list_search_folds_non_ascii_case(task_store):
    add_task(task_store, "ÄPFEL kaufen")
    add_task(task_store, "Straße fegen")
    add_task(task_store, "Birnen")

    assert titles(task_store.find_tasks(plan_list("u1", 1, 20, "äpfel"))) == ["ÄPFEL kaufen"]
    assert titles(task_store.find_tasks(plan_list("u1", 1, 20, "STRASSE"))) == ["Straße fegen"]
