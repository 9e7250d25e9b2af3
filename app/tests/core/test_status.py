from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.status import ProjectStatus, as_utc, classify, days_since

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
DAY = timedelta(days=1)


def _project(planned_end, is_closed=False):
    return {"planned_end": planned_end, "is_closed": is_closed}


def test_deadline_yesterday_is_overdue_by_one_day():
    result = classify(_project(NOW - DAY), NOW)
    assert result.status == ProjectStatus.OVERDUE
    assert result.overdue_days == 1
    assert result.label == "Overdue by 1 day"
    assert result.color == "red"


def test_overdue_label_uses_plural():
    result = classify(_project(NOW - 3 * DAY), NOW)
    assert result.overdue_days == 3
    assert result.label == "Overdue by 3 days"


def test_partial_day_overdue_rounds_toward_deadline():
    # 36h late: ceil(-1.5) == -1
    result = classify(_project(NOW - timedelta(hours=36)), NOW)
    assert result.status == ProjectStatus.OVERDUE
    assert result.overdue_days == 1


@pytest.mark.parametrize("planned_end", [NOW, NOW - timedelta(seconds=1), NOW + DAY])
def test_deadline_today_or_tomorrow_is_due_soon(planned_end):
    result = classify(_project(planned_end), NOW)
    assert result.status == ProjectStatus.DUE_SOON
    assert result.color == "yellow"
    assert result.overdue_days is None


def test_just_past_tomorrow_is_on_track():
    result = classify(_project(NOW + DAY + timedelta(seconds=1)), NOW)
    assert result.status == ProjectStatus.ON_TRACK


def test_five_days_out_is_on_track():
    result = classify(_project(NOW + 5 * DAY), NOW)
    assert result.status == ProjectStatus.ON_TRACK
    assert result.label == "On track"
    assert result.color == "green"


def test_missing_deadline_needs_scheduling():
    result = classify(_project(None), NOW)
    assert result.status == ProjectStatus.SCHEDULE_NEEDED
    assert result.color == "blue"


@pytest.mark.parametrize("planned_end", [None, NOW - 10 * DAY, NOW + 10 * DAY])
def test_closed_dominates_everything(planned_end):
    result = classify(_project(planned_end, is_closed=True), NOW)
    assert result.status == ProjectStatus.CLOSED
    assert result.color == "gray"


def test_naive_deadline_is_read_as_utc():
    naive = datetime(2024, 5, 9, 12, 0)
    assert classify(_project(naive), NOW).overdue_days == 1


def test_classify_accepts_objects():
    class Card:
        is_closed = False
        planned_end = NOW + 5 * DAY

    assert classify(Card(), NOW).status == ProjectStatus.ON_TRACK


def test_as_utc_handles_dates_and_offsets():
    assert as_utc(date(2024, 5, 10)) == datetime(2024, 5, 10, tzinfo=timezone.utc)
    plus_two = timezone(timedelta(hours=2))
    assert as_utc(datetime(2024, 5, 10, 14, 0, tzinfo=plus_two)) == NOW
    assert as_utc("2024-05-10") is None
    assert as_utc(None) is None


def test_days_since():
    assert days_since(NOW - 2 * DAY, NOW) == 2
    assert days_since(NOW - timedelta(hours=1), NOW) == 1
    assert days_since(NOW, NOW) == 0
    assert days_since(None, NOW) is None
