from datetime import datetime, timedelta, timezone

from app.core.ordering import newest_first, sort_records, sort_value

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_newest_first_orders_by_timestamp():
    records = [
        {"id": 1, "timestamp": T0},
        {"id": 2, "timestamp": T0 + timedelta(hours=2)},
        {"id": 3, "timestamp": T0 + timedelta(hours=1)},
    ]
    assert [r["id"] for r in newest_first(records)] == [2, 3, 1]


def test_missing_values_sort_as_earliest():
    records = [
        {"id": 1, "planned_end": None},
        {"id": 2, "planned_end": T0},
    ]
    assert [r["id"] for r in sort_records(records, "planned_end", descending=True)] == [2, 1]
    assert [r["id"] for r in sort_records(records, "planned_end", descending=False)] == [1, 2]
    assert sort_value({"id": 1}, "planned_end") == 0.0


def test_same_second_ties_fall_back_to_id():
    records = [{"id": i, "timestamp": T0} for i in (3, 1, 2)]
    assert [r["id"] for r in newest_first(records)] == [3, 2, 1]
    assert [r["id"] for r in sort_records(records, "timestamp", descending=False)] == [1, 2, 3]


def test_naive_and_aware_values_compare():
    records = [
        {"id": 1, "timestamp": datetime(2024, 5, 1, 10, 0)},
        {"id": 2, "timestamp": datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc)},
    ]
    assert [r["id"] for r in newest_first(records)] == [2, 1]


def test_tie_key_orders_records_from_different_tables():
    # a report and an audit record may share both timestamp and row id
    records = [
        {"kind": "REPORT", "id": 1, "seq": 1, "timestamp": T0},
        {"kind": "AUDIT", "id": 1, "seq": 2, "timestamp": T0},
    ]
    assert [r["kind"] for r in newest_first(records, tie_key="seq")] == ["AUDIT", "REPORT"]
