"""Tests for record ordering, partial merges and timestamp advancement."""

from datetime import date, timedelta
from unittest.mock import patch

from conftest import make_record
from lailatov.db.seed_demo_data import build_demo_babies
from lailatov.utils.sleep_records import advance_timestamp, merge_baby, now_local, sort_records_desc


def test_sort_records_desc_is_stable_for_same_date():
    records = [
        make_record("first", date(2024, 7, 20)),
        make_record("older", date(2024, 7, 1)),
        make_record("second", date(2024, 7, 20)),
    ]
    assert [r.id for r in sort_records_desc(records)] == ["first", "second", "older"]


def test_merge_returns_new_object_without_aliasing():
    baby = build_demo_babies()[0]
    replacement = [make_record("x", date(2024, 8, 1))]

    merged = merge_baby(baby, {"sleep_records": replacement, "age": 7})

    assert merged is not baby
    assert merged.age == 7
    assert baby.age == 6
    merged.sleep_records[0].stage = "changed"
    assert replacement[0].stage == "adjustment"


def test_merge_skips_unknown_and_immutable_fields():
    baby = build_demo_babies()[1]
    merged = merge_baby(baby, {"nickname": "x", "id": "77", "parent_username": "other"})
    assert merged.id == baby.id
    assert merged.parent_username == baby.parent_username
    assert not hasattr(merged, "nickname")


def test_advance_timestamp_strictly_increases_when_clock_stalls():
    frozen = now_local()
    with patch("lailatov.utils.sleep_records.now_local", return_value=frozen):
        assert advance_timestamp(frozen) == frozen + timedelta(microseconds=1)
        assert advance_timestamp(None) == frozen


def test_advance_timestamp_uses_clock_when_ahead():
    previous = now_local() - timedelta(days=1)
    assert advance_timestamp(previous) > previous + timedelta(hours=23)
