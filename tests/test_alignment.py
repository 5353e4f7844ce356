from datetime import datetime, timedelta, timezone

from app.services.weather.alignment import parse_timestamp, resolve_time_index


AXIS = ["2024-05-01T10:00", "2024-05-01T11:00", "2024-05-01T12:00"]
UTC = timezone.utc


def test_exact_match_returns_index():
    assert resolve_time_index(AXIS, "2024-05-01T11:00") == 1


def test_exact_match_prefers_first_duplicate():
    axis = ["2024-05-01T10:00", "2024-05-01T11:00", "2024-05-01T11:00"]
    assert resolve_time_index(axis, "2024-05-01T11:00") == 1


def test_missing_target_falls_back_to_now_not_target():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    # 09:00 is nearest to index 0, but the fallback measures distance to now.
    assert resolve_time_index(AXIS, "2024-05-01T09:00", now=now) == 2


def test_absent_target_uses_now():
    now = datetime(2024, 5, 1, 11, 10, tzinfo=UTC)
    assert resolve_time_index(AXIS, None, now=now) == 1


def test_empty_axis_is_not_found():
    now = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    assert resolve_time_index([], "2024-05-01T11:00", now=now) is None
    assert resolve_time_index([], None, now=now) is None


def test_equal_distance_keeps_earliest_index():
    now = datetime(2024, 5, 1, 10, 30, tzinfo=UTC)
    assert resolve_time_index(AXIS, None, now=now) == 0


def test_now_far_outside_axis_picks_closest_end():
    now = datetime(2030, 1, 1, tzinfo=UTC)
    assert resolve_time_index(AXIS, None, now=now) == 2


def test_naive_axis_is_read_in_location_offset():
    karachi = timezone(timedelta(hours=5))
    # 07:00 UTC is 12:00 in UTC+5.
    now = datetime(2024, 5, 1, 7, 0, tzinfo=UTC)
    assert resolve_time_index(AXIS, None, now=now, tz=karachi) == 2
    assert resolve_time_index(AXIS, None, now=now) == 0


def test_unparseable_entries_are_skipped():
    axis = ["garbage", "2024-05-01T11:00"]
    now = datetime(2024, 5, 1, 9, 0, tzinfo=UTC)
    assert resolve_time_index(axis, None, now=now) == 1
    assert resolve_time_index(["garbage"], None, now=now) is None


def test_parse_timestamp_attaches_offset():
    parsed = parse_timestamp("2024-05-01T10:00", timezone(timedelta(hours=5)))
    assert parsed == datetime(2024, 5, 1, 5, 0, tzinfo=UTC)
    assert parse_timestamp("not-a-date") is None


def test_zulu_suffix_is_parsed():
    assert parse_timestamp("2024-05-01T10:00Z") == datetime(2024, 5, 1, 10, 0, tzinfo=UTC)
    axis = ["2024-05-01T10:00Z", "2024-05-01T11:00Z"]
    now = datetime(2024, 5, 1, 11, 5, tzinfo=UTC)
    assert resolve_time_index(axis, None, now=now) == 1
