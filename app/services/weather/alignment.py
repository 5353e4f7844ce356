from __future__ import annotations

from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Sequence


def parse_iso(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None when it is not one."""
    if not isinstance(value, str):
        return None
    # fromisoformat only accepts a trailing Z from Python 3.11.
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def parse_timestamp(value: str, tz: tzinfo = dt_timezone.utc) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken to be in ``tz``."""
    parsed = parse_iso(value)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def resolve_time_index(
    time_axis: Sequence[str],
    target: str | None,
    *,
    now: datetime | None = None,
    tz: tzinfo = dt_timezone.utc,
) -> int | None:
    """Return the axis index matching ``target``, or the one nearest to now.

    An exact match against ``target`` wins (first occurrence). Without one,
    the whole axis is scanned for the entry closest to wall-clock time, not
    to ``target``; equal distances keep the earliest index. Returns ``None``
    for an empty axis or one with no parseable timestamps.
    """
    if not time_axis:
        return None

    if target is not None:
        for i, stamp in enumerate(time_axis):
            if stamp == target:
                return i

    if now is None:
        now = datetime.now(dt_timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=tz)

    best: int | None = None
    best_diff: float | None = None
    for i, stamp in enumerate(time_axis):
        instant = parse_timestamp(stamp, tz)
        if instant is None:
            continue
        diff = abs((instant - now).total_seconds())
        if best_diff is None or diff < best_diff:
            best = i
            best_diff = diff
    return best
