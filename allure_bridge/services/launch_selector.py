"""
Nearest-launch selection.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable

from allure_bridge.models import Launch

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class LaunchNotFoundError(LookupError):
    """Raised when no launch was created at or after the reference instant."""


def select_next_launch(launches: Iterable[Launch], after: datetime) -> Launch:
    """
    Return the earliest launch created at or after ``after``.

    Launches sharing the same creation instant resolve to the lowest id so the
    answer does not depend on the order Allure lists them in.
    """
    if after.tzinfo is None:
        after = after.replace(tzinfo=timezone.utc)
    after_ms = (after - _EPOCH) // timedelta(milliseconds=1)
    closest: Launch | None = None

    for launch in launches:
        offset = launch.created_date - after_ms
        if offset < 0:
            continue
        if closest is None:
            closest = launch
            continue
        closest_offset = closest.created_date - after_ms
        if offset < closest_offset or (offset == closest_offset and launch.id < closest.id):
            closest = launch

    if closest is None:
        raise LaunchNotFoundError("No launch found after the requested date.")
    return closest


__all__ = ["LaunchNotFoundError", "select_next_launch"]
