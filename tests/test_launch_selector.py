from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from allure_bridge.models import Launch
from allure_bridge.services.launch_selector import LaunchNotFoundError, select_next_launch

REFERENCE = datetime(2025, 1, 30, 19, 0, 38, 625000, tzinfo=timezone.utc)
REFERENCE_MS = int(REFERENCE.timestamp()) * 1000 + 625


def _launch(launch_id: int, offset_ms: int) -> Launch:
    return Launch(id=launch_id, name=f"Run {launch_id}", createdDate=REFERENCE_MS + offset_ms)


def test_returns_first_launch_after_reference() -> None:
    launches = [_launch(101, -50_000), _launch(102, 1_000)]

    assert select_next_launch(launches, REFERENCE).id == 102


def test_picks_smallest_non_negative_offset_regardless_of_order() -> None:
    launches = [
        _launch(1, 90_000),
        _launch(2, -1),
        _launch(3, 5_000),
        _launch(4, 60_000),
    ]

    assert select_next_launch(launches, REFERENCE).id == 3


def test_launch_created_exactly_at_reference_is_selected() -> None:
    launches = [_launch(7, 10), _launch(8, 0)]

    assert select_next_launch(launches, REFERENCE).id == 8


def test_identical_creation_instants_resolve_to_lowest_id() -> None:
    launches = [_launch(30, 500), _launch(12, 500), _launch(25, 500)]

    assert select_next_launch(launches, REFERENCE).id == 12
    assert select_next_launch(list(reversed(launches)), REFERENCE).id == 12


def test_reference_in_other_offset_is_compared_as_instant() -> None:
    moscow = timezone(timedelta(hours=3))
    after = REFERENCE.astimezone(moscow)
    launches = [_launch(1, -1), _launch(2, 1)]

    assert select_next_launch(launches, after).id == 2


def test_empty_sequence_raises_not_found() -> None:
    with pytest.raises(LaunchNotFoundError):
        select_next_launch([], REFERENCE)


def test_only_older_launches_raises_not_found() -> None:
    launches = [_launch(1, -10), _launch(2, -3_600_000)]

    with pytest.raises(LaunchNotFoundError):
        select_next_launch(launches, REFERENCE)


def test_accepts_a_generator() -> None:
    launches = (_launch(i, offset) for i, offset in enumerate([-5, 40, 20], start=1))

    assert select_next_launch(launches, REFERENCE).id == 3
