from __future__ import annotations

import pytest

from core.domain.errors import OutOfRange, Unreachable, ViewError
from core.domain.models import All, One, parse_selector
from core.services.fanout import for_each_target


def test_all_runs_every_ordinal_in_ascending_order() -> None:
    seen: list[int] = []

    report = for_each_target(All(), 4, seen.append)

    assert seen == [1, 2, 3, 4]
    assert report.completed == [1, 2, 3, 4]
    assert not report.failures


def test_all_with_zero_count_runs_nothing() -> None:
    seen: list[int] = []

    for_each_target(All(), 0, seen.append)

    assert seen == []


def test_one_runs_exactly_once() -> None:
    seen: list[int] = []

    for_each_target(One(ordinal=3), 5, seen.append)

    assert seen == [3]


def test_one_out_of_range_is_passed_through_unclamped() -> None:
    seen: list[int] = []

    def action(ordinal: int) -> None:
        seen.append(ordinal)
        if ordinal > 5:
            raise OutOfRange("node", ordinal, 5)

    report = for_each_target(One(ordinal=9), 5, action)

    assert seen == [9]
    assert isinstance(report.failures[0].error, OutOfRange)
    assert report.failed


def test_failure_does_not_stop_remaining_targets() -> None:
    seen: list[int] = []
    reported: list[tuple[int, ViewError]] = []

    def action(ordinal: int) -> None:
        if ordinal == 2:
            raise Unreachable("node 2 is down")
        seen.append(ordinal)

    report = for_each_target(All(), 3, action, lambda i, e: reported.append((i, e)))

    assert seen == [1, 3]
    assert [i for i, _ in reported] == [2]
    assert report.completed == [1, 3]
    assert not report.failed


def test_unexpected_errors_propagate() -> None:
    def action(ordinal: int) -> None:
        raise KeyError(ordinal)

    with pytest.raises(KeyError):
        for_each_target(All(), 2, action)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("all", All()),
        ("ALL", All()),
        ("3", One(ordinal=3)),
        (" 2 ", One(ordinal=2)),
        (4, One(ordinal=4)),
        ("0", One(ordinal=0)),
    ],
)
def test_parse_selector(raw: object, expected: object) -> None:
    assert parse_selector(raw) == expected


@pytest.mark.parametrize("raw", ["x", "", "1.5", True])
def test_parse_selector_rejects_garbage(raw: object) -> None:
    with pytest.raises(ValueError):
        parse_selector(raw)
