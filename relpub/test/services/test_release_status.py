from __future__ import annotations

import pytest

from relpub.services.release.status import (
    Failure,
    OverallStatus,
    Success,
    aggregate,
    exit_status_from_code,
)


def test_no_groups_is_success() -> None:
    assert aggregate([]) == 0


def test_all_success_is_success() -> None:
    assert aggregate([Success(), Success()]) == 0


def test_later_success_does_not_clear_failure() -> None:
    assert aggregate([Failure(2), Success()]) == 2


def test_later_failure_replaces_earlier_code() -> None:
    # Latest failure wins, even when the earlier code was larger.
    assert aggregate([Failure(7), Failure(1)]) == 1


def test_code_mapping() -> None:
    assert exit_status_from_code(0) == Success()
    assert exit_status_from_code(130) == Failure(130)
    assert exit_status_from_code(None) == Failure(1)


def test_failure_rejects_zero() -> None:
    with pytest.raises(ValueError):
        Failure(0)


def test_overall_status_records() -> None:
    overall = OverallStatus()
    assert overall.code == 0
    overall.record(Failure(3))
    overall.record(Success())
    assert overall.code == 3
