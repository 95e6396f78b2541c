from __future__ import annotations

from datetime import datetime

import pytest

from haole.core.history import HistoryBuffer, HistorySample, sparkline


@pytest.mark.parametrize("count", [0, 1, 49, 50, 51, 120])
def test_history_length_is_capped(count):
    history = HistoryBuffer()
    for i in range(count):
        history.append(HistorySample(f"t{i}", i))

    assert len(history) == min(count, 50)


def test_history_evicts_oldest_first_and_keeps_order():
    history = HistoryBuffer(capacity=50)
    for i in range(75):
        history.append(HistorySample(f"t{i}", i))

    assert history.values() == list(range(25, 75))
    assert [s.timestamp for s in history][0] == "t25"
    assert history.latest(3) == [HistorySample("t72", 72), HistorySample("t73", 73), HistorySample("t74", 74)]


def test_history_record_stamps_time():
    history = HistoryBuffer(capacity=3)
    sample = history.record(7, when=datetime(2026, 1, 2, 13, 4, 5))

    assert sample == HistorySample("13:04:05", 7)
    assert list(history) == [sample]


def test_history_rejects_zero_capacity():
    with pytest.raises(ValueError):
        HistoryBuffer(capacity=0)


def test_sparkline_scales_to_ceiling():
    assert sparkline([]) == ""
    assert sparkline([0, 10, 20], ceiling=20) == "▁▄█"
    # Values above the ceiling are clipped
    assert sparkline([40], ceiling=20) == "█"


def test_sparkline_all_zero_draws_baseline():
    assert sparkline([0, 0, 0]) == "▁▁▁"
