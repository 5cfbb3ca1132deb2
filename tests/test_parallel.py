"""Tests for ordered parallel fan-out."""

import threading
import time

import pytest

from piccy.core.parallel import map_ordered


class TestMapOrdered:
    """Result order and failure handling."""

    def test_empty(self) -> None:
        assert map_ordered(lambda x: x, []) == []

    def test_single_item_runs_inline(self) -> None:
        assert map_ordered(lambda x: threading.current_thread().name, ['a']) == [
            threading.current_thread().name
        ]

    def test_order_matches_input(self) -> None:
        def slow_for_early(x):
            time.sleep((10 - x) * 0.005)
            return x * x

        assert map_ordered(slow_for_early, range(10), max_workers=4) == [x * x for x in range(10)]

    def test_first_failure_propagates(self) -> None:
        def fail_on_three(x):
            if x == 3:
                raise ValueError("bad item")
            return x

        with pytest.raises(ValueError, match="bad item"):
            map_ordered(fail_on_three, range(8), max_workers=2)

    def test_pending_tasks_cancelled(self) -> None:
        started = []

        def work(x):
            started.append(x)
            if x == 0:
                raise RuntimeError("boom")
            time.sleep(0.05)
            return x

        with pytest.raises(RuntimeError):
            map_ordered(work, range(50), max_workers=1)
        assert len(started) < 50
