"""
Parallel fan-out for per-image batch work
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, TypeVar

from .config import get_config

logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


def map_ordered(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: Optional[int] = None
) -> List[R]:
    """
    Apply ``func`` to every item on a thread pool.

    Results come back in input order. The first failure cancels the tasks
    that have not started yet and is re-raised; partial results are dropped.
    Pillow releases the GIL while decoding and resampling, so threads run
    the image work concurrently.

    Args:
        func: Work for a single item. Must not touch shared mutable state.
        items: Inputs, read-only for the duration of the call
        max_workers: Pool size (default: configured worker count)
    """
    items = list(items)
    if not items:
        return []
    if len(items) == 1:
        return [func(items[0])]

    workers = min(max_workers or get_config().worker_count, len(items))
    logger.debug("Fanning out %d task(s) over %d worker(s)", len(items), workers)

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = [executor.submit(func, item) for item in items]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [f for f in futures if f in done and f.exception() is not None]
        if failed:
            executor.shutdown(wait=True, cancel_futures=True)
            raise failed[0].exception()
        return [f.result() for f in futures]
    finally:
        executor.shutdown(wait=True)
