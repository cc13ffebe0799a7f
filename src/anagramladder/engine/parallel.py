"""Fan-out of independent per-letter work over a thread pool."""

import os
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def get_executor(*, n_workers: int | None = None) -> ThreadPoolExecutor | None:
    """Get a ThreadPoolExecutor for scoring candidate letters.

    Args:
        n_workers (int | None): Number of worker threads.  If None or 1, returns None and
            callers score sequentially.

    Returns:
        A ThreadPoolExecutor, or None for sequential execution.
    """
    if n_workers is None or n_workers == 1:
        return None
    if n_workers < 1:
        raise ValueError(f"Number of workers must be positive (got {n_workers})")
    cpus = os.cpu_count() or 1  # Fallback to 1 if os.cpu_count() is None
    return ThreadPoolExecutor(
        max_workers=min(n_workers, 4 * cpus),
        thread_name_prefix="anagram-scorer",
    )


def map_in_order(executor: Executor | None, fn: Callable[[T], R], items: Sequence[T]) -> list[R]:
    """Apply `fn` to every item, possibly in parallel, returning results in input order.

    The items must be independent: `fn` may only share read-only state (plus internally
    locked caches) between calls.  The first exception raised by a task is re-raised.
    """
    if executor is None:
        return [fn(item) for item in items]

    futures = {executor.submit(fn, item): index for index, item in enumerate(items)}
    results: list[R | None] = [None] * len(items)
    try:
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    except BaseException:
        for future in futures:
            future.cancel()
        raise
    return results  # type: ignore[return-value]
