"""
Ordered fan-out of independent simulations across worker threads.

Each task owns its random generator and output buffer, so tasks share no
mutable state. Results are always returned in task order, which keeps any
downstream reduction bit-identical to a sequential run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence, TypeVar

from market_simulator.config.settings import SETTINGS

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def resolve_workers(n_workers: Optional[int]) -> int:
    """Worker count to use; falls back to SETTINGS.simulation.n_workers."""
    if n_workers is None:
        n_workers = SETTINGS.simulation.n_workers
    return max(1, int(n_workers))


def ordered_map(
    func: Callable[[T], R],
    tasks: Sequence[T],
    n_workers: Optional[int] = None,
) -> list[R]:
    """
    Apply ``func`` to every task, optionally on a thread pool.

    Parameters
    ----------
    func : Callable
        Pure function of one task
    tasks : Sequence
        Task inputs
    n_workers : int, optional
        Number of threads. 1 runs inline. Defaults to
        SETTINGS.simulation.n_workers.

    Returns
    -------
    list
        ``[func(t) for t in tasks]``, in task order
    """
    workers = min(resolve_workers(n_workers), max(1, len(tasks)))

    if workers == 1:
        return [func(task) for task in tasks]

    logger.debug(f"Fanning out {len(tasks)} tasks over {workers} threads")
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # executor.map yields in submission order and re-raises task errors
        return list(executor.map(func, tasks))


def chunk_ranges(n_items: int, n_chunks: int) -> list[range]:
    """
    Split ``range(n_items)`` into at most ``n_chunks`` contiguous ranges.

    >>> chunk_ranges(10, 3)
    [range(0, 4), range(4, 7), range(7, 10)]
    """
    n_chunks = max(1, min(n_chunks, n_items))
    base, extra = divmod(n_items, n_chunks)
    ranges = []
    start = 0
    for i in range(n_chunks):
        stop = start + base + (1 if i < extra else 0)
        ranges.append(range(start, stop))
        start = stop
    return ranges
