from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Callable, Iterable, Iterator, List, Optional, TypeVar

from tqdm import tqdm

from dbpedia_graph.data.schema.constants import _DISABLE_PARALLEL_WORKERS, _ONE, _PARTITIONS_PER_WORKER

S = TypeVar("S")
P = TypeVar("P")
R = TypeVar("R")

_WORKER_STATE: Optional[object] = None


def _init_worker_state(state: object) -> None:
    global _WORKER_STATE
    _WORKER_STATE = state


def _require_worker_state() -> object:
    if _WORKER_STATE is None:
        raise RuntimeError("Worker state is not initialized.")
    return _WORKER_STATE


def _run_with_worker_state(worker: Callable[[object, P], R], partition: P) -> R:
    return worker(_require_worker_state(), partition)


def _windows(partitions: Iterable[P], size: int) -> Iterator[List[P]]:
    window: List[P] = []
    for partition in partitions:
        window.append(partition)
        if len(window) >= size:
            yield window
            window = []
    if window:
        yield window


def map_partitions(
    worker: Callable[[S, P], R],
    partitions: Iterable[P],
    *,
    state: S,
    num_workers: int = _DISABLE_PARALLEL_WORKERS,
    desc: Optional[str] = None,
    progress_bar: bool = True,
) -> Iterator[R]:
    """Apply ``worker(state, partition)`` to every partition, yielding results in input order.

    ``state`` is read-only: with ``num_workers > 0`` it is shipped once to each
    process through the executor initializer and never sent back.
    ``worker`` must be a module-level function so it can be pickled.
    """

    partitions = tqdm(partitions, desc=desc, unit="part", disable=not progress_bar)
    if num_workers <= _DISABLE_PARALLEL_WORKERS:
        for partition in partitions:
            yield worker(state, partition)
        return
    window_size = max(_ONE, num_workers * _PARTITIONS_PER_WORKER)
    task = partial(_run_with_worker_state, worker)
    with ProcessPoolExecutor(
        max_workers=num_workers,
        initializer=_init_worker_state,
        initargs=(state,),
    ) as executor:
        for window in _windows(partitions, window_size):
            yield from executor.map(task, window)
