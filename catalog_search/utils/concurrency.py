"""Thread-pool helpers for fanning out catalog requests."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def run_concurrently(
    calls: list[Callable[[], T]], max_workers: int
) -> list[T | Exception]:
    """Run independent calls in parallel and collect their outcomes in order.

    A failing call yields its exception in place of a result so that
    sibling calls always run to completion.
    """
    if not calls:
        return []

    outcomes: list[T | Exception] = []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(calls))) as executor:
        futures = [executor.submit(call) for call in calls]
        for future in futures:
            try:
                outcomes.append(future.result())
            except Exception as e:
                outcomes.append(e)
    return outcomes


def best_effort_map(
    func: Callable[[T], R],
    items: Iterable[T],
    default: Callable[[T], R],
    max_workers: int,
    description: str = "task",
) -> list[R]:
    """Apply func to every item concurrently, substituting a default on failure.

    Args:
        func: Worker applied to each item
        items: Inputs, results keep their order
        default: Produces the fallback value for an item whose worker raised
        max_workers: Thread-pool width
        description: Label used when logging absorbed failures

    Returns:
        One result per item, in input order
    """
    items = list(items)
    outcomes = run_concurrently([lambda item=item: func(item) for item in items], max_workers)

    results: list[R] = []
    for item, outcome in zip(items, outcomes):
        if isinstance(outcome, Exception):
            logger.debug(f"Best-effort {description} failed for {item!r}: {outcome}")
            results.append(default(item))
        else:
            results.append(outcome)
    return results
