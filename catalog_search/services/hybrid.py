"""Concurrent fetching of regional and global store variants."""

import logging
from typing import Callable, TypeVar

from ..errors import UpstreamUnavailable
from ..utils.concurrency import run_concurrently

logger = logging.getLogger(__name__)

T = TypeVar("T")


def fetch_regional_and_global(
    fetch: Callable[[bool], list[T]],
    max_workers: int,
    description: str,
) -> tuple[list[T], list[T]]:
    """Fetch the regional and global variants of a request in parallel.

    Args:
        fetch: Performs the request; receives True for the regional store
        max_workers: Thread-pool width
        description: Operation name used in logs and errors

    Returns:
        (regional_results, global_results); a failed branch yields []

    Raises:
        UpstreamUnavailable: If both branches failed
    """
    regional, global_ = run_concurrently(
        [lambda: fetch(True), lambda: fetch(False)], max_workers
    )

    if isinstance(regional, Exception) and isinstance(global_, Exception):
        logger.warning(f"{description}: regional and global requests both failed")
        raise UpstreamUnavailable(f"{description} failed") from regional

    if isinstance(regional, Exception):
        logger.warning(f"{description}: regional request failed, using global results: {regional}")
        regional = []
    if isinstance(global_, Exception):
        logger.warning(f"{description}: global request failed, using regional results: {global_}")
        global_ = []

    return regional, global_
