"""Fire-all-then-join execution of independent remote operations.

Every item of a batch is submitted to a thread pool up front. The batch only
completes once every submitted call has settled, successfully or not; the
first failure in submission order is then re-raised. Calls that were
already running are never cancelled.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)

# Default number of concurrent remote calls per batch
DEFAULT_MAX_WORKERS = 16


def run_batch(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: int = DEFAULT_MAX_WORKERS,
    description: str = "batch",
) -> List[R]:
    """Call ``func`` on every item concurrently and wait for all of them.

    Args:
        func: Operation to run for one item
        items: Items of the batch, fully materialized
        max_workers: Upper bound on concurrently running calls
        description: Name used in log messages

    Returns:
        Results of ``func`` in the order of ``items``

    Raises:
        Exception: The first failure in submission order, after every call
                   has settled
    """
    if not items:
        logger.debug(f"{description}: nothing to do")
        return []

    logger.info(f"{description}: starting {len(items)} operation(s)")

    # Leaving the executor block waits for every submitted call
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as executor:
        futures = [executor.submit(func, item) for item in items]

    errors = [future.exception() for future in futures if future.exception() is not None]
    if errors:
        logger.error(f"{description}: {len(errors)} of {len(items)} operation(s) failed")
        raise errors[0]

    logger.info(f"{description}: {len(items)} operation(s) completed")
    return [future.result() for future in futures]
