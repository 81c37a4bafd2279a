"""
Bounded worker pool for classification calls.

The pool is created once by the stage and injected into the invoker. Its
size caps the number of in-flight classification calls; extra submissions
wait in the executor queue instead of spawning threads.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

import structlog


logger = structlog.get_logger(__name__)

T = TypeVar("T")


class WorkerPool:
    """Fixed-size thread pool, sized for the lifetime of the process."""

    def __init__(self, size: int, name: str = "classification-guess"):
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError(f"Worker pool size must be a strictly positive integer. Got {size!r}")
        self.size = size
        self._executor = ThreadPoolExecutor(max_workers=size, thread_name_prefix=name)
        logger.info("Initialized worker pool", size=size, name=name)

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        """
        Schedule fn on the pool.

        Raises:
            RuntimeError: when the pool has been shut down
        """
        return self._executor.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; queued tasks that have not started are dropped."""
        self._executor.shutdown(wait=wait, cancel_futures=True)
        logger.debug("Worker pool shut down", wait=wait)

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return f"WorkerPool(size={self.size})"
