"""
Concurrency Infrastructure.

Executors used to take durable-medium writes off the caller's thread.

A serial executor has exactly one worker, so jobs run in submission order
and never overlap. The persistence synchronizer relies on that to keep the
last completed write equal to the latest in-memory collection.

Usage:
    from notekeeper.core.concurrency import create_serial_executor

    executor = create_serial_executor("notes-writer")
    future = executor.submit(medium.set, key, payload)
"""

import contextvars
from concurrent.futures import ThreadPoolExecutor

from notekeeper.core.logging import get_logger

logger = get_logger(__name__)


class TracedThreadPoolExecutor(ThreadPoolExecutor):
    """ThreadPoolExecutor that propagates contextvars to worker threads.

    Standard ThreadPoolExecutor does not carry structlog context into
    worker threads. This subclass copies the current context before
    dispatching, so bound log fields are preserved.
    """

    def submit(self, fn, /, *args, **kwargs):
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


def create_serial_executor(name: str) -> TracedThreadPoolExecutor:
    """Create a single-worker executor whose jobs run strictly in order."""
    executor = TracedThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
    logger.debug("Serial executor created", extra={"name": name})
    return executor
