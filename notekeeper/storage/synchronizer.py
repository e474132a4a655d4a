"""
Persistence Synchronizer.

Mirrors the note collection to a durable medium. ``hydrate`` reads it
back at startup; ``flush`` overwrites the stored value with the whole
collection after each mutation.

Write modes:
    immediate - the write runs inline; flush returns a finished Future
    deferred  - the collection is encoded inline, then written by a
                single background worker, so writes land in the order
                they were issued and never overlap

In both modes a rejected write is reported through the returned Future
and remembered until ``drain`` raises it. The in-memory collection is
never rolled back.
"""

from collections.abc import Iterable, Sequence
from concurrent.futures import Future

from notekeeper.core.concurrency import TracedThreadPoolExecutor, create_serial_executor
from notekeeper.core.exceptions import WriteError
from notekeeper.core.logging import bound_context, get_logger, log_with_source
from notekeeper.core.utils import Clock, now_ms
from notekeeper.schemas.note import Note
from notekeeper.storage import codec
from notekeeper.storage.medium import DurableMedium

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "simple-notes.notes.v1"


class PersistenceSynchronizer:
    """Reads and writes the note collection under one storage key."""

    def __init__(
        self,
        medium: DurableMedium,
        key: str = DEFAULT_STORAGE_KEY,
        *,
        legacy_keys: Sequence[str] = (),
        deferred: bool = False,
        clock: Clock = now_ms,
    ) -> None:
        self.medium = medium
        self.key = key
        self.legacy_keys = tuple(legacy_keys)
        self.deferred = deferred
        self._clock = clock
        self._executor: TracedThreadPoolExecutor | None = None
        self._pending: Future[None] | None = None
        self._failure: WriteError | None = None

    @property
    def last_error(self) -> WriteError | None:
        """Failure of the most recent completed write, if it failed."""
        return self._failure

    def hydrate(self) -> list[Note]:
        """
        Load the stored collection.

        Falls back to legacy keys, in order, when the current key holds
        nothing. Unreadable or missing data yields [].
        """
        for key in (self.key, *self.legacy_keys):
            try:
                raw = self.medium.get(key)
            except Exception as e:
                log_with_source(
                    logger, "storage", "warning", "Storage read failed",
                    key=key, error=str(e),
                )
                return []
            if raw:
                notes = codec.decode(raw, self._clock)
                logger.info(
                    "Notes hydrated",
                    extra={"key": key, "count": len(notes)},
                )
                return notes
        logger.debug("No stored notes", extra={"key": self.key})
        return []

    def flush(self, notes: Iterable[Note]) -> "Future[None]":
        """
        Overwrite the stored collection with notes.

        The snapshot is encoded before this returns, so later changes to
        the collection cannot leak into this write.

        Returns:
            Future resolving to None, or failing with WriteError
        """
        payload = codec.encode(notes)

        with bound_context(storage_key=self.key):
            if not self.deferred:
                future: Future[None] = Future()
                try:
                    self._write(payload)
                except WriteError as e:
                    future.set_exception(e)
                else:
                    future.set_result(None)
                return future

            if self._executor is None:
                self._executor = create_serial_executor("notes-writer")
            future = self._executor.submit(self._write, payload)
            self._pending = future
            return future

    def drain(self, timeout: float | None = None) -> None:
        """
        Wait for outstanding writes.

        Raises:
            WriteError: If the most recent write failed
            TimeoutError: If writes are still running after timeout seconds
        """
        if self._pending is not None:
            self._pending.exception(timeout=timeout)
            self._pending = None
        if self._failure is not None:
            failure, self._failure = self._failure, None
            raise failure

    def close(self) -> None:
        """Wait for writes, stop the worker and release the medium."""
        try:
            self.drain()
        finally:
            if self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None
            close = getattr(self.medium, "close", None)
            if close is not None:
                close()

    def _write(self, payload: str) -> None:
        try:
            self.medium.set(self.key, payload)
        except WriteError as e:
            self._record_failure(e)
            raise
        except Exception as e:
            failure = WriteError(f"Storage rejected write: {e}", key=self.key)
            self._record_failure(failure)
            raise failure from e
        self._failure = None
        logger.debug("Notes flushed", extra={"key": self.key, "size": len(payload)})

    def _record_failure(self, error: WriteError) -> None:
        self._failure = error
        log_with_source(
            logger, "storage", "error", "Storage write failed",
            key=self.key, error=error.message,
        )
