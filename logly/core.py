"""The log service: serialised appends and fetches over a record store."""

from __future__ import annotations

import logging
import os
import threading

from logly.log import new_logger
from logly.record import Record
from logly.store import DATA_FILE, FileStore, InMemoryStore, Store


class Logly:
    """Appends text entries to a store and fetches them back by id."""

    def __init__(self, store: Store, logger: logging.Logger | None = None) -> None:
        self.store = store
        self.logger = logger if logger is not None else new_logger("logly")
        self._lock = threading.Lock()

    def append(self, data: str) -> int:
        """Store a new entry holding ``data`` and return its id."""
        with self._lock:
            try:
                record_id = self.store.write(Record(data=data))
            except Exception:
                self.logger.critical("failed to append a log entry", exc_info=True)
                raise
        self.logger.debug("successfully appended a new log entry")
        return record_id

    def fetch(self, record_id: int) -> Record:
        """Return the entry with the given id; the store's error propagates."""
        with self._lock:
            record = self.store.read(record_id)
        self.logger.debug("fetch record request completed id=%d", record_id)
        return record


def in_memory() -> Logly:
    """A service backed by an in-memory store."""
    return Logly(InMemoryStore())


def file(path: str | os.PathLike = DATA_FILE) -> Logly:
    """A service backed by an append-only data file."""
    return Logly(FileStore(path))