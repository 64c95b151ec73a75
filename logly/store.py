"""Record stores: an in-memory list and an append-only data file."""

from __future__ import annotations

import os
import struct
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator

from logly.index import BinaryTreeIndex, Index
from logly.log import new_logger
from logly.record import Record

DATA_FILE = "data.db"
RECORD_SIZE_WIDTH_BYTES = 8
_HEADER = struct.Struct(">Q")


class StoreError(Exception):
    """A record could not be read or written."""


class Store(ABC):
    """Storage for log records, addressed by ids starting at 1."""

    @abstractmethod
    def read(self, record_id: int) -> Record:
        """Return the record with the given id."""

    @abstractmethod
    def write(self, record: Record) -> int:
        """Store a record and return its id."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every record."""


class InMemoryStore(Store):
    """Keeps records in a list; ids are positions counted from 1."""

    def __init__(self) -> None:
        self.logger = new_logger("memory-store")
        self._lock = threading.Lock()
        self._records: list[Record] = []

    @property
    def records(self) -> tuple[Record, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def read(self, record_id: int) -> Record:
        with self._lock:
            if record_id < 1 or record_id > len(self._records):
                raise StoreError(f"incorrect id {record_id}: out of bounds")
            return self._records[record_id - 1]

    def write(self, record: Record) -> int:
        with self._lock:
            self._records.append(record)
            return len(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records = []


class FileStore(Store):
    """Append-only file of length-prefixed encoded records with an offset index."""

    def __init__(self, path: str | os.PathLike = DATA_FILE, index: Index | None = None) -> None:
        self.logger = new_logger("file-store")
        self._lock = threading.Lock()
        self._index = index if index is not None else BinaryTreeIndex()
        self._next_id = 1
        self._file = open(path, "ab+")
        try:
            self._load()
        except Exception:
            self._file.close()
            raise

    @property
    def next_id(self) -> int:
        return self._next_id

    def _load(self) -> None:
        self._file.seek(0, os.SEEK_END)
        if self._file.tell() == 0:
            return
        for offset, _ in self._entries():
            self._index.put(self._next_id, offset)
            self._next_id += 1
        self.logger.info("initialized storage system next_id=%d", self._next_id)
        self._index.logger.info(
            "initialized %s index with %d entries", self._index.kind(), self._index.size()
        )

    def _payload_at(self, offset: int) -> bytes | None:
        self._file.seek(offset)
        header = self._file.read(RECORD_SIZE_WIDTH_BYTES)
        if len(header) < RECORD_SIZE_WIDTH_BYTES:
            return None
        (size,) = _HEADER.unpack(header)
        payload = self._file.read(size)
        if len(payload) < size:
            return None
        return payload

    def _entries(self) -> Iterator[tuple[int, bytes]]:
        offset = 0
        while (payload := self._payload_at(offset)) is not None:
            yield offset, payload
            offset += RECORD_SIZE_WIDTH_BYTES + len(payload)

    @staticmethod
    def _decode(payload: bytes) -> Record:
        try:
            return Record.decode(payload)
        except ValueError as exc:
            raise StoreError(f"corrupt record: {exc}") from exc

    def read(self, record_id: int) -> Record:
        with self._lock:
            if record_id < 1 or record_id > self._next_id:
                raise StoreError(f"incorrect id {record_id}")
            self._file.flush()
            if self._index.has(record_id):
                payload = self._payload_at(self._index.get(record_id))
                if payload is None:
                    raise StoreError(f"{record_id} not found")
                return self._decode(payload)
            for _, payload in self._entries():
                record = self._decode(payload)
                if record.id == record_id:
                    return record
            raise StoreError(f"{record_id} not found")

    def write(self, record: Record) -> int:
        with self._lock:
            record.id = self._next_id
            payload = record.encode()
            offset = self._file.seek(0, os.SEEK_END)
            self._file.write(_HEADER.pack(len(payload)) + payload)
            self._file.flush()
            self._index.put(record.id, offset)
            self._next_id += 1
            return record.id

    def clear(self) -> None:
        with self._lock:
            self._file.truncate(0)
            self._file.flush()
            self._index = type(self._index)()
            self._next_id = 1

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileStore:
        return self

    def __exit__(self, *args) -> None:
        self.close()