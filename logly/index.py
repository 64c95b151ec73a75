"""Indexes mapping record identifiers to byte offsets in a data file."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from logly.log import new_logger


class Index(ABC):
    """Maps record ids to offsets."""

    def __init__(self, service: str) -> None:
        self.logger = new_logger(service)

    @abstractmethod
    def has(self, record_id: int) -> bool:
        """Whether the id is indexed."""

    @abstractmethod
    def get(self, record_id: int) -> int:
        """The offset stored for the id."""

    @abstractmethod
    def put(self, record_id: int, offset: int) -> None:
        """Store an offset for the id."""

    @abstractmethod
    def size(self) -> int:
        """Number of entries that have been put."""

    @abstractmethod
    def kind(self) -> str:
        """Short name of the index implementation."""


@dataclass
class _Node:
    id: int
    offset: int
    left: _Node | None = None
    right: _Node | None = None


class BinaryTreeIndex(Index):
    """Unbalanced binary search tree; equal ids go to the left."""

    def __init__(self) -> None:
        super().__init__("bintree-index")
        self._root: _Node | None = None
        self._size = 0

    def _lookup(self, record_id: int) -> _Node | None:
        node = self._root
        while node is not None:
            if node.id == record_id:
                return node
            node = node.right if record_id > node.id else node.left
        return None

    def contains(self, record_id: int) -> bool:
        return self._lookup(record_id) is not None

    def find(self, record_id: int) -> int:
        """Offset for the id, or -1 when it is absent."""
        node = self._lookup(record_id)
        return node.offset if node is not None else -1

    def insert(self, record_id: int, offset: int) -> None:
        new = _Node(record_id, offset)
        self._size += 1
        if self._root is None:
            self._root = new
            return
        node = self._root
        while True:
            if record_id > node.id:
                if node.right is None:
                    node.right = new
                    return
                node = node.right
            else:
                if node.left is None:
                    node.left = new
                    return
                node = node.left

    def has(self, record_id: int) -> bool:
        return self.contains(record_id)

    def get(self, record_id: int) -> int:
        return self.find(record_id)

    def put(self, record_id: int, offset: int) -> None:
        self.insert(record_id, offset)

    def size(self) -> int:
        return self._size

    def kind(self) -> str:
        return "binary-search-tree"


class InMemoryIndex(Index):
    """Hash-map index; missing ids yield offset 0."""

    def __init__(self) -> None:
        super().__init__("memory-index")
        self._offsets: dict[int, int] = {}
        self._size = 0

    def has(self, record_id: int) -> bool:
        return record_id in self._offsets

    def get(self, record_id: int) -> int:
        return self._offsets.get(record_id, 0)

    def put(self, record_id: int, offset: int) -> None:
        self._offsets[record_id] = offset
        self._size += 1

    def size(self) -> int:
        return self._size

    def kind(self) -> str:
        return "memory"