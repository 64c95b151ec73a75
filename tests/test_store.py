import pytest

from logly.index import BinaryTreeIndex, InMemoryIndex
from logly.record import Record
from logly.store import FileStore, InMemoryStore, Store, StoreError


def test_read():
    store = InMemoryStore()
    for data in ("log1", "log2", "log3"):
        store.write(Record(data=data))
    second = store.read(2)
    assert len(store.records) == 3
    assert second.data == "log2"


def test_write():
    store = InMemoryStore()
    written = store.write(Record(data="log1"))
    assert written == 1
    assert store.records[0].data == "log1"


def test_clear():
    store = InMemoryStore()
    store.write(Record(data="log1"))
    store.write(Record(data="log2"))
    store.write(Record(data="log3"))
    store.clear()
    assert len(store.records) == 0
    assert len(store) == 0


def test_memory_read_out_of_bounds():
    store = InMemoryStore()
    store.write(Record(data="log1"))
    with pytest.raises(StoreError, match="out of bounds"):
        store.read(2)
    with pytest.raises(StoreError):
        store.read(0)


def test_memory_ids_increase():
    store = InMemoryStore()
    ids = [store.write(Record(data=str(n))) for n in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert isinstance(store, Store) and store.read(5).data == "4"


@pytest.fixture(params=[BinaryTreeIndex, InMemoryIndex])
def file_store(request, tmp_path):
    with FileStore(tmp_path / "data.db", request.param()) as store:
        yield store


def test_file_write_read(file_store):
    ids = [file_store.write(Record(data=f"log{n}")) for n in range(1, 4)]
    assert ids == [1, 2, 3]
    for record_id in ids:
        assert file_store.read(record_id) == Record(id=record_id, data=f"log{record_id}")


def test_file_write_sets_record_id(file_store):
    record = Record(data="hello")
    assert file_store.write(record) == 1
    assert record.id == 1


def test_file_incorrect_ids(file_store):
    file_store.write(Record(data="a"))
    with pytest.raises(StoreError, match="incorrect id 0"):
        file_store.read(0)
    with pytest.raises(StoreError, match="incorrect id"):
        file_store.read(5)


def test_file_unwritten_next_id_not_found(file_store):
    file_store.write(Record(data="a"))
    with pytest.raises(StoreError, match="not found"):
        file_store.read(2)


def test_file_layout(tmp_path):
    path = tmp_path / "data.db"
    with FileStore(path) as store:
        store.write(Record(data="hello"))
    raw = path.read_bytes()
    payload = Record(id=1, data="hello").encode()
    assert raw[:8] == len(payload).to_bytes(8, "big")
    assert raw[8:] == payload


def test_file_persists_across_reopen(tmp_path):
    path = tmp_path / "data.db"
    with FileStore(path) as store:
        store.write(Record(data="first"))
        store.write(Record(data="second"))
    with FileStore(path, InMemoryIndex()) as store:
        assert store.next_id == 3
        assert store.read(2).data == "second"
        assert store.write(Record(data="third")) == 3
        assert store.read(3) == Record(id=3, data="third")
        assert store.read(1).data == "first"


def test_reopen_ignores_truncated_tail(tmp_path):
    path = tmp_path / "data.db"
    with FileStore(path) as store:
        store.write(Record(data="complete"))
        store.write(Record(data="partial"))
    raw = path.read_bytes()
    path.write_bytes(raw[:-3])
    with FileStore(path) as store:
        assert store.next_id == 2
        assert store.read(1).data == "complete"


def test_file_clear(file_store, tmp_path):
    file_store.write(Record(data="a"))
    file_store.write(Record(data="b"))
    file_store.clear()
    assert (tmp_path / "data.db").stat().st_size == 0
    assert file_store.write(Record(data="c")) == 1
    assert file_store.read(1).data == "c"


def test_empty_record_round_trip(file_store):
    record_id = file_store.write(Record())
    assert file_store.read(record_id) == Record(id=1, data="")