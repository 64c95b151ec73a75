# logly

logly is a small append-only log. Records are appended one at a time, each
receives a sequential id starting at 1, and any record can be fetched back by
that id.

Two storage back ends are available:

- **in-memory** (`logly.store.InMemoryStore`) – records live in a list for the
  lifetime of the process;
- **file** (`logly.store.FileStore`) – records are appended to a data file as
  an 8-byte big-endian length prefix followed by the encoded record. On
  start-up the file is scanned so numbering continues where it left off, and
  an index maps record ids to file offsets for fast lookups. Two indexes are
  provided in `logly.index`: `BinaryTreeIndex` (the default) and
  `InMemoryIndex` (a hash map).

Records (`logly.record.Record`, with fields `id` and `data`) are encoded in a
compact binary form: field 1 holds the id as a varint, field 2 the text as a
length-delimited UTF-8 string; fields holding default values are left out and
unknown fields are skipped on decoding.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
logly --help
logly --memory
logly --file --cert ./config/localhost.pem --key ./config/localhost-key.pem
```

The command starts an HTTPS server on port 3333 on all interfaces.

Options (each may also be written with a single dash, e.g. `-memory`):

| Option          | Meaning                                                      |
|-----------------|--------------------------------------------------------------|
| `--memory`      | use the in-memory store                                      |
| `--file`        | use the file store, kept in `data.db` in the current directory |
| `--idx-memory`  | accepted together with `--file`; see below                   |
| `--idx-bintree` | accepted together with `--file`; see below                   |
| `--cert`        | TLS certificate file (default `./config/localhost.pem`)      |
| `--key`         | TLS key file (default `./config/localhost-key.pem`)          |

Exactly one of `--memory` and `--file` must be given: choosing both, or
neither, makes the command log an error and exit with status 1. With `--file`,
giving both `--idx-memory` and `--idx-bintree` is likewise an error. The file
store started by the command always uses the binary-tree index; the index
options are only checked for conflicts.

### HTTP endpoints

Every HTTP method is answered the same way on each path.

| Path      | Body / query                        | Response                              |
|-----------|-------------------------------------|---------------------------------------|
| `/append` | `{"data": "some log line"}`         | `{"id": 1}`                           |
| `/fetch`  | `?id=1` or `{"id": 1}`              | `{"data": "some log line"}`           |
| any other | –                                   | `{"message": "Hello, this is Logly"}` |

When `/fetch` has an `id` query parameter, it takes precedence over the body.
Errors (malformed JSON, a bad id, an unknown record) are answered with status
400 and a body of the form `{"error": "...", "time": "..."}`, the time in ISO
8601 form.

## Using it as a library

```python
from logly.core import in_memory, file

log = in_memory()
record_id = log.append("first entry")
record = log.fetch(record_id)
print(record.data)

persistent = file("data.db")
persistent.append("survives a restart")
```

The building blocks can also be used directly:

```python
from logly.index import BinaryTreeIndex
from logly.record import Record
from logly.store import FileStore, InMemoryStore, StoreError

store = InMemoryStore()
store.write(Record(data="log1"))

with FileStore("data.db", BinaryTreeIndex()) as fs:
    new_id = fs.write(Record(data="hello"))
    print(fs.read(new_id).data)
```

Reading an id that does not exist raises `StoreError`. `clear()` empties a
store; on a `FileStore` it truncates the file and numbering starts again at 1.

The HTTP handlers are available without a network as well:
`logly.http_api.HttpServer(log).handle_append(b'{"data": "x"}')` returns a
status code and a JSON body, and `logly.http_api.serve` runs them behind a TLS
server. Loggers are made with `logly.log.new_logger(service)` and write
timestamped lines to standard output.

## What it does not do

- There is no gRPC interface; the log is reachable only over the HTTPS JSON
  API or as a Python library.
- The command line offers no way to pick the data file's location or the
  index used by the file store.
- There is no replication, clustering or service discovery: each process owns
  its own store.