# codekata

A collection of small, self-contained building blocks.

- **Algorithms**
  - `codekata.bst` – binary trees built from `Tree` nodes: `insert`, `walk`
    (in-order generator), `walk_tree`, `search`, `kth_smallest_element`
    (1-based, `-1` when there is none), `is_valid_bst`, `is_balanced`,
    `min_depth`, `sum_roots_to_leaf`, `is_bsts_equal` (same values in order)
    and `is_bsts_equal_with_structures` (same shape and values).
  - `codekata.linked_list` – a `LinkedList` with `insert_first`,
    `insert_last`, iteration and `len()`, plus `has_cycle(head)` for a chain
    of `Node` objects.
  - `codekata.textalgo` – `my_atoi` (leading integer clamped to the 32-bit
    signed range), `is_match` (`.` matches any character, `*` repeats the
    previous one), `get_single_digit` (repeated digit sum),
    `excel_column_title`, `read_tests` (CSV records) and `read_numbers`
    (integers one per line, other lines skipped).
- **Concurrency patterns**
  - `codekata.cache` – a lock-guarded `Cache`, per-key `SafeCounter`,
    `ConcurrentMap` with `store`, `load`, `load_or_store`, `delete` and
    `items`, and `lookup_keys` for hit/miss lookups that fill misses.
  - `codekata.workerpool` – queue-fed worker pools: `worker_pool_demo`,
    `worker_pool_with_context` and `wp_demo` (stop when a timeout passes),
    and `DeepPool`, which starts and stops at most once.
  - `codekata.concurrency` – cancellation and deadlines (`slow_task`,
    `context_timeout`, `context_success`, `context_done_multiple`) and
    producer/consumer hand-offs (`producer_consumer`, `select_until_done`).
  - `codekata.shutdown` – a bounded `JobQueue`, `http_worker`,
    `ticker_worker`, `graceful_shutdown` and `http_worker_demo`, an
    `/enqueue` HTTP service that drains its workers on SIGINT/SIGTERM.
- **Duck typing** – `codekata.speakers`: `Dog` and `Cat` satisfy the
  `Speaker` protocol; `make_it_speak`, `describe_type`, `type_assertion`
  (raises `TypeError` for non-strings), `print_anything` and `hello`.
- **Small services on aiohttp**
  - `codekata.books_api` – an in-memory books REST API.
  - `codekata.echo_ws` – a WebSocket echo server (optionally serving a
    static directory) and `send_and_receive`, a one-shot client.
  - `codekata.duplex_ws` – a `Hub` that relays every message to all
    connected clients, and `run_client`, a console client.

## Examples

```python
from codekata.textalgo import my_atoi, is_match, excel_column_title

my_atoi("   -42abc")            # -42
my_atoi("-12323232323223")      # -2147483648, clamped to 32 bits
is_match("aa", "a*")            # True
excel_column_title(28)          # 'AB'
```

```python
from codekata.bst import insert, walk_tree, search, kth_smallest_element

root = None
for value in (4, 9, 5, 1):
    root = insert(root, value)

walk_tree(root)                 # [1, 4, 5, 9]
search(root, 5)                 # True
kth_smallest_element(root, 2)   # 4
```

```python
from codekata.cache import ConcurrentMap

m = ConcurrentMap()
m.store("name", "Alice")
m.load("name")                  # ('Alice', True)
m.load_or_store("city", "Paris")  # ('Paris', False)
```

## Commands

```
codekata-books [--port 8080] [--shutdown-timeout 10]
codekata-echo serve [--port 8080] [--static DIR]
codekata-echo send [--url ws://localhost:8080/ws] [MESSAGE]
codekata-duplex serve [--port 8080]
codekata-duplex connect [--url ws://localhost:8080/ws]
```

`codekata-books` serves the book catalogue until SIGINT or SIGTERM, then
shuts down within the given timeout. `codekata-duplex connect` sends each
line read from standard input and prints every message it receives.

The books API exposes:

| Method | Path               | Purpose                                  |
|--------|--------------------|------------------------------------------|
| GET    | `/getBooks`        | list all books                           |
| GET    | `/getBook/{id}`    | fetch one book (404 if absent)           |
| POST   | `/createBook`      | add a book under a random id (201)       |
| DELETE | `/deleteBook/{id}` | remove a book (404 if absent)            |
| PUT    | `/udpateBook/{id}` | replace a book, keeping its id           |

It starts with the three books from `seed_books()` held in a `BookStore`.
To embed it in your own aiohttp application, build the app with
`create_app(store)`.

## What it does not do

- Books live only in memory; nothing is written to disk or to a database,
  and they are lost when the server stops.
- There are no data models for betting offers (markets, selections,
  events) and no reading or writing of such documents as JSON.
- There is no generic linear-search helper; use Python's `in` and
  `list.index`.