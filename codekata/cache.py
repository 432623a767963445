"""Thread-safe caches, counters and maps, with small demonstrations of their use."""

import gc
import threading
import tracemalloc
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import NamedTuple


class Cache:
    """A string-to-string map guarded by a lock."""

    def __init__(self):
        self._data = {}
        self._lock = threading.Lock()

    def get(self, key):
        """Return the cached value, or None when the key is absent."""
        with self._lock:
            return self._data.get(key)

    def set(self, key, value):
        with self._lock:
            self._data[key] = value


@dataclass(frozen=True)
class MarketSelection:
    event_id: str
    market_id: str
    selection_id: str


class Lookup(NamedTuple):
    key: str
    value: str
    hit: bool


def lookup_keys(cache, keys):
    """Look up each key, filling misses with a fetched description; report every outcome."""
    outcomes = []
    for key in keys:
        value = cache.get(key)
        if value is not None:
            print(f"Cache HIT for key '{key}': {value}")
            outcomes.append(Lookup(key, value, True))
        else:
            print(f"Cache MISS for key '{key}'. Fetching and adding to cache...")
            fetched = "Fetched description for " + key
            cache.set(key, fetched)
            outcomes.append(Lookup(key, fetched, False))
    return outcomes


def sync_map_with_individual_keys():
    """Cache events and selections under their own ids and look them all up."""
    cache = Cache()
    entries = {
        "U-123": "Ind Vs Pak",
        "S-121": "Ind Wins",
        "S-120": "Pak Wins",
        "S-124": "May be Draw",
        "U-125": "Pak Vs Aus",
        "S-126": "Pak Wins",
        "S-127": "Aus Wins",
        "U-128": "Draw for Pak Vs Aus",
        "U-129": "Aus Vs SL",
    }
    for key, value in entries.items():
        cache.set(key, value)
    return lookup_keys(cache, list(entries))


def sync_map_with_combined_keys():
    """Cache selections under event:selection keys and look them up, one key missing."""
    cache = Cache()
    keys = [
        "U-123:S-121", "U-123:S-120", "U-123:S-124", "U-125:S-126",
        "U-125:S-127", "U-125:U-128", "U-125:U-129",
    ]
    cache.set("U-123:S-121", "Ind Vs Pak:Ind Wins")
    cache.set("U-123:S-120", "Ind Vs Pak:Pak Wins")
    cache.set("U-123:S-124", "Ind Vs Pak:May be Draw")
    cache.set("U-125:S-126", "Pak Vs Aus:Pak Wins")
    cache.set("U-125:S-127", "Pak Vs Aus:Aus Wins")
    cache.set("U-125:U-128", "Pak Vs Aus:May be Draw")
    return lookup_keys(cache, keys)


class SafeCounter:
    """Per-key counters that may be incremented from many threads."""

    def __init__(self):
        self._counts = {}
        self._lock = threading.Lock()

    def inc(self, key):
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1

    def value(self, key):
        with self._lock:
            return self._counts.get(key, 0)


def sync_mutex(count=1000):
    """Increment keys 0..count-1 concurrently while another thread prints them."""
    counter = SafeCounter()

    def reader():
        for key in range(count):
            print(key, counter.value(key))

    with ThreadPoolExecutor(max_workers=8) as pool:
        watcher = threading.Thread(target=reader)
        watcher.start()
        for key in range(count):
            pool.submit(counter.inc, key)
        watcher.join()
    return counter


class ConcurrentMap:
    """A map of arbitrary keys and values safe for concurrent use."""

    def __init__(self):
        self._data = {}
        self._lock = threading.Lock()

    def store(self, key, value):
        with self._lock:
            self._data[key] = value

    def load(self, key):
        """Return ``(value, found)``."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def load_or_store(self, key, value):
        """Return ``(actual, loaded)``: the existing value if present, else store ``value``."""
        with self._lock:
            if key in self._data:
                return self._data[key], True
            self._data[key] = value
            return value, False

    def delete(self, key):
        with self._lock:
            self._data.pop(key, None)

    def items(self):
        """Snapshot of the current entries."""
        with self._lock:
            return list(self._data.items())

    def __len__(self):
        with self._lock:
            return len(self._data)

    def __contains__(self, key):
        with self._lock:
            return key in self._data


def sync_map():
    """Store, load, load-or-store, delete and list entries of a concurrent map."""
    entries = ConcurrentMap()
    entries.store("name", "Alice")
    entries.store("age", 30)

    value, found = entries.load("name")
    if found:
        print("Name:", value)

    actual, loaded = entries.load_or_store("city", "Paris")
    print("City:", actual, "Already present?", loaded)

    entries.delete("age")

    for key, value in entries.items():
        print(f"Key: {key}, Value: {value}")
    return entries


def sync_map_demo():
    """Use a concurrent map with mixed key types and list its entries."""
    entries = ConcurrentMap()
    entries.store("Name", "Bob")
    entries.store("Age", 30)
    entries.store(10, 20)

    value, found = entries.load("Name")
    if found:
        print("Name is :", value)

    value, loaded = entries.load_or_store("Salary", "40 LPA")
    if not loaded:
        print("Salary not found and stored in cache", value)

    for key, value in entries.items():
        print("Key is", key, "Value is", value)
    return entries


def _report_memory(stage):
    current, peak = tracemalloc.get_traced_memory()
    collections = sum(stat["collections"] for stat in gc.get_stats())
    print(stage)
    print(f"Alloc = {current} B")
    print(f"Peak = {peak} B")
    print(f"NumGC = {collections}")
    print("-----------------------------")


def map_churn(inserts=1000, deletes=800):
    """Fill a dict, delete from it, collect garbage, reporting memory at each stage."""
    was_tracing = tracemalloc.is_tracing()
    if not was_tracing:
        tracemalloc.start()
    try:
        values = {}
        _report_memory("After init")
        for key in range(inserts):
            values[key] = key
        _report_memory("After insertions")
        for key in range(deletes):
            values.pop(key, None)
        _report_memory("After Deletions")
        gc.collect()
        _report_memory("After GC")
    finally:
        if not was_tracing:
            tracemalloc.stop()
    return values