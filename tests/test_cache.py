import random
import threading

from codekata.cache import (
    Cache,
    ConcurrentMap,
    MarketSelection,
    SafeCounter,
    lookup_keys,
    map_churn,
    sync_map,
    sync_map_demo,
    sync_map_with_combined_keys,
    sync_map_with_individual_keys,
    sync_mutex,
)


def test_cache_set_get():
    cache = Cache()
    assert cache.get("U-123") is None
    cache.set("U-123", "Ind Vs Pak")
    assert cache.get("U-123") == "Ind Vs Pak"


def test_individual_keys_all_hit(capsys):
    outcomes = sync_map_with_individual_keys()
    assert all(o.hit for o in outcomes)
    assert outcomes[0].key == "U-123"
    assert outcomes[0].value == "Ind Vs Pak"
    assert "Cache HIT for key 'U-129': Aus Vs SL" in capsys.readouterr().out


def test_combined_keys_last_misses(capsys):
    outcomes = sync_map_with_combined_keys()
    assert [o.hit for o in outcomes[:-1]] == [True] * (len(outcomes) - 1)
    last = outcomes[-1]
    assert not last.hit
    assert last.value == "Fetched description for U-125:U-129"
    assert "Cache MISS for key 'U-125:U-129'" in capsys.readouterr().out


def test_lookup_fills_cache_on_miss():
    cache = Cache()
    first = lookup_keys(cache, ["k"])
    second = lookup_keys(cache, ["k"])
    assert not first[0].hit
    assert second[0].hit
    assert second[0].value == first[0].value


def test_market_selection_is_hashable_value():
    a = MarketSelection("U-123", "M-1", "S-121")
    assert a == MarketSelection("U-123", "M-1", "S-121")
    assert len({a, MarketSelection("U-123", "M-1", "S-121")}) == 1


def test_safe_counter_concurrent_increments():
    counter = SafeCounter()
    threads = [threading.Thread(target=lambda: [counter.inc(1) for _ in range(500)]) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value(1) == 8 * 500
    assert counter.value(2) == 0


def test_sync_mutex_counts_each_key_once(capsys):
    counter = sync_mutex(50)
    assert all(counter.value(k) == 1 for k in range(50))
    assert len(capsys.readouterr().out.splitlines()) == 50


def test_concurrent_map_operations():
    entries = ConcurrentMap()
    assert entries.load("x") == (None, False)
    entries.store("x", 1)
    assert entries.load("x") == (1, True)
    assert entries.load_or_store("x", 2) == (1, True)
    assert entries.load_or_store("y", 3) == (3, False)
    entries.delete("x")
    entries.delete("missing")
    assert entries.items() == [("y", 3)]


def test_sync_map(capsys):
    entries = sync_map()
    assert dict(entries.items()) == {"name": "Alice", "city": "Paris"}
    out = capsys.readouterr().out
    assert "City: Paris Already present? False" in out


def test_sync_map_demo(capsys):
    entries = sync_map_demo()
    assert entries.load(10) == (20, True)
    assert entries.load("Salary") == ("40 LPA", True)
    assert "Salary not found and stored in cache 40 LPA" in capsys.readouterr().out


def _parallel(worker, count=8):
    threads = [threading.Thread(target=worker, args=(seed,)) for seed in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_parallel_random_reads_writes_concurrent_map():
    entries = ConcurrentMap()

    def worker(seed):
        rng = random.Random(seed)
        for _ in range(2000):
            key = rng.randrange(100)
            if rng.randrange(2) == 0:
                entries.load(key)
            else:
                entries.store(key, key)

    _parallel(worker)
    assert all(k == v for k, v in entries.items())
    assert 0 < len(entries) <= 100


def test_parallel_random_reads_writes_cache():
    cache = Cache()

    def worker(seed):
        rng = random.Random(seed)
        for _ in range(2000):
            key = str(rng.randrange(100))
            if rng.randrange(2) == 0:
                cache.get(key)
            else:
                cache.set(key, key)

    _parallel(worker)
    present = [str(k) for k in range(100) if cache.get(str(k)) is not None]
    assert present
    assert all(cache.get(k) == k for k in present)


def test_map_churn(capsys):
    assert map_churn(10, 4) == {k: k for k in range(4, 10)}
    out = capsys.readouterr().out
    assert "After GC" in out


def test_map_churn_deleting_more_than_inserted():
    assert map_churn(3, 5) == {}