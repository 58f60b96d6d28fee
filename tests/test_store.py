import threading

import pytest
from django.core.cache import cache
from django.db import DatabaseError

from marketplace.store import MAX_FETCH_ATTEMPTS, ListingStore, Snapshot

CACHE_KEY = "test_listing_store"


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeFetcher:
    def __init__(self):
        self.calls = 0
        self.error = None

    def __call__(self, approved_only):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [{"code": f"JP{self.calls}"}], [{"code": f"JC{self.calls}"}]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def store(clock, fetcher):
    return ListingStore("test", approved_only=True, cache_key=CACHE_KEY, fetcher=fetcher, clock=clock)


def test_empty_snapshot_before_any_fetch(store):
    snapshot = store.snapshot()
    assert snapshot == Snapshot()
    assert not snapshot.has_prefetched_data


def test_prefetch_fetches_and_mirrors(store, fetcher, clock):
    snapshot = store.prefetch()

    assert fetcher.calls == 1
    assert snapshot.postings == [{"code": "JP1"}]
    assert snapshot.caris == [{"code": "JC1"}]
    assert snapshot.last_fetch == clock.now
    assert not snapshot.loading
    assert cache.get(CACHE_KEY)["last_fetch"] == clock.now


def test_prefetch_reuses_fresh_mirror(store, fetcher, clock):
    store.prefetch()
    clock.now += 299
    snapshot = store.prefetch()

    assert fetcher.calls == 1
    assert snapshot.postings == [{"code": "JP1"}]


def test_prefetch_refetches_after_expiry(store, fetcher, clock):
    store.prefetch()
    clock.now += 300
    snapshot = store.prefetch()

    assert fetcher.calls == 2
    assert snapshot.postings == [{"code": "JP2"}]
    assert snapshot.last_fetch == clock.now


def test_new_store_starts_from_mirror(store, clock):
    store.prefetch()
    other = ListingStore("other", approved_only=True, cache_key=CACHE_KEY, fetcher=FakeFetcher(), clock=clock)

    snapshot = other.snapshot()
    assert snapshot.postings == [{"code": "JP1"}]
    assert snapshot.has_prefetched_data


def test_expired_mirror_is_discarded(store, clock):
    store.prefetch()
    clock.now += 301
    other = ListingStore("other", approved_only=True, cache_key=CACHE_KEY, fetcher=FakeFetcher(), clock=clock)

    assert other.snapshot() == Snapshot()
    assert cache.get(CACHE_KEY) is None


def test_cache_duration_follows_settings(store, fetcher, clock, settings):
    settings.MARKET_CACHE_SECONDS = 10
    store.prefetch()
    clock.now += 10
    store.prefetch()
    assert fetcher.calls == 2


def test_refresh_always_fetches(store, fetcher):
    store.prefetch()
    snapshot = store.refresh()
    assert fetcher.calls == 2
    assert snapshot.postings == [{"code": "JP2"}]


def test_invalidate_forces_next_prefetch(store, fetcher):
    store.prefetch()
    store.invalidate()

    assert cache.get(CACHE_KEY) is None
    assert store.snapshot().last_fetch is None
    # Rows stay visible until the next fetch replaces them.
    assert store.snapshot().postings == [{"code": "JP1"}]

    store.prefetch()
    assert fetcher.calls == 2


def test_subscribers_see_both_loading_edges(store):
    seen = []
    store.subscribe(lambda snapshot: seen.append(snapshot.loading))

    store.prefetch()
    assert seen == [True, False]


def test_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()

    store.prefetch()
    assert seen == []


def test_subscribers_notified_when_mirror_adopted(store, clock):
    other = ListingStore("other", approved_only=True, cache_key=CACHE_KEY, fetcher=FakeFetcher(), clock=clock)
    assert other.snapshot() == Snapshot()
    store.prefetch()
    seen = []
    other.subscribe(seen.append)

    other.prefetch()
    assert len(seen) == 1
    assert seen[0].postings == [{"code": "JP1"}]


def test_adopting_an_unchanged_mirror_is_silent(store):
    store.prefetch()
    seen = []
    store.subscribe(seen.append)

    store.prefetch()
    assert seen == []


def test_subscriber_can_call_back_into_the_store(store, fetcher):
    seen = []

    def callback(snapshot):
        seen.append(snapshot.loading)
        assert store.prefetch() is not None

    store.subscribe(callback)
    worker = threading.Thread(target=store.prefetch, daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert fetcher.calls == 1
    assert seen == [True, False]


def test_subscriber_refresh_during_fetch_does_not_wait_on_itself(store, fetcher):
    def callback(snapshot):
        if snapshot.loading:
            store.refresh()

    store.subscribe(callback)
    worker = threading.Thread(target=store.prefetch, daemon=True)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert fetcher.calls == 1


def test_invalidate_during_fetch_forces_another_read(clock):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def fetcher(approved_only):
        calls.append(approved_only)
        if len(calls) == 1:
            started.set()
            release.wait(timeout=5)
            return [{"code": "stale"}], []
        return [{"code": "fresh"}], []

    store = ListingStore("racy", approved_only=True, cache_key=CACHE_KEY, fetcher=fetcher, clock=clock)
    worker = threading.Thread(target=store.prefetch, daemon=True)
    worker.start()
    assert started.wait(timeout=5)

    store.invalidate()
    release.set()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert len(calls) == 2
    assert cache.get(CACHE_KEY)["postings"] == [{"code": "fresh"}]
    assert store.prefetch().postings == [{"code": "fresh"}]
    assert len(calls) == 2


def test_fetch_gives_up_when_writes_keep_landing(clock):
    calls = []

    def fetcher(approved_only):
        calls.append(approved_only)
        store.invalidate()
        return [{"code": "JP1"}], []

    store = ListingStore("busy", approved_only=True, cache_key=CACHE_KEY, fetcher=fetcher, clock=clock)
    snapshot = store.prefetch()

    assert len(calls) == MAX_FETCH_ATTEMPTS
    assert snapshot.postings == [{"code": "JP1"}]
    assert not snapshot.has_prefetched_data
    assert not snapshot.loading
    assert cache.get(CACHE_KEY) is None


def test_failed_fetch_keeps_previous_rows(store, fetcher, clock):
    store.prefetch()
    fetcher.error = DatabaseError("connection lost")
    clock.now += 600

    snapshot = store.prefetch()
    assert fetcher.calls == 2
    assert snapshot.postings == [{"code": "JP1"}]
    assert snapshot.last_fetch == 1_000.0
    assert not snapshot.loading


def test_failed_first_fetch_leaves_store_empty(store, fetcher):
    fetcher.error = DatabaseError("connection lost")

    snapshot = store.prefetch()
    assert not snapshot.has_prefetched_data
    assert not snapshot.loading
    assert cache.get(CACHE_KEY) is None


def test_reset_forgets_state_and_mirror(store):
    store.prefetch()
    store.reset()

    assert cache.get(CACHE_KEY) is None
    assert store.snapshot() == Snapshot()


def test_only_one_fetch_in_flight(clock):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_fetcher(approved_only):
        calls.append(approved_only)
        started.set()
        release.wait(timeout=5)
        return [{"code": "JP1"}], []

    store = ListingStore("slow", approved_only=True, cache_key=CACHE_KEY, fetcher=slow_fetcher, clock=clock)
    results = []

    first = threading.Thread(target=lambda: results.append(store.prefetch()))
    first.start()
    assert started.wait(timeout=5)

    second = threading.Thread(target=lambda: results.append(store.prefetch()))
    second.start()
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert len(calls) == 1
    assert len(results) == 2
    assert all(result.postings == [{"code": "JP1"}] for result in results)


def test_snapshot_as_dict():
    snapshot = Snapshot(postings=[{"code": "JP1"}], caris=[], loading=False, last_fetch=5.0)
    assert snapshot.as_dict() == {
        "postings": [{"code": "JP1"}],
        "caris": [],
        "loading": False,
        "last_fetch": 5.0,
        "has_prefetched_data": True,
    }
