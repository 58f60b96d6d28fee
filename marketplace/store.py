"""
Listing store: cached snapshots of the two listing tables.

Two scopes exist. ``market_store`` holds approved listings only and backs the
public market; ``admin_store`` holds every row and backs the moderation
dashboard. Each keeps an in-process ``Snapshot`` that is mirrored to the
Django cache for ``MARKET_CACHE_SECONDS`` (five minutes by default), so a
fresh process or another worker can start from the mirror instead of hitting
the database.

Rules:

* Only one fetch per store runs at a time. A prefetch that finds another
  fetch in flight waits for it and returns its result. The final
  notification runs after the slot is released; a subscriber that calls
  back into the store during the fetch gets the current snapshot instead
  of waiting on itself.
* An ``invalidate()`` that lands while a fetch is running makes that fetch
  start over, so rows read before a write are never stamped as fresh.
* A prefetch adopts the mirror when it is younger than the freshness window,
  otherwise it refetches. Adopting notifies only when the snapshot changes.
* ``loading`` is raised before a fetch and lowered after it, and subscribers
  are notified on both edges.
* A failed fetch is logged and keeps the previous rows. There is no other
  consistency guarantee: the last writer wins.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Callable

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError

logger = logging.getLogger(__name__)

MARKET_DATA_KEY = 'thisizstore_market_data'
ADMIN_DATA_KEY = 'thisizstore_admin_data'
MAX_FETCH_ATTEMPTS = 3


def cache_duration() -> int:
    return settings.MARKET_CACHE_SECONDS


@dataclass(frozen=True)
class Snapshot:
    postings: list[dict] = field(default_factory=list)
    caris: list[dict] = field(default_factory=list)
    loading: bool = False
    last_fetch: float | None = None

    @property
    def has_prefetched_data(self) -> bool:
        return self.last_fetch is not None

    def as_dict(self) -> dict:
        return {
            'postings': self.postings,
            'caris': self.caris,
            'loading': self.loading,
            'last_fetch': self.last_fetch,
            'has_prefetched_data': self.has_prefetched_data,
        }


Subscriber = Callable[[Snapshot], None]
Fetcher = Callable[[bool], tuple[list[dict], list[dict]]]


def fetch_listings(approved_only: bool = True) -> tuple[list[dict], list[dict]]:
    """
    Reads both listing tables, newest first, with the game joined in.

    Market rows go through the public serializers, which leave out contact
    details; admin rows carry every column.
    """
    from .api.serializers import (
        JasaCariSerializer,
        JasaPostingSerializer,
        PublicJasaCariSerializer,
        PublicJasaPostingSerializer,
    )
    from .models import JasaCari, JasaPosting

    postings = JasaPosting.objects.select_related('game').order_by('-created_at')
    caris = JasaCari.objects.select_related('game').order_by('-created_at')
    if approved_only:
        postings = postings.approved()
        caris = caris.approved()
        posting_serializer, cari_serializer = PublicJasaPostingSerializer, PublicJasaCariSerializer
    else:
        posting_serializer, cari_serializer = JasaPostingSerializer, JasaCariSerializer

    return (
        [dict(row) for row in posting_serializer(postings, many=True).data],
        [dict(row) for row in cari_serializer(caris, many=True).data],
    )


class ListingStore:
    """A snapshot of the listing tables for one scope (market or admin)."""

    def __init__(
        self,
        name: str,
        approved_only: bool,
        cache_key: str,
        fetcher: Fetcher = fetch_listings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.name = name
        self.approved_only = approved_only
        self.cache_key = cache_key
        self._fetcher = fetcher
        self._clock = clock
        self._state: Snapshot | None = None
        self._state_lock = threading.Lock()
        # Fetch slot: the thread currently fetching, guarded by the condition.
        self._slot = threading.Condition()
        self._fetch_owner: int | None = None
        # Bumped by invalidate(); a fetch that straddles a bump is not trusted.
        self._generation = 0
        self._subscribers: set[Subscriber] = set()

    def __repr__(self) -> str:
        return f"<ListingStore {self.name}>"

    # Persistent mirror

    def _load_from_cache(self) -> dict | None:
        cached = cache.get(self.cache_key)
        if cached is None:
            return None
        if self._clock() - cached['last_fetch'] >= cache_duration():
            cache.delete(self.cache_key)
            return None
        return cached

    def _save_to_cache(self, snapshot: Snapshot) -> None:
        cache.set(
            self.cache_key,
            {
                'postings': snapshot.postings,
                'caris': snapshot.caris,
                'last_fetch': snapshot.last_fetch,
            },
            timeout=cache_duration(),
        )

    # State

    def snapshot(self) -> Snapshot:
        with self._state_lock:
            if self._state is None:
                cached = self._load_from_cache()
                if cached:
                    logger.info(
                        "[%s] Initializing from cache: %d postings, %d caris",
                        self.name, len(cached['postings']), len(cached['caris']),
                    )
                    self._state = Snapshot(cached['postings'], cached['caris'], False, cached['last_fetch'])
                else:
                    self._state = Snapshot()
            return self._state

    def _set_state(self, **changes) -> Snapshot:
        current = self.snapshot()
        with self._state_lock:
            self._state = replace(current, **changes)
            return self._state

    # Subscribers

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Registers ``callback``; the returned function unregisters it."""
        self._subscribers.add(callback)

        def unsubscribe() -> None:
            self._subscribers.discard(callback)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    # Fetching

    def _claim(self, take_after_wait: bool) -> bool:
        """
        Takes the fetch slot for the calling thread and returns True.

        Returns False without waiting when the caller is already inside this
        store's fetch (a subscriber calling back). When another thread holds
        the slot, waits for it to finish; then returns False, or takes the
        slot if ``take_after_wait`` is set.
        """
        me = threading.get_ident()
        with self._slot:
            if self._fetch_owner == me:
                return False
            if self._fetch_owner is not None:
                while self._fetch_owner is not None:
                    self._slot.wait()
                if not take_after_wait:
                    return False
            self._fetch_owner = me
            return True

    def _release(self) -> None:
        with self._slot:
            self._fetch_owner = None
            self._slot.notify_all()

    def prefetch(self) -> Snapshot:
        """Makes sure the snapshot is fresh, fetching only when it has to."""
        if not self._claim(take_after_wait=False):
            return self.snapshot()
        changed = True
        try:
            cached = self._load_from_cache()
            if cached:
                before = self.snapshot()
                # Same stamp means same rows: adopting it again changes nothing.
                changed = before.loading or before.last_fetch != cached['last_fetch']
                self._set_state(
                    postings=cached['postings'],
                    caris=cached['caris'],
                    loading=False,
                    last_fetch=cached['last_fetch'],
                )
            else:
                logger.info("[%s] Prefetching listings...", self.name)
                self._fetch()
        finally:
            self._release()
        if changed:
            self._notify()
        return self.snapshot()

    def refresh(self) -> Snapshot:
        """Refetches unconditionally."""
        if not self._claim(take_after_wait=True):
            return self.snapshot()
        try:
            self._fetch()
        finally:
            self._release()
        self._notify()
        return self.snapshot()

    def invalidate(self) -> None:
        """Drops the mirror so the next prefetch goes to the database."""
        cache.delete(self.cache_key)
        with self._state_lock:
            self._generation += 1
        self._set_state(last_fetch=None)
        logger.info("[%s] Cache invalidated", self.name)

    def reset(self) -> None:
        """Forgets the snapshot entirely, mirror included."""
        cache.delete(self.cache_key)
        with self._state_lock:
            self._generation += 1
            self._state = None

    def _fetch(self) -> None:
        """
        Runs the fetcher while the caller holds the slot. Rows read across an
        ``invalidate()`` may predate the write that caused it, so they are
        fetched again, up to ``MAX_FETCH_ATTEMPTS`` times.
        """
        self._set_state(loading=True)
        # Subscribers may call back in; _claim() lets them through.
        self._notify()
        for _ in range(MAX_FETCH_ATTEMPTS):
            with self._state_lock:
                generation = self._generation
            try:
                postings, caris = self._fetcher(self.approved_only)
            except DatabaseError:
                logger.exception("[%s] Fetch failed, keeping previous snapshot", self.name)
                self._set_state(loading=False)
                return
            with self._state_lock:
                invalidated = generation != self._generation
            if not invalidated:
                snapshot = self._set_state(
                    postings=postings,
                    caris=caris,
                    loading=False,
                    last_fetch=self._clock(),
                )
                self._save_to_cache(snapshot)
                logger.info("[%s] Fetch complete: %d postings, %d caris", self.name, len(postings), len(caris))
                return
            logger.info("[%s] Invalidated during fetch, fetching again", self.name)
        # Still racing with writes: show the rows but leave them stale.
        self._set_state(postings=postings, caris=caris, loading=False, last_fetch=None)


market_store = ListingStore('market', approved_only=True, cache_key=MARKET_DATA_KEY)
admin_store = ListingStore('admin', approved_only=False, cache_key=ADMIN_DATA_KEY)


def prefetch_market_data() -> Snapshot:
    return market_store.prefetch()


def prefetch_admin_data() -> Snapshot:
    return admin_store.prefetch()


def invalidate_market_cache() -> None:
    market_store.invalidate()


def refresh_market_data() -> Snapshot:
    """Called after every moderation action so the market shows the change."""
    invalidate_market_cache()
    return market_store.refresh()
