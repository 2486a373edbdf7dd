"""Keyed query cache with request de-duplication, polling and invalidation.

Each cache key owns one entry holding the last-known data, the last error
and the current status. Entries are created by the first subscription to a
key and torn down when the last subscription closes.

State machine per key:
- Idle → Loading: first request starts
- Loading → Success / Error: the latest request for the key resolves
- Success / Error → Loading: revalidation (mount, poll tick, invalidation)

Concurrent reads of one key share a single in-flight request. Forced
revalidation always starts a new request, and every request carries a
sequence number: only the most recently *started* request may write the
entry, so a slow stale response never overwrites a newer one.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from etl_dashboard.keys import key_matches
from etl_dashboard.models.responses import ApiResponse, Envelope

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Envelope]]
Listener = Callable[["QueryState"], None]


class QueryStatus(str, Enum):
    """Lifecycle status of a cache key."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState:
    """Snapshot of one cache entry as seen by consumers.

    ``data`` is the payload of the last successful envelope and survives later
    failures. ``error`` is the message of the most recent failure and is
    cleared by the next success. ``response`` is the last envelope received.
    """

    key: str
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    error: str | None = None
    response: Any = None
    has_data: bool = False
    updated_at: float | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == QueryStatus.LOADING


@dataclass
class _Entry:
    """Internal state tracked per cache key."""

    key: str
    fetcher: Fetcher
    state: QueryState
    subscribers: int = 0
    listeners: list[Listener] = field(default_factory=list)
    refresh_interval: float | None = None
    poll_task: asyncio.Task[None] | None = None
    latest_seq: int = 0


@dataclass
class _InFlight:
    seq: int
    task: asyncio.Task[Envelope]


class Subscription:
    """A consumer's handle on one cache key.

    Closing the subscription releases the consumer's reference. The last
    close stops polling and tears the entry down.
    """

    def __init__(self, cache: QueryCache, key: str, listener: Listener | None) -> None:
        self._cache = cache
        self._key = key
        self._listener = listener
        self._closed = False
        self._last_state = cache.get_state(key)

    @property
    def key(self) -> str:
        return self._key

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> QueryState:
        if not self._closed:
            self._last_state = self._cache.get_state(self._key)
        return self._last_state

    @property
    def data(self) -> Any:
        return self.state.data

    @property
    def error(self) -> str | None:
        return self.state.error

    async def wait(self) -> QueryState:
        """Wait until no request for this key is in flight."""
        await self._cache.wait(self._key)
        return self.state

    async def refresh(self) -> QueryState:
        """Force a new request for this key and wait for it."""
        await self._cache.fetch(self._key, force=True)
        return self.state

    def close(self) -> None:
        if self._closed:
            return
        self._last_state = self._cache.get_state(self._key)
        self._closed = True
        self._cache._release(self._key, self._listener)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> Subscription:
        await self.wait()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


class QueryCache:
    """Process-wide cache of backend reads, keyed by endpoint + parameters.

    Must be used from within a running asyncio event loop. Only this class
    mutates cache entries; mutation actions trigger changes through
    :meth:`invalidate`.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._inflight: dict[str, _InFlight] = {}
        self._seq = itertools.count(1)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def subscribe(
        self,
        key: str,
        fetcher: Fetcher,
        *,
        refresh_interval: float | None = None,
        listener: Listener | None = None,
    ) -> Subscription:
        """Register a consumer of ``key`` and start loading it.

        Every subscription triggers a (de-duplicated) request. When
        ``refresh_interval`` is set, the key is re-fetched every
        ``refresh_interval`` seconds until the last subscription closes.
        """
        entry = self._entries.get(key)
        if entry is None:
            entry = _Entry(key=key, fetcher=fetcher, state=QueryState(key=key))
            self._entries[key] = entry
            logger.debug("Created cache entry %s", key, extra={"cache_key": key})

        entry.subscribers += 1
        if listener is not None:
            entry.listeners.append(listener)

        subscription = Subscription(self, key, listener)
        self._start(key, entry.fetcher, force=False)

        if entry.refresh_interval is None and refresh_interval is not None:
            entry.refresh_interval = refresh_interval
        if entry.refresh_interval is not None and entry.poll_task is None:
            entry.poll_task = asyncio.get_running_loop().create_task(
                self._poll(key, entry.refresh_interval)
            )

        return subscription

    async def fetch(
        self,
        key: str,
        fetcher: Fetcher | None = None,
        *,
        force: bool = False,
    ) -> Envelope:
        """Read ``key``, joining an in-flight request unless ``force`` is set.

        ``fetcher`` may be omitted for keys that have a live entry. The
        result is written to the entry only if no newer request has started.
        """
        if fetcher is None:
            entry = self._entries.get(key)
            if entry is None:
                raise KeyError(f"No cache entry for {key!r} and no fetcher given")
            fetcher = entry.fetcher

        inflight = self._start(key, fetcher, force=force)
        return await asyncio.shield(inflight.task)

    async def invalidate(self, *targets: str) -> list[str]:
        """Force-refetch every live key covered by one of ``targets``.

        A target covers a key when it equals the key or the key's path, so
        ``/api/errors`` covers ``/api/errors?page=2&limit=10``. Waits for the
        refetches and returns the matched keys.

        Covered requests still in flight stop being joinable, so a later
        read never picks up a response that predates the invalidation.
        """
        for key in list(self._inflight):
            if any(key_matches(key, target) for target in targets):
                del self._inflight[key]

        matched = [
            (key, entry.fetcher)
            for key, entry in self._entries.items()
            if any(key_matches(key, target) for target in targets)
        ]
        if not matched:
            logger.debug("Invalidation of %s matched no live keys", ", ".join(targets))
            return []

        logger.info(
            "Revalidating %d cached queries for %s",
            len(matched),
            ", ".join(targets),
        )
        await asyncio.gather(
            *(self.fetch(key, fetcher, force=True) for key, fetcher in matched)
        )
        return [key for key, _ in matched]

    async def wait(self, key: str) -> QueryState:
        """Wait until no request for ``key`` is in flight, then return its state."""
        while key in self._inflight:
            await asyncio.shield(self._inflight[key].task)
        return self.get_state(key)

    def get_state(self, key: str) -> QueryState:
        entry = self._entries.get(key)
        if entry is None:
            return QueryState(key=key)
        return entry.state

    def keys(self) -> list[str]:
        return list(self._entries)

    def subscriber_count(self, key: str) -> int:
        entry = self._entries.get(key)
        return entry.subscribers if entry is not None else 0

    def is_polling(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.poll_task is not None

    async def aclose(self) -> None:
        """Stop all polling, cancel in-flight requests and drop every entry."""
        tasks: list[asyncio.Task[Any]] = []
        for entry in self._entries.values():
            if entry.poll_task is not None:
                tasks.append(entry.poll_task)
        tasks.extend(inflight.task for inflight in self._inflight.values())
        self._entries.clear()
        self._inflight.clear()

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _start(self, key: str, fetcher: Fetcher, *, force: bool) -> _InFlight:
        """Return the request to await for ``key``, starting one if needed."""
        inflight = self._inflight.get(key)
        if inflight is not None and not force:
            logger.debug("Joining in-flight request for %s", key, extra={"cache_key": key})
        else:
            seq = next(self._seq)
            task = asyncio.get_running_loop().create_task(self._run(key, seq, fetcher))
            inflight = _InFlight(seq=seq, task=task)
            self._inflight[key] = inflight

        entry = self._entries.get(key)
        if entry is not None and entry.latest_seq < inflight.seq:
            entry.latest_seq = inflight.seq
            self._set_state(entry, replace(entry.state, status=QueryStatus.LOADING))

        return inflight

    async def _run(self, key: str, seq: int, fetcher: Fetcher) -> Envelope:
        try:
            result = await fetcher()
        except Exception as exc:
            logger.error(
                "Fetcher for %s raised",
                key,
                exc_info=True,
                extra={"cache_key": key, "error_reason": str(exc)},
            )
            result = ApiResponse.failure(str(exc) or exc.__class__.__name__)
        finally:
            current = self._inflight.get(key)
            if current is not None and current.seq == seq:
                del self._inflight[key]

        self._commit(key, seq, result)
        return result

    def _commit(self, key: str, seq: int, result: Envelope) -> None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Discarding result for %s: no subscribers", key, extra={"cache_key": key})
            return
        if seq != entry.latest_seq:
            logger.debug(
                "Discarding stale result for %s (request %d, latest %d)",
                key,
                seq,
                entry.latest_seq,
                extra={"cache_key": key},
            )
            return

        now = time.time()
        if getattr(result, "success", False):
            state = QueryState(
                key=key,
                status=QueryStatus.SUCCESS,
                data=result.data,
                response=result,
                has_data=True,
                updated_at=now,
            )
        else:
            message = getattr(result, "message", None) or f"Request for {key} failed"
            state = replace(
                entry.state,
                status=QueryStatus.ERROR,
                error=message,
                response=result,
                updated_at=now,
            )
        self._set_state(entry, state)

    def _set_state(self, entry: _Entry, state: QueryState) -> None:
        entry.state = state
        for listener in list(entry.listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Listener for %s failed", entry.key, extra={"cache_key": entry.key})

    async def _poll(self, key: str, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            entry = self._entries.get(key)
            if entry is None:
                return
            logger.debug("Polling %s", key, extra={"cache_key": key})
            await self.fetch(key, entry.fetcher)

    def _release(self, key: str, listener: Listener | None) -> None:
        entry = self._entries.get(key)
        if entry is None:
            return

        entry.subscribers -= 1
        if listener is not None and listener in entry.listeners:
            entry.listeners.remove(listener)

        if entry.subscribers <= 0:
            if entry.poll_task is not None:
                entry.poll_task.cancel()
            del self._entries[key]
            logger.debug("Tore down cache entry %s", key, extra={"cache_key": key})
