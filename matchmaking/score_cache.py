"""
Memoization of pairwise compatibility results.

Entries are keyed by an unordered profile-id pair (plus the engine weights)
and live until `clear()` is called. Concurrent misses for the same key are coalesced: the first caller
registers a Future as the in-flight marker and computes, later callers wait on
that Future. The lock only guards the dictionaries, never a computation, so
unrelated pairs are not serialized.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
PairKey = Tuple[str, str]


def pair_key(a_id: str, b_id: str) -> PairKey:
    """Return the order-independent cache key for two profile ids."""
    return (a_id, b_id) if a_id <= b_id else (b_id, a_id)


class ScoreCache(Generic[T]):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: Dict[Hashable, T] = {}
        self._in_flight: Dict[Hashable, Future] = {}
        self._stats = {
            "hits": 0,
            "misses": 0,
            "computations": 0,
            "coalesced": 0,
        }

    def get(self, key: Hashable) -> Optional[T]:
        with self._lock:
            return self._results.get(key)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for `key`, computing it at most once.

        Args:
            key: Hashable cache key (use `pair_key` for profile pairs).
            compute: Zero-argument callable producing the value on a miss.

        Returns:
            The stored value, or the value produced by whichever caller ran
            `compute` for this key.

        Raises:
            Whatever `compute` raised. Every waiter on the same in-flight
            computation receives the same exception and nothing is stored.
        """
        with self._lock:
            if key in self._results:
                self._stats["hits"] += 1
                logger.debug("Score cache hit for %s", key)
                return self._results[key]
            pending = self._in_flight.get(key)
            if pending is None:
                pending = Future()
                self._in_flight[key] = pending
                self._stats["misses"] += 1
                owner = True
            else:
                self._stats["coalesced"] += 1
                owner = False

        if not owner:
            logger.debug("Waiting on in-flight score computation for %s", key)
            return pending.result()

        logger.debug("Score cache miss for %s", key)
        try:
            value = compute()
        except BaseException as exc:
            with self._lock:
                self._in_flight.pop(key, None)
            pending.set_exception(exc)
            raise

        with self._lock:
            self._stats["computations"] += 1
            self._results[key] = value
            self._in_flight.pop(key, None)
        pending.set_result(value)
        return value

    def clear(self) -> None:
        """Drop every stored result. In-flight computations still complete."""
        with self._lock:
            dropped = len(self._results)
            self._results.clear()
        logger.info("Cleared score cache (%d entries)", dropped)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            out = dict(self._stats)
            out["size"] = len(self._results)
            out["in_flight"] = len(self._in_flight)
        return out
