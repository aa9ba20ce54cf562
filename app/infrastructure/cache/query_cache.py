from __future__ import annotations

import logging
import threading
from typing import Callable

from app.application.ports.cache_invalidation import CacheInvalidationPort
from app.domain.entities.invalidation import InvalidationEvent, QueryKey

Subscriber = Callable[[InvalidationEvent], None]


class QueryCache(CacheInvalidationPort):
    """In-process stand-in for the client query cache: tracks stale keys and notifies subscribers."""

    def __init__(self) -> None:
        self._stale: set[QueryKey] = set()
        self._subscribers: dict[QueryKey, list[Subscriber]] = {}
        self._events: list[InvalidationEvent] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def subscribe(self, key: QueryKey, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(key, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def publish(self, event: InvalidationEvent) -> None:
        with self._lock:
            self._events.append(event)
            self._stale.update(event.query_keys)
            callbacks = [(key, cb) for key in event.query_keys for cb in self._subscribers.get(key, [])]

        self._logger.debug(
            "Queries invalidated",
            extra={
                "appointment_id": event.appointment_id,
                "operation": event.operation.value,
                "query_key": ",".join(k.value for k in event.query_keys),
            },
        )
        for key, callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                self._logger.error(
                    "Invalidation subscriber failed",
                    extra={"query_key": key.value, "error": str(e)},
                )

    def is_stale(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._stale

    def mark_fresh(self, key: QueryKey) -> None:
        with self._lock:
            self._stale.discard(key)

    @property
    def events(self) -> list[InvalidationEvent]:
        with self._lock:
            return list(self._events)
