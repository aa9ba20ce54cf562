from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.invalidation import InvalidationEvent


class CacheInvalidationPort(ABC):
    @abstractmethod
    def publish(self, event: InvalidationEvent) -> None:
        """Mark every query key in the event stale. Must complete before the mutation returns."""
        raise NotImplementedError
