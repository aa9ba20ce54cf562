from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.scheduling import ConflictCheckRequest, ConflictCheckResponse


class ConflictCheckPort(ABC):
    @abstractmethod
    async def check(self, request: ConflictCheckRequest) -> ConflictCheckResponse:
        """Check a proposed window against the provider's calendar.

        Raises ConflictCheckError when the check itself could not be performed.
        """
        raise NotImplementedError
