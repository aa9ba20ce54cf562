from __future__ import annotations

import logging

import httpx

from app.application.exceptions import ConflictCheckError, ConflictCheckTimeout
from app.application.ports.conflict_check import ConflictCheckPort
from app.core.config import settings
from app.domain.entities.scheduling import ConflictCheckRequest, ConflictCheckResponse

VALIDATE_PATH = "/api/appointments/validate-scheduling"


class HttpConflictChecker(ConflictCheckPort):
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.SCHEDULING_API_BASE_URL or "").rstrip("/")
        self._token = token or settings.SCHEDULING_API_TOKEN
        self._timeout = timeout if timeout is not None else settings.VALIDATION_TIMEOUT_SECONDS
        self._client = client
        self._logger = logging.getLogger(__name__)

        if not self._base_url and client is None:
            raise ValueError("SCHEDULING_API_BASE_URL is required for remote conflict checks")

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout, headers=headers)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def check(self, request: ConflictCheckRequest) -> ConflictCheckResponse:
        payload: dict[str, str] = {
            "proposedStart": request.proposed_start.isoformat(),
            "proposedEnd": request.proposed_end.isoformat(),
        }
        if request.client_address:
            payload["clientAddress"] = request.client_address

        client = self._ensure_client()
        try:
            response = await client.post(VALIDATE_PATH, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            self._logger.warning("Conflict check timed out", extra={"error": str(e)})
            raise ConflictCheckTimeout("Conflict check timed out") from e
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Conflict check returned error",
                extra={"error": f"status={e.response.status_code}"},
            )
            raise ConflictCheckError(f"Conflict check failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            self._logger.error("Unable to reach conflict check service", extra={"error": str(e)})
            raise ConflictCheckError("Unable to reach conflict check service") from e
        except ValueError as e:
            raise ConflictCheckError("Conflict check returned invalid JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get("isValid"), bool):
            raise ConflictCheckError("Conflict check response is missing isValid")

        return ConflictCheckResponse(
            is_valid=data["isValid"],
            conflict_message=data.get("conflictMessage") or None,
        )
