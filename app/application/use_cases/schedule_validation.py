from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Callable

from app.application.exceptions import ConflictCheckError, InvalidAppointmentError
from app.application.ports.conflict_check import ConflictCheckPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.utils.duration import total_service_duration
from app.domain.entities.schedule_form import ScheduleForm
from app.domain.entities.scheduling import ConflictCheckRequest
from app.domain.entities.validation import ValidationResult

ResultListener = Callable[[ValidationResult], None]


class ScheduleValidationService:
    """
    Interactive conflict pre-check for one booking form session.

    Every call to `validate` takes a new sequence number. A response is only
    published if its sequence is still the latest when it arrives, so a slow
    answer to an old request can never replace a newer state.
    """

    def __init__(
        self,
        checker: ConflictCheckPort,
        catalog: ServiceCatalogPort,
        timeout_seconds: float = 10.0,
        on_change: ResultListener | None = None,
    ) -> None:
        self._checker = checker
        self._catalog = catalog
        self._timeout_seconds = timeout_seconds
        self._on_change = on_change
        self._sequence = 0
        self._result = ValidationResult.idle()
        self._task: asyncio.Task[ValidationResult] | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def result(self) -> ValidationResult:
        return self._result

    @property
    def sequence(self) -> int:
        return self._sequence

    def build_request(self, form: ScheduleForm) -> ConflictCheckRequest:
        if form.scheduled_at is None:
            raise ValueError("scheduled_at is required to build a conflict check")
        duration = total_service_duration(form.services, self._catalog)
        return ConflictCheckRequest(
            proposed_start=form.scheduled_at,
            proposed_end=form.scheduled_at + timedelta(minutes=duration),
            client_address=(form.address or "").strip() or None,
        )

    async def validate(self, form: ScheduleForm) -> ValidationResult:
        """Run a pre-check for `form` and return the latest visible result."""
        self._sequence += 1
        sequence = self._sequence

        # The pre-check only runs for travel bookings with every field filled in.
        if not form.include_travel or not form.is_complete():
            return self._publish(ValidationResult.idle(sequence))

        try:
            request = self.build_request(form)
        except InvalidAppointmentError as e:
            self._logger.info("Form not checkable", extra={"sequence": sequence, "reason": str(e)})
            return self._publish(ValidationResult.idle(sequence))

        self._publish(ValidationResult.validating(sequence))

        try:
            response = await asyncio.wait_for(self._checker.check(request), timeout=self._timeout_seconds)
        except asyncio.TimeoutError:
            self._logger.warning(
                "Schedule validation timed out",
                extra={"sequence": sequence, "reason": f"timeout={self._timeout_seconds}s"},
            )
            outcome = ValidationResult.error(sequence)
        except ConflictCheckError as e:
            self._logger.warning("Schedule validation failed", extra={"sequence": sequence, "error": str(e)})
            outcome = ValidationResult.error(sequence)
        except Exception as e:
            self._logger.exception("Unexpected schedule validation error", extra={"sequence": sequence, "error": str(e)})
            outcome = ValidationResult.error(sequence)
        else:
            if response.is_valid:
                outcome = ValidationResult.valid(sequence)
            else:
                outcome = ValidationResult.invalid(sequence, response.conflict_message)

        if sequence != self._sequence:
            self._logger.debug(
                "Discarding stale validation result",
                extra={"sequence": sequence, "state": outcome.state.value},
            )
            return self._result
        return self._publish(outcome)

    def submit(self, form: ScheduleForm) -> asyncio.Task[ValidationResult]:
        """Start validation in the background, cancelling any in-flight attempt."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.ensure_future(self.validate(form))
        return self._task

    def reset(self) -> ValidationResult:
        self._sequence += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        return self._publish(ValidationResult.idle(self._sequence))

    def _publish(self, result: ValidationResult) -> ValidationResult:
        self._result = result
        if self._on_change is not None:
            self._on_change(result)
        return result
