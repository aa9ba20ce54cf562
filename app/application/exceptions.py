class ConflictCheckError(RuntimeError):
    """Raised when the conflict check could not be performed (network errors, bad responses)."""
    pass


class ConflictCheckTimeout(ConflictCheckError):
    """Raised when the conflict check did not answer within the configured timeout."""
    pass


class TravelTimeError(RuntimeError):
    """Raised by travel providers on transport failures; callers fall back to zero travel."""
    pass


class AppointmentNotFoundError(LookupError):
    """Raised when an appointment id does not exist in the store."""

    def __init__(self, appointment_id: int) -> None:
        super().__init__(f"Appointment {appointment_id} not found")
        self.appointment_id = appointment_id


class InvalidAppointmentError(ValueError):
    """Raised when appointment input is incomplete or out of range."""
    pass
