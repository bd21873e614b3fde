class SalonBookingError(RuntimeError):
    """Base class for expected, caller-recoverable failures."""
    pass


class InvalidInputError(SalonBookingError):
    """Raised when input is malformed or out of range."""
    pass


class SlotConflictError(SalonBookingError):
    """Raised when a date+time is already held by an active booking."""

    def __init__(self, message: str = "This time slot is already booked. Please select another time.") -> None:
        super().__init__(message)


class ResourceNotFoundError(SalonBookingError):
    """Raised when a service, review or slot does not exist."""
    pass


class BookingNotFoundError(ResourceNotFoundError):
    def __init__(self, message: str = "Booking not found") -> None:
        super().__init__(message)


class AlreadyCancelledError(SalonBookingError):
    def __init__(self, message: str = "Booking is already cancelled") -> None:
        super().__init__(message)


class PastDateError(SalonBookingError):
    """Raised when an operation targets a calendar day before today."""
    pass


class StorageError(SalonBookingError):
    """Raised when the persistence layer fails for a reason other than a conflict."""
    pass
