class BookingError(Exception):
    """Base class for booking failures surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ---------- STORE ----------
class StoreUnavailable(BookingError):
    """The booking database could not be reached."""


class ValidationFailure(BookingError):
    """The store (or the draft) rejected the record."""


class BookingNotFound(BookingError):
    """Delete targeted an id that no longer exists. Benign."""


class SessionFull(BookingError):
    """No seat left for the session occurrence."""


# ---------- DRAFT FLOW ----------
class UnknownSession(BookingError):
    pass


class SessionUnavailable(BookingError):
    pass


class DraftIncomplete(BookingError):
    pass
