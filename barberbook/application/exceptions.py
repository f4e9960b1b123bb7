class BookingApiError(RuntimeError):
    """Raised when the Booking API fails (network errors, HTTP errors, GraphQL errors)."""
    pass


class BookingApiUnavailableError(BookingApiError):
    """Raised when the Booking API cannot be reached or answers with an HTTP error status."""
    pass


class BookingApiContractError(RuntimeError):
    """Raised when the Booking API answers without the data the client asked for."""
    pass


class ActionNotAllowedError(ValueError):
    """Raised when the action table or eligibility windows refuse an action."""
    pass


class ActionInFlightError(RuntimeError):
    """Raised when the same submission is already waiting on the Booking API."""
    pass


class SessionRequiredError(RuntimeError):
    pass


class NotFoundError(LookupError):
    """Raised when a booking, shop or review is not visible to the session."""
    pass
