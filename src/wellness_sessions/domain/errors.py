"""Domain errors raised by the session store and service."""


class SessionValidationError(ValueError):
    """Raised when session fields violate the write constraints."""


class SessionNotFoundError(LookupError):
    """Raised when a session does not exist or is not owned by the caller."""


class StoreUnavailableError(RuntimeError):
    """Raised when the backing document store cannot be reached."""
