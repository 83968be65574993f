"""Exception types shared by the API layer, the domain and the commands."""


class LanaError(Exception):
    """Base class for every error lana reports to the user."""


class NetworkError(LanaError):
    """The request never got an HTTP response (connectivity, DNS, timeout)."""


class ApiError(LanaError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class NoTokenError(ApiError):
    """Login succeeded at the HTTP level but no token came back."""


class ValidationError(LanaError):
    """Client-side precondition failure, caught before any network call."""
