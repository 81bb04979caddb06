"""Errors raised by record source adapters."""


class FetchError(Exception):
    """Raised when records cannot be fetched."""

    pass


class TransportError(FetchError):
    """The request could not complete (connectivity, timeout)."""

    pass


class ServerError(FetchError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int):
        super().__init__(f"API Error: {status_code}")
        self.status_code = status_code


class MalformedResponseError(FetchError):
    """The response body could not be turned into records."""

    pass
