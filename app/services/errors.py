"""
Failure types shared by the completion gateway, the knowledge repository and
the request handlers.

Every failure carries a short, human-readable message that the handlers pass
straight through to the UI in the response envelope.
"""


class DashboardError(Exception):
    """Base class for all expected failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(DashboardError):
    """
    Raised when input is missing or malformed.
    Detected before any I/O is performed.
    """

    pass


class NotFoundFailure(DashboardError):
    """Raised when an id has no matching knowledge base entry."""

    pass


class EmptyResponseFailure(DashboardError):
    """Raised when the completion API returned no usable text."""

    pass


class GatewayFailure(DashboardError):
    """
    Raised when the completion API call itself errored
    (network, authentication, rate limit).
    """

    pass


class StoreUnavailableFailure(DashboardError):
    """
    Raised when the document store connection could not be established
    or a store operation errored.
    """

    pass
