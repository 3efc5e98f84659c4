"""Exceptions raised by the storage layer and answered by the app."""


class PortfolioError(Exception):
    """Base class for portfolio backend errors."""


class DatabaseConnectionError(PortfolioError):
    """The database could not be reached at startup and storage is required."""


class StorageUnavailable(PortfolioError):
    """A storage operation failed while serving a request."""

    status_code = 503

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
        self.message = message
