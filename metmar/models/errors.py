"""Error kinds surfaced at the HTTP and CLI boundaries."""


class MetmarError(Exception):
    """Base class for every failure producing an error response."""


class FetchFailure(MetmarError):
    """Raised when an upstream document cannot be retrieved."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeFailure(MetmarError):
    """Raised when an upstream document does not have the expected shape."""


class NotFound(MetmarError):
    """Raised when a report id is absent from the current fetch batch."""


class ExtractionFailure(MetmarError):
    """Raised when the gale timeline cannot be rebuilt from a directory."""
