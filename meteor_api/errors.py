"""Custom exceptions."""


class MeteorAPIError(Exception):
    """Base exception for the meteor API."""


class DatasetFetchError(MeteorAPIError):
    """The external dataset could not be fetched or decoded."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class NoAvailablePortError(MeteorAPIError):
    def __init__(self, start: int, attempts: int):
        super().__init__(
            f"No free port in range {start}-{start + attempts - 1}",
        )
        self.start = start
        self.attempts = attempts
