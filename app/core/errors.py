"""
Application errors for clean API error handling.

Use DatasetUnavailableError when the open-data API is unreachable or answers
with something that is not JSON, so the autocomplete handler can log which
upstream failed before degrading to an empty suggestion list.
"""


class DatasetUnavailableError(Exception):
    """Raised when the dataset API call fails (network error, timeout, non-JSON body)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
