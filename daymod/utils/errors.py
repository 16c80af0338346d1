"""Exceptions and warnings raised by daymod.

Failures while opening, reading or writing files are not wrapped:
the :py:class:`OSError` raised by python already contains the
offending path in its ``filename`` attribute.
"""


class ConfigurationError(ValueError):
    """Raised when the configuration of the blocks is invalid.

    For example a block duration that does not divide a day.
    """


class MalformedTimestamp(ValueError):
    """Raised when a time of the survey cannot be parsed.

    Attributes:
        timestamp: The raw string that could not be parsed.
    """

    def __init__(self, message: str, timestamp: str = None) -> None:
        super().__init__(message)
        self.timestamp = timestamp


class TruncatedFile(EOFError):
    """Raised when a block file is shorter than declared in its header.

    Attributes:
        path: The path of the file.
        expected_size: The number of bytes the header announces.
        actual_size: The number of bytes found in the file.
    """

    def __init__(
        self, message: str, path: str = None,
        expected_size: int = None, actual_size: int = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.expected_size = expected_size
        self.actual_size = actual_size


class UnmappedActivityWarning(UserWarning):
    """Warn that records were dropped as their activity has no category."""
