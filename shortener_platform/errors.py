"""
Error taxonomy for the URL Shortener Platform.

Every failure path of the core raises one of these (or returns the explicit
`None` absence value, for lookups). Callers can catch `ShortenerError` to
handle all of them, or a specific subclass to react to one condition.
"""

from typing import Optional

__all__ = [
    "ShortenerError",
    "GenerationExhausted",
    "AlgorithmUnavailable",
    "InvalidURL",
    "StorageError",
]


class ShortenerError(Exception):
    """Base class for all shortener errors."""


class GenerationExhausted(ShortenerError):
    """
    The content-hash strategy found no free window in the digest.

    The core does not retry; callers may switch strategy or escalate.
    """

    def __init__(self, long_url: str, attempts: int, message: Optional[str] = None):
        self.long_url = long_url
        self.attempts = attempts
        super().__init__(message or f"Unable to generate unique short code after {attempts} attempts")


class AlgorithmUnavailable(ShortenerError):
    """The requested digest algorithm is not provided by this interpreter."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"Digest algorithm not available: {algorithm!r}")


class InvalidURL(ShortenerError, ValueError):
    """Raised by shorten() when URL validation is enabled and the URL is malformed."""


class StorageError(ShortenerError):
    """The mapping store refused a new mapping and no existing mapping could be found."""
